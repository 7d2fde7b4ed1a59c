"""Absolute <-> relative seat index mapping.

Every seat keeps its opponents in a list with its own seat elided: for
a seat with absolute index ``seat_id``, opponent ``a`` lives at slot
``a - 1`` if ``a > seat_id``, else at slot ``a``. All translations go
through these two functions.
"""

from __future__ import annotations

from gofish.errors import IllegalMove


def absolute_to_relative(seat_id: int, absolute: int) -> int:
    if absolute == seat_id:
        raise IllegalMove(f"Seat {seat_id} has no opponent slot for itself")
    if absolute < 0:
        raise IllegalMove(f"Invalid seat index {absolute}")
    return absolute - 1 if absolute > seat_id else absolute


def relative_to_absolute(seat_id: int, relative: int) -> int:
    if relative < 0:
        raise IllegalMove(f"Invalid opponent slot {relative}")
    return relative + 1 if relative >= seat_id else relative
