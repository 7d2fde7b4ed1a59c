"""Events a seat's belief state can observe.

One event is one game fact as seen by one seat. Seat indices are
relative to the receiving seat (its own index elided). A seat's belief
is a pure function of its starting hand and the ordered list of events
it has applied, so the list doubles as a replay log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ObserveDraw:
    """An opponent drew one card of unseen rank from the pool."""
    opponent: int


@dataclass(frozen=True)
class SelfDraw:
    """This seat drew a card and saw its rank."""
    rank: int


@dataclass(frozen=True)
class ObserveAsk:
    """A bystander watched ``asker`` take ``amount`` cards of ``rank`` from ``target``."""
    asker: int
    target: int
    rank: int
    amount: int
    placed: bool


@dataclass(frozen=True)
class SelfAsk:
    """This seat asked ``target`` for ``rank`` and received ``amount`` cards."""
    target: int
    rank: int
    amount: int


@dataclass(frozen=True)
class SelfGiveAll:
    """This seat handed every card of ``rank`` to ``asker``."""
    asker: int
    rank: int


SeatEvent = Union[ObserveDraw, SelfDraw, ObserveAsk, SelfAsk, SelfGiveAll]
