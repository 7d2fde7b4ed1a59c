"""Tests for the absolute <-> relative seat mapping."""

import pytest

from gofish.errors import IllegalMove
from gofish.seating import absolute_to_relative, relative_to_absolute


class TestAbsoluteToRelative:
    @pytest.mark.parametrize("seat_id, absolute, expected", [
        (0, 1, 0), (0, 2, 1), (0, 3, 2),
        (1, 0, 0), (1, 2, 1), (1, 3, 2),
        (2, 0, 0), (2, 1, 1), (2, 3, 2),
        (3, 0, 0), (3, 1, 1), (3, 2, 2),
    ])
    def test_four_seat_table(self, seat_id, absolute, expected):
        assert absolute_to_relative(seat_id, absolute) == expected

    def test_self_has_no_slot(self):
        with pytest.raises(IllegalMove):
            absolute_to_relative(2, 2)

    def test_negative_index(self):
        with pytest.raises(IllegalMove):
            absolute_to_relative(0, -1)


class TestRoundTrip:
    @pytest.mark.parametrize("num_seats", [2, 3, 4, 6])
    def test_inverse(self, num_seats):
        for seat_id in range(num_seats):
            slots = []
            for absolute in range(num_seats):
                if absolute == seat_id:
                    continue
                rel = absolute_to_relative(seat_id, absolute)
                assert relative_to_absolute(seat_id, rel) == absolute
                slots.append(rel)
            assert slots == list(range(num_seats - 1))

    def test_relative_never_maps_to_self(self):
        for seat_id in range(5):
            for rel in range(4):
                assert relative_to_absolute(seat_id, rel) != seat_id
