"""Tests for BeliefDeck construction and mass movement."""

import pytest

from gofish.deck import BeliefDeck, DECK_SIZE, empty_hand, full_pool
from gofish.probability import Known, MoreThan, Unknown


def sample_hand():
    hand = empty_hand()
    hand[0] = 2
    hand[3] = 1
    hand[7] = 3
    hand[12] = 1
    return hand


class TestConstruction:
    def test_full(self):
        deck = BeliefDeck.full()
        assert deck.size == DECK_SIZE == 52
        assert all(c == Unknown(4.0) for c in deck.cards)
        assert deck.size == deck.total()

    def test_empty(self):
        deck = BeliefDeck.empty()
        assert deck.size == 0
        assert deck.total() == 0.0
        assert len(deck.cards) == 13

    def test_from_known_size_matches_counts(self):
        hand = sample_hand()
        deck = BeliefDeck.from_known(hand)
        assert deck.size == 7
        assert deck.size == round(deck.total())
        assert deck[7] == Known(3)
        assert deck[1] == Known(0)

    def test_hand_helpers(self):
        assert empty_hand() == [0] * 13
        assert full_pool() == [4] * 13


class TestRemoval:
    def test_subtract_known_hand_from_pool(self):
        pool = BeliefDeck.full()
        pool.subtract_deck(BeliefDeck.from_known(sample_hand()))
        assert pool.size == 45
        assert pool[0] == Unknown(2.0)
        assert pool[7] == Unknown(1.0)
        assert pool[5] == Unknown(4.0)
        assert pool.total() == pytest.approx(45.0)

    def test_remove_known(self):
        deck = BeliefDeck.from_known(sample_hand())
        deck.remove_known(7, 1)
        assert deck[7] == Known(2)
        assert deck.size == 6

    def test_remove_known_from_estimate_saturates(self):
        deck = BeliefDeck.empty()
        deck[4] = Unknown(0.25)
        deck.remove_known(4, 1)
        assert deck[4] == Unknown(0.0)

    def test_remove_known_from_bound(self):
        deck = BeliefDeck.empty()
        deck[2] = MoreThan(2)
        deck.remove_known(2, 1)
        assert deck[2] == MoreThan(1)


class TestTransferUnknownMass:
    def test_single_draw_from_full_pool(self):
        pool = BeliefDeck.full()
        hand = BeliefDeck.empty()
        hand.transfer_unknown_mass(pool, 1)

        for rank in range(13):
            assert isinstance(hand[rank], Unknown)
            assert hand[rank].value() == pytest.approx(1 / 13)
            assert pool[rank].value() == pytest.approx(4 - 1 / 13)
        assert hand.size == 1
        assert pool.size == 51
        assert hand.total() + pool.total() == pytest.approx(52.0)

    def test_shares_follow_pool_proportions(self):
        pool = BeliefDeck.empty()
        pool[0] = Unknown(3.0)
        pool[1] = Unknown(1.0)
        pool.size = 4
        hand = BeliefDeck.empty()
        hand.transfer_unknown_mass(pool, 2)
        assert hand[0].value() == pytest.approx(1.5)
        assert hand[1].value() == pytest.approx(0.5)
        assert pool[0].value() == pytest.approx(1.5)
        assert pool[1].value() == pytest.approx(0.5)

    def test_known_cell_in_receiver_becomes_bound(self):
        pool = BeliefDeck.full()
        hand = BeliefDeck.empty()
        hand[5] = Known(1)
        hand.transfer_unknown_mass(pool, 1)
        assert hand[5] == MoreThan(1)

    def test_known_zero_pool_rank_gives_nothing(self):
        pool = BeliefDeck.full()
        pool[9] = Known(0)
        hand = BeliefDeck.empty()
        hand.transfer_unknown_mass(pool, 1)
        assert hand[9] == Unknown(0.0)
        assert pool[9] == Known(0)

    def test_empty_source_moves_counts_only(self):
        pool = BeliefDeck.empty()
        pool.size = 3
        hand = BeliefDeck.empty()
        hand.transfer_unknown_mass(pool, 1)
        assert hand.total() == 0.0
        assert hand.size == 1
        assert pool.size == 2


class TestCopyAndSerialize:
    def test_copy_is_independent(self):
        deck = BeliefDeck.full()
        clone = deck.copy()
        clone.remove_known(0, 1)
        assert deck[0] == Unknown(4.0)
        assert clone != deck

    def test_to_dict(self):
        d = BeliefDeck.from_known(sample_hand()).to_dict()
        assert d["size"] == 7
        assert d["cards"][0] == {"type": "Known", "value": 2.0}
