"""Rank-count decks: exact hands and per-rank belief decks.

Only rank identity matters, so a deck is an array indexed by rank.

  KnownHand  -- List[int], exact count per rank (a seat's own hand, or
                the engine's ground-truth pool)
  BeliefDeck -- one Probability cell per rank plus a running card count,
                used both for a seat's estimate of the face-down pool and
                for its estimate of each opponent's hand
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from belief_config import NUM_RANKS, NUM_SUITS, STARTING_CARDS
from gofish.probability import (
    Known,
    Probability,
    Unknown,
    combine_add,
    combine_sub,
    to_dict as cell_to_dict,
)

DECK_SIZE = NUM_RANKS * NUM_SUITS

KnownHand = List[int]


def empty_hand(num_ranks: int = NUM_RANKS) -> KnownHand:
    return [0] * num_ranks


def full_pool(num_ranks: int = NUM_RANKS, num_suits: int = NUM_SUITS) -> KnownHand:
    return [num_suits] * num_ranks


@dataclass
class BeliefDeck:
    """Per-rank belief cells plus the number of cards believed present.

    ``size`` tracks whole cards. Unknown cells hold fractional mass, so
    ``size`` only matches the rounded cell values for decks built from
    exact (Known) counts.
    """
    cards: List[Probability]
    size: int = 0

    @classmethod
    def full(cls, num_ranks: int = NUM_RANKS, num_suits: int = NUM_SUITS) -> BeliefDeck:
        return cls(
            cards=[Unknown(float(num_suits)) for _ in range(num_ranks)],
            size=num_ranks * num_suits,
        )

    @classmethod
    def empty(cls, num_ranks: int = NUM_RANKS) -> BeliefDeck:
        return cls(cards=[Unknown(0.0) for _ in range(num_ranks)], size=0)

    @classmethod
    def from_known(cls, hand: KnownHand) -> BeliefDeck:
        return cls(cards=[Known(int(n)) for n in hand], size=int(sum(hand)))

    @property
    def num_ranks(self) -> int:
        return len(self.cards)

    def __getitem__(self, rank: int) -> Probability:
        return self.cards[rank]

    def __setitem__(self, rank: int, value: Probability) -> None:
        self.cards[rank] = value

    def copy(self) -> BeliefDeck:
        # cells are immutable, a shallow list copy is enough
        return BeliefDeck(cards=list(self.cards), size=self.size)

    def total(self) -> float:
        return sum(c.value() for c in self.cards)

    def subtract_deck(self, other: BeliefDeck) -> None:
        """Remove another deck's mass rank by rank."""
        for rank, cell in enumerate(other.cards):
            self.cards[rank] = combine_sub(self.cards[rank], cell)
        self.size = max(self.size - other.size, 0)

    def remove_known(self, rank: int, amount: int) -> None:
        self.cards[rank] = combine_sub(self.cards[rank], Known(amount))
        self.size = max(self.size - amount, 0)

    def transfer_unknown_mass(self, source: BeliefDeck, amount: int) -> None:
        """Model drawing ``amount`` cards of unseen rank from ``source``.

        Each rank receives its proportional share of ``source``'s mass as
        Unknown, and the same share is taken out of ``source``. A source
        with no mass left gives nothing away; the card counts still move.
        """
        total = source.total()
        if total > 0:
            shares = [c.value() / total * amount for c in source.cards]
            for rank, share in enumerate(shares):
                self.cards[rank] = combine_add(self.cards[rank], Unknown(share))
            for rank, share in enumerate(shares):
                source.cards[rank] = combine_sub(source.cards[rank], Unknown(share))
        self.size += amount
        source.size = max(source.size - amount, 0)

    def to_dict(self) -> dict:
        return {
            "cards": [cell_to_dict(c) for c in self.cards],
            "size": self.size,
        }
