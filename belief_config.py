"""Game dimensions for Go Fish belief tracking and policy I/O.

This module defines the BeliefConfig dataclass that captures the table
size and card counts, plus the derived dimensions that the policy layer
(network, baseline agents, trainer) needs. The policy layer never
hard-codes 13 ranks or 4 seats; it only works through BeliefConfig.

Belief vector layout (length feature_dim):
  [opponent_0 | ... | opponent_{k-1} | pool | own_hand | bias]
  where each opponent block and the pool block hold 2 numbers per rank
  (state tag, normalized magnitude), own_hand holds 1 number per rank,
  and bias is a single constant 1.0.

Move id layout (length num_moves):
  id <= num_opponents * num_ranks  ->  Ask(player=id // num_ranks, rank=id % num_ranks)
  any larger id                    ->  Draw
"""

from __future__ import annotations

from dataclasses import dataclass

NUM_RANKS = 13  # only the value of a card matters, not its suit
NUM_SUITS = 4
STARTING_CARDS = 7

INPUTS_PER_UNKNOWN_CARD = 2


@dataclass(frozen=True)
class BeliefConfig:
    """Configuration describing a Go Fish table.

    Attributes:
        num_seats: Number of seats at the table (including this one)
        num_ranks: Distinct card values (suits are not modelled)
        num_suits: Copies of each rank; a book is all of them
        starting_cards: Cards dealt to every seat
    """
    num_seats: int = 4
    num_ranks: int = NUM_RANKS
    num_suits: int = NUM_SUITS
    starting_cards: int = STARTING_CARDS

    def __post_init__(self) -> None:
        if self.num_seats < 2:
            raise ValueError(f"Need at least 2 seats, got {self.num_seats}")
        if self.num_ranks < 1 or self.num_suits < 1:
            raise ValueError("num_ranks and num_suits must be positive")
        if self.starting_cards < 0:
            raise ValueError("starting_cards must be non-negative")
        if self.num_seats * self.starting_cards > self.deck_size:
            raise ValueError(
                f"Cannot deal {self.starting_cards} cards to {self.num_seats} "
                f"seats from a {self.deck_size}-card deck"
            )

    @property
    def num_opponents(self) -> int:
        return self.num_seats - 1

    @property
    def deck_size(self) -> int:
        return self.num_ranks * self.num_suits

    @property
    def feature_dim(self) -> int:
        """Flattened belief vector length for network input."""
        return (
            self.num_seats * self.num_ranks * INPUTS_PER_UNKNOWN_CARD
            + self.num_ranks
            + 1
        )

    @property
    def num_moves(self) -> int:
        """Number of move ids a policy ranks.

        Ids 0..num_opponents * num_ranks decode to asks; the last id is
        the first one past that range and decodes to Draw.
        """
        return self.num_opponents * self.num_ranks + 2

    @property
    def draw_id(self) -> int:
        return self.num_moves - 1
