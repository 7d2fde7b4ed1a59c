"""Per-seat belief tracking for Go Fish.

Each seat owns one SeatBelief. It holds:

  pool     -- BeliefDeck estimate of the face-down draw pile
  others   -- one BeliefDeck per opponent, in relative index order
              (this seat's own index elided, see gofish.seating)
  own_hand -- exact count per rank, or None for a spectator with no hand

A seat never reads another seat's belief or hand. Everything it knows
arrives through the event handlers below, each of which applies one
observed game fact. Handlers append the event they applied to
``events``, so a belief can be rebuilt from its starting hand and the
event log (see ``replay``).

Update rules:

  observe_draw   opponent took one unseen card: move proportional
                 Unknown mass from pool to that opponent
  self_draw      this seat saw the rank it drew; a fourth copy places
                 the book and the rank leaves play
  observe_ask    bystander watched a successful ask: target is now empty
                 for the rank; asker holds Known(3) / MoreThan(2), or the
                 rank is gone everywhere if a book was placed
  self_ask       this seat asked and received ``amount`` (possibly 0);
                 the target is now known empty for the rank
  self_give_all  this seat handed over its 1/2/3 copies; what that
                 implies about the asker depends on how many it gave
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from belief_config import BeliefConfig
from gofish.deck import BeliefDeck, KnownHand
from gofish.errors import IllegalMove, InvalidTransferAmount
from gofish.events import (
    ObserveAsk,
    ObserveDraw,
    SeatEvent,
    SelfAsk,
    SelfDraw,
    SelfGiveAll,
)
from gofish.moves import Ask, Draw, Move
from gofish.probability import Known, MoreThan
from gofish.seating import absolute_to_relative, relative_to_absolute


class SeatBelief:
    """What one seat can legitimately know about the table.

    Args:
        seat_id: Absolute index of this seat, stable for the match
        config: Table dimensions
        own_hand: This seat's dealt hand, or None for a spectator
    """

    def __init__(
        self,
        seat_id: int,
        config: Optional[BeliefConfig] = None,
        own_hand: Optional[KnownHand] = None,
    ) -> None:
        self.config = config if config is not None else BeliefConfig()
        cfg = self.config
        if not 0 <= seat_id < cfg.num_seats:
            raise ValueError(f"seat_id {seat_id} outside a {cfg.num_seats}-seat table")
        if own_hand is not None and len(own_hand) != cfg.num_ranks:
            raise ValueError(
                f"own_hand must have {cfg.num_ranks} ranks, got {len(own_hand)}"
            )
        if own_hand is not None and any(not 0 <= n < cfg.num_suits for n in own_hand):
            raise ValueError(
                f"own_hand counts must be in 0..{cfg.num_suits - 1}: {list(own_hand)}"
            )

        self.seat_id = seat_id
        self.own_hand: Optional[KnownHand] = list(own_hand) if own_hand is not None else None
        self.initial_hand: Optional[KnownHand] = list(own_hand) if own_hand is not None else None
        self.events: List[SeatEvent] = []

        self.pool = BeliefDeck.full(cfg.num_ranks, cfg.num_suits)
        if self.own_hand is not None:
            self.pool.subtract_deck(BeliefDeck.from_known(self.own_hand))

        # Opponents are dealt from whatever this seat cannot see.
        self.others: List[BeliefDeck] = []
        for _ in range(cfg.num_opponents):
            deck = BeliefDeck.empty(cfg.num_ranks)
            deck.transfer_unknown_mass(self.pool, cfg.starting_cards)
            self.others.append(deck)

    # ---- Index mapping ----

    def relative(self, absolute: int) -> int:
        """Opponent slot for an absolute seat index."""
        if absolute >= self.config.num_seats:
            raise IllegalMove(f"Invalid seat index {absolute}")
        return absolute_to_relative(self.seat_id, absolute)

    def absolute(self, relative: int) -> int:
        if relative >= self.config.num_opponents:
            raise IllegalMove(f"Invalid opponent slot {relative}")
        return relative_to_absolute(self.seat_id, relative)

    @property
    def is_spectator(self) -> bool:
        return self.own_hand is None

    # ---- Event handlers ----

    def observe_draw(self, opponent: int) -> None:
        self._opponent(opponent).transfer_unknown_mass(self.pool, 1)
        self.events.append(ObserveDraw(opponent))

    def self_draw(self, rank: int) -> bool:
        """Record a drawn card. Returns True if it completed a book."""
        hand = self._require_hand("draw")
        self._check_rank(rank)
        self.pool.remove_known(rank, 1)
        hand[rank] += 1
        placed = hand[rank] == self.config.num_suits
        if placed:
            hand[rank] = 0
            self._clear_rank(rank)
        self.events.append(SelfDraw(rank))
        return placed

    def observe_ask(
        self, asker: int, target: int, rank: int, amount: int, placed: bool
    ) -> None:
        """Watch ``asker`` take ``amount`` cards of ``rank`` from ``target``."""
        asker_deck = self._opponent(asker)
        target_deck = self._opponent(target)
        self._check_rank(rank)
        if amount not in (1, 2, 3):
            raise InvalidTransferAmount(
                f"Observed ask transferred {amount} cards of rank {rank}"
            )
        if not placed and amount == 3:
            raise InvalidTransferAmount("Three cards handed over must complete a book")

        target_deck[rank] = Known(0)
        target_deck.size = max(target_deck.size - amount, 0)
        asker_deck.size += amount

        if placed:
            asker_deck.size = max(asker_deck.size - self.config.num_suits, 0)
            self._clear_rank(rank)
        elif amount == 2:
            asker_deck[rank] = Known(3)
        else:
            asker_deck[rank] = MoreThan(2)
        self.events.append(ObserveAsk(asker, target, rank, amount, placed))

    def self_ask(self, target: int, rank: int, amount: int) -> bool:
        """Record the result of this seat's ask. Returns True if a book was placed."""
        hand = self._require_hand("ask")
        target_deck = self._opponent(target)
        self._check_rank(rank)
        if not 0 <= amount < self.config.num_suits:
            raise InvalidTransferAmount(
                f"Ask for rank {rank} transferred {amount} cards"
            )

        if hand[rank] + amount > self.config.num_suits:
            raise InvalidTransferAmount(
                f"Seat {self.seat_id} would hold {hand[rank] + amount} cards of rank {rank}"
            )
        hand[rank] += amount
        target_deck.remove_known(rank, amount)
        target_deck[rank] = Known(0)

        placed = hand[rank] == self.config.num_suits
        if placed:
            hand[rank] = 0
            self._clear_rank(rank)
        self.events.append(SelfAsk(target, rank, amount))
        return placed

    def self_give_all(self, asker: int, rank: int) -> None:
        """Hand every card of ``rank`` to ``asker``."""
        hand = self._require_hand("give cards")
        asker_deck = self._opponent(asker)
        self._check_rank(rank)

        given = hand[rank]
        if given == 0:
            raise IllegalMove(
                f"Seat {self.seat_id} holds no rank {rank}; a miss hands nothing over"
            )
        if given >= self.config.num_suits:
            raise InvalidTransferAmount(
                f"Seat {self.seat_id} cannot hand over {given} cards of rank {rank}"
            )

        asker_deck.size += given
        if given == 1:
            asker_deck[rank] = MoreThan(2)
        elif given == 2:
            asker_deck[rank] = Known(3)
        else:
            # asker held the fourth copy, so the book is down
            asker_deck.size = max(asker_deck.size - self.config.num_suits, 0)
            self._clear_rank(rank)
        hand[rank] = 0
        self.events.append(SelfGiveAll(asker, rank))

    def apply(self, event: SeatEvent) -> None:
        """Dispatch a recorded event to its handler."""
        if isinstance(event, ObserveDraw):
            self.observe_draw(event.opponent)
        elif isinstance(event, SelfDraw):
            self.self_draw(event.rank)
        elif isinstance(event, ObserveAsk):
            self.observe_ask(event.asker, event.target, event.rank, event.amount, event.placed)
        elif isinstance(event, SelfAsk):
            self.self_ask(event.target, event.rank, event.amount)
        elif isinstance(event, SelfGiveAll):
            self.self_give_all(event.asker, event.rank)
        else:
            raise TypeError(f"Unknown seat event: {event!r}")

    # ---- Queries ----

    def move_is_legal(self, move: Move) -> bool:
        if isinstance(move, Draw):
            return self.pool.total() > 0
        if isinstance(move, Ask):
            if move.player == self.seat_id:
                return False
            if not 0 <= move.player < self.config.num_seats:
                return False
            if not 0 <= move.rank < self.config.num_ranks:
                return False
            return self.own_hand is not None and self.own_hand[move.rank] > 0
        return False

    def hand_size(self) -> int:
        return sum(self.own_hand) if self.own_hand is not None else 0

    def to_dict(self) -> dict:
        """JSON-serializable snapshot of this seat's belief."""
        return {
            "id": self.seat_id,
            "pool": self.pool.to_dict(),
            "others": [deck.to_dict() for deck in self.others],
            "own_hand": list(self.own_hand) if self.own_hand is not None else None,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeatBelief):
            return NotImplemented
        return (
            self.seat_id == other.seat_id
            and self.config == other.config
            and self.own_hand == other.own_hand
            and self.pool == other.pool
            and self.others == other.others
        )

    def __repr__(self) -> str:
        role = "spectator" if self.is_spectator else "player"
        return f"SeatBelief(seat={self.seat_id}, {role}, events={len(self.events)})"

    # ---- Internals ----

    def _opponent(self, relative: int) -> BeliefDeck:
        if not 0 <= relative < len(self.others):
            raise IllegalMove(f"Invalid opponent slot {relative}")
        return self.others[relative]

    def _require_hand(self, action: str) -> KnownHand:
        if self.own_hand is None:
            raise IllegalMove(f"Spectator seat {self.seat_id} cannot {action}")
        return self.own_hand

    def _check_rank(self, rank: int) -> None:
        if not 0 <= rank < self.config.num_ranks:
            raise IllegalMove(f"Invalid rank {rank}")

    def _clear_rank(self, rank: int) -> None:
        """A placed book takes every copy of ``rank`` out of circulation."""
        for deck in self.others:
            deck[rank] = Known(0)
        self.pool[rank] = Known(0)


def replay(
    seat_id: int,
    config: BeliefConfig,
    own_hand: Optional[KnownHand],
    events: Iterable[SeatEvent],
) -> SeatBelief:
    """Rebuild a seat's belief from its starting hand and event log."""
    belief = SeatBelief(seat_id, config, own_hand)
    for event in events:
        belief.apply(event)
    return belief
