"""Go Fish match engine.

The engine owns the ground truth: the face-down pool as exact per-rank
counts, and one SeatBelief per seat (whose ``own_hand`` is that seat's
true hand). Seats never see each other's state; the engine resolves each
move against ground truth and then pushes one event to every seat.

Turn protocol:
  1. Encode the active seat's belief, ask its policy for a ranking, and
     take the first legal candidate. No legal candidate ends the match.
  2. Resolve the move:
       Draw       -- sample a physical card from the pool; the drawer
                     sees its rank, everyone else sees an unseen draw
       Ask(p, r)  -- the asker learns how many cards it received (maybe
                     none); on a hit the target hands them over and every
                     bystander watches the exchange
  3. Pass the turn to the next seat.

Rules:
  - 13 ranks x 4 suits, 7 starting cards per seat
  - a seat may only ask for a rank it holds
  - collecting all 4 copies places a book, removing the rank from play
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from belief_config import BeliefConfig
from game_interface import DecisionPolicy
from gofish.belief_state import SeatBelief
from gofish.deck import KnownHand, empty_hand, full_pool
from gofish.errors import EmptyPoolDraw
from gofish.features import encode_belief
from gofish.moves import Ask, Draw, Move, move_from_id


@dataclass(frozen=True)
class TurnRecord:
    """One resolved turn, from the engine's (omniscient) point of view.

    rank: rank drawn, or rank asked for
    amount: cards transferred (1 for a draw)
    placed: whether the actor completed a book this turn
    """
    turn: int
    seat: int
    move: Move
    rank: int
    amount: int
    placed: bool

    def __str__(self) -> str:
        book = " (book)" if self.placed else ""
        if isinstance(self.move, Draw):
            return f"turn {self.turn}: seat {self.seat} drew rank {self.rank}{book}"
        return (
            f"turn {self.turn}: seat {self.seat} asked seat {self.move.player} "
            f"for rank {self.rank}, got {self.amount}{book}"
        )


def sample_rank(pool: Sequence[int], rng: random.Random) -> int:
    """Pick a rank with probability proportional to its remaining count.

    Uniform over the physical cards left, not over ranks.
    """
    total = sum(pool)
    if total <= 0:
        raise EmptyPoolDraw("Cannot draw a card from an empty pool")
    pick = rng.randint(1, total)
    cumulative = 0
    for rank, count in enumerate(pool):
        cumulative += count
        if pick <= cumulative:
            return rank
    raise EmptyPoolDraw("Pool counts changed while sampling")


def deal_hands(
    config: BeliefConfig, rng: random.Random
) -> Tuple[List[KnownHand], KnownHand]:
    """Deal starting hands from a shuffled deck.

    If any hand starts with a complete book the whole deal is redone.

    Returns:
        (hands, pool): one exact hand per seat, and the remaining pool
    """
    while True:
        deck = [
            rank
            for rank in range(config.num_ranks)
            for _ in range(config.num_suits)
        ]
        rng.shuffle(deck)

        hands = [empty_hand(config.num_ranks) for _ in range(config.num_seats)]
        pool = full_pool(config.num_ranks, config.num_suits)
        for seat in range(config.num_seats):
            start = seat * config.starting_cards
            for rank in deck[start:start + config.starting_cards]:
                hands[seat][rank] += 1
                pool[rank] -= 1

        if not any(count == config.num_suits for hand in hands for count in hand):
            return hands, pool


class MatchEngine:
    """Drives one Go Fish match between policy-controlled seats.

    Args:
        policies: One decision policy per seat, in seat order
        config: Table dimensions (num_seats is taken from len(policies))
        rng: Random stream for dealing and drawing; give each concurrent
            match its own
        hands: Optional fixed starting hands (pool is whatever remains)
    """

    def __init__(
        self,
        policies: Sequence[DecisionPolicy],
        config: Optional[BeliefConfig] = None,
        rng: Optional[random.Random] = None,
        hands: Optional[Sequence[KnownHand]] = None,
    ) -> None:
        if config is None:
            config = BeliefConfig(num_seats=len(policies))
        if len(policies) != config.num_seats:
            raise ValueError(
                f"Got {len(policies)} policies for a {config.num_seats}-seat table"
            )
        self.config = config
        self.policies = list(policies)
        self.rng = rng if rng is not None else random.Random()

        if hands is None:
            dealt, self.pool = deal_hands(config, self.rng)
        else:
            dealt, self.pool = self._pool_from_hands(hands)

        self.seats: List[SeatBelief] = [
            SeatBelief(seat_id, config, hand) for seat_id, hand in enumerate(dealt)
        ]
        self.books: List[int] = [0] * config.num_seats
        self.current_player = 0
        self.finished = False
        self.turn = 0
        self.history: List[TurnRecord] = []

    def _pool_from_hands(
        self, hands: Sequence[KnownHand]
    ) -> Tuple[List[KnownHand], KnownHand]:
        cfg = self.config
        if len(hands) != cfg.num_seats:
            raise ValueError(f"Expected {cfg.num_seats} hands, got {len(hands)}")
        pool = full_pool(cfg.num_ranks, cfg.num_suits)
        for hand in hands:
            if len(hand) != cfg.num_ranks:
                raise ValueError(f"Hand must have {cfg.num_ranks} ranks: {hand}")
            if any(count >= cfg.num_suits for count in hand):
                raise ValueError(f"Hand starts with a complete book: {hand}")
            for rank, count in enumerate(hand):
                pool[rank] -= count
        if any(count < 0 for count in pool):
            raise ValueError("Hands hold more copies of a rank than exist")
        return [list(hand) for hand in hands], pool

    # ---- State ----

    @property
    def num_seats(self) -> int:
        return self.config.num_seats

    @property
    def state(self) -> Tuple[str, Optional[int]]:
        """("running", active_seat) or ("finished", None)."""
        if self.finished:
            return ("finished", None)
        return ("running", self.current_player)

    def pool_size(self) -> int:
        return sum(self.pool)

    def hand(self, seat: int) -> KnownHand:
        return list(self.seats[seat].own_hand)

    def cards_in_play(self) -> int:
        """Pool plus every hand plus placed books; constant for a match."""
        return (
            self.pool_size()
            + sum(seat.hand_size() for seat in self.seats)
            + self.config.num_suits * sum(self.books)
        )

    # ---- Turn protocol ----

    def is_legal(self, seat: int, move: Move) -> bool:
        """Seat-level legality, plus the pile on the table must be non-empty to draw.

        The number of cards in the face-down pile is public, so refusing
        a draw from an empty pile uses no hidden information.
        """
        if not self.seats[seat].move_is_legal(move):
            return False
        if isinstance(move, Draw):
            return self.pool_size() > 0
        return True

    def select_move(self, seat: int) -> Optional[Move]:
        """First legal move in the seat's policy ranking, or None.

        Ids that do not decode to a move are skipped like illegal ones.
        """
        features = encode_belief(self.seats[seat])
        for move_id in self.policies[seat](features):
            if int(move_id) < 0:
                continue
            move = move_from_id(self.config, int(move_id))
            if self.is_legal(seat, move):
                return move
        return None

    def step(self) -> Optional[TurnRecord]:
        """Play one turn. Returns its record, or None once the match is over."""
        if self.finished:
            return None

        actor = self.current_player
        move = self.select_move(actor)
        if move is None:
            self.finished = True
            return None

        if isinstance(move, Draw):
            record = self._resolve_draw(actor)
        else:
            record = self._resolve_ask(actor, move)

        self.history.append(record)
        self.turn += 1
        self.current_player = (self.current_player + 1) % self.num_seats
        return record

    def play(self, max_turns: Optional[int] = None) -> int:
        """Step until the match finishes or ``max_turns`` more turns have run.

        Returns the number of turns played by this call. An unfinished
        match stays resumable.
        """
        played = 0
        while not self.finished and (max_turns is None or played < max_turns):
            if self.step() is None:
                break
            played += 1
        return played

    def _resolve_draw(self, actor: int) -> TurnRecord:
        rank = sample_rank(self.pool, self.rng)
        self.pool[rank] -= 1

        placed = self.seats[actor].self_draw(rank)
        if placed:
            self.books[actor] += 1

        for seat in self.seats:
            if seat.seat_id != actor:
                seat.observe_draw(seat.relative(actor))

        return TurnRecord(self.turn, actor, Draw(), rank, 1, placed)

    def _resolve_ask(self, actor: int, move: Ask) -> TurnRecord:
        asker = self.seats[actor]
        target = self.seats[move.player]
        amount = target.own_hand[move.rank]

        placed = asker.self_ask(asker.relative(move.player), move.rank, amount)
        if placed:
            self.books[actor] += 1

        if amount > 0:
            target.self_give_all(target.relative(actor), move.rank)
            for seat in self.seats:
                if seat.seat_id in (actor, move.player):
                    continue
                seat.observe_ask(
                    seat.relative(actor),
                    seat.relative(move.player),
                    move.rank,
                    amount,
                    placed,
                )

        return TurnRecord(self.turn, actor, move, move.rank, amount, placed)
