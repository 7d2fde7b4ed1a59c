"""Host-side bot sessions.

A BotSession is one seat's view of a real table: the host creates it
with the table size, the seat's dealt hand (or None for a spectator)
and the seat's position, feeds it the events it observes, and asks it
for move suggestions. Sessions are plain objects owned by whoever
created them; a SessionStore keeps them by id for the web server.
"""

from __future__ import annotations

import uuid
from typing import Dict, Optional

import torch

from belief_config import BeliefConfig
from gofish.belief_state import SeatBelief
from gofish.deck import KnownHand
from gofish.features import encode_belief
from gofish.moves import Move, move_from_id
from policy.network import PolicyNetwork


class BotSession:
    """One seat's belief state plus the network that suggests its moves."""

    def __init__(
        self,
        num_seats: int,
        own_hand: Optional[KnownHand],
        seat_id: int,
        network: Optional[PolicyNetwork] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = BeliefConfig(num_seats=num_seats)
        self.belief = SeatBelief(seat_id, self.config, own_hand)
        if network is None:
            generator = torch.Generator()
            if seed is not None:
                generator.manual_seed(seed)
            network = PolicyNetwork.for_config(self.config, generator=generator)
        self.network = network

    def observe(self, event_type: str, **kwargs) -> None:
        """Apply an event by handler name, e.g. observe("observe_draw", opponent=1)."""
        handlers = {
            "observe_draw": self.belief.observe_draw,
            "self_draw": self.belief.self_draw,
            "observe_ask": self.belief.observe_ask,
            "self_ask": self.belief.self_ask,
            "self_give_all": self.belief.self_give_all,
        }
        if event_type not in handlers:
            raise ValueError(f"Unknown event type: {event_type}")
        handlers[event_type](**kwargs)

    def suggest_move(self) -> Optional[Move]:
        """The network's highest-ranked legal move, or None."""
        features = encode_belief(self.belief)
        for move_id in self.network.rank_moves(features):
            move = move_from_id(self.config, move_id)
            if self.belief.move_is_legal(move):
                return move
        return None

    def to_dict(self) -> dict:
        return self.belief.to_dict()


class SessionStore:
    """Sessions keyed by an opaque id."""

    def __init__(self) -> None:
        self._sessions: Dict[str, BotSession] = {}

    def create(self, *args, **kwargs) -> str:
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = BotSession(*args, **kwargs)
        return session_id

    def get(self, session_id: str) -> Optional[BotSession]:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
