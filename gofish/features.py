"""Flatten a SeatBelief into the fixed-length vector a policy reads.

Layout (see BeliefConfig.feature_dim):
  per opponent, per rank:  [state tag, magnitude]
  pool, per rank:          [state tag, magnitude]
  own hand, per rank:      magnitude
  bias:                    1.0

State tags are -1 (Unknown), 0 (Known), 1 (MoreThan). Magnitudes map a
count in [0, 3] linearly onto [-1, 1].
"""

from __future__ import annotations

from typing import List

import torch

from gofish.belief_state import SeatBelief
from gofish.deck import BeliefDeck
from gofish.errors import IllegalMove
from gofish.probability import state_tag


def lerp(start: float, end: float, progress: float) -> float:
    return start + progress * (end - start)


def magnitude(count: float) -> float:
    return lerp(-1.0, 1.0, count / 3.0)


def deck_features(deck: BeliefDeck) -> List[float]:
    out: List[float] = []
    for cell in deck.cards:
        out.append(state_tag(cell))
        out.append(magnitude(cell.value()))
    return out


def encode_belief(belief: SeatBelief, device: str = "cpu") -> torch.Tensor:
    """Belief vector for one seat. Shape: [feature_dim]."""
    if belief.own_hand is None:
        raise IllegalMove(f"Spectator seat {belief.seat_id} has no hand to encode")

    values: List[float] = []
    for deck in belief.others:
        values.extend(deck_features(deck))
    values.extend(deck_features(belief.pool))
    values.extend(magnitude(count) for count in belief.own_hand)
    values.append(1.0)

    return torch.tensor(values, dtype=torch.float32, device=torch.device(device))
