"""Decision policies that can sit at a MatchEngine.

Provides:
- NetworkPolicy: ranks moves with a PolicyNetwork
- RandomPolicy: uniformly shuffled ranking
- DrawOnlyPolicy: always draws while the pool lasts
- GreedyAskPolicy: asks for its most-held rank from the opponent believed
  to hold the most of it, drawing as a fallback

All of them only read the belief vector handed to them. Baselines decode
the vector using the layout documented in belief_config.
"""

from __future__ import annotations

import random
from typing import List, Optional

import torch

from belief_config import INPUTS_PER_UNKNOWN_CARD, BeliefConfig
from gofish.seating import relative_to_absolute
from policy.network import PolicyNetwork


class NetworkPolicy:
    """Policy that ranks moves by a PolicyNetwork's scores."""

    def __init__(self, network: PolicyNetwork) -> None:
        self.network = network

    def __call__(self, features: torch.Tensor) -> List[int]:
        return self.network.rank_moves(features)


class RandomPolicy:
    """Policy that ranks every move id in random order."""

    def __init__(self, config: BeliefConfig, seed: Optional[int] = None) -> None:
        self.config = config
        self.rng = random.Random(seed)

    def __call__(self, features: torch.Tensor) -> List[int]:
        ids = list(range(self.config.num_moves))
        self.rng.shuffle(ids)
        return ids


class DrawOnlyPolicy:
    """Policy that never asks; the match ends once the pool is empty."""

    def __init__(self, config: BeliefConfig) -> None:
        self.config = config

    def __call__(self, features: torch.Tensor) -> List[int]:
        return [self.config.draw_id]


def own_hand_counts(config: BeliefConfig, features: torch.Tensor) -> List[float]:
    """Recover own-hand counts from the magnitude encoding."""
    start = config.num_seats * config.num_ranks * INPUTS_PER_UNKNOWN_CARD
    magnitudes = features[start:start + config.num_ranks]
    return [round((m + 1.0) * 1.5) for m in magnitudes.tolist()]


def opponent_estimates(config: BeliefConfig, features: torch.Tensor) -> List[List[float]]:
    """Estimated counts per opponent slot and rank."""
    out = []
    for slot in range(config.num_opponents):
        base = slot * config.num_ranks * INPUTS_PER_UNKNOWN_CARD
        block = features[base:base + config.num_ranks * INPUTS_PER_UNKNOWN_CARD]
        magnitudes = block[1::INPUTS_PER_UNKNOWN_CARD].tolist()
        out.append([(m + 1.0) * 1.5 for m in magnitudes])
    return out


class GreedyAskPolicy:
    """Ask for held ranks from the opponent believed to hold the most.

    The belief vector carries opponent slots, not absolute seats, so the
    policy needs its own seat index to name the target.
    """

    def __init__(self, config: BeliefConfig, seat_id: int) -> None:
        self.config = config
        self.seat_id = seat_id

    def __call__(self, features: torch.Tensor) -> List[int]:
        cfg = self.config
        hand = own_hand_counts(cfg, features)
        estimates = opponent_estimates(cfg, features)

        candidates = []
        for rank, held in enumerate(hand):
            if held <= 0:
                continue
            for slot, counts in enumerate(estimates):
                target = relative_to_absolute(self.seat_id, slot)
                move_id = target * cfg.num_ranks + rank
                if move_id > cfg.num_opponents * cfg.num_ranks:
                    continue
                candidates.append((held, counts[rank], -move_id, move_id))

        candidates.sort(reverse=True)
        return [c[-1] for c in candidates] + [cfg.draw_id]
