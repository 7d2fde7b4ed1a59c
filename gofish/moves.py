"""Moves a seat can make, and decoding of policy move ids.

Move id encoding (see BeliefConfig.num_moves):
  id <= num_opponents * num_ranks  ->  Ask(player=id // num_ranks, rank=id % num_ranks)
  larger ids                       ->  Draw

The decoded ``player`` is an absolute seat index, so some ids decode to
asking oneself; those are rejected by the legality check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from belief_config import BeliefConfig


@dataclass(frozen=True)
class Draw:
    """Take one card from the face-down pool."""

    def __str__(self) -> str:
        return "draw"


@dataclass(frozen=True)
class Ask:
    """Ask seat ``player`` (absolute index) for every card of ``rank``."""
    player: int
    rank: int

    def __str__(self) -> str:
        return f"ask({self.player}, {self.rank})"


Move = Union[Draw, Ask]


def move_from_id(config: BeliefConfig, move_id: int) -> Move:
    if move_id < 0:
        raise ValueError(f"Move id must be non-negative, got {move_id}")
    if move_id <= config.num_opponents * config.num_ranks:
        return Ask(player=move_id // config.num_ranks, rank=move_id % config.num_ranks)
    return Draw()


def move_to_id(config: BeliefConfig, move: Move) -> int:
    if isinstance(move, Draw):
        return config.draw_id
    move_id = move.player * config.num_ranks + move.rank
    if move_id > config.num_opponents * config.num_ranks:
        raise ValueError(f"{move} has no move id at a {config.num_seats}-seat table")
    return move_id
