"""Evolvable feed-forward policy network.

The network scores every move id from one seat's belief vector:

  Input:  belief vector in R^{feature_dim}
  Hidden: tanh layer of width num_opponents * num_ranks
  Output: softmax over num_moves move ids

Dimensions come from the table's BeliefConfig, so the same class works
for any seat count. Networks are not trained by gradient descent; a
population trainer recombines them with ``crossover`` and perturbs them
with ``mutate``.
"""

from __future__ import annotations

from typing import List, Optional

import torch
import torch.nn as nn

from belief_config import BeliefConfig

MUTATION_RATE = 0.1


class PolicyNetwork(nn.Module):
    """Scores move ids from a belief vector.

    Args:
        feature_dim: Belief vector length
        num_moves: Number of move ids to score
        hidden_dim: Hidden layer width
        generator: Optional torch.Generator for reproducible initialization
    """

    def __init__(
        self,
        feature_dim: int,
        num_moves: int,
        hidden_dim: int,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        super().__init__()
        self.feature_dim = feature_dim
        self.num_moves = num_moves
        self.hidden_dim = hidden_dim
        self.net = nn.Sequential(
            nn.Linear(feature_dim, hidden_dim),
            nn.Tanh(),
            nn.Linear(hidden_dim, num_moves),
            nn.Softmax(dim=-1),
        )
        self.reset_parameters(generator)

    @classmethod
    def for_config(
        cls,
        config: BeliefConfig,
        hidden_dim: Optional[int] = None,
        generator: Optional[torch.Generator] = None,
    ) -> PolicyNetwork:
        if hidden_dim is None:
            hidden_dim = config.num_opponents * config.num_ranks
        return cls(config.feature_dim, config.num_moves, hidden_dim, generator)

    def reset_parameters(self, generator: Optional[torch.Generator] = None) -> None:
        """Draw every weight and bias uniformly from [-1, 1]."""
        with torch.no_grad():
            for param in self.parameters():
                noise = torch.rand(param.shape, generator=generator)
                param.copy_(noise * 2.0 - 1.0)

    def forward(self, features: torch.Tensor) -> torch.Tensor:
        """Forward pass.

        Args:
            features: [batch, feature_dim] or [feature_dim]
        Returns:
            move_probs: [batch, num_moves] or [num_moves]
        """
        return self.net(features)

    def rank_moves(self, features: torch.Tensor) -> List[int]:
        """Move ids sorted by score, highest first; ties go to the lower id."""
        with torch.no_grad():
            scores = self.forward(features)
        order = torch.sort(scores, descending=True, stable=True).indices
        return order.tolist()

    def clone(self) -> PolicyNetwork:
        child = PolicyNetwork(self.feature_dim, self.num_moves, self.hidden_dim)
        child.load_state_dict(self.state_dict())
        return child

    def crossover(
        self, other: PolicyNetwork, generator: Optional[torch.Generator] = None
    ) -> PolicyNetwork:
        """Uniform crossover: each weight and bias comes from either parent."""
        child = self.clone()
        with torch.no_grad():
            for mine, theirs in zip(child.parameters(), other.parameters()):
                if mine.shape != theirs.shape:
                    raise ValueError(
                        f"Cannot cross networks with shapes {tuple(mine.shape)} "
                        f"and {tuple(theirs.shape)}"
                    )
                keep = torch.rand(mine.shape, generator=generator) < 0.5
                mine.copy_(torch.where(keep, mine, theirs))
        return child

    def mutate(
        self,
        rate: float = MUTATION_RATE,
        std: float = 1.0,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        """Add N(0, std) noise to each weight with probability ``rate``.

        Biases are left alone.
        """
        with torch.no_grad():
            for name, param in self.named_parameters():
                if not name.endswith("weight"):
                    continue
                hit = torch.rand(param.shape, generator=generator) < rate
                noise = torch.randn(param.shape, generator=generator) * std
                param.add_(noise * hit)
