"""Decision policy interface for the Go Fish engine.

Defines the protocol a move-picking policy must implement to be seated
at a MatchEngine. The engine never inspects a policy: it hands over one
seat's belief vector and walks the returned ranking until it finds a
legal move.

The interface uses Python's Protocol (structural subtyping) so policies
don't need to explicitly inherit, they just need to be callable with
the right signature.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import torch


@runtime_checkable
class DecisionPolicy(Protocol):
    """Ranks candidate moves from one seat's belief vector.

    Any callable with this signature can be used with:
    - MatchEngine (one policy per seat)
    - play_match / play_matches (evaluation)
    - EvolutionTrainer (when backed by a PolicyNetwork)
    """

    def __call__(self, features: torch.Tensor) -> Sequence[int]:
        """Return move ids, most preferred first.

        Args:
            features: [feature_dim] belief vector (see BeliefConfig)

        Returns:
            Move ids in preference order. The ranking need not be
            complete or contain any legal move; an exhausted ranking
            ends the match.
        """
        ...
