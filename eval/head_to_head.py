"""Head-to-head evaluation for Go Fish policies.

Provides:
- play_match(): Run one match up to a turn cap and report books per seat
- play_matches(): Run N matches with rotating seat order and aggregate
  books placed per policy, with confidence intervals
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from belief_config import BeliefConfig
from game_interface import DecisionPolicy
from gofish.game import MatchEngine


@dataclass
class MatchResult:
    """Result of a single match."""
    turns: int
    finished: bool
    books: List[int]

    def __str__(self) -> str:
        status = "finished" if self.finished else "turn cap"
        books = ", ".join(f"seat {i}: {b}" for i, b in enumerate(self.books))
        return f"Match ({self.turns} turns, {status}): {books}"


@dataclass
class SeriesResult:
    """Books placed per policy over a series of matches."""
    num_matches: int
    means: List[float]
    stds: List[float]
    ci_95: List[Tuple[float, float]]
    per_match_books: List[List[int]] = field(repr=False, default_factory=list)

    def __str__(self) -> str:
        lines = [f"Series ({self.num_matches} matches):"]
        for i, (mean, std, ci) in enumerate(zip(self.means, self.stds, self.ci_95)):
            lines.append(
                f"  Policy {i}: {mean:.4f} +/- {std:.4f} books"
                f"  95% CI: [{ci[0]:.4f}, {ci[1]:.4f}]"
            )
        return "\n".join(lines)


def play_match(
    policies: Sequence[DecisionPolicy],
    config: Optional[BeliefConfig] = None,
    max_turns: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> MatchResult:
    """Play one match. The engine is dropped once the turn cap is hit."""
    engine = MatchEngine(policies, config=config, rng=rng)
    turns = engine.play(max_turns)
    return MatchResult(turns=turns, finished=engine.finished, books=list(engine.books))


def play_matches(
    policies: Sequence[DecisionPolicy],
    num_matches: int = 100,
    config: Optional[BeliefConfig] = None,
    max_turns: Optional[int] = None,
    seed: Optional[int] = None,
    rotate_seats: bool = True,
) -> SeriesResult:
    """Play a series of matches between the same policies.

    If rotate_seats=True, match k seats the policies shifted by k so no
    policy always moves first. Each match gets its own random stream.
    """
    rng = random.Random(seed)
    n = len(policies)
    books_by_policy: List[List[int]] = [[] for _ in range(n)]

    for k in range(num_matches):
        shift = k % n if rotate_seats else 0
        order = [(shift + i) % n for i in range(n)]
        result = play_match(
            [policies[p] for p in order],
            config=config,
            max_turns=max_turns,
            rng=random.Random(rng.getrandbits(64)),
        )
        for seat, p in enumerate(order):
            books_by_policy[p].append(result.books[seat])

    means, stds, cis = [], [], []
    for books in books_by_policy:
        count = len(books)
        mean = sum(books) / count if count else 0.0
        if count > 1:
            std = math.sqrt(sum((b - mean) ** 2 for b in books) / (count - 1))
        else:
            std = 0.0
        se = std / math.sqrt(count) if count else 0.0
        means.append(mean)
        stds.append(std)
        cis.append((mean - 1.96 * se, mean + 1.96 * se))

    return SeriesResult(
        num_matches=num_matches,
        means=means,
        stds=stds,
        ci_95=cis,
        per_match_books=[list(b) for b in zip(*books_by_policy)],
    )
