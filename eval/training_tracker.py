"""Fitness history for population training.

A TrainingTracker keeps one Checkpoint per generation (the top and mean
fitness of the population, plus any extra metrics the caller wants to
log) and can write the whole history to JSON and read it back.
"""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence


@dataclass
class Checkpoint:
    """Population fitness after one generation's evaluation."""
    generation: int
    wall_time_s: float
    top_fitness: float
    mean_fitness: float
    metrics: Dict[str, float] = field(default_factory=dict)


class TrainingTracker:
    """Per-generation fitness log.

    Usage:
        tracker = TrainingTracker()
        for _ in range(num_generations):
            stats = trainer.step()
            tracker.record(stats.generation, [a.fitness for a in trainer.agents])
        tracker.save("fitness_log.json")
        print(tracker.summary())
    """

    def __init__(self) -> None:
        self.checkpoints: List[Checkpoint] = []
        self._start_time = time.perf_counter()

    def record(
        self,
        generation: int,
        fitnesses: Sequence[float],
        extra_metrics: Optional[Dict[str, float]] = None,
    ) -> Checkpoint:
        """Summarize one generation's fitness values; wall time is since construction."""
        scores = list(fitnesses)
        cp = Checkpoint(
            generation=generation,
            wall_time_s=time.perf_counter() - self._start_time,
            top_fitness=max(scores, default=0.0),
            mean_fitness=sum(scores) / len(scores) if scores else 0.0,
            metrics=dict(extra_metrics or {}),
        )
        self.checkpoints.append(cp)
        return cp

    @property
    def generations(self) -> List[int]:
        return [cp.generation for cp in self.checkpoints]

    @property
    def top_fitnesses(self) -> List[float]:
        return [cp.top_fitness for cp in self.checkpoints]

    @property
    def mean_fitnesses(self) -> List[float]:
        return [cp.mean_fitness for cp in self.checkpoints]

    def best_checkpoint(self) -> Optional[Checkpoint]:
        """Generation whose best agent scored highest (earliest on ties)."""
        best = None
        for cp in self.checkpoints:
            if best is None or cp.top_fitness > best.top_fitness:
                best = cp
        return best

    def mean_gain(self) -> Optional[float]:
        """Change in mean fitness from the first to the last generation."""
        if len(self.checkpoints) < 2:
            return None
        return self.checkpoints[-1].mean_fitness - self.checkpoints[0].mean_fitness

    def summary(self) -> str:
        if not self.checkpoints:
            return "No checkpoints recorded."

        rule = "=" * 60
        out = [rule, "  Training Progress", rule]
        out.append(f"  {'Gen':>6} {'Elapsed':>10} {'Top':>10} {'Mean':>10}")
        for cp in self.checkpoints:
            out.append(
                f"  {cp.generation:>6} {cp.wall_time_s:>9.1f}s "
                f"{cp.top_fitness:>10.2f} {cp.mean_fitness:>10.2f}"
            )
            out.extend(f"  {'':>6} {name}: {value:.4f}" for name, value in cp.metrics.items())

        best = self.best_checkpoint()
        out.append(f"\n  Best: generation {best.generation}, top fitness = {best.top_fitness:.2f}")
        gain = self.mean_gain()
        if gain is not None:
            out.append(f"  Mean fitness change: {gain:+.2f}")
        out.append(rule)
        return "\n".join(out)

    def to_dict(self) -> Dict[str, Any]:
        return {"checkpoints": [asdict(cp) for cp in self.checkpoints]}

    def save(self, path: str) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load(cls, path: str) -> TrainingTracker:
        data = json.loads(Path(path).read_text())
        tracker = cls()
        tracker.checkpoints = [Checkpoint(**cp) for cp in data["checkpoints"]]
        return tracker
