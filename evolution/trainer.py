"""Population training loop for Go Fish policy networks.

Each generation:

  1. Selection   -- sort agents by fitness, keep the top
                    reproduction_fraction as parents
  2. Crossover   -- every other agent is replaced by a uniform crossover
                    of two distinct parents
  3. Mutation    -- each child's weights get Gaussian noise
  4. Evaluation  -- fitness is reset, then for each evaluation game the
                    population is shuffled into tables of
                    seats_per_match and every agent adds the books its
                    seat placed

Matches are independent: each one owns its engine and seat beliefs and
gets its own random stream, so none of them share state.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

import torch

from belief_config import BeliefConfig
from eval.head_to_head import play_match
from policy.agents import NetworkPolicy
from policy.network import MUTATION_RATE, PolicyNetwork


@dataclass
class EvolutionConfig:
    """Configuration for the population training loop."""
    population_size: int = 100
    reproduction_fraction: float = 0.1
    evaluation_games: int = 40
    seats_per_match: int = 4
    max_turns: int = 50
    hidden_dim: Optional[int] = None  # None = num_opponents * num_ranks
    mutation_rate: float = MUTATION_RATE
    mutation_std: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.population_size % self.seats_per_match != 0:
            raise ValueError(
                f"population_size ({self.population_size}) must be a multiple "
                f"of seats_per_match ({self.seats_per_match})"
            )
        if self.num_parents < 2:
            raise ValueError("reproduction_fraction must keep at least 2 parents")

    @property
    def num_parents(self) -> int:
        return int(self.population_size * self.reproduction_fraction)


@dataclass
class Agent:
    """A policy network and its fitness for the current generation."""
    network: PolicyNetwork
    fitness: float = 0.0


@dataclass
class GenerationStats:
    generation: int
    top_fitness: float
    mean_fitness: float
    matches: int
    finished_matches: int

    def __str__(self) -> str:
        return (
            f"Generation {self.generation}: top fitness {self.top_fitness:.1f}, "
            f"mean {self.mean_fitness:.2f} "
            f"({self.finished_matches}/{self.matches} matches finished)"
        )


class EvolutionTrainer:
    """Evolves a population of PolicyNetworks by playing Go Fish.

    Args:
        config: EvolutionConfig with population hyperparameters
    """

    def __init__(self, config: Optional[EvolutionConfig] = None) -> None:
        self.config = config if config is not None else EvolutionConfig()
        cfg = self.config
        self.table = BeliefConfig(num_seats=cfg.seats_per_match)
        self.rng = random.Random(cfg.seed)
        self.generator = torch.Generator()
        self.generator.manual_seed(self.rng.getrandbits(63))

        self.agents: List[Agent] = [
            Agent(PolicyNetwork.for_config(self.table, cfg.hidden_dim, self.generator))
            for _ in range(cfg.population_size)
        ]
        self.generation = 0
        self.history: List[GenerationStats] = []

    def select_and_breed(self) -> None:
        """Keep the fittest parents and refill the rest of the population."""
        cfg = self.config
        self.agents.sort(key=lambda a: a.fitness, reverse=True)
        parents = cfg.num_parents

        for i in range(parents, cfg.population_size):
            first, second = self.rng.sample(range(parents), 2)
            child = self.agents[first].network.crossover(
                self.agents[second].network, self.generator
            )
            child.mutate(cfg.mutation_rate, cfg.mutation_std, self.generator)
            self.agents[i].network = child

    def evaluate(self) -> GenerationStats:
        """Reset fitness and play every evaluation game."""
        cfg = self.config
        for agent in self.agents:
            agent.fitness = 0.0

        matches = 0
        finished = 0
        for _ in range(cfg.evaluation_games):
            self.rng.shuffle(self.agents)
            for start in range(0, cfg.population_size, cfg.seats_per_match):
                table = self.agents[start:start + cfg.seats_per_match]
                result = play_match(
                    [NetworkPolicy(agent.network) for agent in table],
                    config=self.table,
                    max_turns=cfg.max_turns,
                    rng=random.Random(self.rng.getrandbits(64)),
                )
                for agent, books in zip(table, result.books):
                    agent.fitness += books
                matches += 1
                finished += int(result.finished)

        fitnesses = [a.fitness for a in self.agents]
        return GenerationStats(
            generation=self.generation,
            top_fitness=max(fitnesses),
            mean_fitness=sum(fitnesses) / len(fitnesses),
            matches=matches,
            finished_matches=finished,
        )

    def step(self) -> GenerationStats:
        """Run one generation: selection, crossover, mutation, evaluation."""
        self.select_and_breed()
        stats = self.evaluate()
        self.history.append(stats)
        self.generation += 1
        return stats

    def train(self, num_generations: int) -> List[GenerationStats]:
        return [self.step() for _ in range(num_generations)]

    def best_agent(self) -> Agent:
        return max(self.agents, key=lambda a: a.fitness)
