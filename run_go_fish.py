#!/usr/bin/env python3
"""Train Go Fish policy networks and show a sample match.

This is the main entry point for evolving a population of policies,
printing per-generation fitness, and replaying one match of the best
network against baseline policies.
"""

from __future__ import annotations

import argparse
import random

from belief_config import BeliefConfig
from eval.head_to_head import play_matches
from eval.training_tracker import TrainingTracker
from evolution.trainer import EvolutionConfig, EvolutionTrainer
from gofish.game import MatchEngine
from policy.agents import DrawOnlyPolicy, GreedyAskPolicy, NetworkPolicy, RandomPolicy


def print_separator(title=""):
    print(f"\n{'='*60}")
    if title:
        print(f"  {title}")
        print(f"{'='*60}")


def run_training(config, generations, save_path=None):
    print_separator("Evolution")
    trainer = EvolutionTrainer(config)
    tracker = TrainingTracker()

    for _ in range(generations):
        stats = trainer.step()
        tracker.record(
            stats.generation,
            [agent.fitness for agent in trainer.agents],
            extra_metrics={"finished_fraction": stats.finished_matches / max(stats.matches, 1)},
        )
        print(f"  {stats}")

    print(tracker.summary())
    if save_path:
        tracker.save(save_path)
        print(f"  Saved training log to {save_path}")
    return trainer


def show_sample_match(trainer, max_turns, seed):
    print_separator("Sample Match (best network in seat 0)")
    table = trainer.table
    policies = [NetworkPolicy(trainer.best_agent().network)]
    policies += [GreedyAskPolicy(table, seat) for seat in range(1, table.num_seats)]

    engine = MatchEngine(policies, config=table, rng=random.Random(seed))
    engine.play(max_turns)
    for record in engine.history:
        print(f"  {record}")
    status = "finished" if engine.finished else f"stopped at {max_turns} turns"
    print(f"\n  Match {status}. Books: {engine.books}")


def compare_baselines(table, matches, max_turns, seed):
    print_separator("Baseline Series")
    policies = [GreedyAskPolicy(table, 0), DrawOnlyPolicy(table)]
    policies += [
        RandomPolicy(table, seed=None if seed is None else seed + seat)
        for seat in range(2, table.num_seats)
    ]
    # greedy policies need their own seat index, so keep seat order fixed
    result = play_matches(
        policies, num_matches=matches, config=table,
        max_turns=max_turns, seed=seed, rotate_seats=False,
    )
    names = [type(p).__name__ for p in policies]
    print(f"  Policies: {', '.join(names)}")
    print(result)


def main():
    parser = argparse.ArgumentParser(description="Go Fish policy evolution")
    parser.add_argument("--generations", type=int, default=20,
                        help="Number of generations to evolve")
    parser.add_argument("--population", type=int, default=100,
                        help="Population size (multiple of --seats)")
    parser.add_argument("--seats", type=int, default=4,
                        help="Seats per match")
    parser.add_argument("--evaluation-games", type=int, default=40,
                        help="Evaluation rounds per generation")
    parser.add_argument("--max-turns", type=int, default=50,
                        help="Turn cap per match")
    parser.add_argument("--reproduction-fraction", type=float, default=0.1,
                        help="Fraction of the population kept as parents")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--save", type=str, default=None,
                        help="Write the training log to this JSON file")
    parser.add_argument("--baselines", action="store_true",
                        help="Also run a baseline policy series")
    args = parser.parse_args()

    config = EvolutionConfig(
        population_size=args.population,
        reproduction_fraction=args.reproduction_fraction,
        evaluation_games=args.evaluation_games,
        seats_per_match=args.seats,
        max_turns=args.max_turns,
        seed=args.seed,
    )
    print(f"Evolving {config.population_size} policies for {args.generations} generations")
    print(f"  {config.seats_per_match} seats per match, {config.max_turns} turn cap")

    trainer = run_training(config, args.generations, args.save)
    show_sample_match(trainer, args.max_turns, args.seed)

    if args.baselines:
        compare_baselines(BeliefConfig(num_seats=args.seats), 200, args.max_turns, args.seed)


if __name__ == "__main__":
    main()
