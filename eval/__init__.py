"""Evaluation framework for Go Fish policies.

Provides:
- head_to_head: Single matches and seat-rotated series between policies
- training_tracker: Fitness tracking over evolution generations
"""
