from evolution.trainer import Agent, EvolutionConfig, EvolutionTrainer, GenerationStats
