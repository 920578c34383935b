"""Configuration package for the creature simulation.

Module-level defaults live in the themed modules (world, creature, food,
brain, evolution); ``simulation_config`` groups them into dataclasses that
a single run is constructed from.
"""

from evosim.config.simulation_config import (
    BrainConfig,
    CreatureConfig,
    EvolutionConfig,
    FoodConfig,
    SimulationConfig,
    WorldConfig,
)

__all__ = [
    "BrainConfig",
    "CreatureConfig",
    "EvolutionConfig",
    "FoodConfig",
    "SimulationConfig",
    "WorldConfig",
]
