"""Pytest configuration and fixtures for creature evolution tests."""

import random

import pytest

from evosim.config.simulation_config import (
    EvolutionConfig,
    FoodConfig,
    SimulationConfig,
    WorldConfig,
)


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def small_config():
    """A 200x200 world with a handful of creatures and short generations."""
    return SimulationConfig(
        world=WorldConfig(width=200, height=200),
        food=FoodConfig(count=5),
        evolution=EvolutionConfig(population_size=6, generation_length=20),
    )


@pytest.fixture
def manager(small_config):
    """A seeded GenerationManager on the small world."""
    from evosim.simulation.manager import GenerationManager

    return GenerationManager(small_config, seed=42)


@pytest.fixture
def make_creature(seeded_rng):
    """Factory for creatures in a 1024x1024 world with an all-zero brain."""
    from evosim.entities.creature import Creature

    def _make(x, y, world_width=1024, world_height=1024, **kwargs):
        return Creature(x, y, world_width, world_height, "#808080", rng=seeded_rng, **kwargs)

    return _make
