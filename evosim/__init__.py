"""evosim - neuroevolution of simple creatures.

A population of creatures, each steered by a small feedforward neural
network, forages in a 2D world. Generations end after a fixed number of
ticks; the fittest creatures that reached the goal zone are cloned and
mutated to form the next generation.

Usage:
    from evosim import GenerationManager, SimulationConfig

    manager = GenerationManager(SimulationConfig(), seed=42)
    for _ in range(1000):
        snapshot = manager.tick()
"""

from evosim.config.simulation_config import SimulationConfig
from evosim.entities import Creature, Food
from evosim.exceptions import (
    ConfigurationError,
    DimensionMismatch,
    EvoSimError,
    ModelShapeMismatch,
    NoEligibleParents,
    PersistenceError,
)
from evosim.neural_network import Activation, Layer, Matrix, NeuralNetwork
from evosim.simulation import GenerationManager, SimulationState, WorldSnapshot

__version__ = "0.1.0"

__all__ = [
    "Activation",
    "ConfigurationError",
    "Creature",
    "DimensionMismatch",
    "EvoSimError",
    "Food",
    "GenerationManager",
    "Layer",
    "Matrix",
    "ModelShapeMismatch",
    "NeuralNetwork",
    "NoEligibleParents",
    "PersistenceError",
    "SimulationConfig",
    "SimulationState",
    "WorldSnapshot",
]
