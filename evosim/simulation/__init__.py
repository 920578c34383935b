"""Simulation layer: the generation manager and its observable state."""

from evosim.simulation.manager import GenerationManager
from evosim.simulation.snapshot import (
    CreatureState,
    FoodState,
    GenerationReport,
    WorldSnapshot,
)
from evosim.simulation.state import SimulationState

__all__ = [
    "CreatureState",
    "FoodState",
    "GenerationManager",
    "GenerationReport",
    "SimulationState",
    "WorldSnapshot",
]
