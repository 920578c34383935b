"""Fitness scoring for generation boundaries.

Fitness is only evaluated when a generation ends, to rank the creatures that
reached the goal zone. It combines four signals:

- Rightward progress (x position relative to world width), rewarded
- Remaining energy (relative to capacity), rewarded
- Food eaten, rewarded
- Creature-creature collisions, penalized
"""

from typing import TYPE_CHECKING, Optional

from evosim.config.simulation_config import EvolutionConfig

if TYPE_CHECKING:
    from evosim.entities.creature import Creature

DEFAULT_EVOLUTION_CONFIG = EvolutionConfig()


def calculate_fitness(creature: "Creature", config: Optional[EvolutionConfig] = None) -> float:
    """Score one creature at the end of a generation."""
    cfg = config or DEFAULT_EVOLUTION_CONFIG

    progress = creature.pos.x / creature.world_width
    energy = creature.energy / creature.max_energy if creature.max_energy > 0 else 0.0

    return (
        cfg.fitness_weight_progress * progress
        + cfg.fitness_weight_energy * energy
        + cfg.fitness_weight_food * creature.food_eaten
        - cfg.fitness_penalty_collision * creature.collisions
    )
