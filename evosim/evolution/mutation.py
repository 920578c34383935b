"""Mutation intensity for creature brains.

Mutation is the only source of novelty: brains are cloned and perturbed,
never trained. How hard a creature's brain is perturbed depends on how it
fared during the generation:

- Less remaining energy -> higher mutation rate (struggling creatures explore)
- More food eaten -> larger mutation scale (bigger jumps around good brains)
"""

from typing import Optional, Tuple

from evosim.config.simulation_config import EvolutionConfig

DEFAULT_EVOLUTION_CONFIG = EvolutionConfig()


def creature_mutation_parameters(
    energy: float,
    max_energy: float,
    food_eaten: int,
    config: Optional[EvolutionConfig] = None,
) -> Tuple[float, float]:
    """Calculate brain mutation rate and scale for one creature.

    Args:
        energy: Creature's remaining energy
        max_energy: Creature's energy capacity
        food_eaten: Food items the creature ate
        config: Evolution configuration (uses defaults if None)

    Returns:
        Tuple of (mutation_rate, mutation_scale)
    """
    cfg = config or DEFAULT_EVOLUTION_CONFIG

    energy_ratio = max(0.0, min(1.0, energy / max_energy)) if max_energy > 0 else 0.0
    rate = cfg.mutation_rate_base + (1.0 - energy_ratio) * cfg.mutation_rate_energy_factor
    rate = max(0.0, min(1.0, rate))

    scale = cfg.mutation_scale_base + max(0, food_eaten) / cfg.mutation_scale_food_divisor
    return rate, scale
