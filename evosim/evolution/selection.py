"""Parent selection at generation boundaries.

Only creatures that reached the goal zone (right of
``world_width * goal_x_fraction``) and ate at least
``min_food_for_reproduction`` items may reproduce. Eligible creatures are
ranked by fitness and the top half (rounded up) become parents.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

from evosim.config.simulation_config import EvolutionConfig
from evosim.evolution.fitness import calculate_fitness
from evosim.exceptions import EvolutionError, NoEligibleParents

if TYPE_CHECKING:
    from evosim.entities.creature import Creature

DEFAULT_EVOLUTION_CONFIG = EvolutionConfig()


@dataclass
class ScoredCreature:
    """A creature paired with its end-of-generation fitness."""

    creature: "Creature"
    fitness: float


def is_eligible(creature: "Creature", config: Optional[EvolutionConfig] = None) -> bool:
    """Whether ``creature`` may reproduce."""
    cfg = config or DEFAULT_EVOLUTION_CONFIG
    goal_x = creature.world_width * cfg.goal_x_fraction
    return creature.pos.x > goal_x and creature.food_eaten >= cfg.min_food_for_reproduction


def rank_eligible(
    creatures: Sequence["Creature"], config: Optional[EvolutionConfig] = None
) -> List[ScoredCreature]:
    """Score eligible creatures, best first.

    The sort is stable, so ties keep population order.
    """
    cfg = config or DEFAULT_EVOLUTION_CONFIG
    scored = [
        ScoredCreature(creature, calculate_fitness(creature, cfg))
        for creature in creatures
        if is_eligible(creature, cfg)
    ]
    scored.sort(key=lambda entry: entry.fitness, reverse=True)
    return scored


def select_parents(
    creatures: Sequence["Creature"],
    config: Optional[EvolutionConfig] = None,
    generation: int = 0,
) -> List[ScoredCreature]:
    """Pick the top half (rounded up) of the eligible creatures.

    Raises:
        NoEligibleParents: If no creature is eligible
    """
    ranked = rank_eligible(creatures, config)
    if not ranked:
        raise NoEligibleParents(generation, len(creatures))
    return ranked[: math.ceil(len(ranked) / 2)]


def children_per_parent(population_size: int, parent_count: int) -> int:
    """Children each parent produces so the next generation reaches the target.

    Rounds up, so the next generation may slightly exceed ``population_size``.
    """
    if parent_count < 1:
        raise EvolutionError("Cannot split a population between zero parents")
    return math.ceil(population_size / parent_count)
