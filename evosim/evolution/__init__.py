"""Evolution module: fitness, parent selection and mutation intensity.

Brains are never trained. At the end of every generation the creatures that
reached the goal zone with food in their belly are ranked by fitness, the top
half reproduce by cloning, and clones are occasionally mutated.
"""

from evosim.evolution.fitness import calculate_fitness
from evosim.evolution.mutation import creature_mutation_parameters
from evosim.evolution.selection import (
    ScoredCreature,
    children_per_parent,
    is_eligible,
    rank_eligible,
    select_parents,
)

__all__ = [
    "calculate_fitness",
    "children_per_parent",
    "creature_mutation_parameters",
    "is_eligible",
    "rank_eligible",
    "ScoredCreature",
    "select_parents",
]
