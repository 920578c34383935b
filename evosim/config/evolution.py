"""Generation, selection and mutation configuration constants.

Fitness weighting (one consistent set):
    fitness = 100 * (x / world_width)
            + 20  * (energy / max_energy)
            + 25  * food_eaten
            - 2   * collisions
"""

# =============================================================================
# GENERATIONS
# =============================================================================
POPULATION_SIZE = 50
GENERATION_LENGTH = 600  # Ticks per generation
MAX_GENERATIONS = None  # None runs until stopped

# =============================================================================
# SELECTION
# =============================================================================
# Reproduction requires x > world_width * GOAL_X_FRACTION and at least one
# food item eaten
GOAL_X_FRACTION = 0.5
MIN_FOOD_FOR_REPRODUCTION = 1

FITNESS_WEIGHT_PROGRESS = 100.0
FITNESS_WEIGHT_ENERGY = 20.0
FITNESS_WEIGHT_FOOD = 25.0
FITNESS_PENALTY_COLLISION = 2.0

# =============================================================================
# MUTATION
# =============================================================================
CLONE_MUTATION_CHANCE = 0.1  # Chance a child's brain is mutated at birth

# Adaptive creature mutation:
#   rate  = base + (1 - energy / max_energy) * energy_factor
#   scale = base + food_eaten / food_divisor
MUTATION_RATE_BASE = 0.05
MUTATION_RATE_ENERGY_FACTOR = 0.1
MUTATION_SCALE_BASE = 0.1
MUTATION_SCALE_FOOD_DIVISOR = 10.0
