"""Food configuration constants.

Food scarcity and placement drive selection: food spawns on the left side of
the world while reproduction requires reaching the right side, so creatures
must forage before travelling.
"""

FOOD_COUNT = 40
FOOD_SIZE = 6.0

# Food x positions are drawn from [0, world_width * fraction)
FOOD_SPAWN_X_FRACTION = 0.5

# Shift of the spawn fraction per generation. Negative values push food
# further from the goal as the run progresses, increasing selective pressure.
FOOD_SPAWN_SHIFT_PER_GENERATION = 0.0
FOOD_MIN_SPAWN_X_FRACTION = 0.1

# Eaten food is parked here until respawned. Far enough off-world that no
# sensor or collision check can reach it.
DESPAWNED_POSITION = (-10_000.0, -10_000.0)
