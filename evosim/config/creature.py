"""Creature body, sensor and energy configuration constants."""

import math

# =============================================================================
# BODY
# =============================================================================
CREATURE_SIZE = 10.0  # Visual radius; also the movement wall margin
COLLISION_RADIUS_FACTOR = 0.8  # collision_radius = size * factor
CREATURE_SPEED = 2.0  # Units per tick at full output

# Creature-creature push-apart bounce keeps this fraction of each speed
BOUNCE_DAMPING = 0.7

# =============================================================================
# ENERGY
# =============================================================================
# Energy only affects fitness and mutation intensity. A creature at 0 energy
# keeps moving until the generation ends.
MAX_ENERGY = 100.0
ENERGY_DECAY = 0.02  # Drained every tick, floored at 0
FOOD_ENERGY_REWARD = 35.0  # Gained per food item, capped at MAX_ENERGY

# =============================================================================
# SENSORS
# =============================================================================
SENSOR_LENGTH_MULTIPLIER = 20.0  # sensor_length = size * multiplier
SENSOR_CONE_WIDTH = math.pi / 3  # 60 degree vision cone per sensor

# Offsets from the facing angle: front, left, right
SENSOR_OFFSETS = (0.0, -math.pi / 2, math.pi / 2)

# =============================================================================
# SPAWNING
# =============================================================================
# Creatures start in the left part of the world; the goal zone is on the right
CREATURE_SPAWN_X_FRACTION = 0.25
