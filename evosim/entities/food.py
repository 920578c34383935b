"""Food resource entity."""

import random
from typing import Any, Dict, Optional

from evosim.config.food import DESPAWNED_POSITION, FOOD_SIZE, FOOD_SPAWN_X_FRACTION
from evosim.config.creature import COLLISION_RADIUS_FACTOR
from evosim.entities.base import Body, EntityKind


class Food(Body):
    """A passive food item (pure logic, no rendering).

    Eaten food is never removed from the manager's list: ``despawn`` parks it
    far off-world and ``respawn`` moves it back to a random spot, so list
    indices stay stable for the whole run.
    """

    kind = EntityKind.FOOD

    def __init__(
        self,
        world_width: float,
        world_height: float,
        size: float = FOOD_SIZE,
        collision_radius_factor: float = COLLISION_RADIUS_FACTOR,
        spawn_x_fraction: float = FOOD_SPAWN_X_FRACTION,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(
            0.0, 0.0, size, size * collision_radius_factor, world_width, world_height
        )
        self.spawn_x_fraction = spawn_x_fraction
        self.rng = rng
        self.available = True
        self.times_eaten = 0
        self.respawn()

    @property
    def is_available(self) -> bool:
        return self.available

    def respawn(self, spawn_x_fraction: Optional[float] = None) -> None:
        """Move to a new random position inside the spawn region.

        Args:
            spawn_x_fraction: Overrides the stored spawn fraction, e.g. with a
                generation-dependent bias
        """
        if spawn_x_fraction is not None:
            self.spawn_x_fraction = spawn_x_fraction
        rng = self.rng or random
        self.pos.update(
            rng.random() * (self.world_width * self.spawn_x_fraction),
            rng.random() * self.world_height,
        )
        self.available = True

    def despawn(self) -> None:
        """Park the food off-world until the next respawn."""
        self.pos.update(*DESPAWNED_POSITION)
        self.available = False
        self.times_eaten += 1

    def to_state(self) -> Dict[str, Any]:
        return {
            "x": self.pos.x,
            "y": self.pos.y,
            "size": self.size,
            "available": self.available,
        }
