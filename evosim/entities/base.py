"""Base entity classes for the simulation."""

from enum import Enum

from evosim.math_utils import Vector2


class EntityKind(Enum):
    """Closed set of entity variants living in the world."""

    CREATURE = "creature"
    FOOD = "food"


class Body:
    """Shared capability surface of everything a creature can sense or hit.

    Attributes:
        kind: Which variant this body is
        pos: Center position
        size: Visual radius, also used for surface-to-surface sensor distance
        collision_radius: Radius used for overlap tests
        world_width: Width of the world (read-only)
        world_height: Height of the world (read-only)
    """

    kind: EntityKind

    def __init__(
        self,
        x: float,
        y: float,
        size: float,
        collision_radius: float,
        world_width: float,
        world_height: float,
    ) -> None:
        self.pos: Vector2 = Vector2(x, y)
        self.size: float = size
        self.collision_radius: float = collision_radius
        self.world_width: float = world_width
        self.world_height: float = world_height

    @property
    def is_creature(self) -> bool:
        return self.kind is EntityKind.CREATURE

    @property
    def is_food(self) -> bool:
        return self.kind is EntityKind.FOOD
