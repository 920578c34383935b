"""Creature entity: a neural-network-driven agent.

Each tick a creature drains a little energy, reads three vision cones, feeds
the readings (plus its food count and energy) to its brain, moves according
to the four brain outputs, and resolves collisions with food, other creatures
and the world walls.
"""

import math
import random
from typing import Any, Dict, List, Optional, Sequence, Tuple

from evosim.color import color_small_change
from evosim.config.creature import SENSOR_OFFSETS
from evosim.config.simulation_config import BrainConfig, CreatureConfig, EvolutionConfig
from evosim.entities.base import Body, EntityKind
from evosim.entities.food import Food
from evosim.evolution.mutation import creature_mutation_parameters
from evosim.exceptions import DimensionMismatch
from evosim.math_utils import Vector2, angle_difference, clamp
from evosim.neural_network import NeuralNetwork


class Creature(Body):
    """An agent with a position, velocity, energy budget and a brain.

    Attributes:
        brain: The creature's NeuralNetwork
        vel: Velocity applied during the last move (or bounce)
        angle: Facing angle in radians, 0 = facing up
        previous_pos: Position at the start of the current tick
        energy: Remaining energy in [0, max_energy]
        food_eaten: Food items eaten this generation
        collisions: Creature-creature collisions this generation
        can_eat: Guard preventing re-entrant feeding
        sensors: Last (front, left, right) readings
        color: Hex color, only used by renderers
    """

    kind = EntityKind.CREATURE

    def __init__(
        self,
        x: float,
        y: float,
        world_width: float,
        world_height: float,
        color: str,
        config: Optional[CreatureConfig] = None,
        evolution: Optional[EvolutionConfig] = None,
        brain: Optional[NeuralNetwork] = None,
        brain_config: Optional[BrainConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or CreatureConfig()
        self.evolution = evolution or EvolutionConfig()
        super().__init__(
            x, y, self.config.size, self.config.collision_radius, world_width, world_height
        )
        self.rng = rng
        self.color = color
        self.speed: float = self.config.speed
        self.vel: Vector2 = Vector2(0, 0)
        self.previous_pos: Vector2 = self.pos.copy()
        self.angle: float = 0.0

        self.max_energy: float = self.config.max_energy
        self.energy: float = self.max_energy
        self.food_eaten: int = 0
        self.collisions: int = 0
        self.can_eat: bool = True
        self.sensors: Tuple[float, float, float] = (0.0, 0.0, 0.0)

        if brain is None:
            brain_config = brain_config or BrainConfig()
            brain = NeuralNetwork(
                brain_config.network_shape,
                activation=brain_config.activation,
                dropout=brain_config.dropout,
                alpha=brain_config.alpha,
                rng=rng,
            )
        self.brain = brain

    @property
    def sensor_length(self) -> float:
        return self.size * self.config.sensor_length_multiplier

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self, obstacles: Sequence[Body] = ()) -> List[float]:
        """Advance this creature by one tick.

        Args:
            obstacles: Every other creature and food item in the world
                (``self`` may be included, it is skipped)

        Returns:
            The brain outputs used for this tick's move
        """
        self.energy = max(0.0, self.energy - self.config.energy_decay)
        self.previous_pos = self.pos.copy()

        front, left, right = self.sense(obstacles)
        outputs = self.brain.infer([front, left, right, self.food_eaten, self.energy])
        self.move(outputs)

        self.handle_collisions(obstacles)

        if not self.vel.is_zero():
            self.angle = math.atan2(self.vel.y, self.vel.x) + math.pi / 2
        return outputs

    # ------------------------------------------------------------------
    # Sensing
    # ------------------------------------------------------------------

    def sense(self, obstacles: Sequence[Body]) -> Tuple[float, float, float]:
        """Read the front, left and right vision cones."""
        cone = self.config.sensor_cone_width
        front, left, right = (
            self.sensor_reading(obstacles, offset, cone) for offset in SENSOR_OFFSETS
        )
        self.sensors = (front, left, right)
        return self.sensors

    def sensor_reading(
        self, obstacles: Sequence[Body], angle_offset: float, vision_width: float
    ) -> float:
        """Normalized proximity of the closest body in one vision cone.

        Returns:
            1.0 when the sensor ray leaves the world or a body touches the
            creature, 0.0 when nothing is in range, linear in between
        """
        sensor_length = self.sensor_length
        sensor_angle = self.angle + angle_offset

        end_x = self.pos.x + math.cos(sensor_angle) * sensor_length
        end_y = self.pos.y + math.sin(sensor_angle) * sensor_length
        if end_x <= 0 or end_x >= self.world_width or end_y <= 0 or end_y >= self.world_height:
            return 1.0

        half_width = vision_width / 2
        closest = math.inf
        for obstacle in obstacles:
            if obstacle is self:
                continue
            dx = obstacle.pos.x - self.pos.x
            dy = obstacle.pos.y - self.pos.y
            distance = math.sqrt(dx * dx + dy * dy)
            if distance >= sensor_length:
                continue
            if angle_difference(sensor_angle, math.atan2(dy, dx)) <= half_width:
                surface_distance = distance - (self.size + obstacle.size)
                if surface_distance < closest:
                    closest = surface_distance

        if closest == math.inf:
            return 0.0
        # Overlapping bodies read as touching
        return 1.0 - min(1.0, max(0.0, closest) / sensor_length)

    # ------------------------------------------------------------------
    # Movement and collisions
    # ------------------------------------------------------------------

    def move(self, outputs: Sequence[float]) -> None:
        """Move according to (up, down, left, right) brain outputs."""
        if len(outputs) != 4:
            raise DimensionMismatch(4, len(outputs), where="movement outputs")
        up, down, left, right = outputs
        direction = Vector2(right - left, down - up)

        # Degenerate direction means standing still
        if direction.is_zero() or not math.isfinite(direction.length()):
            self.vel = Vector2(0, 0)
            return

        self.vel = direction.normalize() * self.speed
        self.pos.update(
            clamp(self.pos.x + self.vel.x, self.size, self.world_width - self.size),
            clamp(self.pos.y + self.vel.y, self.size, self.world_height - self.size),
        )

    def handle_collisions(self, objects: Sequence[Body]) -> None:
        """Eat overlapping food, push apart overlapping creatures, clamp to walls."""
        for obj in objects:
            if obj is self:
                continue
            dx = obj.pos.x - self.pos.x
            dy = obj.pos.y - self.pos.y
            distance = math.sqrt(dx * dx + dy * dy)
            min_distance = self.collision_radius + obj.collision_radius
            if distance >= min_distance:
                continue

            if obj.kind is EntityKind.FOOD:
                self.eat(obj)
            elif obj.kind is EntityKind.CREATURE:
                self._push_apart(obj, dx, dy, min_distance - distance)

        r = self.collision_radius
        self.pos.update(
            clamp(self.pos.x, r, self.world_width - r),
            clamp(self.pos.y, r, self.world_height - r),
        )

    def _push_apart(self, other: "Creature", dx: float, dy: float, overlap: float) -> None:
        self.collisions += 1
        other.collisions += 1

        angle = math.atan2(dy, dx)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        half = overlap * 0.5

        self.pos.update(self.pos.x - cos_a * half, self.pos.y - sin_a * half)
        other.pos.update(other.pos.x + cos_a * half, other.pos.y + sin_a * half)

        damping = self.config.bounce_damping
        self.vel = Vector2(-cos_a * self.speed * damping, -sin_a * self.speed * damping)
        other.vel = Vector2(cos_a * other.speed * damping, sin_a * other.speed * damping)

    def eat(self, food: Food) -> bool:
        """Consume ``food`` if the feeding guard allows it.

        Returns:
            True if the food was eaten
        """
        if not self.can_eat or not food.is_available:
            return False
        self.can_eat = False
        try:
            self.food_eaten += 1
            self.energy = min(self.max_energy, self.energy + self.config.food_energy_reward)
            food.despawn()
        finally:
            self.can_eat = True
        return True

    # ------------------------------------------------------------------
    # Reproduction
    # ------------------------------------------------------------------

    def clone(self, x: float, y: float) -> "Creature":
        """Create a child at (x, y) with a copy of this brain.

        The child's brain is mutated with probability
        ``evolution.clone_mutation_chance``.
        """
        child = Creature(
            x,
            y,
            self.world_width,
            self.world_height,
            self.color,
            config=self.config,
            evolution=self.evolution,
            brain=self.brain.clone(),
            rng=self.rng,
        )
        rng = self.rng or random
        if rng.random() < self.evolution.clone_mutation_chance:
            child.mutate()
        return child

    def mutate(self) -> int:
        """Mutate the brain with intensity tied to energy and food eaten.

        Returns:
            Number of brain parameters changed
        """
        rate, scale = creature_mutation_parameters(
            self.energy, self.max_energy, self.food_eaten, self.evolution
        )
        changed = self.brain.mutate(rate, scale)
        self.color = color_small_change(self.color, self.rng)
        return changed

    def to_state(self) -> Dict[str, Any]:
        """Observable state for renderers and the HTTP adapter."""
        return {
            "x": self.pos.x,
            "y": self.pos.y,
            "angle": self.angle,
            "size": self.size,
            "color": self.color,
            "energy": self.energy,
            "food_eaten": self.food_eaten,
            "collisions": self.collisions,
            "sensors": list(self.sensors),
        }

    def __repr__(self) -> str:
        return (
            f"Creature(pos=({self.pos.x:.1f}, {self.pos.y:.1f}), "
            f"energy={self.energy:.1f}, food={self.food_eaten})"
        )
