"""Simulation configuration dataclasses.

Each group mirrors one of the constant modules in this package; a
``SimulationConfig`` bundles them for a single run. Configurations are
validated once, when a GenerationManager is built from them.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from evosim.config import brain as brain_defaults
from evosim.config import creature as creature_defaults
from evosim.config import evolution as evolution_defaults
from evosim.config import food as food_defaults
from evosim.config import world as world_defaults
from evosim.exceptions import ConfigurationError


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


@dataclass
class WorldConfig:
    """World bounds shared read-only by every entity."""

    width: float = world_defaults.WORLD_WIDTH
    height: float = world_defaults.WORLD_HEIGHT

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"World size must be positive, got {self.width}x{self.height}"
            )


@dataclass
class BrainConfig:
    """Shape and hidden-layer options of every creature's brain.

    ``activation`` and ``dropout`` may be a single value applied to all
    hidden layers or a sequence with one value per hidden layer.
    """

    network_shape: Tuple[int, ...] = brain_defaults.NETWORK_SHAPE
    activation: Union[str, Sequence[str]] = brain_defaults.HIDDEN_ACTIVATION
    dropout: Union[float, Sequence[float]] = brain_defaults.HIDDEN_DROPOUT
    alpha: float = brain_defaults.ACTIVATION_ALPHA

    def validate(self) -> None:
        if len(self.network_shape) < 2:
            raise ConfigurationError("network_shape needs at least an input and an output width")
        for width in self.network_shape:
            _require_int("network_shape width", width)
            if width < 1:
                raise ConfigurationError(f"Layer widths must be positive, got {width}")
        dropouts = [self.dropout] if isinstance(self.dropout, (int, float)) else list(self.dropout)
        for rate in dropouts:
            if not 0 <= rate < 1:
                raise ConfigurationError(f"Dropout rate must be in [0, 1), got {rate}")
        if self.network_shape[0] != brain_defaults.BRAIN_INPUT_SIZE:
            raise ConfigurationError(
                f"Creature brains take {brain_defaults.BRAIN_INPUT_SIZE} inputs, "
                f"network_shape starts with {self.network_shape[0]}"
            )
        if self.network_shape[-1] != brain_defaults.BRAIN_OUTPUT_SIZE:
            raise ConfigurationError(
                f"Creature brains produce {brain_defaults.BRAIN_OUTPUT_SIZE} outputs, "
                f"network_shape ends with {self.network_shape[-1]}"
            )


@dataclass
class CreatureConfig:
    """Body, energy and sensor parameters of a creature."""

    size: float = creature_defaults.CREATURE_SIZE
    speed: float = creature_defaults.CREATURE_SPEED
    collision_radius_factor: float = creature_defaults.COLLISION_RADIUS_FACTOR
    bounce_damping: float = creature_defaults.BOUNCE_DAMPING
    max_energy: float = creature_defaults.MAX_ENERGY
    energy_decay: float = creature_defaults.ENERGY_DECAY
    food_energy_reward: float = creature_defaults.FOOD_ENERGY_REWARD
    sensor_length_multiplier: float = creature_defaults.SENSOR_LENGTH_MULTIPLIER
    sensor_cone_width: float = creature_defaults.SENSOR_CONE_WIDTH
    spawn_x_fraction: float = creature_defaults.CREATURE_SPAWN_X_FRACTION

    @property
    def collision_radius(self) -> float:
        return self.size * self.collision_radius_factor

    @property
    def sensor_length(self) -> float:
        return self.size * self.sensor_length_multiplier

    def validate(self) -> None:
        if self.size <= 0:
            raise ConfigurationError(f"Creature size must be positive, got {self.size}")
        if self.speed < 0:
            raise ConfigurationError(f"Creature speed cannot be negative, got {self.speed}")
        if self.max_energy <= 0:
            raise ConfigurationError(f"max_energy must be positive, got {self.max_energy}")
        if self.energy_decay < 0:
            raise ConfigurationError(f"energy_decay cannot be negative, got {self.energy_decay}")
        if not 0 < self.spawn_x_fraction <= 1:
            raise ConfigurationError(
                f"spawn_x_fraction must be in (0, 1], got {self.spawn_x_fraction}"
            )


@dataclass
class FoodConfig:
    """Food batch size and spawn placement."""

    count: int = food_defaults.FOOD_COUNT
    size: float = food_defaults.FOOD_SIZE
    collision_radius_factor: float = creature_defaults.COLLISION_RADIUS_FACTOR
    spawn_x_fraction: float = food_defaults.FOOD_SPAWN_X_FRACTION
    spawn_shift_per_generation: float = food_defaults.FOOD_SPAWN_SHIFT_PER_GENERATION
    min_spawn_x_fraction: float = food_defaults.FOOD_MIN_SPAWN_X_FRACTION

    def spawn_fraction_for(self, generation: int) -> float:
        """Fraction of the world width food may spawn in at ``generation``."""
        fraction = self.spawn_x_fraction + generation * self.spawn_shift_per_generation
        return max(self.min_spawn_x_fraction, min(1.0, fraction))

    def validate(self) -> None:
        _require_int("count", self.count)
        if self.count < 0:
            raise ConfigurationError(f"Food count cannot be negative, got {self.count}")
        if self.size <= 0:
            raise ConfigurationError(f"Food size must be positive, got {self.size}")
        if not 0 < self.min_spawn_x_fraction <= 1 or not 0 < self.spawn_x_fraction <= 1:
            raise ConfigurationError("Food spawn fractions must be in (0, 1]")


@dataclass
class EvolutionConfig:
    """Generation length, selection and mutation parameters."""

    population_size: int = evolution_defaults.POPULATION_SIZE
    generation_length: int = evolution_defaults.GENERATION_LENGTH
    max_generations: Optional[int] = evolution_defaults.MAX_GENERATIONS
    goal_x_fraction: float = evolution_defaults.GOAL_X_FRACTION
    min_food_for_reproduction: int = evolution_defaults.MIN_FOOD_FOR_REPRODUCTION
    fitness_weight_progress: float = evolution_defaults.FITNESS_WEIGHT_PROGRESS
    fitness_weight_energy: float = evolution_defaults.FITNESS_WEIGHT_ENERGY
    fitness_weight_food: float = evolution_defaults.FITNESS_WEIGHT_FOOD
    fitness_penalty_collision: float = evolution_defaults.FITNESS_PENALTY_COLLISION
    clone_mutation_chance: float = evolution_defaults.CLONE_MUTATION_CHANCE
    mutation_rate_base: float = evolution_defaults.MUTATION_RATE_BASE
    mutation_rate_energy_factor: float = evolution_defaults.MUTATION_RATE_ENERGY_FACTOR
    mutation_scale_base: float = evolution_defaults.MUTATION_SCALE_BASE
    mutation_scale_food_divisor: float = evolution_defaults.MUTATION_SCALE_FOOD_DIVISOR

    def validate(self) -> None:
        _require_int("population_size", self.population_size)
        _require_int("generation_length", self.generation_length)
        if self.max_generations is not None:
            _require_int("max_generations", self.max_generations)
        if self.population_size < 1:
            raise ConfigurationError(
                f"population_size must be at least 1, got {self.population_size}"
            )
        if self.generation_length < 1:
            raise ConfigurationError(
                f"generation_length must be at least 1, got {self.generation_length}"
            )
        if self.max_generations is not None and self.max_generations < 1:
            raise ConfigurationError(
                f"max_generations must be at least 1 or None, got {self.max_generations}"
            )
        if not 0 <= self.clone_mutation_chance <= 1:
            raise ConfigurationError(
                f"clone_mutation_chance must be in [0, 1], got {self.clone_mutation_chance}"
            )
        if self.mutation_rate_base < 0 or self.mutation_scale_base < 0:
            raise ConfigurationError("Mutation rate and scale bases cannot be negative")
        if self.mutation_scale_food_divisor <= 0:
            raise ConfigurationError("mutation_scale_food_divisor must be positive")


@dataclass
class SimulationConfig:
    """Everything needed to build a GenerationManager."""

    world: WorldConfig = field(default_factory=WorldConfig)
    brain: BrainConfig = field(default_factory=BrainConfig)
    creature: CreatureConfig = field(default_factory=CreatureConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    evolution: EvolutionConfig = field(default_factory=EvolutionConfig)

    def validate(self) -> "SimulationConfig":
        """Validate every group, returning self for chaining.

        Raises:
            ConfigurationError: If any group is invalid, including fields of
                the wrong type (e.g. from a JSON request body)
        """
        for name in ("world", "brain", "creature", "food", "evolution"):
            try:
                getattr(self, name).validate()
            except ConfigurationError:
                raise
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"Invalid {name} configuration: {exc}") from exc
        return self

    def with_overrides(self, **groups: Any) -> "SimulationConfig":
        """Return a copy with some groups replaced.

        Each keyword names a group and maps to either a replacement dataclass
        or a dict of field overrides for that group::

            config.with_overrides(world={"width": 200}, evolution={"population_size": 4})
        """
        replacements: Dict[str, Any] = {}
        for name, value in groups.items():
            current = getattr(self, name, None)
            if current is None or not dataclasses.is_dataclass(current):
                raise ConfigurationError(f"Unknown configuration group: {name!r}")
            if isinstance(value, dict):
                try:
                    value = dataclasses.replace(current, **value)
                except TypeError as exc:
                    raise ConfigurationError(f"Invalid {name} override: {exc}") from exc
            elif not isinstance(value, type(current)):
                raise ConfigurationError(
                    f"{name} override must be a dict or {type(current).__name__}"
                )
            replacements[name] = value
        return dataclasses.replace(self, **replacements)

    @classmethod
    def from_dict(
        cls,
        data: Optional[Dict[str, Dict[str, Any]]],
        base: Optional["SimulationConfig"] = None,
    ) -> "SimulationConfig":
        """Build a config from nested plain dicts, e.g. a JSON request body.

        Groups missing from ``data`` are taken from ``base`` (defaults if None).
        """
        config = base or cls()
        if not data:
            return config
        groups = dict(data)
        if "brain" in groups and "network_shape" in groups["brain"]:
            groups["brain"] = dict(groups["brain"])
            try:
                groups["brain"]["network_shape"] = tuple(groups["brain"]["network_shape"])
            except TypeError as exc:
                raise ConfigurationError(f"network_shape must be a list of widths: {exc}") from exc
        return config.with_overrides(**groups)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return dataclasses.asdict(self)
