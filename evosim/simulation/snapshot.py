"""Observable simulation state handed to renderers and the HTTP adapter.

Snapshots are plain copies: holding one never exposes live entities.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class GenerationReport:
    """Summary of one finished generation."""

    generation: int
    population: int
    eligible: int
    parents: int
    children_per_parent: int
    next_population: int
    best_fitness: float
    mean_fitness: float
    total_food_eaten: int
    reseeded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CreatureState:
    x: float
    y: float
    angle: float
    size: float
    color: str
    energy: float
    food_eaten: int
    collisions: int
    sensors: List[float] = field(default_factory=list)


@dataclass
class FoodState:
    x: float
    y: float
    size: float
    available: bool


@dataclass
class WorldSnapshot:
    """Everything needed to draw one frame."""

    generation: int
    tick: int
    generation_length: int
    state: str
    world_width: float
    world_height: float
    creatures: List[CreatureState]
    foods: List[FoodState]
    last_report: Optional[GenerationReport] = None

    @property
    def population(self) -> int:
        return len(self.creatures)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["population"] = self.population
        return data
