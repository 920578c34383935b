"""Request and response models for the HTTP API."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class CreatureData(BaseModel):
    """Observable state of one creature."""

    x: float
    y: float
    angle: float
    size: float
    color: str
    energy: float
    food_eaten: int
    collisions: int
    sensors: List[float] = []


class FoodData(BaseModel):
    """Observable state of one food item."""

    x: float
    y: float
    size: float
    available: bool


class GenerationReportData(BaseModel):
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


class WorldState(BaseModel):
    """A full frame of the simulation."""

    generation: int
    tick: int
    generation_length: int
    state: str
    population: int
    world_width: float
    world_height: float
    creatures: List[CreatureData]
    foods: List[FoodData]
    last_report: Optional[GenerationReportData] = None


class ResetRequest(BaseModel):
    """Body of POST /api/reset.

    ``config`` holds per-group overrides, e.g.
    ``{"world": {"width": 400}, "evolution": {"population_size": 10}}``.
    """

    config: Optional[Dict[str, Dict[str, Any]]] = None
    seed: Optional[int] = None


class BrainModel(BaseModel):
    """A serialized brain plus optional run metadata."""

    model: Union[Dict[str, Any], List[Dict[str, Any]]]
    generation: Optional[int] = None
    fitness: Optional[float] = None


class LoadModelResponse(BaseModel):
    success: bool
    creatures_updated: int = Field(ge=0)
