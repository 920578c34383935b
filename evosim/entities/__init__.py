"""World entities: creatures and food."""

from evosim.entities.base import Body, EntityKind
from evosim.entities.creature import Creature
from evosim.entities.food import Food

__all__ = ["Body", "Creature", "EntityKind", "Food"]
