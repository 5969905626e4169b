"""
Record schemas for the game data documents.

All schemas are Pydantic models; the registry describes the five collections.
"""

from factoryplanner.schemas.game import (
    Building,
    BuildingType,
    Corporation,
    CorporationComponent,
    CorporationLevel,
    CorporationReward,
    Item,
    ItemType,
    PlacementConstraint,
    Purity,
    Rail,
    RawGameData,
    Recipe,
    RecipeItem,
    RewardType,
    UnlockRequirement,
)
from factoryplanner.schemas.registry import CollectionInfo, CollectionRegistry

__all__ = [
    "Building",
    "BuildingType",
    "CollectionInfo",
    "CollectionRegistry",
    "Corporation",
    "CorporationComponent",
    "CorporationLevel",
    "CorporationReward",
    "Item",
    "ItemType",
    "PlacementConstraint",
    "Purity",
    "Rail",
    "RawGameData",
    "Recipe",
    "RecipeItem",
    "RewardType",
    "UnlockRequirement",
]
