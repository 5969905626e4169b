"""
Collection registry.

Central description of the five game data collections: their record
model, default resource name and the label used in messages.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import ClassVar

from pydantic import TypeAdapter

from factoryplanner.schemas.game import (
    Building,
    Corporation,
    GameRecord,
    Item,
    Rail,
    Recipe,
)


@dataclass(frozen=True)
class CollectionInfo:
    """Metadata about a registered collection."""

    name: str
    model: type[GameRecord]
    resource: str
    label: str

    @cached_property
    def adapter(self) -> TypeAdapter:
        """Type adapter parsing a JSON array of this collection's records, built once."""
        return TypeAdapter(tuple[self.model, ...])  # type: ignore[name-defined]


class CollectionRegistry:
    """
    Registry of the game data collections.

    Iteration order is the canonical collection order used everywhere
    (loading, validation, reporting).
    """

    _collections: ClassVar[dict[str, CollectionInfo]] = {
        "items": CollectionInfo(
            name="items",
            model=Item,
            resource="items_catalog.json",
            label="item",
        ),
        "buildings": CollectionInfo(
            name="buildings",
            model=Building,
            resource="buildings.json",
            label="building",
        ),
        "recipes": CollectionInfo(
            name="recipes",
            model=Recipe,
            resource="recipes.json",
            label="recipe",
        ),
        "rails": CollectionInfo(
            name="rails",
            model=Rail,
            resource="rails.json",
            label="rail",
        ),
        "corporations": CollectionInfo(
            name="corporations",
            model=Corporation,
            resource="corporations_components.json",
            label="corporation",
        ),
    }

    @classmethod
    def get(cls, name: str) -> CollectionInfo:
        """
        Get collection info by name.

        Args:
            name: Collection name.

        Returns:
            CollectionInfo for the collection.

        Raises:
            KeyError: If the collection is not registered.
        """
        if name not in cls._collections:
            available = ", ".join(cls._collections)
            msg = f"Unknown collection '{name}'. Available: {available}"
            raise KeyError(msg)
        return cls._collections[name]

    @classmethod
    def all(cls) -> list[CollectionInfo]:
        """All registered collections in canonical order."""
        return list(cls._collections.values())
