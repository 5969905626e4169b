"""
Primary tables: one id-keyed, read-only mapping per collection.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeVar

from factoryplanner.schemas.game import (
    Building,
    Corporation,
    GameRecord,
    Item,
    Rail,
    RawGameData,
    Recipe,
)

R = TypeVar("R", bound=GameRecord)


@dataclass(frozen=True)
class GameTables:
    """Id -> record mappings for all five collections, in load order."""

    items: Mapping[str, Item]
    buildings: Mapping[str, Building]
    recipes: Mapping[str, Recipe]
    rails: Mapping[str, Rail]
    corporations: Mapping[str, Corporation]


def _table(records: Iterable[R]) -> Mapping[str, R]:
    # Later duplicates replace earlier ones but keep the first slot's position.
    return MappingProxyType({record.id: record for record in records})  # type: ignore[attr-defined]


def build_tables(raw: RawGameData) -> GameTables:
    """
    Convert raw record sequences to read-only id-keyed tables.

    Ids are unique after validation. On unvalidated input a later
    duplicate silently overwrites the earlier record.

    Args:
        raw: Raw game data.

    Returns:
        GameTables keyed by record id.
    """
    return GameTables(
        items=_table(raw.items),
        buildings=_table(raw.buildings),
        recipes=_table(raw.recipes),
        rails=_table(raw.rails),
        corporations=_table(raw.corporations),
    )
