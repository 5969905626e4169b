"""
Derived indices over the primary tables.

All indices are computed eagerly, once, and are immutable: every
grouping is a tuple and every mapping a MappingProxyType, so the same
record can be shared between indices without callers being able to
corrupt one through another.
"""

from bisect import bisect_left
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeVar

from factoryplanner.indexing.tables import GameTables, build_tables
from factoryplanner.schemas.game import (
    Building,
    BuildingType,
    Corporation,
    CorporationReward,
    Item,
    ItemType,
    Rail,
    Recipe,
)
from factoryplanner.utils.logging import get_logger
from factoryplanner.validation.core import ValidatedGameData

log = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class GameDataIndices:
    """
    Pre-computed lookup structures.

    Attributes:
        recipes_by_building: Recipes grouped by owning building id.
        recipes_by_output_item: Recipes grouped by output item id.
        recipes_by_input_item: Recipes grouped by each distinct input item id.
        buildings_by_category: Buildings grouped by category.
        buildings_by_corporation: Buildings grouped by unlocking corporation id;
            buildings without an unlock requirement are absent.
        items_by_category: Items grouped by category.
        items_by_tier: Items grouped by tier.
        rails_sorted_by_capacity: All rails, ascending by capacity (stable).
        rails_by_min_capacity: For each capacity present, the rails with
            capacity >= it, ascending.
        rewards_by_corporation_level: corporation id -> level -> rewards.
    """

    recipes_by_building: Mapping[str, tuple[Recipe, ...]]
    recipes_by_output_item: Mapping[str, tuple[Recipe, ...]]
    recipes_by_input_item: Mapping[str, tuple[Recipe, ...]]
    buildings_by_category: Mapping[BuildingType, tuple[Building, ...]]
    buildings_by_corporation: Mapping[str, tuple[Building, ...]]
    items_by_category: Mapping[ItemType, tuple[Item, ...]]
    items_by_tier: Mapping[int, tuple[Item, ...]]
    rails_sorted_by_capacity: tuple[Rail, ...]
    rails_by_min_capacity: Mapping[float, tuple[Rail, ...]]
    rewards_by_corporation_level: Mapping[str, Mapping[int, tuple[CorporationReward, ...]]]


@dataclass(frozen=True)
class CompiledGameData:
    """The published dataset: primary tables plus derived indices."""

    tables: GameTables
    indices: GameDataIndices


def _group(
    records: Iterable[V],
    keys: Callable[[V], Iterable[K]],
) -> Mapping[K, tuple[V, ...]]:
    """Group records under each of their keys, preserving first-seen order."""
    groups: dict[K, list[V]] = {}
    for record in records:
        for key in keys(record):
            groups.setdefault(key, []).append(record)
    return MappingProxyType({key: tuple(group) for key, group in groups.items()})


def _distinct_inputs(recipe: Recipe) -> list[str]:
    return list(dict.fromkeys(recipe_input.id for recipe_input in recipe.inputs))


def _unlocking_corporation(building: Building) -> list[str]:
    return [building.unlocked_by.corporation] if building.unlocked_by else []


def _build_rail_indices(
    rails: Iterable[Rail],
) -> tuple[tuple[Rail, ...], Mapping[float, tuple[Rail, ...]]]:
    """Sorted rails plus the at-or-above threshold lists for each capacity present."""
    sorted_rails = tuple(sorted(rails, key=lambda rail: rail.capacity))
    capacities = [rail.capacity for rail in sorted_rails]

    by_min_capacity: dict[float, tuple[Rail, ...]] = {}
    for capacity in dict.fromkeys(capacities):
        by_min_capacity[capacity] = sorted_rails[bisect_left(capacities, capacity) :]

    return sorted_rails, MappingProxyType(by_min_capacity)


def _build_rewards_by_corporation_level(
    corporations: Iterable[Corporation],
) -> Mapping[str, Mapping[int, tuple[CorporationReward, ...]]]:
    index: dict[str, Mapping[int, tuple[CorporationReward, ...]]] = {}
    for corp in corporations:
        index[corp.id] = MappingProxyType(
            {level.level: tuple(level.rewards) for level in corp.levels}
        )
    return MappingProxyType(index)


def build_indices(tables: GameTables) -> GameDataIndices:
    """
    Build all derived indices from the primary tables.

    Args:
        tables: Primary id-keyed tables.

    Returns:
        GameDataIndices with every index populated.
    """
    recipes = list(tables.recipes.values())
    buildings = list(tables.buildings.values())
    items = list(tables.items.values())

    sorted_rails, rails_by_min_capacity = _build_rail_indices(tables.rails.values())

    return GameDataIndices(
        recipes_by_building=_group(recipes, lambda r: [r.building_id]),
        recipes_by_output_item=_group(recipes, lambda r: [r.output.id]),
        recipes_by_input_item=_group(recipes, _distinct_inputs),
        buildings_by_category=_group(buildings, lambda b: [b.category]),
        buildings_by_corporation=_group(buildings, _unlocking_corporation),
        items_by_category=_group(items, lambda i: [i.category]),
        items_by_tier=_group(items, lambda i: [i.tier]),
        rails_sorted_by_capacity=sorted_rails,
        rails_by_min_capacity=rails_by_min_capacity,
        rewards_by_corporation_level=_build_rewards_by_corporation_level(
            tables.corporations.values()
        ),
    )


def compile_game_data(validated: ValidatedGameData) -> CompiledGameData:
    """
    Build tables and indices from validated data.

    Args:
        validated: Output of require_valid().

    Returns:
        CompiledGameData ready to publish.

    Raises:
        TypeError: If given anything other than ValidatedGameData.
    """
    if not isinstance(validated, ValidatedGameData):
        msg = (
            "compile_game_data() requires ValidatedGameData; "
            f"got {type(validated).__name__}. Call require_valid() first."
        )
        raise TypeError(msg)

    tables = build_tables(validated.raw)
    indices = build_indices(tables)

    log.info(
        "Compiled game data",
        items=len(tables.items),
        buildings=len(tables.buildings),
        recipes=len(tables.recipes),
        rails=len(tables.rails),
        corporations=len(tables.corporations),
    )
    return CompiledGameData(tables=tables, indices=indices)
