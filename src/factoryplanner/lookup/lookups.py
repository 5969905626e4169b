"""
Read-only query API over the published game data.

Every query reads one snapshot from the store, so a concurrent reload
can never mix old and new data within a single call.
"""

from dataclasses import dataclass

from factoryplanner.indexing.indices import CompiledGameData
from factoryplanner.schemas.game import (
    Building,
    BuildingType,
    Corporation,
    CorporationLevel,
    CorporationReward,
    Item,
    ItemType,
    Rail,
    Recipe,
    RewardType,
)
from factoryplanner.store import GameDataStore


@dataclass(frozen=True)
class RecipesByItem:
    """Recipes touching one item."""

    produced_by: tuple[Recipe, ...]
    consumed_by: tuple[Recipe, ...]


class GameDataLookup:
    """
    Query facade over a GameDataStore.

    By-id queries return None for unknown ids; grouped queries return an
    empty tuple for unknown keys. Every query raises DataNotLoadedError
    until the store has published a dataset.
    """

    def __init__(self, store: GameDataStore) -> None:
        self._store = store

    def _data(self) -> CompiledGameData:
        return self._store.snapshot()

    # Items

    def get_item(self, item_id: str) -> Item | None:
        return self._data().tables.items.get(item_id)

    def get_items_by_category(self, category: ItemType | str) -> tuple[Item, ...]:
        return self._data().indices.items_by_category.get(category, ())  # type: ignore[call-overload]

    def get_items_by_tier(self, tier: int) -> tuple[Item, ...]:
        return self._data().indices.items_by_tier.get(tier, ())

    def get_all_items(self) -> tuple[Item, ...]:
        return tuple(self._data().tables.items.values())

    # Buildings

    def get_building(self, building_id: str) -> Building | None:
        return self._data().tables.buildings.get(building_id)

    def get_buildings_by_category(
        self, category: BuildingType | str
    ) -> tuple[Building, ...]:
        return self._data().indices.buildings_by_category.get(category, ())  # type: ignore[call-overload]

    def get_buildings_by_corporation(self, corporation_id: str) -> tuple[Building, ...]:
        """Buildings whose unlock requirement names the corporation, at any level."""
        return self._data().indices.buildings_by_corporation.get(corporation_id, ())

    def get_all_buildings(self) -> tuple[Building, ...]:
        return tuple(self._data().tables.buildings.values())

    # Recipes

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self._data().tables.recipes.get(recipe_id)

    def get_recipes_by_building(self, building_id: str) -> tuple[Recipe, ...]:
        return self._data().indices.recipes_by_building.get(building_id, ())

    def get_recipes_producing(self, item_id: str) -> tuple[Recipe, ...]:
        """Recipes whose output is the item."""
        return self._data().indices.recipes_by_output_item.get(item_id, ())

    def get_recipes_consuming(self, item_id: str) -> tuple[Recipe, ...]:
        """Recipes that take the item as an input."""
        return self._data().indices.recipes_by_input_item.get(item_id, ())

    def get_recipes_for_item(self, item_id: str) -> RecipesByItem:
        indices = self._data().indices
        return RecipesByItem(
            produced_by=indices.recipes_by_output_item.get(item_id, ()),
            consumed_by=indices.recipes_by_input_item.get(item_id, ()),
        )

    def get_all_recipes(self) -> tuple[Recipe, ...]:
        return tuple(self._data().tables.recipes.values())

    # Rails

    def get_rail(self, rail_id: str) -> Rail | None:
        return self._data().tables.rails.get(rail_id)

    def get_rails_by_min_capacity(self, min_capacity: float) -> tuple[Rail, ...]:
        """
        Rails with capacity >= min_capacity, ascending by capacity.

        Exact capacity values are answered from the precomputed index;
        any other threshold filters the sorted rail sequence.
        """
        indices = self._data().indices
        precomputed = indices.rails_by_min_capacity.get(min_capacity)
        if precomputed is not None:
            return precomputed
        return tuple(
            rail for rail in indices.rails_sorted_by_capacity if rail.capacity >= min_capacity
        )

    def get_all_rails(self) -> tuple[Rail, ...]:
        return tuple(self._data().tables.rails.values())

    # Corporations

    def get_corporation(self, corporation_id: str) -> Corporation | None:
        return self._data().tables.corporations.get(corporation_id)

    def get_all_corporations(self) -> tuple[Corporation, ...]:
        return tuple(self._data().tables.corporations.values())

    def get_corporation_levels(self, corporation_id: str) -> tuple[CorporationLevel, ...]:
        corp = self.get_corporation(corporation_id)
        return corp.levels if corp is not None else ()

    def get_rewards_at_level(
        self, corporation_id: str, level: int
    ) -> tuple[CorporationReward, ...]:
        return self._rewards_at_level(self._data(), corporation_id, level)

    def get_rewards_by_type(
        self,
        corporation_id: str,
        level: int,
        reward_type: RewardType | str,
    ) -> tuple[CorporationReward, ...]:
        return self._rewards_by_type(self._data(), corporation_id, level, reward_type)

    def get_rails_unlocked_by(self, corporation_id: str, level: int) -> tuple[Rail, ...]:
        """Rails granted at exactly this corporation level; unknown ids are skipped."""
        data = self._data()
        rewards = self._rewards_by_type(data, corporation_id, level, RewardType.RAIL)
        return tuple(
            data.tables.rails[reward.id]
            for reward in rewards
            if reward.id and reward.id in data.tables.rails
        )

    def get_buildings_unlocked_by(
        self, corporation_id: str, level: int
    ) -> tuple[Building, ...]:
        """Buildings granted at exactly this corporation level; unknown ids are skipped."""
        data = self._data()
        rewards = self._rewards_by_type(data, corporation_id, level, RewardType.BUILDING)
        return tuple(
            data.tables.buildings[reward.id]
            for reward in rewards
            if reward.id and reward.id in data.tables.buildings
        )

    @staticmethod
    def _rewards_at_level(
        data: CompiledGameData, corporation_id: str, level: int
    ) -> tuple[CorporationReward, ...]:
        levels = data.indices.rewards_by_corporation_level.get(corporation_id)
        if levels is None:
            return ()
        return levels.get(level, ())

    @classmethod
    def _rewards_by_type(
        cls,
        data: CompiledGameData,
        corporation_id: str,
        level: int,
        reward_type: RewardType | str,
    ) -> tuple[CorporationReward, ...]:
        rewards = cls._rewards_at_level(data, corporation_id, level)
        return tuple(reward for reward in rewards if reward.type == reward_type)
