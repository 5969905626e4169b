"""Tests for primary tables and derived indices."""

import copy
from collections.abc import Callable, Mapping
from dataclasses import fields
from typing import Any

import pytest

from factoryplanner.indexing import (
    CompiledGameData,
    GameDataIndices,
    build_indices,
    build_tables,
    compile_game_data,
)
from factoryplanner.schemas import (
    BuildingType,
    CollectionRegistry,
    ItemType,
    RawGameData,
    RewardType,
)
from factoryplanner.validation import require_valid

BuildRaw = Callable[[dict[str, Any]], RawGameData]


def _rail(rail_id: str, capacity: float) -> dict[str, Any]:
    return {
        "id": rail_id,
        "name": rail_id.upper(),
        "size": 1,
        "capacity": capacity,
        "power": 1,
        "heat": 0,
    }


@pytest.fixture
def compiled(raw_game_data: RawGameData) -> CompiledGameData:
    """Compiled version of the sample dataset."""
    return compile_game_data(require_valid(raw_game_data))


class TestBuildTables:
    """Tests for build_tables."""

    def test_tables_keyed_by_id(self, raw_game_data: RawGameData) -> None:
        """Test that every record is reachable by its id."""
        tables = build_tables(raw_game_data)

        assert list(tables.items) == ["ore_titanium", "bar_titanium", "ceramics"]
        assert tables.buildings["smelter"].power == 10
        assert tables.recipes["titanium_bar"].building_id == "smelter"
        assert tables.rails["rail_v2"].capacity == 120
        assert tables.corporations["selenian_corporation"].name == "Selenian Corporation"

    @pytest.mark.parametrize("collection", [info.name for info in CollectionRegistry.all()])
    def test_round_trip(
        self,
        raw_game_data: RawGameData,
        game_data_payloads: dict[str, Any],
        build_raw: BuildRaw,
        collection: str,
    ) -> None:
        """Test that n unique records give a table of size n holding equal records."""
        records = getattr(raw_game_data, collection)
        reparsed = getattr(build_raw(game_data_payloads), collection)
        table = getattr(build_tables(raw_game_data), collection)

        assert len(table) == len(records)
        assert list(table) == [record.id for record in records]
        for record, fresh in zip(records, reparsed, strict=True):
            assert table[record.id] is record
            assert table[record.id] == fresh

    def test_later_duplicate_overwrites(
        self, game_data_payloads: dict[str, Any], build_raw: BuildRaw
    ) -> None:
        """Test last-write-wins on unvalidated duplicate ids."""
        payloads = copy.deepcopy(game_data_payloads)
        replacement = dict(payloads["items"][0], name="Replacement Ore")
        payloads["items"].append(replacement)

        tables = build_tables(build_raw(payloads))

        assert len(tables.items) == 3
        assert tables.items["ore_titanium"].name == "Replacement Ore"

    def test_tables_read_only(self, raw_game_data: RawGameData) -> None:
        """Test that tables cannot be mutated."""
        tables = build_tables(raw_game_data)
        with pytest.raises(TypeError):
            tables.items["new"] = tables.items["ceramics"]  # type: ignore[index]


class TestRecipeIndices:
    """Tests for recipe indices."""

    def test_by_building(self, compiled: CompiledGameData) -> None:
        """Test recipes grouped by building."""
        index = compiled.indices.recipes_by_building
        assert [r.id for r in index["smelter"]] == ["titanium_bar"]
        assert [r.id for r in index["ore_excavator"]] == ["titanium_ore_normal"]
        assert "storage_small" not in index

    def test_by_output_and_input(self, compiled: CompiledGameData) -> None:
        """Test recipes grouped by output and input item."""
        indices = compiled.indices
        assert [r.id for r in indices.recipes_by_output_item["bar_titanium"]] == ["titanium_bar"]
        assert [r.id for r in indices.recipes_by_input_item["ore_titanium"]] == ["titanium_bar"]
        assert "ceramics" not in indices.recipes_by_output_item

    def test_repeated_input_listed_once(
        self, game_data_payloads: dict[str, Any], build_raw: BuildRaw
    ) -> None:
        """Test that a recipe naming an input twice appears once under it."""
        payloads = copy.deepcopy(game_data_payloads)
        payloads["recipes"][1]["inputs"].append({"id": "ore_titanium", "amount": 1})

        indices = build_indices(build_tables(build_raw(payloads)))

        assert len(indices.recipes_by_input_item["ore_titanium"]) == 1

    def test_shared_records(self, compiled: CompiledGameData) -> None:
        """Test that indices reference the same records as the tables."""
        recipe = compiled.tables.recipes["titanium_bar"]
        assert compiled.indices.recipes_by_building["smelter"][0] is recipe
        assert compiled.indices.recipes_by_output_item["bar_titanium"][0] is recipe


class TestBuildingAndItemIndices:
    """Tests for building and item groupings."""

    def test_buildings_by_category(self, compiled: CompiledGameData) -> None:
        """Test buildings grouped by category."""
        index = compiled.indices.buildings_by_category
        assert [b.id for b in index[BuildingType.EXTRACTION]] == ["ore_excavator"]
        assert [b.id for b in index[BuildingType.STORAGE]] == ["storage_small"]
        assert BuildingType.RAIL_SUPPORT not in index

    def test_buildings_by_corporation(self, compiled: CompiledGameData) -> None:
        """Test that only buildings with an unlock requirement are grouped."""
        index = compiled.indices.buildings_by_corporation
        assert [b.id for b in index["selenian_corporation"]] == ["ore_excavator", "smelter"]
        assert sum(len(group) for group in index.values()) == 2

    def test_items_by_category_and_tier(self, compiled: CompiledGameData) -> None:
        """Test items grouped by category and tier."""
        indices = compiled.indices
        assert [i.id for i in indices.items_by_category[ItemType.RAW]] == ["ore_titanium"]
        assert [i.id for i in indices.items_by_tier[2]] == ["ceramics"]
        assert 7 not in indices.items_by_tier


class TestRailIndices:
    """Tests for capacity-ordered rail indices."""

    @pytest.fixture
    def rail_indices(self, build_raw: BuildRaw) -> Any:
        rails = [
            _rail("rail_d", 480),
            _rail("rail_a", 60),
            _rail("rail_e", 720),
            _rail("rail_b", 120),
            _rail("rail_c", 240),
        ]
        return build_indices(build_tables(build_raw({"rails": rails})))

    def test_sorted_ascending(self, rail_indices: Any) -> None:
        """Test rails sorted by capacity."""
        capacities = [r.capacity for r in rail_indices.rails_sorted_by_capacity]
        assert capacities == [60, 120, 240, 480, 720]

    def test_min_capacity_thresholds(self, rail_indices: Any) -> None:
        """Test the at-or-above lists for each capacity present."""
        index = rail_indices.rails_by_min_capacity
        assert sorted(index) == [60, 120, 240, 480, 720]
        assert [r.capacity for r in index[240]] == [240, 480, 720]
        assert [r.capacity for r in index[60]] == [60, 120, 240, 480, 720]
        assert [r.id for r in index[720]] == ["rail_e"]

    def test_equal_capacity_keeps_load_order(self, build_raw: BuildRaw) -> None:
        """Test that rails with the same capacity keep their load order."""
        rails = [_rail("rail_y", 120), _rail("rail_x", 60), _rail("rail_z", 120)]
        indices = build_indices(build_tables(build_raw({"rails": rails})))

        assert [r.id for r in indices.rails_sorted_by_capacity] == ["rail_x", "rail_y", "rail_z"]
        assert [r.id for r in indices.rails_by_min_capacity[120]] == ["rail_y", "rail_z"]


class TestRewardIndex:
    """Tests for rewards by corporation level."""

    def test_rewards_by_level(self, compiled: CompiledGameData) -> None:
        """Test rewards grouped by corporation and level."""
        levels = compiled.indices.rewards_by_corporation_level["selenian_corporation"]
        assert sorted(levels) == [1, 2, 3]
        assert [r.type for r in levels[2]] == [RewardType.BUILDING, RewardType.CURRENCY]
        assert levels[3][0].id == "rail_v2"


class TestCompileGameData:
    """Tests for compile_game_data."""

    def test_requires_validated_data(self, raw_game_data: RawGameData) -> None:
        """Test that raw data is rejected."""
        with pytest.raises(TypeError, match="require_valid"):
            compile_game_data(raw_game_data)  # type: ignore[arg-type]

    def test_idempotent(self, raw_game_data: RawGameData) -> None:
        """Test that compiling the same input twice yields equal indices in equal order."""
        validated = require_valid(raw_game_data)
        first = compile_game_data(validated)
        second = compile_game_data(validated)

        assert first.indices == second.indices
        for index_field in fields(GameDataIndices):
            a = getattr(first.indices, index_field.name)
            b = getattr(second.indices, index_field.name)
            if isinstance(a, Mapping):
                assert list(a) == list(b), index_field.name

    def test_rebuild_from_same_tables(self, raw_game_data: RawGameData) -> None:
        """Test that build_indices is a pure function of the tables."""
        tables = build_tables(raw_game_data)

        assert build_indices(tables) == build_indices(tables)

    def test_empty_dataset(self, empty_raw_game_data: RawGameData) -> None:
        """Test that empty data compiles to empty indices."""
        compiled = compile_game_data(require_valid(empty_raw_game_data))

        assert compiled.indices.rails_sorted_by_capacity == ()
        assert len(compiled.indices.items_by_tier) == 0
        assert len(compiled.tables.recipes) == 0

    def test_indices_read_only(self, compiled: CompiledGameData) -> None:
        """Test that index mappings cannot be mutated."""
        with pytest.raises(TypeError):
            compiled.indices.items_by_tier[9] = ()  # type: ignore[index]
        with pytest.raises(AttributeError):
            compiled.indices.recipes_by_building["smelter"].append(None)  # type: ignore[attr-defined]
