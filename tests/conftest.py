"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from factoryplanner.config import DataSourceConfig, PlannerConfig
from factoryplanner.schemas import CollectionRegistry, RawGameData


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


def _items() -> list[dict[str, Any]]:
    return [
        {"id": "ore_titanium", "name": "Titanium Ore", "type": "raw", "tier": 0},
        {"id": "bar_titanium", "name": "Titanium Bar", "type": "processed", "tier": 1},
        {"id": "ceramics", "name": "Ceramics", "type": "component", "tier": 2},
    ]


def _buildings() -> list[dict[str, Any]]:
    return [
        {
            "id": "ore_excavator",
            "name": "Ore Excavator",
            "type": "extraction",
            "size": 3,
            "power": 5,
            "heat": 2,
            "inputSockets": 0,
            "outputSockets": 1,
            "placementConstraint": "ore_deposit",
            "recipeIds": ["titanium_ore_normal"],
            "unlockedBy": {"corporation": "selenian_corporation", "level": 1},
        },
        {
            "id": "smelter",
            "name": "Smelter",
            "type": "processing",
            "size": 3,
            "power": 10,
            "heat": 5,
            "inputSockets": 1,
            "outputSockets": 1,
            "buildCost": {"bar_titanium": 10},
            "recipeIds": ["titanium_bar"],
            "unlockedBy": {"corporation": "selenian_corporation", "level": 2},
        },
        {
            "id": "storage_small",
            "name": "Small Storage",
            "type": "storage",
            "size": 2,
            "power": 1,
            "heat": 0,
            "inputSockets": 1,
            "outputSockets": 1,
            "capacity": 100,
        },
    ]


def _recipes() -> list[dict[str, Any]]:
    return [
        {
            "id": "titanium_ore_normal",
            "buildingId": "ore_excavator",
            "output": {"id": "ore_titanium", "amount": 1},
            "inputs": [],
            "duration": 2,
            "outputPerMinute": 30,
            "purity": "normal",
        },
        {
            "id": "titanium_bar",
            "buildingId": "smelter",
            "output": {"id": "bar_titanium", "amount": 1},
            "inputs": [{"id": "ore_titanium", "amount": 2}],
            "duration": 4,
            "outputPerMinute": 15,
        },
    ]


def _rails() -> list[dict[str, Any]]:
    return [
        {
            "id": "rail_v1",
            "name": "Rail V1",
            "size": 1,
            "capacity": 60,
            "power": 1,
            "heat": 0,
            "unlockedBy": {"corporation": "selenian_corporation", "level": 1},
        },
        {
            "id": "rail_v2",
            "name": "Rail V2",
            "size": 1,
            "capacity": 120,
            "power": 2,
            "heat": 0,
            "buildCost": {"bar_titanium": 5},
            "unlockedBy": {"corporation": "selenian_corporation", "level": 3},
        },
    ]


def _corporations() -> list[dict[str, Any]]:
    return [
        {
            "id": "selenian_corporation",
            "name": "Selenian Corporation",
            "description": "Factories and production facilities",
            "levels": [
                {
                    "level": 1,
                    "xp": 0,
                    "components": [],
                    "rewards": [
                        {"type": "building", "id": "ore_excavator"},
                        {"type": "rail", "id": "rail_v1"},
                    ],
                },
                {
                    "level": 2,
                    "xp": 100,
                    "components": [{"id": "bar_titanium", "points": 10}],
                    "rewards": [
                        {"type": "building", "id": "smelter"},
                        {"type": "currency", "name": "Credits", "amount": 500},
                    ],
                },
                {
                    "level": 3,
                    "xp": 300,
                    "components": [{"id": "bar_titanium", "points": 10}],
                    "rewards": [{"type": "rail", "id": "rail_v2"}],
                },
            ],
        }
    ]


@pytest.fixture
def game_data_payloads() -> dict[str, list[dict[str, Any]]]:
    """JSON payloads of a small, fully consistent dataset, keyed by collection."""
    return {
        "items": _items(),
        "buildings": _buildings(),
        "recipes": _recipes(),
        "rails": _rails(),
        "corporations": _corporations(),
    }


def parse_payloads(payloads: dict[str, list[dict[str, Any]]]) -> RawGameData:
    """Parse collection payloads into RawGameData; missing collections are empty."""
    parsed = {
        info.name: info.adapter.validate_python(payloads.get(info.name, []))
        for info in CollectionRegistry.all()
    }
    return RawGameData(**parsed)


@pytest.fixture
def build_raw() -> Callable[[dict[str, Any]], RawGameData]:
    """Factory parsing collection payloads into RawGameData."""
    return parse_payloads


@pytest.fixture
def raw_game_data(game_data_payloads: dict[str, list[dict[str, Any]]]) -> RawGameData:
    """Parsed version of game_data_payloads."""
    return parse_payloads(game_data_payloads)


@pytest.fixture
def empty_raw_game_data() -> RawGameData:
    """All five collections empty."""
    return RawGameData()


@pytest.fixture
def write_data_dir(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write collection payloads as JSON files under a fresh data directory."""

    def _write(payloads: dict[str, Any]) -> Path:
        data_dir = tmp_path / "data"
        data_dir.mkdir(exist_ok=True)
        for info in CollectionRegistry.all():
            if info.name in payloads:
                (data_dir / info.resource).write_text(
                    json.dumps(payloads[info.name]), encoding="utf-8"
                )
        return data_dir

    return _write


@pytest.fixture
def data_dir(
    write_data_dir: Callable[[dict[str, Any]], Path],
    game_data_payloads: dict[str, list[dict[str, Any]]],
) -> Path:
    """Data directory holding the consistent sample dataset."""
    return write_data_dir(game_data_payloads)


@pytest.fixture
def planner_config(data_dir: Path) -> PlannerConfig:
    """Config pointing at the sample data directory."""
    return PlannerConfig(data=DataSourceConfig(root=str(data_dir)))
