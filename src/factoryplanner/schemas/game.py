"""
Pydantic record models for the game data documents.

The JSON documents use camelCase keys; models expose snake_case
attributes and accept either spelling on construction.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GameRecord(BaseModel):
    """Base for all game data records: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ─── Items ──────────────────────────────────────────────────────────


class ItemType(str, Enum):
    """Item categories."""

    RAW = "raw"
    PROCESSED = "processed"
    COMPONENT = "component"
    MATERIAL = "material"
    AMMO = "ammo"


class Item(GameRecord):
    """A craftable or extractable item."""

    id: str
    name: str
    category: ItemType = Field(alias="type")
    tier: int = Field(ge=0)


# ─── Buildings ──────────────────────────────────────────────────────


class BuildingType(str, Enum):
    """Building categories."""

    EXTRACTION = "extraction"
    PROCESSING = "processing"
    CRAFTING = "crafting"
    GENERATOR = "generator"
    TRANSPORT = "transport"
    STORAGE = "storage"
    TEMPERATURE = "temperature"
    HABITAT = "habitat"
    DEFENSE = "defense"
    RAIL_SUPPORT = "rail_support"
    RAIL_JUNCTION = "rail_junction"


class PlacementConstraint(str, Enum):
    """Deposit a building must be placed on."""

    ORE_DEPOSIT = "ore_deposit"
    HELIUM_DEPOSIT = "helium_deposit"
    SULFUR_DEPOSIT = "sulfur_deposit"


class UnlockRequirement(GameRecord):
    """Corporation level that unlocks a building or rail."""

    corporation: str
    # None for unreleased content
    level: int | None = None


class Building(GameRecord):
    """A placeable building."""

    id: str
    name: str
    category: BuildingType = Field(alias="type")
    size: int = Field(ge=0, description="Footprint edge length in grid cells")
    power: float
    heat: float
    input_sockets: int = Field(ge=0)
    output_sockets: int = Field(ge=0)
    placement_constraint: PlacementConstraint | None = None
    build_cost: dict[str, float] | None = None
    unlocked_by: UnlockRequirement | None = None
    recipe_ids: tuple[str, ...] | None = None
    capacity: float | None = None
    cooling_capacity: float | None = None
    rail_connections: int | None = None


# ─── Recipes ────────────────────────────────────────────────────────


class Purity(str, Enum):
    """Resource node purity for extraction recipes."""

    IMPURE = "impure"
    NORMAL = "normal"
    PURE = "pure"


class RecipeItem(GameRecord):
    """An item id with a quantity."""

    id: str
    amount: float


class Recipe(GameRecord):
    """A production recipe run by one building."""

    id: str
    building_id: str
    output: RecipeItem
    inputs: tuple[RecipeItem, ...] = ()
    duration: float = Field(description="Seconds per cycle")
    output_per_minute: float
    purity: Purity | None = None


# ─── Rails ──────────────────────────────────────────────────────────


class Rail(GameRecord):
    """A transport rail tier; the edges of the factory graph."""

    id: str
    name: str
    size: int = Field(ge=0)
    capacity: float = Field(description="Throughput in items/min")
    power: float
    heat: float
    build_cost: dict[str, float] | None = None
    unlocked_by: UnlockRequirement | None = None


# ─── Corporations ───────────────────────────────────────────────────


class RewardType(str, Enum):
    """Reward tags. Only BUILDING and RAIL rewards reference other collections."""

    BUILDING = "building"
    RAIL = "rail"
    UTILITY = "utility"
    LEM = "lem"
    ITEM = "item"
    WEAPON = "weapon"
    MODULE_PACK = "module_pack"
    CURRENCY = "currency"
    META = "meta"


class CorporationComponent(GameRecord):
    """A component that can be contributed for corporation XP."""

    id: str
    points: float


class CorporationReward(GameRecord):
    """A reward granted at a corporation level."""

    type: RewardType
    id: str | None = None
    name: str | None = None
    amount: float | None = None


class CorporationLevel(GameRecord):
    """One progression level of a corporation."""

    level: int
    xp: float
    components: tuple[CorporationComponent, ...] = ()
    rewards: tuple[CorporationReward, ...] = ()


class Corporation(GameRecord):
    """A progression corporation."""

    id: str
    name: str
    description: str = ""
    levels: tuple[CorporationLevel, ...] = ()


# ─── Aggregate ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class RawGameData:
    """
    The five collections as loaded, in document order.

    Attributes:
        items: Items catalog records.
        buildings: Building records.
        recipes: Recipe records.
        rails: Rail records.
        corporations: Corporation records.
    """

    items: tuple[Item, ...] = ()
    buildings: tuple[Building, ...] = ()
    recipes: tuple[Recipe, ...] = ()
    rails: tuple[Rail, ...] = ()
    corporations: tuple[Corporation, ...] = ()
