"""
Cross-reference validation for loaded game data.

Checks id uniqueness per collection and every reference between
collections. All checks run; every violation is collected.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from factoryplanner.schemas.game import RawGameData, RewardType
from factoryplanner.schemas.registry import CollectionRegistry


class ValidationErrorCode(str, Enum):
    """Closed set of integrity violation codes."""

    DUPLICATE_ID = "DUPLICATE_ID"
    MISSING_BUILDING_REF = "MISSING_BUILDING_REF"
    MISSING_ITEM_REF = "MISSING_ITEM_REF"
    MISSING_RECIPE_REF = "MISSING_RECIPE_REF"
    MISSING_CORPORATION_REF = "MISSING_CORPORATION_REF"
    MISSING_RAIL_REF = "MISSING_RAIL_REF"


@dataclass(frozen=True)
class ValidationError:
    """
    A single integrity violation.

    Attributes:
        code: Violation category.
        message: Human-readable message naming the offending id(s).
        source: Resource name of the collection containing the violation.
        entity_id: Id of the record containing the violation, if any.
    """

    code: ValidationErrorCode
    message: str
    source: str
    entity_id: str | None = None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one raw dataset."""

    errors: tuple[ValidationError, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if no violation was found."""
        return not self.errors

    def by_code(self, code: ValidationErrorCode) -> list[ValidationError]:
        """Violations with the given code, in report order."""
        return [e for e in self.errors if e.code == code]

    def format(self) -> str:
        """Single aggregated report, one line per violation."""
        if self.is_valid:
            return "Validation passed"
        lines = "\n".join(str(e) for e in self.errors)
        return f"Validation failed:\n{lines}"


# Private issuer token; only require_valid() passes it.
_REQUIRE_VALID = object()


@dataclass(frozen=True)
class ValidatedGameData:
    """
    Raw game data that has passed validation.

    Only require_valid() can construct one; direct construction raises
    TypeError. The index builder's compile step accepts nothing else.
    """

    raw: RawGameData
    result: ValidationResult
    _issued_by: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._issued_by is not _REQUIRE_VALID:
            msg = "ValidatedGameData is only produced by require_valid()"
            raise TypeError(msg)


class GameDataValidationError(Exception):
    """Raised when game data fails cross-reference validation."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(result.format())
        self.result = result


# Collection each reward type references. Every RewardType must appear here.
REWARD_REFERENCES: dict[RewardType, str | None] = {
    RewardType.BUILDING: "buildings",
    RewardType.RAIL: "rails",
    RewardType.UTILITY: None,
    RewardType.LEM: None,
    RewardType.ITEM: None,
    RewardType.WEAPON: None,
    RewardType.MODULE_PACK: None,
    RewardType.CURRENCY: None,
    RewardType.META: None,
}

_MISSING_REF_CODES: dict[str, ValidationErrorCode] = {
    "buildings": ValidationErrorCode.MISSING_BUILDING_REF,
    "rails": ValidationErrorCode.MISSING_RAIL_REF,
}


def _check_duplicate_ids(
    ids: Iterable[str],
    source: str,
    label: str,
) -> list[ValidationError]:
    """Flag every repeat of an already-seen id; first occurrences are never flagged."""
    errors: list[ValidationError] = []
    seen: set[str] = set()

    for entity_id in ids:
        if entity_id in seen:
            errors.append(
                ValidationError(
                    code=ValidationErrorCode.DUPLICATE_ID,
                    message=f'Duplicate {label} ID: "{entity_id}"',
                    source=source,
                    entity_id=entity_id,
                )
            )
        seen.add(entity_id)

    return errors


def validate_game_data(
    data: RawGameData,
    resources: dict[str, str] | None = None,
) -> ValidationResult:
    """
    Validate that all game data cross-references are consistent.

    Collects every violation rather than stopping at the first.

    Args:
        data: Raw game data to validate.
        resources: Optional collection -> resource name mapping used as the
            violation source; defaults to the registry's resource names.

    Returns:
        ValidationResult with all violations in check order.
    """
    sources = {info.name: info.resource for info in CollectionRegistry.all()}
    if resources:
        sources.update(resources)

    errors: list[ValidationError] = []

    ids = {
        "items": {item.id for item in data.items},
        "buildings": {building.id for building in data.buildings},
        "recipes": {recipe.id for recipe in data.recipes},
        "rails": {rail.id for rail in data.rails},
        "corporations": {corp.id for corp in data.corporations},
    }

    for info in CollectionRegistry.all():
        records = getattr(data, info.name)
        errors.extend(
            _check_duplicate_ids((r.id for r in records), sources[info.name], info.label)
        )

    source = sources["recipes"]
    for recipe in data.recipes:
        if recipe.building_id not in ids["buildings"]:
            errors.append(
                ValidationError(
                    code=ValidationErrorCode.MISSING_BUILDING_REF,
                    message=(
                        f'Recipe "{recipe.id}" references non-existent building '
                        f'"{recipe.building_id}"'
                    ),
                    source=source,
                    entity_id=recipe.id,
                )
            )

        if recipe.output.id not in ids["items"]:
            errors.append(
                ValidationError(
                    code=ValidationErrorCode.MISSING_ITEM_REF,
                    message=(
                        f'Recipe "{recipe.id}" output references non-existent item '
                        f'"{recipe.output.id}"'
                    ),
                    source=source,
                    entity_id=recipe.id,
                )
            )

        for recipe_input in recipe.inputs:
            if recipe_input.id not in ids["items"]:
                errors.append(
                    ValidationError(
                        code=ValidationErrorCode.MISSING_ITEM_REF,
                        message=(
                            f'Recipe "{recipe.id}" input references non-existent item '
                            f'"{recipe_input.id}"'
                        ),
                        source=source,
                        entity_id=recipe.id,
                    )
                )

    source = sources["buildings"]
    for building in data.buildings:
        for recipe_id in building.recipe_ids or ():
            if recipe_id not in ids["recipes"]:
                errors.append(
                    ValidationError(
                        code=ValidationErrorCode.MISSING_RECIPE_REF,
                        message=(
                            f'Building "{building.id}" references non-existent recipe '
                            f'"{recipe_id}"'
                        ),
                        source=source,
                        entity_id=building.id,
                    )
                )

        if (
            building.unlocked_by is not None
            and building.unlocked_by.corporation not in ids["corporations"]
        ):
            errors.append(
                ValidationError(
                    code=ValidationErrorCode.MISSING_CORPORATION_REF,
                    message=(
                        f'Building "{building.id}" references non-existent corporation '
                        f'"{building.unlocked_by.corporation}"'
                    ),
                    source=source,
                    entity_id=building.id,
                )
            )

    source = sources["rails"]
    for rail in data.rails:
        if rail.unlocked_by is not None and rail.unlocked_by.corporation not in ids["corporations"]:
            errors.append(
                ValidationError(
                    code=ValidationErrorCode.MISSING_CORPORATION_REF,
                    message=(
                        f'Rail "{rail.id}" references non-existent corporation '
                        f'"{rail.unlocked_by.corporation}"'
                    ),
                    source=source,
                    entity_id=rail.id,
                )
            )

    source = sources["corporations"]
    for corp in data.corporations:
        for level in corp.levels:
            for reward in level.rewards:
                target = REWARD_REFERENCES[reward.type]
                if target is None or not reward.id:
                    continue
                if reward.id not in ids[target]:
                    label = CollectionRegistry.get(target).label
                    errors.append(
                        ValidationError(
                            code=_MISSING_REF_CODES[target],
                            message=(
                                f'Corporation "{corp.id}" level {level.level} reward '
                                f'references non-existent {label} "{reward.id}"'
                            ),
                            source=source,
                            entity_id=corp.id,
                        )
                    )

    return ValidationResult(errors=tuple(errors))


def require_valid(
    data: RawGameData,
    resources: dict[str, str] | None = None,
) -> ValidatedGameData:
    """
    Validate and wrap raw data in the validated marker type.

    Args:
        data: Raw game data.
        resources: Optional collection -> resource name mapping.

    Returns:
        ValidatedGameData wrapping the input.

    Raises:
        GameDataValidationError: If any violation is found.
    """
    result = validate_game_data(data, resources)
    if not result.is_valid:
        raise GameDataValidationError(result)
    return ValidatedGameData(raw=data, result=result, _issued_by=_REQUIRE_VALID)
