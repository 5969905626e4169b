"""Game data cross-reference validation."""

from factoryplanner.validation.core import (
    GameDataValidationError,
    ValidatedGameData,
    ValidationError,
    ValidationErrorCode,
    ValidationResult,
    require_valid,
    validate_game_data,
)
from factoryplanner.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "GameDataValidationError",
    "ValidatedGameData",
    "ValidationError",
    "ValidationErrorCode",
    "ValidationResult",
    "require_valid",
    "validate_game_data",
]
