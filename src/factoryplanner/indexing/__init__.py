"""Primary tables and derived indices for validated game data."""

from factoryplanner.indexing.indices import (
    CompiledGameData,
    GameDataIndices,
    build_indices,
    compile_game_data,
)
from factoryplanner.indexing.tables import GameTables, build_tables

__all__ = [
    "CompiledGameData",
    "GameDataIndices",
    "GameTables",
    "build_indices",
    "build_tables",
    "compile_game_data",
]
