"""Read-only lookups over published game data."""

from factoryplanner.lookup.lookups import GameDataLookup, RecipesByItem

__all__ = ["GameDataLookup", "RecipesByItem"]
