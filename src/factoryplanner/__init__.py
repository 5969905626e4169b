"""
Factoryplanner: game data core for the factory layout planner.

This package loads the game data documents (items, buildings, recipes,
rails, corporations), validates their cross-references and compiles
them into read-only lookup indices.
"""

from importlib.metadata import version

__version__ = version("factoryplanner")

__all__ = ["__version__"]
