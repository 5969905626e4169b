"""
Configuration management with typed Pydantic models.

Provides the data source location, loader concurrency and
logging settings, loadable from YAML.
"""

from factoryplanner.config.loader import default_config, load_config
from factoryplanner.config.settings import (
    DataFilesConfig,
    DataSourceConfig,
    LoadingConfig,
    LoggingConfig,
    PlannerConfig,
)

__all__ = [
    "DataFilesConfig",
    "DataSourceConfig",
    "LoadingConfig",
    "LoggingConfig",
    "PlannerConfig",
    "default_config",
    "load_config",
]
