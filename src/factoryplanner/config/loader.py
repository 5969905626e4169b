"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance
from a sibling base.yaml. Every key is optional.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from factoryplanner.config.settings import (
    DataFilesConfig,
    DataSourceConfig,
    LoadingConfig,
    LoggingConfig,
    PlannerConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping: {path}"
        raise ValueError(msg)
    return _process_config_values(data)


def default_config() -> PlannerConfig:
    """Configuration with every value at its default."""
    return PlannerConfig()


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> PlannerConfig:
    """
    Load planner configuration from YAML file(s).

    Recognized sections:
        - data.root: directory or http(s) base URL
        - data.timeout: HTTP timeout in seconds
        - data.files.{items,buildings,recipes,rails,corporations}
        - loading.max_workers
        - logging.level, logging.json

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated PlannerConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base.resolve() != config_path.resolve():
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    data_section = merged.get("data") or {}
    data = DataSourceConfig(
        root=data_section.get("root", "./data"),
        files=DataFilesConfig(**(data_section.get("files") or {})),
        timeout=data_section.get("timeout", 10.0),
    )

    loading_section = merged.get("loading") or {}
    loading = LoadingConfig(
        max_workers=loading_section.get("max_workers", 5),
    )

    logging_section = merged.get("logging") or {}
    logging = LoggingConfig(
        level=logging_section.get("level", "INFO"),
        json_output=logging_section.get("json", False),
    )

    return PlannerConfig(data=data, loading=loading, logging=logging)
