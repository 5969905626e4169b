"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from factoryplanner.utils.logging import LOG_LEVELS


class DataFilesConfig(BaseModel):
    """Resource names of the five game data documents, relative to the data root."""

    model_config = ConfigDict(frozen=True)

    items: str = Field(default="items_catalog.json", description="Items catalog")
    buildings: str = Field(default="buildings.json", description="Buildings")
    recipes: str = Field(default="recipes.json", description="Recipes")
    rails: str = Field(default="rails.json", description="Rail tiers")
    corporations: str = Field(
        default="corporations_components.json",
        description="Corporations with progression levels",
    )

    def as_mapping(self) -> dict[str, str]:
        """Collection name -> resource name, in canonical collection order."""
        return {
            "items": self.items,
            "buildings": self.buildings,
            "recipes": self.recipes,
            "rails": self.rails,
            "corporations": self.corporations,
        }


class DataSourceConfig(BaseModel):
    """Where the game data lives.

    The root is either a local directory or an http(s) base URL.
    """

    model_config = ConfigDict(frozen=True)

    root: str = Field(
        default="./data", description="Data directory or http(s) base URL"
    )
    files: DataFilesConfig = Field(default_factory=DataFilesConfig)
    timeout: float = Field(
        default=10.0, gt=0, description="HTTP timeout in seconds (URL roots only)"
    )

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Reject an empty data root."""
        if not v.strip():
            msg = "Data root must not be empty"
            raise ValueError(msg)
        return v.strip()

    @property
    def is_remote(self) -> bool:
        """True when the data root is an http(s) URL."""
        return self.root.startswith(("http://", "https://"))

    @property
    def root_path(self) -> Path:
        """Data root as a filesystem path (local roots only)."""
        if self.is_remote:
            msg = f"Data root is a URL, not a path: {self.root}"
            raise ValueError(msg)
        return Path(self.root)


class LoadingConfig(BaseModel):
    """Loader concurrency configuration."""

    model_config = ConfigDict(frozen=True)

    max_workers: int = Field(
        default=5, ge=1, le=32, description="Parallel resource fetches"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class PlannerConfig(BaseModel):
    """Complete configuration for the game data core."""

    model_config = ConfigDict(frozen=True)

    data: DataSourceConfig = Field(default_factory=DataSourceConfig)
    loading: LoadingConfig = Field(default_factory=LoadingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def resources(self) -> dict[str, str]:
        """Convenience accessor for the collection -> resource mapping."""
        return self.data.files.as_mapping()
