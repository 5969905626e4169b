"""
Game data loader.

Fetches the five game data documents in parallel and parses them into
typed record tuples.
"""

import json
from concurrent.futures import ThreadPoolExecutor, as_completed

from pydantic import ValidationError

from factoryplanner.config.settings import PlannerConfig
from factoryplanner.ingestion.base import ResourceParseError, Transport
from factoryplanner.ingestion.transport import create_transport
from factoryplanner.schemas.game import GameRecord, RawGameData
from factoryplanner.schemas.registry import CollectionInfo, CollectionRegistry
from factoryplanner.utils.logging import get_logger

log = get_logger(__name__)


def _format_record_errors(error: ValidationError, limit: int = 3) -> str:
    """Summarize the first few record-level schema errors."""
    parts = []
    for detail in error.errors()[:limit]:
        location = ".".join(str(p) for p in detail["loc"])
        parts.append(f"{location}: {detail['msg']}")
    remaining = error.error_count() - limit
    if remaining > 0:
        parts.append(f"... and {remaining} more")
    return "; ".join(parts)


class GameDataLoader:
    """
    Loads all five game data collections.

    Fetches run concurrently; the first failing resource aborts the
    whole load and no partial data is returned.
    """

    def __init__(
        self,
        config: PlannerConfig,
        transport: Transport | None = None,
    ) -> None:
        """
        Initialize the loader.

        Args:
            config: Planner configuration (data root, file names, workers).
            transport: Optional transport; created from config when omitted.
        """
        self.config = config
        self._transport = transport

    def load(self) -> RawGameData:
        """
        Fetch and parse every collection.

        Returns:
            RawGameData holding all five record tuples.

        Raises:
            GameDataLoadError: If any resource fails to load or parse.
        """
        if self._transport is not None:
            return self._load_with(self._transport)
        with create_transport(self.config.data) as transport:
            return self._load_with(transport)

    def _load_with(self, transport: Transport) -> RawGameData:
        resources = self.config.resources
        log.info(
            "Loading game data",
            root=self.config.data.root,
            workers=self.config.loading.max_workers,
        )

        results: dict[str, tuple[GameRecord, ...]] = {}

        with ThreadPoolExecutor(max_workers=self.config.loading.max_workers) as executor:
            futures = {
                executor.submit(
                    self._load_collection, transport, info, resources[info.name]
                ): info.name
                for info in CollectionRegistry.all()
            }

            try:
                for future in as_completed(futures):
                    name = futures[future]
                    results[name] = future.result()
            except Exception as e:
                for pending in futures:
                    pending.cancel()
                log.error(
                    "Game data load failed",
                    resource=getattr(e, "resource", None),
                    error=str(e),
                )
                raise

        return RawGameData(**results)  # type: ignore[arg-type]

    def _load_collection(
        self,
        transport: Transport,
        info: CollectionInfo,
        resource: str,
    ) -> tuple[GameRecord, ...]:
        """Fetch one resource and parse it into records of the collection's model."""
        body = transport.fetch(resource)

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            msg = f"Invalid JSON in game data file: {resource}"
            raise ResourceParseError(msg, resource, cause=e) from e

        if not isinstance(payload, list):
            msg = (
                f"Invalid content in game data file: {resource} "
                f"(expected a JSON array, got {type(payload).__name__})"
            )
            raise ResourceParseError(msg, resource)

        try:
            records = info.adapter.validate_python(payload)
        except ValidationError as e:
            msg = (
                f"Invalid {info.label} record in game data file: {resource} "
                f"({_format_record_errors(e)})"
            )
            raise ResourceParseError(msg, resource, cause=e) from e

        log.debug(
            "Loaded game data file",
            resource=resource,
            location=transport.describe(resource),
            records=len(records),
        )
        return records


def load_raw_game_data(
    config: PlannerConfig,
    transport: Transport | None = None,
) -> RawGameData:
    """
    Convenience wrapper around GameDataLoader.

    Args:
        config: Planner configuration.
        transport: Optional transport override.

    Returns:
        RawGameData with all five collections.

    Raises:
        GameDataLoadError: If any resource fails.
    """
    return GameDataLoader(config, transport).load()
