"""
Game data store.

Owns the load -> validate -> index pipeline lifecycle and the single
published snapshot that lookups read from.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from factoryplanner.config.settings import PlannerConfig
from factoryplanner.indexing.indices import CompiledGameData, compile_game_data
from factoryplanner.ingestion.base import GameDataLoadError
from factoryplanner.ingestion.loader import GameDataLoader
from factoryplanner.schemas.game import RawGameData
from factoryplanner.utils.logging import get_logger, log_context
from factoryplanner.validation.core import GameDataValidationError, require_valid

log = get_logger(__name__)


class LoadStatus(str, Enum):
    """Lifecycle of the store."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DataNotLoadedError(RuntimeError):
    """Game data was queried before a successful load."""

    def __init__(self) -> None:
        super().__init__("Game data not loaded. Call load() first.")


@dataclass(frozen=True)
class LoadState:
    """
    Observable store state.

    Attributes:
        status: Current lifecycle status.
        error: Description of the last failed load, if the last load failed.
        last_updated: When the current snapshot was published.
        generation: Generation of the last load attempt that settled.
        has_data: Whether a snapshot is available for reads.
    """

    status: LoadStatus
    error: str | None
    last_updated: datetime | None
    generation: int
    has_data: bool


class GameDataStore:
    """
    Holds the one live copy of compiled game data.

    Every load attempt is stamped with a generation number; only the
    most recently requested attempt may publish its result. A failed
    load keeps the previously published snapshot readable.
    """

    def __init__(
        self,
        config: PlannerConfig | None = None,
        loader: Callable[[], RawGameData] | None = None,
    ) -> None:
        """
        Initialize an empty store.

        Args:
            config: Planner configuration; defaults are used when omitted.
            loader: Callable producing raw game data. Defaults to a
                GameDataLoader built from config.
        """
        self.config = config or PlannerConfig()
        self._loader = loader or GameDataLoader(self.config).load
        self._lock = threading.Lock()
        self._snapshot: CompiledGameData | None = None
        self._status = LoadStatus.IDLE
        self._error: str | None = None
        self._last_updated: datetime | None = None
        self._requested_generation = 0
        self._settled_generation = 0

    @property
    def state(self) -> LoadState:
        """Consistent view of status, error and data availability."""
        with self._lock:
            return self._state_locked()

    def _state_locked(self) -> LoadState:
        return LoadState(
            status=self._status,
            error=self._error,
            last_updated=self._last_updated,
            generation=self._settled_generation,
            has_data=self._snapshot is not None,
        )

    def snapshot(self) -> CompiledGameData:
        """
        The currently published dataset.

        Raises:
            DataNotLoadedError: If no load has ever succeeded.
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise DataNotLoadedError()
        return snapshot

    def load(self) -> LoadState:
        """
        Run the full pipeline and publish the result.

        Load and validation failures are recorded in the store state
        instead of being raised.

        Returns:
            Store state after this attempt settled.
        """
        with self._lock:
            self._requested_generation += 1
            generation = self._requested_generation
            self._status = LoadStatus.LOADING
            self._error = None

        with log_context(generation=generation):
            compiled: CompiledGameData | None = None
            error: str | None = None

            try:
                raw = self._loader()
                validated = require_valid(raw, self.config.resources)
                compiled = compile_game_data(validated)
            except GameDataLoadError as e:
                error = str(e)
                log.error("Game data load failed", resource=e.resource, error=error)
            except GameDataValidationError as e:
                error = str(e)
                log.error("Game data validation failed", violations=len(e.result.errors))
            except Exception as e:
                error = str(e) or "Unknown error occurred"
                log.exception("Unexpected error while loading game data")

            return self._publish(generation, compiled, error)

    def _publish(
        self,
        generation: int,
        compiled: CompiledGameData | None,
        error: str | None,
    ) -> LoadState:
        with self._lock:
            if generation != self._requested_generation:
                log.warning(
                    "Discarding stale load result",
                    latest_generation=self._requested_generation,
                )
                return self._state_locked()

            self._settled_generation = generation
            if compiled is not None:
                self._snapshot = compiled
                self._status = LoadStatus.READY
                self._error = None
                self._last_updated = datetime.now(timezone.utc)
                log.info("Game data ready")
            else:
                self._status = LoadStatus.ERROR
                self._error = error
            return self._state_locked()
