"""
Base classes for game data ingestion.

Defines the transport interface and the load error taxonomy shared by
all transports.
"""

from abc import ABC, abstractmethod
from types import TracebackType


class GameDataLoadError(Exception):
    """
    A game data resource could not be loaded.

    Attributes:
        resource: Name of the failing resource (e.g. 'recipes.json').
        cause: Underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.resource = resource
        self.cause = cause


class ResourceTransportError(GameDataLoadError):
    """The resource could not be retrieved at all (connection, timeout, I/O)."""


class ResourceStatusError(GameDataLoadError):
    """The resource answered with an error status."""

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, resource, cause)
        self.status_code = status_code


class ResourceParseError(GameDataLoadError):
    """The resource body is not a well-formed array of records."""


class Transport(ABC):
    """
    Retrieves raw resource bodies by name.

    Implementations translate their own failures into
    ResourceTransportError or ResourceStatusError.
    """

    @abstractmethod
    def fetch(self, resource: str) -> bytes:
        """
        Fetch the raw body of a resource.

        Args:
            resource: Resource name relative to the data root.

        Returns:
            Raw bytes of the resource.
        """
        ...

    @abstractmethod
    def describe(self, resource: str) -> str:
        """Human-readable location of a resource, for logs."""
        ...

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self) -> "Transport":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
