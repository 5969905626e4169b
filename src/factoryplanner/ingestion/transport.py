"""
Concrete transports: local directory and HTTP base URL.
"""

from pathlib import Path

import httpx

from factoryplanner.config.settings import DataSourceConfig
from factoryplanner.ingestion.base import (
    ResourceStatusError,
    ResourceTransportError,
    Transport,
)
from factoryplanner.utils.logging import get_logger

log = get_logger(__name__)


class FileTransport(Transport):
    """Reads resources from a local data directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def describe(self, resource: str) -> str:
        return str(self.root / resource)

    def fetch(self, resource: str) -> bytes:
        path = self.root / resource
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            msg = f"Game data file not found: {resource} (status 404, no such file {path})"
            raise ResourceStatusError(msg, resource, status_code=404, cause=e) from e
        except OSError as e:
            msg = f"Failed to read game data file: {resource} ({e.strerror or e})"
            raise ResourceTransportError(msg, resource, cause=e) from e


class HttpTransport(Transport):
    """
    Fetches resources relative to an http(s) base URL.

    A client may be injected (tests use httpx.MockTransport); otherwise
    one is created and owned by this transport.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def describe(self, resource: str) -> str:
        return f"{self.base_url}{resource.lstrip('/')}"

    def fetch(self, resource: str) -> bytes:
        url = self.describe(resource)
        try:
            response = self._client.get(url)
        except httpx.TimeoutException as e:
            msg = f"Timed out fetching game data file: {resource}"
            raise ResourceTransportError(msg, resource, cause=e) from e
        except httpx.RequestError as e:
            msg = f"Failed to fetch game data file: {resource}"
            raise ResourceTransportError(msg, resource, cause=e) from e

        if response.is_error:
            reason = "not found" if response.status_code == 404 else "unavailable"
            msg = f"Game data file {reason}: {resource} (HTTP {response.status_code})"
            raise ResourceStatusError(msg, resource, status_code=response.status_code)

        return response.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def create_transport(config: DataSourceConfig) -> Transport:
    """
    Pick a transport for the configured data root.

    Args:
        config: Data source configuration.

    Returns:
        HttpTransport for http(s) roots, FileTransport otherwise.
    """
    if config.is_remote:
        log.debug("Using HTTP transport", base_url=config.root)
        return HttpTransport(config.root, timeout=config.timeout)
    log.debug("Using file transport", root=config.root)
    return FileTransport(config.root_path)
