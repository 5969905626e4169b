"""Game data ingestion: transports and the parallel loader."""

from factoryplanner.ingestion.base import (
    GameDataLoadError,
    ResourceParseError,
    ResourceStatusError,
    ResourceTransportError,
    Transport,
)
from factoryplanner.ingestion.loader import GameDataLoader, load_raw_game_data
from factoryplanner.ingestion.transport import FileTransport, HttpTransport, create_transport

__all__ = [
    "FileTransport",
    "GameDataLoadError",
    "GameDataLoader",
    "HttpTransport",
    "ResourceParseError",
    "ResourceStatusError",
    "ResourceTransportError",
    "Transport",
    "create_transport",
    "load_raw_game_data",
]
