"""Application state container.

AppState is created once by ``open_app_state()`` and passed explicitly to
whatever consumes the directory. There is no global registry of services.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from appdirectory.config import Settings
    from appdirectory.directory import AppDirectory
    from appdirectory.protocols import FetcherProtocol, StoreProtocol


@dataclass
class AppState:
    """Holds all shared runtime state."""

    settings: Settings
    directory: AppDirectory

    http_client: httpx.AsyncClient | None = None
    store: StoreProtocol | None = None
    fetcher: FetcherProtocol | None = None
