"""Structural interfaces for the directory's collaborators.

The directory depends on these protocols rather than on the concrete
``SqliteStore`` / ``Fetcher`` so tests can substitute in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from appdirectory.models.application import Application


class StoreProtocol(Protocol):
    """Synchronous string key-value store. Implementations must never raise."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class ResponseProtocol(Protocol):
    @property
    def ok(self) -> bool: ...

    async def json(self) -> list[Application]:
        """Decode the body to a catalog. Raises if the body is not a valid catalog."""
        ...


class FetcherProtocol(Protocol):
    async def fetch(self, url: str) -> ResponseProtocol: ...
