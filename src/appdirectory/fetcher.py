"""HTTP fetcher for the remote application catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError

from appdirectory.config import FetcherSettings
from appdirectory.errors import DirectoryError, ErrorCode
from appdirectory.models.application import parse_catalog

if TYPE_CHECKING:
    from appdirectory.models.application import Application

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Create the shared AsyncClient. The caller owns and closes it."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
    )


class FetchResponse:
    """Response wrapper implementing ResponseProtocol."""

    def __init__(self, url: str, response: httpx.Response) -> None:
        self.url = url
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def ok(self) -> bool:
        return self._response.is_success

    async def json(self) -> list[Application]:
        try:
            return parse_catalog(self._response.content)
        except ValidationError as exc:
            raise DirectoryError(
                code=ErrorCode.INVALID_CATALOG,
                message=f"Response from {self.url} is not a valid catalog "
                f"({exc.error_count()} validation errors)",
                recoverable=False,
            ) from exc


class Fetcher:
    """Fetches catalog documents over HTTP. Implements FetcherProtocol."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> FetchResponse:
        """GET ``url``. Raises DirectoryError(FETCH_FAILED) on network errors.

        Non-2xx responses are returned, not raised; check ``ok``.
        """
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise DirectoryError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Network error fetching {url}: {exc}",
                recoverable=True,
            ) from exc

        log.debug("fetch_complete", url=url, status_code=response.status_code)
        return FetchResponse(url, response)
