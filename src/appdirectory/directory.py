"""Application directory: cached catalog, remote refresh and intent queries.

The catalog is seeded synchronously from the store at construction and is
trusted for as long as the URL recorded alongside it matches the configured
source URL. When the URLs differ, ``get_all_apps()`` fetches the catalog from
the configured URL; on success the catalog and URL are replaced together, on
any failure the previous catalog is returned untouched.

Failures are never raised to callers. A corrupt cache degrades to an empty
catalog and a failed refresh degrades to the stale one; both are reported
through the injected logger so they stay observable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from appdirectory.errors import DirectoryError, ErrorCode
from appdirectory.index import find_app_by_name, find_apps_by_intent, group_intents_by_context
from appdirectory.models.application import dump_catalog, parse_catalog

if TYPE_CHECKING:
    from appdirectory.models.application import AppIntentGroup, Application
    from appdirectory.protocols import FetcherProtocol, StoreProtocol

URL_KEY = "fdc3@url"
APPLICATIONS_KEY = "fdc3@applications"


class AppDirectory:
    def __init__(
        self,
        store: StoreProtocol,
        fetcher: FetcherProtocol,
        url: str,
        log: Any = None,
    ) -> None:
        """Load the cached catalog. Never performs network I/O and never raises.

        ``log`` is any structlog-style logger; defaults to the module logger.
        """
        self._store = store
        self._fetcher = fetcher
        self._url = url
        self._log = log if log is not None else structlog.get_logger()

        self._cached_url = store.get(URL_KEY)
        self._apps = self._load_cached_catalog()

    @property
    def url(self) -> str:
        """Configured source URL."""
        return self._url

    @property
    def cached_url(self) -> str | None:
        """Source URL the in-memory catalog was last written from."""
        return self._cached_url

    def _load_cached_catalog(self) -> list[Application]:
        raw = self._store.get(APPLICATIONS_KEY)
        if raw is None:
            return []
        try:
            return parse_catalog(raw)
        except ValidationError as exc:
            self._log.warning(
                "directory_cache_corrupt",
                code=ErrorCode.CORRUPT_CACHE,
                error_count=exc.error_count(),
            )
            # Overwrite so the corrupt value does not come back on the next start
            self._store.set(APPLICATIONS_KEY, dump_catalog([]))
            return []

    async def get_all_apps(self) -> list[Application]:
        if self._cached_url == self._url:
            return list(self._apps)

        try:
            apps = await self._fetch_catalog(self._url)
        except DirectoryError as exc:
            self._log.warning(
                "directory_refresh_failed",
                url=self._url,
                code=exc.code,
                message=exc.message,
            )
            return list(self._apps)
        except Exception:
            # Any other fetcher failure is still a refresh failure
            self._log.warning(
                "directory_refresh_failed",
                url=self._url,
                code=ErrorCode.FETCH_FAILED,
                exc_info=True,
            )
            return list(self._apps)

        # No await between these writes: catalog and URL change together
        self._apps = apps
        self._cached_url = self._url
        self._store.set(APPLICATIONS_KEY, dump_catalog(apps))
        self._store.set(URL_KEY, self._url)
        self._log.info("directory_refreshed", url=self._url, app_count=len(apps))
        return list(apps)

    async def _fetch_catalog(self, url: str) -> list[Application]:
        response = await self._fetcher.fetch(url)
        if not response.ok:
            raise DirectoryError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Catalog source {url} returned an unsuccessful response",
                recoverable=True,
            )
        return await response.json()

    async def get_app_by_name(self, name: str) -> Application | None:
        return find_app_by_name(await self.get_all_apps(), name)

    async def get_apps_by_intent(self, intent_name: str) -> list[Application]:
        return find_apps_by_intent(await self.get_all_apps(), intent_name)

    async def get_app_intents_by_context(self, context: str) -> list[AppIntentGroup]:
        return group_intents_by_context(await self.get_all_apps(), context)
