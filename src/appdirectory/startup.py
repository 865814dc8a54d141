"""Startup sequencing.

Services are built by hand in dependency order, each receiving the instances
it needs through its constructor:

    http client → store → fetcher → directory

Services with asynchronous setup contribute an awaitable "ready" signal; all
of them are awaited together before the state is handed out.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog

from appdirectory.config import Settings
from appdirectory.directory import AppDirectory
from appdirectory.fetcher import Fetcher, build_http_client
from appdirectory.logging_config import setup_logging
from appdirectory.state import AppState
from appdirectory.store import SqliteStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

log = structlog.get_logger()


def _resolve_db_path(db_path: str) -> str:
    if db_path == ":memory:":
        return db_path
    path = Path(db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return str(path)


@asynccontextmanager
async def open_app_state(settings: Settings | None = None) -> AsyncIterator[AppState]:
    """Build every service, wait until all are ready, and tear them down on exit."""
    settings = settings or Settings()
    setup_logging(settings.logging)
    db_path = _resolve_db_path(settings.store.db_path)

    async with aiosqlite.connect(db_path) as db, build_http_client(settings.fetcher) as client:
        store = SqliteStore(db)
        # Every service with async setup contributes its ready signal here
        ready = [store.init_db()]
        await asyncio.gather(*ready)

        fetcher = Fetcher(client)
        directory = AppDirectory(store, fetcher, settings.directory.url)
        log.info(
            "startup_complete",
            url=directory.url,
            cache_fresh=directory.cached_url == directory.url,
        )

        try:
            yield AppState(
                settings=settings,
                directory=directory,
                http_client=client,
                store=store,
                fetcher=fetcher,
            )
        finally:
            await store.aclose()
