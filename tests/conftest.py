"""Shared fixtures: a small two-app catalog and in-memory collaborators."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import httpx
import pytest

from appdirectory.fetcher import FetchResponse
from appdirectory.models.application import AppIntent, Application, dump_catalog


class FakeFetcher:
    """FetcherProtocol stand-in that records every URL it is asked for."""

    def __init__(
        self,
        apps: list[Application] | None = None,
        *,
        status_code: int = 200,
        content: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self.apps = apps or []
        self.status_code = status_code
        self.content = content if content is not None else dump_catalog(self.apps)
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        # Suspend like a real request so overlapping callers interleave
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return FetchResponse(url, httpx.Response(self.status_code, text=self.content))


@pytest.fixture()
def source_url() -> str:
    return "http://localhost:3923/provider/sample-app-directory.json"


@pytest.fixture()
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def app_a() -> Application:
    return Application(
        app_id="1",
        name="App 1",
        manifest="",
        manifest_type="",
        intents=[
            AppIntent(name="testIntent.StartChat", contexts=["testContext.User"]),
            AppIntent(name="testIntent.SendEmail", contexts=["testContext.User"]),
        ],
    )


@pytest.fixture()
def app_b() -> Application:
    return Application(
        app_id="2",
        name="App 2",
        manifest="",
        manifest_type="",
        intents=[
            AppIntent(
                name="testIntent.StartChat",
                contexts=["testContext.User", "testContext.Bot"],
            ),
            AppIntent(name="testIntent.ShowChart", contexts=["testContext.Instrument"]),
        ],
    )


@pytest.fixture()
def sample_apps(app_a: Application, app_b: Application) -> list[Application]:
    return [app_a, app_b]
