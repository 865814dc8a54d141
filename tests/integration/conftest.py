"""Integration test fixtures.

Settings pointing the store at a temporary database file; HTTP traffic is
mocked with respx in the tests themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from appdirectory.config import Settings

if TYPE_CHECKING:
    from pathlib import Path

SOURCE_URL = "https://directory.example.com/apps.json"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        directory={"url": SOURCE_URL},
        store={"db_path": str(tmp_path / "data" / "store.db")},
        logging={"level": "WARNING", "format": "text"},
    )
