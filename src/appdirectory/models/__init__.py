from __future__ import annotations

from appdirectory.models.application import (
    AppIntent,
    AppIntentGroup,
    Application,
    CatalogAdapter,
    IntentMetadata,
    dump_catalog,
    parse_catalog,
)

__all__ = [
    # catalog
    "Application",
    "AppIntent",
    "CatalogAdapter",
    "parse_catalog",
    "dump_catalog",
    # queries
    "IntentMetadata",
    "AppIntentGroup",
]
