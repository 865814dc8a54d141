from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class _CatalogModel(BaseModel):
    # Wire format is camelCase (appId, manifestType, customConfig)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AppIntent(_CatalogModel):
    """An intent declared by an application."""

    name: str
    contexts: list[str] = []  # Context type identifiers, treated as a set
    custom_config: dict[str, Any] = Field(default_factory=dict)


class Application(_CatalogModel):
    """Single entry in the application directory."""

    app_id: str
    name: str
    manifest: str
    manifest_type: str
    intents: list[AppIntent] = []


class IntentMetadata(_CatalogModel):
    name: str
    display_name: str


class AppIntentGroup(_CatalogModel):
    """Single result returned by get_app_intents_by_context."""

    intent: IntentMetadata
    apps: list[Application]


CatalogAdapter: TypeAdapter[list[Application]] = TypeAdapter(list[Application])


def parse_catalog(data: str | bytes) -> list[Application]:
    """Decode a JSON-encoded catalog. Raises ``pydantic.ValidationError`` on bad data."""
    return CatalogAdapter.validate_json(data)


def dump_catalog(apps: list[Application]) -> str:
    return CatalogAdapter.dump_json(apps, by_alias=True).decode()
