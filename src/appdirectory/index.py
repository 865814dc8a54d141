"""Intent indexes derived from a catalog.

Nothing here is persisted. The directory rebuilds what it needs on every
query from the catalog returned by ``get_all_apps()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from appdirectory.models.application import AppIntentGroup, IntentMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from appdirectory.models.application import Application


@dataclass
class IntentIndex:
    """Intent name → declaring applications, built in a single pass.

    Applications keep catalog order within each entry and appear once per
    intent even when they declare the same intent more than once.
    """

    by_intent: dict[str, list[Application]] = field(default_factory=dict)


def build_intent_index(apps: Iterable[Application]) -> IntentIndex:
    index = IntentIndex()
    for app in apps:
        for intent_name in dict.fromkeys(intent.name for intent in app.intents):
            index.by_intent.setdefault(intent_name, []).append(app)
    return index


def find_app_by_name(apps: Iterable[Application], name: str) -> Application | None:
    return next((app for app in apps if app.name == name), None)


def find_apps_by_intent(apps: Iterable[Application], intent_name: str) -> list[Application]:
    return build_intent_index(apps).by_intent.get(intent_name, [])


def group_intents_by_context(
    apps: Sequence[Application], context: str
) -> list[AppIntentGroup]:
    """Group applications under each intent that accepts ``context``.

    One group per distinct intent name, sorted by intent name.
    """
    groups: dict[str, list[Application]] = {}
    for app in apps:
        matching = dict.fromkeys(
            intent.name for intent in app.intents if context in intent.contexts
        )
        for intent_name in matching:
            groups.setdefault(intent_name, []).append(app)

    return [
        AppIntentGroup(
            # No separate display name in the catalog schema
            intent=IntentMetadata(name=name, display_name=name),
            apps=group,
        )
        for name, group in sorted(groups.items())
    ]
