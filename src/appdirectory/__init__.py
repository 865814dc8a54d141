"""Application directory: a cached catalog of applications and their intents."""

from __future__ import annotations

from appdirectory.directory import AppDirectory
from appdirectory.errors import DirectoryError, ErrorCode
from appdirectory.models import AppIntent, AppIntentGroup, Application, IntentMetadata

__all__ = [
    "AppDirectory",
    "Application",
    "AppIntent",
    "AppIntentGroup",
    "IntentMetadata",
    "DirectoryError",
    "ErrorCode",
]
