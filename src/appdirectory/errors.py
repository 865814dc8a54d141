"""Error types for the application directory.

Only ``DirectoryError`` is raised by code in this package. The directory
absorbs every failure coming from the fetcher, so callers of the query API
only ever see a catalog (possibly empty or stale) or ``None`` from a name
lookup.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    CORRUPT_CACHE = "CORRUPT_CACHE"
    FETCH_FAILED = "FETCH_FAILED"
    INVALID_CATALOG = "INVALID_CATALOG"


class DirectoryError(Exception):
    def __init__(self, code: ErrorCode, message: str, recoverable: bool) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable
