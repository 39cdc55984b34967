"""Custom exception classes and error messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

ERROR_MSG_EMPTY_PATHS = "The list of paths is empty"


class ListingError(Exception):
    """Base class for failures raised by the listing engine."""


class DirectoryUnreadable(ListingError):
    """Raised when a directory cannot be opened or enumerated.

    Recoverable: traversals report it and continue with the next directory.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot open directory {path}: {reason}")
        self.path = path
        self.reason = reason


class PathNotFoundError(ListingError):
    """Raised when a single path cannot be stat'ed."""


class ConfigLoadError(Exception):
    """Raised when a configuration file cannot be loaded."""


class ListingInterrupted(KeyboardInterrupt):
    """Raised when a listing is interrupted; carries partial state."""

    def __init__(self, levels_listed: int, errors: int) -> None:
        super().__init__("Listing interrupted")
        self.levels_listed = levels_listed
        self.errors = errors
