"""Generic utility helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def lookup_owner(path: Path) -> str | None:
    """Return the owning account name for ``path``, or ``None`` if unknown."""
    try:
        return path.owner()
    except (KeyError, OSError, NotImplementedError):
        return None


def display_path(path: Path) -> str:
    """Path text as the user typed it; ``.`` for the empty path."""
    text = str(path)
    return text or "."
