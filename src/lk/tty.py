"""Helpers for TTY detection and output decisions."""

from __future__ import annotations

import sys

from .constants import ColorMode


def stdout_is_tty() -> bool:
    """Return True if stdout is a TTY. Isolated for testability."""
    try:
        return sys.stdout.isatty()
    except AttributeError:
        # stdout replaced with an object lacking isatty(); treat as non-TTY
        return False


def resolve_color_mode(requested: ColorMode, *, to_file: bool = False) -> ColorMode:
    """Resolve 'auto' to a concrete mode based on the destination."""
    if requested is ColorMode.AUTO:
        return ColorMode.ALWAYS if not to_file and stdout_is_tty() else ColorMode.NEVER
    return requested
