"""Output formatting helpers."""

from __future__ import annotations

import stat
from datetime import datetime
from typing import TYPE_CHECKING

from .constants import EXECUTABLE_EXTENSIONS

if TYPE_CHECKING:
    from .entries import Entry
    from .summary import Summary

SIZE_SUFFIXES = ("B", "K", "M", "G", "T", "P")
SIZE_STEP = 1024
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NS_PER_SECOND = 1_000_000_000


def format_size(size: int, *, human: bool = False) -> str:
    """Return ``size`` as plain bytes, or like ``1.5K`` when ``human``."""
    if not human:
        return str(size)
    value = float(size)
    idx = 0
    while value >= SIZE_STEP and idx < len(SIZE_SUFFIXES) - 1:
        value /= SIZE_STEP
        idx += 1
    return f"{value:.1f}{SIZE_SUFFIXES[idx]}"


def format_timestamp(ns: int) -> str:
    """Local time for a nanosecond timestamp."""
    return datetime.fromtimestamp(ns / NS_PER_SECOND).strftime(TIMESTAMP_FORMAT)  # noqa: DTZ006


def is_executable(entry: Entry) -> bool:
    if entry.is_dir:
        return False
    dot = entry.name.rfind(".")
    if dot >= 0 and entry.name[dot:].lower() in EXECUTABLE_EXTENSIONS:
        return True
    return bool(entry.mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def format_attributes(entry: Entry) -> str:
    """Five-character attribute column, e.g. ``d-H--`` or ``-R--A``."""
    kind = "l" if entry.is_link else "d" if entry.is_dir else "-"
    readonly = bool(entry.attributes & stat.FILE_ATTRIBUTE_READONLY) or (
        entry.mode != 0 and not entry.mode & stat.S_IWUSR
    )
    return "".join((
        kind,
        "R" if readonly else "-",
        "H" if entry.is_hidden else "-",
        "S" if entry.attributes & stat.FILE_ATTRIBUTE_SYSTEM else "-",
        "A" if entry.attributes & stat.FILE_ATTRIBUTE_ARCHIVE else "-",
    ))


def type_indicator(entry: Entry) -> str:
    """Suffix appended by ``-F``: ``@`` link, ``/`` directory, ``*`` executable."""
    if entry.is_link:
        return "@"
    if entry.is_dir:
        return "/"
    if is_executable(entry):
        return "*"
    return ""


def summary_line(summary: Summary, *, human: bool = False, label: str = "Summary") -> str:
    size = format_size(summary.total_bytes, human=human)
    return f"{label}: {summary.directory_count} directories, {summary.file_count} files, total size: {size}"
