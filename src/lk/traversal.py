"""Flat and tree traversals over the directory reader and entry comparator.

Both traversals are generators driven by an explicit worklist, so callers
render each level as it arrives and may stop iterating between levels.
Links are listed but never descended into, and depth is clamped to
:data:`~lk.constants.MAX_DEPTH_CEILING`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from time import perf_counter
from typing import TYPE_CHECKING

from .constants import INDENT_WIDTH, MAX_DEPTH_CEILING, TypeTag
from .entries import split_path_spec
from .errors import DirectoryUnreadable
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .ordering import sort_entries
from .summary import Summary, aggregate

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from .entries import DirectoryReader, Entry
    from .options import FilterConfig, SortConfig, TraversalConfig

logger = get_logger(__name__)

type ErrorHandler = Callable[[DirectoryUnreadable], None]


@dataclass(frozen=True, slots=True)
class DirectoryListing:
    """One visited directory: its sorted entries and optional summary."""

    path: Path
    entries: list[Entry]
    summary: Summary | None
    depth: int = 0


class TreeEventKind(StrEnum):
    ENTRY = "entry"
    DESCEND = "descend"


@dataclass(frozen=True, slots=True)
class TreeEvent:
    """A line of tree output.

    ``ENTRY`` events carry a type tag. A ``DESCEND`` event at ``depth`` marks
    that the children of ``name`` follow at ``depth + 1``.
    """

    depth: int
    kind: TreeEventKind
    name: str
    path: Path
    tag: TypeTag | None = None


@dataclass(slots=True)
class TraversalStats:
    levels: int = 0
    entries: int = 0
    errors: int = 0


def type_tag(entry: Entry) -> TypeTag:
    if entry.is_link:
        return TypeTag.LINK
    if entry.is_dir:
        return TypeTag.DIRECTORY
    return TypeTag.FILE


def indent_for(depth: int) -> str:
    """Indentation for a tree line at ``depth``."""
    return " " * (INDENT_WIDTH * max(0, min(depth, MAX_DEPTH_CEILING)))


@dataclass(slots=True)
class Traversal:
    """Read, sort, and walk directories for one set of configuration values."""

    reader: DirectoryReader
    filter_config: FilterConfig
    sort_config: SortConfig
    traversal_config: TraversalConfig
    on_error: ErrorHandler | None = None
    stats: TraversalStats = field(default_factory=TraversalStats)

    # ----- shared steps -----
    def _report(self, err: DirectoryUnreadable) -> None:
        self.stats.errors += 1
        log_event(
            logger,
            StructuredLogEvent(
                name="traversal.unreadable",
                message=f"skipping unreadable directory {err.path}",
                level=logging.WARNING if self.on_error is None else logging.DEBUG,
                context={"path": err.path, "reason": err.reason},
            ),
        )
        if self.on_error is not None:
            self.on_error(err)

    def _read_sorted(self, path: Path, *, root: bool) -> list[Entry] | None:
        try:
            if root:
                entries = self.reader.read(path, self.filter_config)
            else:
                entries = self.reader.read_directory(path, self.filter_config)
        except DirectoryUnreadable as err:
            self._report(err)
            return None
        self.stats.levels += 1
        self.stats.entries += len(entries)
        return sort_entries(entries, self.sort_config)

    def _descend_targets(self, directory: Path, entries: list[Entry], depth: int) -> list[Path]:
        """Child directories to visit next, in sorted order."""
        candidates = [e for e in entries if e.is_dir]
        if not candidates:
            return []
        if depth + 1 > self.traversal_config.depth_limit:
            log_event(
                logger,
                StructuredLogEvent(
                    name="traversal.depth_limit",
                    message="not descending past depth limit",
                    level=logging.DEBUG,
                    context={"path": directory, "depth": depth, "limit": self.traversal_config.depth_limit},
                ),
            )
            return []
        targets: list[Path] = []
        for entry in candidates:
            if entry.is_link:
                log_event(
                    logger,
                    StructuredLogEvent(
                        name="traversal.link_skipped",
                        message="not following link",
                        level=logging.DEBUG,
                        context={"path": directory / entry.name},
                    ),
                )
                continue
            targets.append(directory / entry.name)
        return targets

    def _log_start(self, root: Path, mode: str) -> float:
        log_event(
            logger,
            StructuredLogEvent(
                name="traversal.start",
                message="starting traversal",
                level=logging.DEBUG,
                context={
                    "root": root,
                    "mode": mode,
                    "recursive": self.traversal_config.recursive,
                    "depth_limit": self.traversal_config.depth_limit,
                },
            ),
        )
        return perf_counter()

    def _log_complete(self, root: Path, start: float) -> None:
        log_event(
            logger,
            StructuredLogEvent(
                name="traversal.complete",
                message="completed traversal",
                level=logging.DEBUG,
                context={
                    "root": root,
                    "duration_seconds": perf_counter() - start,
                    "levels": self.stats.levels,
                    "entries": self.stats.entries,
                    "errors": self.stats.errors,
                },
            ),
        )

    # ----- strategies -----
    def listings(self, root: Path) -> Iterator[DirectoryListing]:
        """Yield one :class:`DirectoryListing` per directory, pre-order."""
        start = self._log_start(root, "flat")
        config = self.traversal_config
        descend = config.recursive and not config.tree
        directory, _ = split_path_spec(root)

        pending: list[tuple[Path, int]] = [(root, 0)]
        while pending:
            path, depth = pending.pop()
            entries = self._read_sorted(path, root=depth == 0)
            if entries is None:
                continue
            summary = aggregate(entries) if config.summarize else None
            base = directory if depth == 0 else path
            children = self._descend_targets(base, entries, depth) if descend else []
            yield DirectoryListing(path=path, entries=entries, summary=summary, depth=depth)
            pending.extend((child, depth + 1) for child in reversed(children))

        self._log_complete(root, start)

    def tree(self, root: Path) -> Iterator[TreeEvent]:
        """Yield tree events: each level's entries, then each subtree in turn."""
        start = self._log_start(root, "tree")
        directory, _ = split_path_spec(root)

        pending: list[tuple[Path, int]] = [(root, 0)]
        while pending:
            path, depth = pending.pop()
            if depth > 0:
                yield TreeEvent(depth=depth - 1, kind=TreeEventKind.DESCEND, name=path.name, path=path)
            entries = self._read_sorted(path, root=depth == 0)
            if entries is None:
                continue
            base = directory if depth == 0 else path
            for entry in entries:
                yield TreeEvent(
                    depth=depth,
                    kind=TreeEventKind.ENTRY,
                    name=entry.name,
                    path=base / entry.name,
                    tag=type_tag(entry),
                )
            if self.traversal_config.recursive:
                children = self._descend_targets(base, entries, depth)
                pending.extend((child, depth + 1) for child in reversed(children))

        self._log_complete(root, start)


def iter_listing(
    root: Path,
    *,
    reader: DirectoryReader,
    filter_config: FilterConfig,
    sort_config: SortConfig,
    traversal_config: TraversalConfig,
    on_error: ErrorHandler | None = None,
) -> Iterator[DirectoryListing]:
    """Flat (optionally recursive) listing of ``root``."""
    traversal = Traversal(reader, filter_config, sort_config, traversal_config, on_error)
    return traversal.listings(root)


def iter_tree(
    root: Path,
    *,
    reader: DirectoryReader,
    filter_config: FilterConfig,
    sort_config: SortConfig,
    traversal_config: TraversalConfig,
    on_error: ErrorHandler | None = None,
) -> Iterator[TreeEvent]:
    """Indented tree of ``root``."""
    traversal = Traversal(reader, filter_config, sort_config, traversal_config, on_error)
    return traversal.tree(root)


__all__ = [
    "DirectoryListing",
    "Traversal",
    "TraversalStats",
    "TreeEvent",
    "TreeEventKind",
    "indent_for",
    "iter_listing",
    "iter_tree",
    "type_tag",
]
