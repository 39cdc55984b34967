"""Application services that glue together traversal and rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .constants import EXIT_OK, EXIT_PARTIAL
from .entries import DirectoryReader, ScandirEntrySource, split_path_spec
from .errors import (
    ERROR_MSG_EMPTY_PATHS,
    DirectoryUnreadable,
    ListingError,
    ListingInterrupted,
    PathNotFoundError,
)
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .ordering import sort_entries
from .pattern import has_wildcard
from .summary import Summary
from .traversal import Traversal

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from .entries import Entry
    from .options import ListingOptions
    from .renderers import ListingRenderer

logger = get_logger(__name__)


def _default_reader() -> DirectoryReader:
    return DirectoryReader(ScandirEntrySource())


@dataclass(frozen=True, slots=True)
class RunReport:
    roots: int
    levels: int
    errors: int
    total: Summary | None = None

    @property
    def exit_code(self) -> int:
        return EXIT_PARTIAL if self.errors else EXIT_OK


@dataclass(slots=True)
class _Progress:
    levels: int = 0
    errors: int = 0
    summarized_levels: int = 0
    total: Summary = field(default_factory=Summary)


@dataclass(slots=True)
class ListingExecutor:
    """Run the configured traversal for each root and hand results to the renderer."""

    renderer: ListingRenderer
    reader: DirectoryReader = field(default_factory=_default_reader)
    on_error: Callable[[ListingError], None] | None = None

    def _report(self, progress: _Progress, err: ListingError) -> None:
        progress.errors += 1
        if self.on_error is not None:
            self.on_error(err)

    def _run_tree(self, traversal: Traversal, root: Path) -> None:
        for event in traversal.tree(root):
            self.renderer.render_tree_event(event)

    def _run_flat(self, traversal: Traversal, root: Path, progress: _Progress) -> None:
        directory, _ = split_path_spec(root)
        for listing in traversal.listings(root):
            self.renderer.render_listing(listing, directory=directory if listing.depth == 0 else None)
            if listing.summary is not None:
                progress.summarized_levels += 1
                progress.total = progress.total.merge(listing.summary)

    def _resolve_self(self, root: Path, options: ListingOptions) -> Entry:
        """Entry for ``root`` itself; a wildcard spec resolves to its first match in listing order."""
        if not has_wildcard(root.name):
            return self.reader.read_self(root)
        try:
            matched = self.reader.read(root, options.filter)
        except DirectoryUnreadable as err:
            msg = f"cannot access {root}: {err.reason}"
            raise PathNotFoundError(msg) from err
        if not matched:
            msg = f"cannot access {root}: no matching entries"
            raise PathNotFoundError(msg)
        return sort_entries(matched, options.sort)[0]

    def _run_root(self, root: Path, options: ListingOptions, progress: _Progress) -> None:
        if options.list_self or not has_wildcard(root.name):
            try:
                entry = self._resolve_self(root, options)
            except PathNotFoundError as err:
                self._report(progress, err)
                return
            if options.list_self or not entry.is_dir:
                self.renderer.render_self(root, entry)
                progress.levels += 1
                return

        traversal = Traversal(
            reader=self.reader,
            filter_config=options.filter,
            sort_config=options.sort,
            traversal_config=options.traversal,
            on_error=self.on_error,
        )
        try:
            if options.traversal.tree:
                self._run_tree(traversal, root)
            else:
                self._run_flat(traversal, root, progress)
        finally:
            progress.levels += traversal.stats.levels
            progress.errors += traversal.stats.errors

    def execute(self, paths: Sequence[Path], options: ListingOptions) -> RunReport:
        """List every path in order; unreadable paths are reported and skipped."""
        if not paths:
            raise ValueError(ERROR_MSG_EMPTY_PATHS)

        progress = _Progress()
        multiple = len(paths) > 1
        log_event(
            logger,
            StructuredLogEvent(
                name="executor.start",
                message="listing paths",
                context={"paths": list(paths), "tree": options.traversal.tree, "sort": options.sort.sort_key},
            ),
        )
        try:
            for idx, root in enumerate(paths):
                if multiple:
                    self.renderer.render_root_header(root)
                self._run_root(root, options, progress)
                if idx < len(paths) - 1:
                    self.renderer.render_separator()
        except KeyboardInterrupt as _:
            log_event(
                logger,
                StructuredLogEvent(
                    name="listing.interrupted",
                    message="listing interrupted by user",
                    level=logging.WARNING,
                    context={"levels": progress.levels, "errors": progress.errors},
                ),
            )
            raise ListingInterrupted(progress.levels, progress.errors) from _

        total: Summary | None = None
        if progress.summarized_levels:
            total = progress.total
            if progress.summarized_levels > 1:
                self.renderer.render_summary(total, label="Total")

        return RunReport(roots=len(paths), levels=progress.levels, errors=progress.errors, total=total)


__all__ = ["ListingExecutor", "RunReport"]
