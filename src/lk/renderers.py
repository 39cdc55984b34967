"""Renderers for flat listings, tree events, and summaries.

Presentation is kept apart from collection: the traversals hand over sorted
entries and tree events, and everything here only formats and paints them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.text import Text

from .constants import TypeTag
from .formatter import (
    format_attributes,
    format_size,
    format_timestamp,
    is_executable,
    summary_line,
    type_indicator,
)
from .options import RenderOptions
from .traversal import TreeEventKind, indent_for
from .utils import display_path, lookup_owner

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from rich.console import Console

    from .entries import Entry
    from .summary import Summary
    from .traversal import DirectoryListing, TreeEvent

STYLE_DIRECTORY = "bold cyan"
STYLE_LINK = "bold magenta"
STYLE_EXECUTABLE = "bold green"
STYLE_HEADER = "bold"
STYLE_INDEX = "dim"

UNKNOWN_OWNER = "Unknown"
DIR_SIZE_LABEL = "<DIR>"
ROW_MARGIN = "    "

ATTR_WIDTH = 6
SIZE_WIDTH = 12
TIME_WIDTH = 20
OWNER_WIDTH = 20


def entry_style(entry: Entry) -> str:
    if entry.is_link:
        return STYLE_LINK
    if entry.is_dir:
        return STYLE_DIRECTORY
    if is_executable(entry):
        return STYLE_EXECUTABLE
    return ""


_TAG_STYLES = {
    TypeTag.DIRECTORY: STYLE_DIRECTORY,
    TypeTag.LINK: STYLE_LINK,
    TypeTag.FILE: "",
}


@dataclass(slots=True)
class ListingRenderer:
    """Turn listings and tree events into console lines."""

    console: Console
    options: RenderOptions = field(default_factory=RenderOptions)
    owner_lookup: Callable[[Path], str | None] = lookup_owner

    # ----- flat listings -----
    def column_header(self) -> list[str]:
        opts = self.options
        cols = [f"{'Attr':<{ATTR_WIDTH}}", f"{'Size':>{SIZE_WIDTH}}"]
        if opts.show_created:
            cols.append(f"{'Created':>{TIME_WIDTH}}")
        cols.append(f"{'Modified':>{TIME_WIDTH}}")
        if opts.show_owner:
            cols.append(f"{'Owner':<{OWNER_WIDTH}}")
        cols.append("Name")
        header = " ".join(cols)
        return [f"{ROW_MARGIN}{header}", f"{ROW_MARGIN}{'-' * len(header)}"]

    def _long_columns(self, directory: Path, entry: Entry) -> str:
        opts = self.options
        size = DIR_SIZE_LABEL if entry.is_dir else format_size(entry.size, human=opts.human_sizes)
        cols = [f"{format_attributes(entry):<{ATTR_WIDTH}}", f"{size:>{SIZE_WIDTH}}"]
        if opts.show_created:
            cols.append(f"{format_timestamp(entry.created_ns):>{TIME_WIDTH}}")
        cols.append(f"{format_timestamp(entry.modified_ns):>{TIME_WIDTH}}")
        if opts.show_owner:
            owner = self.owner_lookup(directory / entry.name) or UNKNOWN_OWNER
            cols.append(f"{owner:<{OWNER_WIDTH}}")
        return " ".join(cols) + " "

    def entry_row(self, directory: Path, index: int, entry: Entry) -> Text:
        """One numbered row, e.g. ``  1. notes.txt``."""
        opts = self.options
        row = Text(f"{index:3d}. ", style=STYLE_INDEX)
        if opts.long_format:
            row.append(self._long_columns(directory, entry))
        row.append(entry.name, style=entry_style(entry))
        if opts.type_indicator:
            row.append(type_indicator(entry))
        if opts.full_path:
            row.append(f" ({display_path(directory / entry.name)})")
        return row

    def render_listing(self, listing: DirectoryListing, *, directory: Path | None = None) -> None:
        """Print the header, rows, and summary of one directory level.

        ``directory`` is where the entries live when ``listing.path`` is a
        wildcard spec.
        """
        base = listing.path if directory is None else directory
        self.console.print()
        self.console.print(Text(f"[{display_path(listing.path)}]:", style=STYLE_HEADER))
        if self.options.long_format:
            for line in self.column_header():
                self.console.print(Text(line))
        for idx, entry in enumerate(listing.entries, start=1):
            self.console.print(self.entry_row(base, idx, entry))
        if listing.summary is not None:
            self.render_summary(listing.summary)

    def render_self(self, path: Path, entry: Entry) -> None:
        """Listing of a single path (``-d``) under its own header."""
        self.console.print()
        self.console.print(Text(f"[{display_path(path)}]:", style=STYLE_HEADER))
        if self.options.long_format:
            for line in self.column_header():
                self.console.print(Text(line))
        self.console.print(self.entry_row(path.parent, 1, entry))

    def render_summary(self, summary: Summary, *, label: str = "Summary") -> None:
        self.console.print()
        self.console.print(Text(summary_line(summary, human=self.options.human_sizes, label=label)))

    # ----- tree -----
    def tree_line(self, event: TreeEvent) -> Text:
        indent = indent_for(event.depth)
        if event.kind is TreeEventKind.DESCEND:
            return Text(f"{indent}|")
        tag = event.tag or TypeTag.FILE
        line = Text(f"{indent}|- [{tag.value}] ")
        line.append(event.name, style=_TAG_STYLES[tag])
        return line

    def render_tree_event(self, event: TreeEvent) -> None:
        self.console.print(self.tree_line(event))

    # ----- multi-root -----
    def render_root_header(self, path: Path) -> None:
        self.console.print(Text(f"==> {display_path(path)} <==", style=STYLE_HEADER))

    def render_separator(self) -> None:
        self.console.print()


__all__ = ["ListingRenderer", "entry_style"]
