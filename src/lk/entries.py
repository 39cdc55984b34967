"""Entry snapshots, visibility filtering, and directory reading."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .errors import DirectoryUnreadable, PathNotFoundError
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .pattern import has_wildcard, matches

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .options import FilterConfig

logger = get_logger(__name__)

SPECIAL_NAMES = frozenset({".", ".."})


@dataclass(frozen=True, slots=True)
class Entry:
    """Snapshot of one filesystem object, captured once during enumeration."""

    name: str
    is_dir: bool = False
    is_link: bool = False
    size: int = 0
    modified_ns: int = 0
    created_ns: int = 0
    mode: int = 0
    attributes: int = 0
    is_hidden: bool = False

    @property
    def extension(self) -> str | None:
        """Text after the last ``.`` in the name, or ``None`` without a dot."""
        _, dot, ext = self.name.rpartition(".")
        return ext if dot else None


def _created_ns(st: os.stat_result) -> int:
    birth = getattr(st, "st_birthtime_ns", None)
    if birth is not None:
        return birth
    birth_s = getattr(st, "st_birthtime", None)
    if birth_s is not None:
        return int(birth_s * 1_000_000_000)
    return st.st_ctime_ns


def _is_hidden(name: str, attributes: int) -> bool:
    return name.startswith(".") or bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)


def entry_from_stat(name: str, st: os.stat_result, *, is_dir: bool) -> Entry:
    """Build an :class:`Entry` from an ``lstat`` result.

    ``is_dir`` is passed separately because a link to a directory reports
    itself as a directory while its ``lstat`` describes the link.
    """
    attributes = getattr(st, "st_file_attributes", 0)
    is_link = stat.S_ISLNK(st.st_mode) or bool(attributes & stat.FILE_ATTRIBUTE_REPARSE_POINT)
    return Entry(
        name=name,
        is_dir=is_dir,
        is_link=is_link,
        size=0 if is_dir else st.st_size,
        modified_ns=st.st_mtime_ns,
        created_ns=_created_ns(st),
        mode=st.st_mode,
        attributes=attributes,
        is_hidden=_is_hidden(name, attributes),
    )


class EntrySource(Protocol):
    """Capability for enumerating raw directory entries.

    ``entries`` returns a lazy, finite, one-shot iterator and raises
    ``OSError`` if the directory cannot be opened or read.
    """

    def entries(self, directory: Path) -> Iterator[Entry]: ...

    def stat(self, path: Path) -> Entry: ...


class ScandirEntrySource:
    """Entry source backed by :func:`os.scandir`."""

    def entries(self, directory: Path) -> Iterator[Entry]:
        with os.scandir(directory) as it:
            for dir_entry in it:
                try:
                    st = dir_entry.stat(follow_symlinks=False)
                    is_dir = dir_entry.is_dir()
                except OSError as err:
                    # Vanished between readdir and stat; nothing to show.
                    log_event(
                        logger,
                        StructuredLogEvent(
                            name="reader.entry_vanished",
                            message="entry disappeared during enumeration",
                            context={"path": Path(dir_entry.path), "reason": err.strerror or str(err)},
                        ),
                    )
                    continue
                yield entry_from_stat(dir_entry.name, st, is_dir=is_dir)

    def stat(self, path: Path) -> Entry:
        st = path.lstat()
        name = path.name or str(path)
        return entry_from_stat(name, st, is_dir=path.is_dir())


def is_visible(entry: Entry, filter_config: FilterConfig) -> bool:
    """Return ``True`` if ``entry`` passes the hidden-file and name filters."""
    if entry.is_hidden and not filter_config.show_hidden:
        return False
    pattern = filter_config.name_pattern
    return not pattern or matches(pattern, entry.name)


def split_path_spec(path_spec: Path) -> tuple[Path, str | None]:
    """Split a path spec into the directory to enumerate and a name pattern.

    Only the final component may carry wildcards; ``src/*.py`` becomes
    ``(src, "*.py")`` and a plain path is returned unchanged with no pattern.
    """
    name = path_spec.name
    if name and has_wildcard(name):
        return path_spec.parent, name
    return path_spec, None


def _reason(err: OSError) -> str:
    return err.strerror or err.__class__.__name__


@dataclass(slots=True)
class DirectoryReader:
    """Read the visible entries of one directory (no ordering guarantee)."""

    source: EntrySource

    def read(self, path_spec: Path, filter_config: FilterConfig) -> list[Entry]:
        """Read a directory, or the parent of a wildcard spec such as ``src/*.py``."""
        directory, spec_pattern = split_path_spec(path_spec)
        return self.read_directory(directory, filter_config, spec_pattern=spec_pattern)

    def read_directory(
        self,
        directory: Path,
        filter_config: FilterConfig,
        *,
        spec_pattern: str | None = None,
    ) -> list[Entry]:
        """Read ``directory`` as-is; wildcard characters in its name are literal."""
        entries: list[Entry] = []
        try:
            for entry in self.source.entries(directory):
                if entry.name in SPECIAL_NAMES:
                    continue
                if spec_pattern is not None and not matches(spec_pattern, entry.name):
                    continue
                if not is_visible(entry, filter_config):
                    continue
                entries.append(entry)
        except OSError as err:
            raise DirectoryUnreadable(directory, _reason(err)) from err
        return entries

    def read_self(self, path: Path) -> Entry:
        """Return the entry describing ``path`` itself."""
        try:
            return self.source.stat(path)
        except OSError as err:
            msg = f"cannot access {path}: {_reason(err)}"
            raise PathNotFoundError(msg) from err


__all__ = [
    "DirectoryReader",
    "Entry",
    "EntrySource",
    "ScandirEntrySource",
    "entry_from_stat",
    "is_visible",
    "split_path_spec",
]
