"""In-memory entry sources and entry builders shared by tests."""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from lk.entries import Entry

if TYPE_CHECKING:
    from collections.abc import Iterator


def file_entry(name: str, size: int = 0, *, mtime: int = 0, mode: int = stat.S_IFREG | 0o644) -> Entry:
    return Entry(name=name, size=size, modified_ns=mtime, created_ns=mtime, mode=mode, is_hidden=name.startswith("."))


def dir_entry(name: str, *, mtime: int = 0) -> Entry:
    return Entry(
        name=name,
        is_dir=True,
        modified_ns=mtime,
        created_ns=mtime,
        mode=stat.S_IFDIR | 0o755,
        is_hidden=name.startswith("."),
    )


def link_entry(name: str, *, to_dir: bool = True) -> Entry:
    return Entry(name=name, is_dir=to_dir, is_link=True, mode=stat.S_IFLNK | 0o777)


@dataclass(slots=True)
class FakeEntrySource:
    """Entry source over a mapping of POSIX directory paths to entries."""

    tree: dict[str, list[Entry]]
    unreadable: set[str] = field(default_factory=set)
    opened: list[str] = field(default_factory=list)

    def entries(self, directory: Path) -> Iterator[Entry]:
        key = directory.as_posix()
        self.opened.append(key)
        if key in self.unreadable:
            raise PermissionError(13, "Permission denied", key)
        if key not in self.tree:
            raise FileNotFoundError(2, "No such file or directory", key)
        return iter(list(self.tree[key]))

    def stat(self, path: Path) -> Entry:
        key = path.as_posix()
        if key in self.tree or key in self.unreadable:
            return dir_entry(path.name or key)
        for entry in self.tree.get(path.parent.as_posix(), []):
            if entry.name == path.name:
                return entry
        raise FileNotFoundError(2, "No such file or directory", key)
