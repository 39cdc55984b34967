"""Per-level counts and sizes for listed entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .entries import Entry


@dataclass(frozen=True, slots=True)
class Summary:
    directory_count: int = 0
    file_count: int = 0
    total_bytes: int = 0

    def merge(self, other: Summary) -> Summary:
        """Combine two summaries; used by callers that total several levels."""
        return Summary(
            directory_count=self.directory_count + other.directory_count,
            file_count=self.file_count + other.file_count,
            total_bytes=self.total_bytes + other.total_bytes,
        )


def aggregate(entries: Iterable[Entry]) -> Summary:
    """Count directories and files and sum file sizes in one pass."""
    dirs = files = total = 0
    for entry in entries:
        if entry.is_dir:
            dirs += 1
        else:
            files += 1
            total += entry.size
    return Summary(directory_count=dirs, file_count=files, total_bytes=total)


__all__ = ["Summary", "aggregate"]
