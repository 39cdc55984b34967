"""Natural string ordering and the multi-key entry comparator."""

from __future__ import annotations

from functools import cmp_to_key
from typing import TYPE_CHECKING

from .constants import SortKey

if TYPE_CHECKING:
    from .entries import Entry
    from .options import SortConfig


def _sign(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _digit_run_end(text: str, start: int) -> int:
    end = start
    while end < len(text) and _is_digit(text[end]):
        end += 1
    return end


def natural_compare(a: str, b: str) -> int:
    """Compare strings case-insensitively with digit runs compared by value.

    ``"file2"`` sorts before ``"file10"``. Digit runs are parsed as Python
    integers, so there is no overflow limit on their length.
    """
    i = j = 0
    while i < len(a) and j < len(b):
        if _is_digit(a[i]) and _is_digit(b[j]):
            end_a = _digit_run_end(a, i)
            end_b = _digit_run_end(b, j)
            cmp = _sign(int(a[i:end_a]), int(b[j:end_b]))
            if cmp:
                return cmp
            i, j = end_a, end_b
            continue
        cmp = _sign(a[i].lower(), b[j].lower())
        if cmp:
            return cmp
        i += 1
        j += 1
    return _sign(len(a) - i, len(b) - j)


def casefold_compare(a: str, b: str) -> int:
    """Plain case-insensitive comparison."""
    return _sign(a.lower(), b.lower())


def _compare_extensions(a: Entry, b: Entry) -> int:
    ext_a, ext_b = a.extension, b.extension
    if ext_a is None and ext_b is None:
        return 0
    # Names with an extension come before names without one.
    if ext_a is None:
        return 1
    if ext_b is None:
        return -1
    return casefold_compare(ext_a, ext_b)


def _compare_names(a: Entry, b: Entry, *, natural: bool) -> int:
    cmp = natural_compare(a.name, b.name) if natural else casefold_compare(a.name, b.name)
    # Exact name keeps the order total when names differ only in case or zero padding.
    return cmp or _sign(a.name, b.name)


def _compare_keys(a: Entry, b: Entry, config: SortConfig) -> int:
    cmp = 0
    if config.sort_key is SortKey.TIME:
        cmp = _sign(a.modified_ns, b.modified_ns)
    elif config.sort_key is SortKey.SIZE:
        cmp = _sign(a.size, b.size)
    elif config.sort_key is SortKey.EXTENSION:
        cmp = _compare_extensions(a, b)
    return cmp or _compare_names(a, b, natural=config.natural)


def compare_entries(a: Entry, b: Entry, config: SortConfig) -> int:
    """Total order over entries for ``config``.

    Directory grouping is decided first and is never affected by ``reverse``;
    ``reverse`` flips only the decision of the remaining keys.
    """
    if config.group_directories_first and a.is_dir != b.is_dir:
        return -1 if a.is_dir else 1
    cmp = _compare_keys(a, b, config)
    return -cmp if config.reverse else cmp


def sort_entries(entries: list[Entry], config: SortConfig) -> list[Entry]:
    """Sort ``entries`` in place and return the same list."""
    entries.sort(key=cmp_to_key(lambda a, b: compare_entries(a, b, config)))
    return entries


__all__ = ["casefold_compare", "compare_entries", "natural_compare", "sort_entries"]
