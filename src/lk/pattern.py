"""Wildcard matching for entry names.

Supports ``*`` (any run of characters, including none) and ``?`` (exactly one
character). Every other character matches case-insensitively.

An empty pattern matches only the empty name. Callers that treat an empty
filter as "show everything" must check for that before calling
:func:`matches`.
"""

from __future__ import annotations

from .constants import WILDCARD_CHARS

STAR = "*"
ANY = "?"


def _same(pattern_char: str, name_char: str) -> bool:
    return pattern_char == ANY or pattern_char.lower() == name_char.lower()


def matches(pattern: str, name: str) -> bool:
    """Return ``True`` if ``name`` matches the wildcard ``pattern``.

    Greedy scan with a single backtrack point: on a mismatch after a ``*``,
    the star absorbs one more character of ``name`` and matching resumes just
    after the star. Runs in O(len(pattern) * len(name)).
    """
    p_len = len(pattern)
    n_len = len(name)
    p = n = 0
    resume = -1  # pattern index just past the most recent star
    anchor = 0  # name index the most recent star is currently absorbing up to

    while n < n_len:
        if p < p_len and pattern[p] == STAR:
            while p < p_len and pattern[p] == STAR:
                p += 1
            if p == p_len:
                return True
            resume = p
            anchor = n
            continue
        if p < p_len and _same(pattern[p], name[n]):
            p += 1
            n += 1
            continue
        if resume < 0:
            return False
        anchor += 1
        n = anchor
        p = resume

    while p < p_len and pattern[p] == STAR:
        p += 1
    return p == p_len


def has_wildcard(text: str) -> bool:
    """Return ``True`` if ``text`` contains a wildcard character."""
    return any(ch in WILDCARD_CHARS for ch in text)


__all__ = ["has_wildcard", "matches"]
