from __future__ import annotations

import pytest

try:  # import at module level; skip the whole module if unavailable
    from hypothesis import given
    from hypothesis import strategies as st
except ImportError:  # pragma: no cover - tooling availability
    pytest.skip("hypothesis not available", allow_module_level=True)

from lk.constants import SortKey
from lk.entries import Entry
from lk.options import SortConfig
from lk.ordering import casefold_compare, compare_entries, natural_compare, sort_entries
from tests.support import dir_entry, file_entry

pytestmark = pytest.mark.small

NAMES = st.text(alphabet="abAB019._-", max_size=8)

ENTRIES = st.builds(
    Entry,
    name=NAMES,
    is_dir=st.booleans(),
    size=st.integers(min_value=0, max_value=10_000),
    modified_ns=st.integers(min_value=0, max_value=10**12),
)

CONFIGS = st.builds(
    SortConfig,
    group_directories_first=st.booleans(),
    sort_key=st.sampled_from(list(SortKey)),
    natural=st.booleans(),
    reverse=st.booleans(),
)


def names(entries: list[Entry]) -> list[str]:
    return [e.name for e in entries]


# ----- natural comparator -----


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("file2", "file10", -1),
        ("a10", "a2", 1),
        ("File", "file", 0),
        ("abc", "abcd", -1),
        ("abcd", "abc", 1),
        ("", "", 0),
        ("", "a", -1),
        ("img007", "img7", 0),
        ("x9y", "x10a", -1),
        ("99999999999999999999999", "100000000000000000000000", -1),
    ],
)
def test_natural_compare_cases(a: str, b: str, expected: int) -> None:
    assert natural_compare(a, b) == expected


@given(NAMES)
def test_natural_compare_is_reflexive(x: str) -> None:
    assert natural_compare(x, x) == 0


@given(NAMES, NAMES)
def test_natural_compare_is_antisymmetric(a: str, b: str) -> None:
    assert natural_compare(a, b) == -natural_compare(b, a)


def test_casefold_compare_ignores_case() -> None:
    assert casefold_compare("README", "readme") == 0
    assert casefold_compare("a", "B") == -1


# ----- entry comparator -----


def test_end_to_end_group_directories_then_names() -> None:
    entries = [file_entry("b.txt", 10), file_entry("a.txt", 20), dir_entry("sub")]
    sort_entries(entries, SortConfig(group_directories_first=True, sort_key=SortKey.NAME))
    assert names(entries) == ["sub", "a.txt", "b.txt"]


def test_natural_name_order() -> None:
    entries = [file_entry("file10"), file_entry("file2"), file_entry("file1")]
    sort_entries(entries, SortConfig(natural=True))
    assert names(entries) == ["file1", "file2", "file10"]
    sort_entries(entries, SortConfig(natural=False))
    assert names(entries) == ["file1", "file10", "file2"]


def test_time_sort_with_name_tie_break() -> None:
    entries = [file_entry("c", mtime=5), file_entry("b", mtime=1), file_entry("a", mtime=5)]
    sort_entries(entries, SortConfig(sort_key=SortKey.TIME))
    assert names(entries) == ["b", "a", "c"]


def test_size_sort_treats_directories_as_equal() -> None:
    entries = [file_entry("big", 500), dir_entry("zdir"), dir_entry("adir"), file_entry("small", 5)]
    sort_entries(entries, SortConfig(sort_key=SortKey.SIZE))
    assert names(entries) == ["adir", "zdir", "small", "big"]


def test_extension_sort_puts_extensionless_last() -> None:
    entries = [
        file_entry("Makefile"),
        file_entry("b.py"),
        file_entry("a.TXT"),
        file_entry("LICENSE"),
        file_entry("c.md"),
    ]
    sort_entries(entries, SortConfig(sort_key=SortKey.EXTENSION))
    assert names(entries) == ["c.md", "b.py", "a.TXT", "LICENSE", "Makefile"]


def test_reverse_does_not_flip_directory_grouping() -> None:
    entries = [file_entry("a"), dir_entry("b"), file_entry("c"), dir_entry("d")]
    sort_entries(entries, SortConfig(group_directories_first=True, reverse=True))
    assert names(entries) == ["d", "b", "c", "a"]


def test_case_only_differences_are_ordered_deterministically() -> None:
    first = [file_entry("readme"), file_entry("README")]
    second = [file_entry("README"), file_entry("readme")]
    config = SortConfig()
    assert names(sort_entries(first, config)) == names(sort_entries(second, config))


def test_compare_entries_reverse_negates_name_decision() -> None:
    a, b = file_entry("a"), file_entry("b")
    assert compare_entries(a, b, SortConfig()) == -1
    assert compare_entries(a, b, SortConfig(reverse=True)) == 1


@given(st.lists(ENTRIES, max_size=12), CONFIGS)
def test_sorting_is_idempotent(entries: list[Entry], config: SortConfig) -> None:
    once = sort_entries(list(entries), config)
    twice = sort_entries(list(once), config)
    assert once == twice


@given(st.lists(ENTRIES, max_size=12, unique_by=lambda e: e.name), CONFIGS)
def test_sorting_is_independent_of_input_order(entries: list[Entry], config: SortConfig) -> None:
    forward = sort_entries(list(entries), config)
    backward = sort_entries(list(reversed(entries)), config)
    assert forward == backward


@given(st.lists(ENTRIES, max_size=12, unique_by=lambda e: e.name), CONFIGS)
def test_reverse_yields_exact_reverse_without_grouping(entries: list[Entry], config: SortConfig) -> None:
    plain = SortConfig(sort_key=config.sort_key, natural=config.natural)
    flipped = SortConfig(sort_key=config.sort_key, natural=config.natural, reverse=True)
    assert sort_entries(list(entries), flipped) == list(reversed(sort_entries(list(entries), plain)))


@given(st.lists(ENTRIES, max_size=12), CONFIGS)
def test_grouping_never_puts_a_file_before_a_directory(entries: list[Entry], config: SortConfig) -> None:
    grouped = SortConfig(
        group_directories_first=True,
        sort_key=config.sort_key,
        natural=config.natural,
        reverse=config.reverse,
    )
    flags = [e.is_dir for e in sort_entries(list(entries), grouped)]
    assert flags == sorted(flags, reverse=True)
