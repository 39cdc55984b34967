from __future__ import annotations

from pathlib import Path

import pytest

from lk.cli import common
from lk.cli.common import ListParams, print_interrupt_diagnostics
from lk.constants import EXIT_INTERRUPT
from lk.errors import DirectoryUnreadable, ListingInterrupted

pytestmark = pytest.mark.small


def _params(**overrides: object) -> ListParams:
    values: dict[str, object] = dict.fromkeys(
        (
            "show_hidden",
            "long_format",
            "recursive",
            "sort_size",
            "sort_time",
            "sort_extension",
            "reverse",
            "human_sizes",
            "type_indicator",
            "list_self",
            "group_dirs",
            "show_created",
            "tree",
            "natural",
            "full_path",
            "show_owner",
            "summary",
            "ignore_defaults",
        ),
        False,
    )
    values |= dict.fromkeys(("name_pattern", "max_depth", "color", "output", "config_path"))
    values["paths"] = (Path(),)
    values |= overrides
    return ListParams(**values)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        ({}, None),
        ({"sort_extension": True}, "extension"),
        ({"sort_size": True, "sort_extension": True}, "size"),
        ({"sort_time": True, "sort_size": True}, "time"),
    ],
)
def test_sort_flag_precedence(flags: dict[str, bool], expected: str | None) -> None:
    assert _params(**flags).sort == expected


def test_interrupt_diagnostics_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        print_interrupt_diagnostics(ListingInterrupted(levels_listed=4, errors=1))
    assert excinfo.value.code == EXIT_INTERRUPT
    err = capsys.readouterr().err
    assert "levels listed: 4" in err
    assert "unreadable paths: 1" in err


def test_error_printer_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    report = common._error_printer()
    report(DirectoryUnreadable(Path("locked"), "Permission denied"))
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "lk: cannot open directory locked: Permission denied" in captured.err


class _FakeStdout:
    def fileno(self) -> int:
        return 1


def test_exit_on_broken_pipe_redirects_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[int, int]] = []
    monkeypatch.setattr(common.os, "dup2", lambda src, dst: calls.append((src, dst)))
    monkeypatch.setattr(common.sys, "stdout", _FakeStdout())
    with pytest.raises(SystemExit) as excinfo:
        common.exit_on_broken_pipe()
    assert excinfo.value.code == 0
    assert calls
    assert calls[0][1] == 1
