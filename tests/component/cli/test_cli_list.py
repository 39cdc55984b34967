from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from lk.cli import cli, main
from lk.config import TOML_CONFIG

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.medium


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = tmp_path / "proj"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.py").write_text("print('a')\n", encoding="utf-8")
    (root / "b.txt").write_text("bbbbbbbbbb", encoding="utf-8")
    (root / ".hidden").write_text("", encoding="utf-8")
    (root / "sub" / "c.md").write_text("# c\n", encoding="utf-8")
    (root / "sub" / "deeper" / "d.txt").write_text("d", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return root


def _rows(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()[:1].isdigit()]


def test_plain_listing_hides_dotfiles(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", str(project)])
    assert res.exit_code == 0
    assert f"[{project}]:" in res.stdout
    assert _rows(res.stdout) == ["1. a.py", "2. b.txt", "3. sub"]


def test_show_hidden_and_group_directories(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", "-a", "-G", str(project)])
    assert res.exit_code == 0
    assert _rows(res.stdout) == ["1. sub", "2. .hidden", "3. a.py", "4. b.txt"]


def test_sort_by_size_reversed(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", "-S", "-r", str(project)])
    assert res.exit_code == 0
    assert _rows(res.stdout) == ["1. a.py", "2. b.txt", "3. sub"]


def test_wildcard_path_and_filter(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", str(project / "*.py")])
    assert _rows(res.stdout) == ["1. a.py"]
    res = CliRunner().invoke(cli, ["list", "--filter", "*.TXT", str(project)])
    assert _rows(res.stdout) == ["1. b.txt"]


def test_recursive_with_summary(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", "-R", "-M", str(project)])
    assert res.exit_code == 0
    headers = [line for line in res.stdout.splitlines() if line.startswith("[")]
    assert headers == [f"[{project}]:", f"[{project / 'sub'}]:", f"[{project / 'sub' / 'deeper'}]:"]
    assert "Summary: 1 directories, 2 files, total size: 21" in res.stdout
    assert "Total: 2 directories, 4 files, total size: 26" in res.stdout


def test_max_depth_limits_recursion(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", "-R", "--max-depth", "1", str(project)])
    assert f"[{project / 'sub'}]:" in res.stdout
    assert "deeper]:" not in res.stdout


def test_tree_view(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", "-T", "-R", str(project)])
    assert res.exit_code == 0
    assert res.stdout.splitlines() == [
        "|- [F] a.py",
        "|- [F] b.txt",
        "|- [D] sub",
        "|",
        "  |- [F] c.md",
        "  |- [D] deeper",
        "  |",
        "    |- [F] d.txt",
    ]


def test_long_format_with_indicator(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", "-l", "-F", str(project)])
    assert res.exit_code == 0
    assert "Attr" in res.stdout
    assert "Modified" in res.stdout
    sub_row = next(line for line in res.stdout.splitlines() if line.rstrip().endswith("sub/"))
    assert "<DIR>" in sub_row


def test_list_self(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", "-d", str(project)])
    assert _rows(res.stdout) == ["1. proj"]


def test_multiple_roots(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", str(project), str(project / "sub")])
    assert f"==> {project} <==" in res.stdout
    assert f"==> {project / 'sub'} <==" in res.stdout


def test_missing_path_is_partial_failure(project: Path) -> None:
    res = CliRunner().invoke(cli, ["list", str(project / "nope"), str(project / "sub")])
    assert res.exit_code == 1
    assert "lk: cannot access" in res.output
    assert "c.md" in res.stdout


def test_output_file_gets_plain_text(project: Path, tmp_path: Path) -> None:
    target = tmp_path / "listing.txt"
    res = CliRunner().invoke(cli, ["list", "--color", "never", "--output", str(target), str(project)])
    assert res.exit_code == 0
    text = target.read_text(encoding="utf-8")
    assert "1. a.py" in text
    assert "\x1b[" not in text


def test_color_always_emits_ansi(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERM", "xterm-256color")
    res = CliRunner().invoke(cli, ["list", "--color", "always", str(project)])
    assert "\x1b[" in res.stdout


def test_project_config_enables_options(project: Path, tmp_path: Path) -> None:
    (tmp_path / TOML_CONFIG).write_text("show_hidden = true\n", encoding="utf-8")
    res = CliRunner().invoke(cli, ["list", str(project)])
    assert "1. .hidden" in _rows(res.stdout)


def test_default_command_lists_current_directory(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(project)
    res = CliRunner().invoke(cli, [])
    assert res.exit_code == 0
    assert _rows(res.stdout) == ["1. a.py", "2. b.txt", "3. sub"]


def test_bundled_verbose_flag_reaches_list(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["-vR", str(project)])
    out = capsys.readouterr().out
    assert f"[{project / 'sub'}]:" in out
