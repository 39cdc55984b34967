from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lk.config import ENV_CONFIG_PATH

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's own lk configuration out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv(ENV_CONFIG_PATH, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
