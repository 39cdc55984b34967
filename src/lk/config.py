"""Utilities for loading and writing configuration files."""

from __future__ import annotations

import importlib.resources
import os
import tomllib
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from lk.errors import ConfigLoadError
from lk.logging_utils import StructuredLogEvent, get_logger, log_event

# Configuration filenames
TOML_CONFIG = ".lk.toml"
ENV_CONFIG_PATH = "LK_CONFIG_PATH"

logger = get_logger(__name__)


def load_default_config_text() -> str:
    """Return the bundled default configuration text.

    This preserves formatting and comments so that `lk init` writes a
    readable file.
    """
    try:
        cfg_path = importlib.resources.files("lk.resources").joinpath("default_config.toml")
        with cfg_path.open("r", encoding="utf-8") as f:  # type: ignore[attr-defined]
            return f.read()
    except OSError as err:  # pragma: no cover - exercised via CLI
        msg = f"Error loading default configuration: {err}"
        raise ConfigLoadError(msg) from err


def load_default_config() -> dict[str, Any]:
    """Return the bundled default configuration as a Python dict."""
    return tomllib.loads(load_default_config_text())


def write_default_config(target_dir: Path) -> Path:
    """Write the bundled default configuration into ``target_dir``."""
    text = load_default_config_text()
    toml_path = target_dir / TOML_CONFIG
    toml_path.write_text(text, encoding="utf-8")
    return toml_path


def _load_with_extends(path: Path, *, _visited: set[Path] | None = None) -> dict[str, Any]:
    """Load a TOML file supporting an optional 'extends' key for inheritance.

    Later files override earlier ones. Relative paths in 'extends' are resolved
    relative to the parent of ``path``.
    """
    if _visited is None:
        _visited = set()
    real = path.resolve()
    if real in _visited:
        # Cycle; the file already contributed its values.
        return {}
    _visited.add(real)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Error reading {path}: {e.strerror or e}"
        raise ConfigLoadError(msg) from e
    try:
        data = tomlkit.loads(raw).unwrap()
    except TOMLKitError as e:
        msg = f"Error parsing {path.name}: {e}"
        raise ConfigLoadError(msg) from e

    base_cfg: dict[str, Any] = {}
    ext = data.get("extends")
    if isinstance(ext, str):
        ext_list = [ext]
    elif isinstance(ext, list):
        ext_list = [e for e in ext if isinstance(e, str)]
    else:
        ext_list = []
    for entry in ext_list:
        ext_path = Path(entry).expanduser()
        if not ext_path.is_absolute():
            ext_path = (path.parent / ext_path).resolve()
        if ext_path.exists():
            base_cfg |= _load_with_extends(ext_path, _visited=_visited)

    # Current file overrides extended values
    base_cfg |= {k: v for k, v in data.items() if k != "extends"}
    return base_cfg


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file (supports 'extends')."""
    return _load_with_extends(path)


def _xdg_config_path() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    xdg_dir = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return xdg_dir / "lk" / "config.toml"


def read_config(
    *,
    base_path: Path,
    ignore_default: bool = False,
    explicit_config: Path | None = None,
) -> dict[str, Any]:
    """Read configuration merging multiple sources with clear precedence.

    Precedence (low to high):
      1. bundled defaults (unless ``ignore_default``)
      2. XDG config: $XDG_CONFIG_HOME/lk/config.toml (or ~/.config/lk/config.toml)
      3. project file in ``base_path``: .lk.toml
      4. $LK_CONFIG_PATH (if set)
      5. ``explicit_config`` (from --config)
    Later sources override earlier ones.
    """
    cfg: dict[str, Any] = {} if ignore_default else load_default_config()
    sources: list[Path] = []

    for p in (_xdg_config_path(), base_path / TOML_CONFIG):
        if p.exists():
            cfg |= load_toml_config(p)
            sources.append(p)

    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        p = Path(env_path)
        if p.exists():
            cfg |= load_toml_config(p)
            sources.append(p)

    if explicit_config:
        if not explicit_config.exists():
            msg = f"Explicit config file not found: {explicit_config}"
            raise ConfigLoadError(msg)
        cfg |= load_toml_config(explicit_config)
        sources.append(explicit_config)

    log_event(
        logger,
        StructuredLogEvent(
            name="config.loaded",
            message="configuration loaded",
            context={"sources": sources, "defaults": not ignore_default},
        ),
    )
    return cfg


def apply_runtime_flags(cfg: dict[str, Any], *, enabled: dict[str, bool], values: dict[str, Any]) -> dict[str, Any]:
    """Overlay CLI flags on the loaded config.

    ``enabled`` holds boolean switches; a flag can only turn an option on.
    ``values`` holds explicit option values; ``None`` means "not given".
    """
    cfg = dict(cfg)
    for key, flag in enabled.items():
        if flag:
            cfg[key] = True
    for key, value in values.items():
        if value is not None:
            cfg[key] = value
    return cfg
