"""Immutable configuration values threaded through every engine call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import (
    CONFIG_COLOR,
    CONFIG_FILTER,
    CONFIG_FULL_PATH,
    CONFIG_GROUP_DIRS,
    CONFIG_HUMAN_SIZES,
    CONFIG_LIST_SELF,
    CONFIG_LONG_FORMAT,
    CONFIG_MAX_DEPTH,
    CONFIG_NATURAL,
    CONFIG_RECURSIVE,
    CONFIG_REVERSE,
    CONFIG_SHOW_CREATED,
    CONFIG_SHOW_HIDDEN,
    CONFIG_SHOW_OWNER,
    CONFIG_SORT,
    CONFIG_SUMMARY,
    CONFIG_TREE,
    CONFIG_TYPE_INDICATOR,
    MAX_DEPTH_CEILING,
    ColorMode,
    SortKey,
)
from .errors import ConfigLoadError


@dataclass(frozen=True, slots=True)
class SortConfig:
    group_directories_first: bool = False
    sort_key: SortKey = SortKey.NAME
    natural: bool = False
    reverse: bool = False


@dataclass(frozen=True, slots=True)
class FilterConfig:
    show_hidden: bool = False
    name_pattern: str = ""


@dataclass(frozen=True, slots=True)
class TraversalConfig:
    recursive: bool = False
    tree: bool = False
    summarize: bool = False
    max_depth: int = MAX_DEPTH_CEILING

    @property
    def depth_limit(self) -> int:
        """Configured depth clamped to the engine ceiling."""
        return max(0, min(self.max_depth, MAX_DEPTH_CEILING))


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Presentation-only switches consumed by the renderer."""

    long_format: bool = False
    human_sizes: bool = False
    type_indicator: bool = False
    full_path: bool = False
    show_owner: bool = False
    show_created: bool = False
    color: ColorMode = ColorMode.AUTO


@dataclass(frozen=True, slots=True)
class ListingOptions:
    """Everything one ``lk`` run needs, built once from config and flags."""

    sort: SortConfig = field(default_factory=SortConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    render: RenderOptions = field(default_factory=RenderOptions)
    list_self: bool = False


def _bool(cfg: dict[str, Any], key: str) -> bool:
    value = cfg.get(key, False)
    if not isinstance(value, bool):
        msg = f"Config value '{key}' must be true or false, got {value!r}"
        raise ConfigLoadError(msg)
    return value


def _choice[E: (SortKey, ColorMode)](cfg: dict[str, Any], key: str, enum: type[E], default: E) -> E:
    value = cfg.get(key, default.value)
    try:
        return enum(str(value).lower())
    except ValueError as err:
        allowed = ", ".join(m.value for m in enum)
        msg = f"Config value '{key}' must be one of: {allowed}; got {value!r}"
        raise ConfigLoadError(msg) from err


def _max_depth(cfg: dict[str, Any]) -> int:
    value = cfg.get(CONFIG_MAX_DEPTH, MAX_DEPTH_CEILING)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = f"Config value '{CONFIG_MAX_DEPTH}' must be a non-negative integer, got {value!r}"
        raise ConfigLoadError(msg)
    return value


def build_options(cfg: dict[str, Any]) -> ListingOptions:
    """Translate a merged config mapping into :class:`ListingOptions`."""
    pattern = cfg.get(CONFIG_FILTER, "")
    if not isinstance(pattern, str):
        msg = f"Config value '{CONFIG_FILTER}' must be a string, got {pattern!r}"
        raise ConfigLoadError(msg)
    return ListingOptions(
        sort=SortConfig(
            group_directories_first=_bool(cfg, CONFIG_GROUP_DIRS),
            sort_key=_choice(cfg, CONFIG_SORT, SortKey, SortKey.NAME),
            natural=_bool(cfg, CONFIG_NATURAL),
            reverse=_bool(cfg, CONFIG_REVERSE),
        ),
        filter=FilterConfig(
            show_hidden=_bool(cfg, CONFIG_SHOW_HIDDEN),
            name_pattern=pattern,
        ),
        traversal=TraversalConfig(
            recursive=_bool(cfg, CONFIG_RECURSIVE),
            tree=_bool(cfg, CONFIG_TREE),
            summarize=_bool(cfg, CONFIG_SUMMARY),
            max_depth=_max_depth(cfg),
        ),
        render=RenderOptions(
            long_format=_bool(cfg, CONFIG_LONG_FORMAT),
            human_sizes=_bool(cfg, CONFIG_HUMAN_SIZES),
            type_indicator=_bool(cfg, CONFIG_TYPE_INDICATOR),
            full_path=_bool(cfg, CONFIG_FULL_PATH),
            show_owner=_bool(cfg, CONFIG_SHOW_OWNER),
            show_created=_bool(cfg, CONFIG_SHOW_CREATED),
            color=_choice(cfg, CONFIG_COLOR, ColorMode, ColorMode.AUTO),
        ),
        list_self=_bool(cfg, CONFIG_LIST_SELF),
    )
