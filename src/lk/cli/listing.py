"""CLI command implementation for the ``lk list`` workflow."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from lk.config import apply_runtime_flags, read_config
from lk.constants import (
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
    EXIT_CONFIG,
    ColorMode,
)
from lk.errors import ConfigLoadError
from lk.options import build_options

from .common import (
    ListParams,
    _execute_with_handling,
    exit_on_broken_pipe,
)


def _flag_config(params: ListParams) -> dict[str, bool]:
    return {
        CONFIG_SHOW_HIDDEN: params.show_hidden,
        CONFIG_LONG_FORMAT: params.long_format,
        CONFIG_RECURSIVE: params.recursive,
        CONFIG_REVERSE: params.reverse,
        CONFIG_HUMAN_SIZES: params.human_sizes,
        CONFIG_TYPE_INDICATOR: params.type_indicator,
        CONFIG_LIST_SELF: params.list_self,
        CONFIG_GROUP_DIRS: params.group_dirs,
        CONFIG_SHOW_CREATED: params.show_created,
        CONFIG_TREE: params.tree,
        CONFIG_NATURAL: params.natural,
        CONFIG_FULL_PATH: params.full_path,
        CONFIG_SHOW_OWNER: params.show_owner,
        CONFIG_SUMMARY: params.summary,
    }


def _value_config(params: ListParams) -> dict[str, object]:
    return {
        CONFIG_SORT: params.sort,
        CONFIG_FILTER: params.name_pattern,
        CONFIG_MAX_DEPTH: params.max_depth,
        CONFIG_COLOR: params.color,
    }


@click.command(name="list", context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-a", "show_hidden", is_flag=True, help="Show hidden files")
@click.option("-l", "long_format", is_flag=True, help="Use long listing format (attributes, size, dates)")
@click.option("-R", "recursive", is_flag=True, help="Recursively list subdirectories")
@click.option("-S", "sort_size", is_flag=True, help="Sort by file size")
@click.option("-t", "sort_time", is_flag=True, help="Sort by modification time")
@click.option("-X", "sort_extension", is_flag=True, help="Sort by file extension")
@click.option("-r", "reverse", is_flag=True, help="Reverse sort order")
@click.option("-H", "human_sizes", is_flag=True, help="Use human-readable file sizes")
@click.option("-F", "type_indicator", is_flag=True, help="Append file type indicator (/ @ *)")
@click.option("-d", "list_self", is_flag=True, help="List the path itself, not its contents")
@click.option("-G", "group_dirs", is_flag=True, help="Group directories first")
@click.option("-E", "show_created", is_flag=True, help="Show file creation time (long format)")
@click.option("-T", "tree", is_flag=True, help="Tree view of directory structure")
@click.option("-N", "natural", is_flag=True, help="Natural sorting (numbers compared by value)")
@click.option("-P", "full_path", is_flag=True, help="Show full file path")
@click.option("-O", "show_owner", is_flag=True, help="Display file owner in long listing")
@click.option("-M", "summary", is_flag=True, help="Show summary (directories, files, total size)")
@click.option("--filter", "name_pattern", metavar="PATTERN", help="Only show names matching a * / ? wildcard")
@click.option("--max-depth", type=click.IntRange(min=0), help="Stop descending below this depth (at most 31)")
@click.option(
    "--color",
    type=click.Choice([c.value for c in ColorMode], case_sensitive=False),
    help="Colorize output (default: auto)",
)
@click.option("--output", type=click.Path(path_type=Path, dir_okay=False), help="Write the listing to a file")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Explicit config file path")
@click.option("--ignore-defaults", is_flag=True, help="Ignore bundled default settings")
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
def list_command(**kwargs: object) -> None:
    """List directory contents based on CLI flags, config, and paths."""
    raw_paths = kwargs.pop("paths")
    params = ListParams(**kwargs, paths=tuple(raw_paths) or (Path(),))  # type: ignore[arg-type]

    try:
        cfg = read_config(
            base_path=Path(),
            ignore_default=params.ignore_defaults,
            explicit_config=params.config_path,
        )
        cfg = apply_runtime_flags(cfg, enabled=_flag_config(params), values=_value_config(params))
        options = build_options(cfg)
    except ConfigLoadError as err:
        print(err, file=sys.stderr)
        raise SystemExit(EXIT_CONFIG) from err

    try:
        report = _execute_with_handling(params=params, options=options)
    except BrokenPipeError:
        exit_on_broken_pipe()
        return

    if report.exit_code:
        raise SystemExit(report.exit_code)
