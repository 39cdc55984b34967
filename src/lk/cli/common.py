"""Shared CLI helpers used by multiple subcommands."""

from __future__ import annotations

import contextlib
import os
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.text import Text

from lk.constants import EXIT_INTERRUPT, EXIT_USAGE
from lk.errors import ListingInterrupted
from lk.output import build_error_console, open_console
from lk.renderers import ListingRenderer
from lk.services import ListingExecutor, RunReport

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from lk.errors import ListingError
    from lk.options import ListingOptions


@dataclass(frozen=True, slots=True)
class ListParams:
    show_hidden: bool
    long_format: bool
    recursive: bool
    sort_size: bool
    sort_time: bool
    sort_extension: bool
    reverse: bool
    human_sizes: bool
    type_indicator: bool
    list_self: bool
    group_dirs: bool
    show_created: bool
    tree: bool
    natural: bool
    full_path: bool
    show_owner: bool
    summary: bool
    name_pattern: str | None
    max_depth: int | None
    color: str | None
    output: Path | None
    config_path: Path | None
    ignore_defaults: bool
    paths: tuple[Path, ...]

    @property
    def sort(self) -> str | None:
        """Requested sort key; time wins over size, size over extension."""
        if self.sort_time:
            return "time"
        if self.sort_size:
            return "size"
        if self.sort_extension:
            return "extension"
        return None


def exit_on_broken_pipe() -> None:
    """Silence the downstream-closed pipe and exit cleanly."""
    # Point stdout at devnull so the interpreter's final flush cannot fail again.
    with contextlib.suppress(OSError, ValueError, AttributeError):
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    raise SystemExit(0)


def print_interrupt_diagnostics(interrupted: ListingInterrupted) -> None:
    print("\nInterrupted by user.", file=sys.stderr)
    print(f"levels listed: {interrupted.levels_listed}", file=sys.stderr)
    print(f"unreadable paths: {interrupted.errors}", file=sys.stderr)
    raise SystemExit(EXIT_INTERRUPT)


def _error_printer() -> Callable[[ListingError], None]:
    console = build_error_console()

    def report(err: ListingError) -> None:
        console.print(Text(f"lk: {err}", style="red"))

    return report


def _execute_with_handling(*, params: ListParams, options: ListingOptions) -> RunReport:
    paths = list(params.paths)
    try:
        with open_console(color=options.render.color, output=params.output) as console:
            executor = ListingExecutor(
                renderer=ListingRenderer(console=console, options=options.render),
                on_error=_error_printer(),
            )
            return executor.execute(paths, options)
    except ValueError as e:
        print(e, file=sys.stderr)
        raise SystemExit(EXIT_USAGE) from e
    except BrokenPipeError:
        raise
    except OSError as e:
        if params.output is None:
            raise
        print(f"lk: cannot write {params.output}: {e.strerror or e}", file=sys.stderr)
        raise SystemExit(EXIT_USAGE) from e
    except ListingInterrupted as li:
        print_interrupt_diagnostics(li)
        raise
