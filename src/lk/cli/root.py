"""Top-level Click group wiring together all lk commands."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lk import __version__

from .common import exit_on_broken_pipe

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_COMMAND = "list"

# Threshold for -vv to map to DEBUG
VERBOSE_DEBUG_THRESHOLD = 2

CLI_CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}


def _options_table(params: Iterable[click.Parameter], ctx: click.Context, *, skip_help: bool = False) -> Table:
    table = Table(show_header=False, show_edge=False, box=None, pad_edge=False, expand=False)
    table.add_column(style="cyan", no_wrap=True)
    table.add_column(style="default")
    for param in params:
        if not isinstance(param, click.Option):
            continue
        record = param.get_help_record(ctx)
        if not record:
            continue
        opts, help_text = record
        # The group's help flag is already listed under global options.
        if skip_help and opts.lstrip().startswith("-h, --help"):
            continue
        table.add_row(Text(opts), Text(help_text or ""))
    return table


class _DefaultListGroup(click.Group):
    """Click group that falls back to the list command when none is provided."""

    def resolve_command(
        self,
        ctx: click.Context,
        args: list[str],
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if args:
            try:
                return super().resolve_command(ctx, args)
            except click.UsageError:
                pass

        list_cmd = self.get_command(ctx, DEFAULT_COMMAND)
        if list_cmd is None:
            return super().resolve_command(ctx, args)
        # ``args`` already holds every leftover token; ctx may have been re-parsed.
        return DEFAULT_COMMAND, list_cmd, list(args)

    def get_help(self, ctx: click.Context) -> str:  # type: ignore[override]
        """Return rich-formatted help for the root command.

        Layout:
          - Usage lines (global vs command forms)
          - Global options
          - List options (default when no command is specified)
          - Commands list (with list marked as default)
        """
        console = Console(record=True, highlight=False)

        console.print("[bold]Usage:[/bold] lk [GLOBAL OPTIONS] [LIST OPTIONS] [PATHS...]")
        console.print("       lk [GLOBAL OPTIONS] COMMAND [ARGS...]")
        console.print()
        console.print("  lk lists directory contents as flat listings or trees.")
        console.print("  If no COMMAND is given, the default command is: [bold]list[/bold].")
        console.print()

        console.print("[bold]Global Options:[/bold]")
        console.print(_options_table(self.get_params(ctx), ctx))
        console.print()

        list_cmd = self.get_command(ctx, DEFAULT_COMMAND)
        if isinstance(list_cmd, click.Command):
            list_ctx = click.Context(list_cmd, info_name=DEFAULT_COMMAND, parent=ctx)
            console.print("[bold]List options (default when no command is specified):[/bold]")
            console.print(_options_table(list_cmd.get_params(list_ctx), list_ctx, skip_help=True))
            console.print()

        console.print("[bold]Commands:[/bold]")
        cmd_table = Table(show_header=False, show_edge=False, box=None, pad_edge=False, expand=False)
        cmd_table.add_column(style="cyan", no_wrap=True)
        cmd_table.add_column(style="default")
        for name in sorted(self.commands):
            command = self.commands[name]
            help_text = (command.short_help or command.help or "").strip().splitlines()[0:1]
            text = help_text[0] if help_text else ""
            if name == DEFAULT_COMMAND:
                text = f"{text} (default when no COMMAND is given)".strip()
            cmd_table.add_row(Text(name), Text(text))
        console.print(cmd_table)

        return console.export_text()


@click.group(cls=_DefaultListGroup, invoke_without_command=True, context_settings=CLI_CONTEXT_SETTINGS)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (use -vv for debug)")
@click.option(
    "--log-level",
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    help="Set log level explicitly",
)
@click.version_option(__version__, "-V", "--version", message="%(version)s")
@click.pass_context
def cli(ctx: click.Context, verbose: int, log_level: str | None) -> None:
    """List directory contents as flat listings or trees.

    If no COMMAND is given, this behaves like: lk list [PATHS...]
    """
    if log_level:
        level = getattr(logging, log_level.upper())
    elif verbose >= VERBOSE_DEBUG_THRESHOLD:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, force=True)

    # resolve_command already routes unknown leading arguments to ``list``; only
    # a bare ``lk`` (no arguments at all) reaches here without a subcommand.
    if ctx.invoked_subcommand is None and isinstance(ctx.command, click.Group):
        command = ctx.command.get_command(ctx, DEFAULT_COMMAND)
        if command is not None:
            command.main(
                args=list(ctx.args),
                prog_name=f"{ctx.command_path} {DEFAULT_COMMAND}",
                standalone_mode=False,
            )


# Import subcommands and register them
from .completions import completions  # noqa: E402
from .init import init  # noqa: E402
from .listing import list_command  # noqa: E402
from .version import version  # noqa: E402

cli.add_command(list_command)
cli.add_command(version)
cli.add_command(completions)
cli.add_command(init)


def _inject_default_list(
    args: list[str],
    *,
    commands: Iterable[str] | None = None,
) -> list[str]:
    """Insert the ``list`` command when users omit it."""
    normalized = list(args)

    if commands is None:
        return normalized

    command_names = set(commands)

    insert_at: int | None = None
    idx = 0
    while idx < len(normalized):
        current = normalized[idx]

        if current in _HELP_FLAGS or current in command_names:
            return normalized

        if not current.startswith("-"):
            insert_at = idx
            break

        if _is_verbose_flag(current):
            idx += 1
            continue

        bundle = _split_verbose_bundle(current)
        if bundle is not None:
            normalized[idx : idx + 1] = bundle
            insert_at = idx + 1
            break

        skip = _log_level_skip(current)
        if skip:
            idx += skip
            continue

        insert_at = idx
        break

    if insert_at is None:
        insert_at = len(normalized)

    if DEFAULT_COMMAND in command_names:
        normalized.insert(insert_at, DEFAULT_COMMAND)

    return normalized


def main(argv: list[str] | None = None) -> None:
    """Console entry point: executes the Click group with the provided argv."""
    argv = list(sys.argv[1:] if argv is None else argv)
    argv = _inject_default_list(argv, commands=getattr(cli, "commands", None))
    try:
        cli.main(args=argv, prog_name="lk", standalone_mode=False)
    except BrokenPipeError:
        exit_on_broken_pipe()
    except click.ClickException as exc:
        exc.show()
        raise SystemExit(exc.exit_code) from None
    except click.Abort:
        raise SystemExit(1) from None


# Flags handled by the root command itself; encountering them means we should
# not inject the default ``list`` subcommand.
_HELP_FLAGS = {"-h", "--help", "-V", "--version"}
_VERBOSE_FLAGS = {"--verbose"}


def _is_verbose_flag(flag: str) -> bool:
    """Return ``True`` if the token is a root-level verbosity flag."""
    if flag in _VERBOSE_FLAGS:
        return True
    if flag == "-":
        return False
    stripped = flag.lstrip("-")
    return bool(stripped) and set(stripped) == {"v"} and not flag.startswith("--")


def _split_verbose_bundle(flag: str) -> list[str] | None:
    """Split ``-vR`` into the root's ``-v`` and the list command's ``-R``."""
    if flag.startswith("--") or not flag.startswith("-v"):
        return None
    rest = flag[1:].lstrip("v")
    if not rest:
        return None
    return [flag[: len(flag) - len(rest)], f"-{rest}"]


def _log_level_skip(flag: str) -> int:
    """Return how many tokens a log-level flag consumes (1 for inline)."""
    if flag == "--log-level":
        return 2
    if flag.startswith("--log-level="):
        return 1
    return 0
