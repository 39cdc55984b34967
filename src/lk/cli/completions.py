"""CLI command that prints the shell completion script for lk."""

from __future__ import annotations

import click
from click.shell_completion import get_completion_class

PROG_NAME = "lk"
COMPLETE_VAR = "_LK_COMPLETE"
SHELLS = ("bash", "fish", "zsh")


@click.command()
@click.option(
    "--shell",
    type=click.Choice(SHELLS, case_sensitive=False),
    required=True,
    help="Target shell to generate completion script for",
)
@click.pass_context
def completions(ctx: click.Context, shell: str) -> None:
    """Print the completion script for the given shell.

    The script completes subcommands, every list flag, and paths, by
    calling back into ``lk`` with $_LK_COMPLETE set.
    """
    comp_cls = get_completion_class(shell.lower())
    if comp_cls is None:  # pragma: no cover - guarded by the Choice above
        msg = f"unsupported shell: {shell}"
        raise click.UsageError(msg)
    comp = comp_cls(ctx.find_root().command, {}, PROG_NAME, COMPLETE_VAR)
    click.echo(comp.source())
