"""CLI command reporting the installed lk version."""

from __future__ import annotations

import click

from lk import __version__


@click.command()
def version() -> None:
    """Print version and exit."""
    print(__version__)
