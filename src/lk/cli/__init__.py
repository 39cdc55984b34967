"""CLI exports.

This package exposes `cli` and `main` from `root.py` so that
`python -m lk` and the console entry point share one implementation.
"""

from .common import (
    exit_on_broken_pipe,
    print_interrupt_diagnostics,
)
from .root import cli, main

__all__ = [
    "cli",
    "exit_on_broken_pipe",
    "main",
    "print_interrupt_diagnostics",
]
