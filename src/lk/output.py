"""Console construction for listing output."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, TextIO

from rich.console import Console

from .constants import ColorMode
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .tty import resolve_color_mode

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = get_logger(__name__)


def build_console(*, color: ColorMode, file: TextIO | None = None) -> Console:
    """Return a rich console writing to ``file`` (stdout when ``None``)."""
    resolved = resolve_color_mode(color, to_file=file is not None)
    if resolved is ColorMode.ALWAYS:
        return Console(file=file, force_terminal=True, highlight=False, soft_wrap=True)
    return Console(file=file, color_system=None, force_terminal=False, highlight=False, soft_wrap=True)


def build_error_console() -> Console:
    return Console(stderr=True, highlight=False, soft_wrap=True)


@contextlib.contextmanager
def open_console(*, color: ColorMode, output: Path | None = None) -> Iterator[Console]:
    """Yield a console for stdout, or for ``output`` opened for writing."""
    if output is None:
        yield build_console(color=color)
        return
    log_event(
        logger,
        StructuredLogEvent(name="output.file", message="writing listing to file", context={"path": output}),
    )
    with output.open("w", encoding="utf-8") as fh:
        yield build_console(color=color, file=fh)
