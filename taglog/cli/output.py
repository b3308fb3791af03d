"""Changelog output: file writing and terminal rendering."""

import logging
import shutil
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.markdown import Markdown

from taglog.config import DEFAULT_RENDER_WIDTH, MAX_RENDER_WIDTH

logger = logging.getLogger(__name__)


def write_changelog(text: str, path: Path) -> None:
    """Write the changelog to ``path`` as UTF-8."""
    path.write_text(text, encoding="utf-8")
    logger.info(f"Changelog written to {path}")


def render_width(stream: TextIO) -> int:
    """Terminal width capped at MAX_RENDER_WIDTH, or the default when unknown."""
    if not stream.isatty():
        return DEFAULT_RENDER_WIDTH
    columns = shutil.get_terminal_size(fallback=(0, 0)).columns
    if columns <= 0:
        return DEFAULT_RENDER_WIDTH
    return min(columns, MAX_RENDER_WIDTH)


def print_changelog(text: str, style: str = "auto", stream: TextIO | None = None) -> None:
    """Print the changelog, styled with rich when writing to a terminal.

    Args:
        text: Markdown changelog
        style: ``auto`` renders on a terminal, ``plain`` always prints raw markdown
        stream: Output stream (defaults to stdout)

    """
    stream = stream or sys.stdout
    if style == "plain" or not stream.isatty():
        stream.write(text)
        stream.flush()
        return

    console = Console(file=stream, width=render_width(stream))
    console.print(Markdown(text))
