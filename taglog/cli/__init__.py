"""CLI module for taglog.

This module provides the command-line interface and changelog output.
"""

from taglog.cli.main import cli, main
from taglog.cli.output import print_changelog, render_width, write_changelog

__all__ = [
    "cli",
    "main",
    "print_changelog",
    "render_width",
    "write_changelog",
]
