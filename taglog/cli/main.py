"""Command-line interface for taglog."""

import logging
import sys
from pathlib import Path

import click

from taglog import __version__
from taglog.changelog import ChangelogBuilder, ChangelogError
from taglog.config import ConfigLoader, ConfigurationError
from taglog.git import GitRepository, RepositoryError

from .output import print_changelog, write_changelog

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging on stderr.

    Args:
        verbose: Enable verbose (DEBUG) logging

    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _flag(value: bool) -> bool | None:
    # Unset boolean flags must not override the config file or environment
    return True if value else None


@click.group()
@click.version_option(version=__version__, prog_name="taglog")
def cli() -> None:
    """taglog - Generate a changelog from git tags.

    Releases are ordered by semantic version and commits are grouped by
    their conventional-commit type.
    """
    pass


@cli.command()
@click.option(
    "--repo",
    "-r",
    type=click.Path(file_okay=False, path_type=Path),
    help="Path to git repository (default: current directory).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the changelog to a file instead of stdout.",
)
@click.option("--unreleased", "-u", is_flag=True, help="Only generate unreleased changes.")
@click.option(
    "--tag",
    "-t",
    help="Version or label for unreleased changes (default: unreleased).",
)
@click.option("--inc-major", is_flag=True, help="Label unreleased changes as the next major version.")
@click.option("--inc-minor", is_flag=True, help="Label unreleased changes as the next minor version.")
@click.option("--inc-patch", is_flag=True, help="Label unreleased changes as the next patch version.")
@click.option(
    "--style",
    type=click.Choice(["auto", "plain"]),
    help="Terminal rendering: auto styles markdown on a terminal, plain never does.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: ~/.taglog.yaml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
def generate(
    repo: Path | None,
    output: Path | None,
    unreleased: bool,
    tag: str | None,
    inc_major: bool,
    inc_minor: bool,
    inc_patch: bool,
    style: str | None,
    config_file: Path | None,
    verbose: bool,
) -> None:
    """Generate the changelog.

    Examples:

        taglog generate

        taglog generate --repo ../project --output CHANGELOG.md

        taglog generate --unreleased --inc-minor
    """
    setup_logging(verbose)

    try:
        loader = ConfigLoader(config_file=config_file)
        options = loader.load(
            {
                "repo": repo,
                "output": output,
                "unreleased": _flag(unreleased),
                "tag": tag,
                "inc_major": _flag(inc_major),
                "inc_minor": _flag(inc_minor),
                "inc_patch": _flag(inc_patch),
                "style": style,
            }
        )
        config_path = loader.config_path()
        if config_path is not None:
            click.echo(f"Using config file: {config_path}", err=True)
        logger.debug(f"Repository path is set to {options.repo}")
        repository = GitRepository(options.repo)
        text = ChangelogBuilder(repository, options.engine_config()).build().render()
    except (ConfigurationError, RepositoryError, ChangelogError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if options.output is not None:
        try:
            write_changelog(text, options.output)
        except OSError as e:
            click.echo(f"Error: Cannot write to file: {e}", err=True)
            sys.exit(1)
        return

    print_changelog(text, style=options.style)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
