"""CLI entry point for gitwrap.

This module defines the Click-based command-line interface for gitwrap.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gitwrap import __version__
from gitwrap.cli.commands import branches, diff, log, remotes, status, tags, tree
from gitwrap.cli.context import CLIContext, ExitCode
from gitwrap.cli.output import format_error
from gitwrap.config import load_config
from gitwrap.exceptions import ConfigError
from gitwrap.logging import configure_logging

VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gitwrap")
@click.option(
    "-C",
    "--repo",
    "repo_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Repository to operate on (defaults to the current directory).",
)
@click.option(
    "--bare",
    is_flag=True,
    default=False,
    help="Treat the repository path as a bare repository.",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./gitwrap.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG with git commands).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    repo_path: Path,
    bare: bool,
    config_file: str | None,
    verbose: int,
) -> None:
    """gitwrap - inspect and drive git repositories from Python."""
    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigError as e:
        # Logging is not configured yet
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details), err=True)
        ctx.exit(ExitCode.FAILURE)

    # Priority: -v flags > config verbosity
    if verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)
    configure_logging(level=level)

    ctx.obj = CLIContext(
        config=config,
        repo_path=repo_path,
        bare=bare,
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(log)
cli.add_command(status)
cli.add_command(branches)
cli.add_command(tags)
cli.add_command(remotes)
cli.add_command(diff)
cli.add_command(tree)

if __name__ == "__main__":
    cli()
