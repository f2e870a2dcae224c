from __future__ import annotations

import click

from gitwrap.cli.console import console
from gitwrap.cli.context import CLIContext, async_command
from gitwrap.cli.output import format_status_line


@click.command()
@click.pass_obj
@async_command
async def status(cli_ctx: CLIContext) -> None:
    """Show changed and untracked paths in short format."""
    result = await cli_ctx.repository().status()
    if result.clean:
        console.print("nothing to commit, working tree clean")
        return
    for entry in result:
        style = "green" if entry.staged else "red"
        console.print(
            f"[{style}]{format_status_line(entry)}[/{style}]", soft_wrap=True
        )
