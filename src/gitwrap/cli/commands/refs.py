"""``gitwrap branches``, ``gitwrap tags`` and ``gitwrap remotes`` commands."""

from __future__ import annotations

import click
from rich.markup import escape
from rich.table import Table

from gitwrap.cli.console import console
from gitwrap.cli.context import CLIContext, async_command
from gitwrap.exceptions import GitwrapError


@click.command()
@click.pass_obj
@async_command
async def branches(cli_ctx: CLIContext) -> None:
    """List local branches; the checked-out branch is marked with ``*``."""
    repo = cli_ctx.repository()
    heads = await repo.branches()
    try:
        current = (await repo.branch()).name
    except GitwrapError:
        # Detached HEAD or unborn branch
        current = None

    for head in heads:
        if head.name == current:
            console.print(
                f"* [green]{escape(head.name)}[/green] {head.commit.id[:7]}",
                soft_wrap=True,
            )
        else:
            console.print(f"  {escape(head.name)} {head.commit.id[:7]}", soft_wrap=True)


@click.command()
@click.option(
    "-m", "--messages", is_flag=True, default=False, help="Show tag messages."
)
@click.pass_obj
@async_command
async def tags(cli_ctx: CLIContext, messages: bool) -> None:
    """List tags with the commit each one points at."""
    repo = cli_ctx.repository()
    table = Table(show_lines=False)
    table.add_column("Tag", style="bold")
    table.add_column("Commit")
    table.add_column("Kind")
    if messages:
        table.add_column("Message")

    for tag in await repo.tags():
        row = [
            escape(tag.name),
            tag.commit.id[:7],
            "annotated" if tag.annotated else "lightweight",
        ]
        if messages:
            row.append(escape(await tag.message()))
        table.add_row(*row)

    console.print(table)


@click.command()
@click.option(
    "--names",
    is_flag=True,
    default=False,
    help="List configured remote names instead of remote-tracking refs.",
)
@click.pass_obj
@async_command
async def remotes(cli_ctx: CLIContext, names: bool) -> None:
    """List remote-tracking refs, e.g. ``origin/master``."""
    repo = cli_ctx.repository()
    if names:
        for name in await repo.remote_list():
            console.print(escape(name), soft_wrap=True)
        return
    for ref in await repo.remotes():
        console.print(f"{escape(ref.name)} {ref.commit.id[:7]}", soft_wrap=True)
