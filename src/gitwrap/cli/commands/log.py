from __future__ import annotations

import click
from rich.markup import escape

from gitwrap.cli.console import console
from gitwrap.cli.context import CLIContext, async_command


@click.command()
@click.argument("start", required=False)
@click.option(
    "-n",
    "--max-count",
    type=click.IntRange(min=1),
    default=None,
    help="Number of commits to show (defaults.max_count when omitted).",
)
@click.option(
    "--skip",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Number of commits to skip first.",
)
@click.option("--full", is_flag=True, default=False, help="Show full messages.")
@click.pass_obj
@async_command
async def log(
    cli_ctx: CLIContext,
    start: str | None,
    max_count: int | None,
    skip: int,
    full: bool,
) -> None:
    """Show commits reachable from START (the default branch if omitted).

    Examples:
        gitwrap log
        gitwrap log develop -n 20 --skip 20
    """
    repo = cli_ctx.repository()
    for commit in await repo.commits(start, max_count, skip):
        author = commit.author.name if commit.author else ""
        if not full:
            console.print(
                f"[yellow]{commit.short_id}[/yellow] {escape(commit.subject)} "
                f"[dim]({escape(author)})[/dim]",
                soft_wrap=True,
            )
            continue
        console.print(f"[yellow]commit {commit.id}[/yellow]", soft_wrap=True)
        console.print(f"Author: {escape(str(commit.author))}", soft_wrap=True)
        if commit.authored_date is not None:
            console.print(f"Date:   {commit.authored_date.isoformat()}")
        console.print()
        for line in commit.message.splitlines():
            console.print(f"    {escape(line)}", soft_wrap=True)
        console.print()
