from __future__ import annotations

import click

from gitwrap.cli.console import console
from gitwrap.cli.context import CLIContext, async_command
from gitwrap.cli.output import format_tree_entry
from gitwrap.exceptions import NotFoundError
from gitwrap.models import Tree


@click.command()
@click.argument("treeish", required=False)
@click.option(
    "--path",
    "subpath",
    default=None,
    help="List a directory below the root, e.g. src/gitwrap.",
)
@click.pass_obj
@async_command
async def tree(cli_ctx: CLIContext, treeish: str | None, subpath: str | None) -> None:
    """List the entries of TREEISH (the default branch if omitted)."""
    root = cli_ctx.repository().tree(treeish)
    target = await root.find(subpath) if subpath else root
    if not isinstance(target, Tree):
        raise NotFoundError(f"Not a directory in {root.id}: {subpath}")
    for entry in await target.contents():
        console.print(format_tree_entry(entry), soft_wrap=True)
