from __future__ import annotations

import click
from rich.markup import escape

from gitwrap.cli.console import console
from gitwrap.cli.context import CLIContext, async_command
from gitwrap.models import Diff


def _summary(diff: Diff) -> str:
    if diff.new_file:
        kind, path = "A", diff.b_path
    elif diff.deleted_file:
        kind, path = "D", diff.a_path
    elif diff.renamed_file:
        kind, path = "R", f"{diff.a_path} -> {diff.b_path}"
    else:
        kind, path = "M", diff.b_path
    counts = "binary" if diff.binary else f"+{diff.added} -{diff.removed}"
    return f"{kind} {escape(path)} [dim]{counts}[/dim]"


@click.command()
@click.argument("commit_a")
@click.argument("commit_b")
@click.argument("paths", nargs=-1)
@click.option(
    "-p",
    "--patch",
    is_flag=True,
    default=False,
    help="Print the unified diff instead of a per-file summary.",
)
@click.pass_obj
@async_command
async def diff(
    cli_ctx: CLIContext,
    commit_a: str,
    commit_b: str,
    paths: tuple[str, ...],
    patch: bool,
) -> None:
    """Show per-file changes between COMMIT_A and COMMIT_B.

    Examples:
        gitwrap diff HEAD~1 HEAD
        gitwrap diff v1.0 v1.1 src/ --patch
    """
    repo = cli_ctx.repository()
    changes = await repo.diff(commit_a, commit_b, list(paths) or None)
    for change in changes:
        if patch:
            # Patch text goes out untouched; no markup or wrapping
            click.echo(change.diff, nl=False)
        else:
            console.print(_summary(change), soft_wrap=True)
