"""The ``start`` command: reconcile a workspace and attach to it."""

import click

from ..core.reconciler import Reconciler, StartResult
from .utils import error_handler, format_output, get_config, verbose_echo


def _print_dry_run(result: StartResult, annotate: bool = False) -> None:
    if not result.commands:
        click.echo("Workspace already up to date")
        return
    click.echo("Dry run - actions to execute:")
    comments = result.plan.describe() if annotate else []
    for position, line in enumerate(result.commands):
        if position < len(comments):
            click.echo(f"  {comments[position]}")
        click.echo(f"  {line}")


@click.command()
@click.argument("workspace", required=False)
@click.option("--dry-run", "-d", is_flag=True, help="Print the plan without executing it")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Kill extra sessions and windows, recreate mismatched windows",
)
@click.option(
    "--strict", is_flag=True, help="Also compare window index and layout"
)
@click.pass_context
@error_handler
def start(
    ctx: click.Context, workspace: str | None, dry_run: bool, force: bool, strict: bool
) -> None:
    """Start a workspace.

    WORKSPACE is a workspace name (looked up under the config directory), a
    path to a manifest, or omitted to use .hetki.yaml in the current
    directory.
    """
    config = get_config(ctx)
    reconciler = Reconciler.from_config(config)

    result = reconciler.start(workspace, dry_run=dry_run, force=force, strict=strict)
    verbose_echo(ctx, f"Workspace: {result.path}")

    if dry_run:
        format_output(
            ctx,
            {
                "workspace": str(result.path),
                "sessions": result.sessions,
                "commands": result.commands,
            },
            human_format_func=lambda _: _print_dry_run(
                result, annotate=bool(ctx.obj and ctx.obj.get("verbose"))
            ),
        )
