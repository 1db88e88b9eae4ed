"""The ``list`` command: named workspaces under the config directory."""

import click

from ..manifest import WorkspaceResolver, scan_workspaces
from .utils import error_handler, format_output, get_config, output_table, quiet_echo


@click.command("list")
@click.pass_context
@error_handler
def list_workspaces(ctx: click.Context) -> None:
    """List named workspaces."""
    config = get_config(ctx)
    resolver = WorkspaceResolver(config.config_dir)
    found = scan_workspaces(resolver.workspaces_dir)

    if not found and not (ctx.obj and ctx.obj.get("json")):
        quiet_echo(ctx, f"No workspaces found in {resolver.workspaces_dir}")
        return

    format_output(
        ctx,
        {"workspaces": {name: str(path) for name, path in found.items()}},
        human_format_func=lambda data: output_table(
            ["Name", "Path"], [[name, path] for name, path in data["workspaces"].items()]
        ),
    )
