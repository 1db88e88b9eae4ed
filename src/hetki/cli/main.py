"""Main CLI entry point for hetki."""

import click

from .. import __version__
from .config import config
from .start import start
from .switch import switch
from .workspaces import list_workspaces


@click.group()
@click.version_option(version=__version__, prog_name="hetki")
@click.option("--config", "-c", help="Configuration file path")
@click.option("--profile", "-p", help="Configuration profile to use")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
# Configuration override flags
@click.option("--socket-name", "-L", help="Override socket_name setting")
@click.option("--log-level", help="Override log_level setting")
@click.pass_context
def main(
    ctx: click.Context,
    config: str | None,
    profile: str | None,
    verbose: bool,
    quiet: bool,
    json: bool,
    socket_name: str | None,
    log_level: str | None,
) -> None:
    """hetki - declarative tmux session manager.

    Describe sessions, windows and panes in a workspace manifest and let
    hetki bring the running tmux server in line with it. Running the same
    workspace again only fixes what drifted.

    \b
    - start:  reconcile a workspace and attach to it
    - switch: jump to a session, window or pane
    - list:   show named workspaces
    - config: manage configuration settings
    """
    if verbose and quiet:
        raise click.UsageError("Cannot use both --verbose and --quiet options")

    if verbose:
        log_level = "DEBUG"
    elif quiet and log_level is None:
        log_level = "ERROR"

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["profile"] = profile
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json

    # Store CLI overrides for configuration
    ctx.obj["cli_overrides"] = {
        k: v
        for k, v in {"socket_name": socket_name, "log_level": log_level}.items()
        if v is not None
    }


main.add_command(start)
main.add_command(switch)
main.add_command(list_workspaces)
main.add_command(config)


if __name__ == "__main__":
    main()
