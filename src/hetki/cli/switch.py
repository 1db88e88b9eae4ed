"""The ``switch`` command: jump to a session, window or pane."""

import sys

import click

from ..backend import get_backend
from .utils import CliError, error_handler, get_config


def strip_marker_prefix(value: str) -> str:
    """Drop list decorations (``* ``, ``- ``, ``> ``) in front of a target."""
    for i, char in enumerate(value):
        if char == ":" or char.isalnum():
            return value[i:].strip()
    return ""


def list_to_tmux_format(value: str) -> str:
    """``session:window:pane`` (list output) becomes ``session:window.pane``."""
    parts = value.split(":")
    if len(parts) == 3:
        return f"{parts[0]}:{parts[1]}.{parts[2]}"
    return value


def parse_target(raw: str) -> str:
    return list_to_tmux_format(strip_marker_prefix(raw.strip()))


def read_stdin_line() -> str | None:
    """First line of piped stdin, ``None`` when stdin is a terminal or empty."""
    if sys.stdin is None or sys.stdin.isatty():
        return None
    line = sys.stdin.readline()
    return line if line.strip() else None


@click.command()
@click.argument("target", required=False)
@click.pass_context
@error_handler
def switch(ctx: click.Context, target: str | None) -> None:
    """Switch to a tmux session, window or pane.

    \b
    The target can be given as an argument or piped on stdin:
      hetki switch dev
      hetki switch dev:editor
      hetki switch dev:editor:0
    """
    raw = target if target is not None else read_stdin_line()
    if raw is None:
        raise CliError(
            "no target provided\nUsage: hetki switch <target> or pipe from stdin"
        )

    resolved = parse_target(raw)
    if not resolved:
        raise CliError("empty target")

    config = get_config(ctx)
    backend = get_backend(
        config.backend,
        socket_name=config.socket_name,
        workspace_env_var=config.workspace_env_var,
    )
    backend.switch(resolved)
