"""
Executor: apply a plan to tmux as one scripted batch.

Every action becomes one line of a tmux script, which is fed to the server
with ``source -`` so it is applied within a single round-trip. When no server
is running, the first command is run on its own (``new-session`` starts the
server) and the rest is re-submitted. No other error is handled here: a
failed batch is fatal and the documented recovery is to run again.
"""

import os
import re
import shlex
from collections.abc import Sequence

from ...core.actions import Action, ActionValidationError
from ...core.model import State
from ...utils.logging import BackendError, ServerNotRunningError, log_performance
from ...utils.logging import LogContext
from .client import TmuxClient
from .commands import render_commands, set_environment_args
from .logging_utils import (
    log_batch_operation,
    log_environment_update,
    log_server_recovery,
)

DEFAULT_WORKSPACE_ENV_VAR = "HETKI_WORKSPACE_PATH"

# characters tmux's config parser treats literally outside quotes
_SAFE_ARG = re.compile(r"^[\w@%+=:,./-]+$")


def quote_arg(arg: str) -> str:
    """Quote an argument for a tmux script line when it is not plain."""
    if _SAFE_ARG.match(arg):
        return arg
    return shlex.quote(arg)


def script_line(args: Sequence[str]) -> str:
    return " ".join(quote_arg(arg) for arg in args)


def build_script(commands: Sequence[Sequence[str]]) -> str:
    """One command per line, newline terminated."""
    return "".join(script_line(command) + "\n" for command in commands)


class Executor:
    """Maps actions to tmux commands and applies them atomically."""

    def __init__(self, client: TmuxClient, workspace_env_var: str = DEFAULT_WORKSPACE_ENV_VAR):
        self.client = client
        self.workspace_env_var = workspace_env_var

    @staticmethod
    def to_commands(actions: Sequence[Action], state: State | None = None) -> list[list[str]]:
        """Validate actions and render their argument vectors.

        ``state`` is the observed server state the plan was computed against;
        window targets that need an index are resolved through it.
        """
        for action in actions:
            try:
                action.validate()
            except ActionValidationError as e:
                raise BackendError(f"invalid action {action!r}: {e}") from e
        return render_commands(actions, state)

    @log_performance(LogContext.EXECUTOR)
    def apply(
        self,
        actions: Sequence[Action],
        sessions: Sequence[str] = (),
        workspace_path: str | None = None,
        state: State | None = None,
    ) -> None:
        """Apply ``actions``; on success tag ``sessions`` with ``workspace_path``."""
        if not actions:
            return

        self.execute_batch(self.to_commands(actions, state))

        if workspace_path and sessions:
            self.record_workspace(sessions, workspace_path)

    def execute_batch(self, commands: list[list[str]]) -> None:
        if not commands:
            return

        try:
            self.client.source(build_script(commands))
        except ServerNotRunningError:
            log_server_recovery(commands[0])
            self.client.run_checked(*commands[0])
            if len(commands) > 1:
                self.client.source(build_script(commands[1:]))

        log_batch_operation(len(commands), "success")

    def record_workspace(self, sessions: Sequence[str], workspace_path: str) -> None:
        """Set the per-session variable naming the manifest that built it."""
        absolute = os.path.abspath(workspace_path)
        for session in sessions:
            self.client.run_checked(
                *set_environment_args(session, self.workspace_env_var, absolute)
            )
            log_environment_update(session, self.workspace_env_var, absolute)
