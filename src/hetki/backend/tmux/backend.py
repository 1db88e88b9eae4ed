"""tmux binding of the ``Backend`` interface."""

import os
from collections.abc import Sequence

from ...core.actions import Action
from ...core.model import State
from ...utils.logging import (
    AttachError,
    BackendError,
    LogContext,
    TmuxCommandError,
    get_logger,
)
from ..base import Backend
from .client import TmuxClient
from .commands import attach_args, render_commands
from .executor import DEFAULT_WORKSPACE_ENV_VAR, Executor
from .logging_utils import log_attach, log_query, log_query_failure
from .query import inventory_args, parse_inventory

logger = get_logger(__name__, LogContext.BACKEND)


def inside_tmux() -> bool:
    return bool(os.environ.get("TMUX"))


def find_window_index(state: State, session_name: str, window_name: str) -> int:
    """Index tmux gave the window named ``window_name`` in ``session_name``."""
    session = state.sessions.get(session_name)
    if session is None:
        raise AttachError(f"session {session_name!r} not found")
    window = session.window(window_name)
    if window is None or window.index is None:
        raise AttachError(f"window {window_name!r} not found in session {session_name!r}")
    return window.index


class TmuxBackend(Backend):
    """Queries, applies to and attaches to a tmux server."""

    name = "tmux"

    def __init__(
        self,
        client: TmuxClient | None = None,
        socket_name: str | None = None,
        workspace_env_var: str = DEFAULT_WORKSPACE_ENV_VAR,
    ):
        self.client = client if client is not None else TmuxClient(socket_name=socket_name)
        self.workspace_env_var = workspace_env_var
        self.executor = Executor(self.client, workspace_env_var=workspace_env_var)
        self.observed: State | None = None
        self.pane_base_index = 0
        self.window_base_index = 0

    def query_state(self) -> State:
        """Observe the server; a failed query yields an empty state.

        Base indices printed before the failure are kept, so a first-run plan
        still targets the right panes.
        """
        result = self.client.run(*inventory_args(self.workspace_env_var))
        state = parse_inventory(result.output, tmux_env=os.environ.get("TMUX"))
        if not result.ok:
            log_query_failure(result.error_output)
            state.sessions = {}
            state.active = None

        self.pane_base_index = state.pane_base_index
        self.window_base_index = state.window_base_index
        self.observed = state
        log_query(len(state.sessions), state.pane_base_index, state.window_base_index)
        return state

    def apply(
        self,
        actions: Sequence[Action],
        sessions: Sequence[str] = (),
        workspace_path: str | None = None,
    ) -> None:
        self.executor.apply(
            actions, sessions=sessions, workspace_path=workspace_path, state=self.observed
        )

    def dry_run(self, actions: Sequence[Action]) -> list[str]:
        return ["tmux " + " ".join(args) for args in render_commands(actions, self.observed)]

    def attach(self, session: str) -> None:
        self._switch_to(session)

    def switch(self, target: str) -> None:
        """Switch to ``session``, ``session:window`` or ``session:window.pane``.

        Window names are resolved to indices with a fresh query and the pane
        position is shifted by the server's ``pane-base-index``.
        """
        session, sep, rest = target.partition(":")
        if not sep:
            self._switch_to(target)
            return

        state = self.query_state()
        window, has_pane, pane = rest, "", ""
        session_state = state.sessions.get(session)
        if session_state is None or session_state.window(rest) is None:
            # the pane number follows the last dot; window names may hold dots
            window, has_pane, pane = rest.rpartition(".")
            if not has_pane:
                window = pane
        resolved = f"{session}:{find_window_index(state, session, window)}"
        if has_pane:
            try:
                position = int(pane)
            except ValueError:
                raise BackendError(f"invalid pane {pane!r} in target {target!r}") from None
            resolved = f"{resolved}.{position + state.pane_base_index}"

        self._switch_to(resolved)

    def _switch_to(self, target: str) -> None:
        inside = inside_tmux()
        log_attach(target, inside)
        try:
            self.client.interactive(*attach_args(target, inside))
        except TmuxCommandError as e:
            logger.error("Attach failed", exception=e, target=target)
            raise AttachError(f"attach to {target!r}: {e.message}", {"target": target}) from e
