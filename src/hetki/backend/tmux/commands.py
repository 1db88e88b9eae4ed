"""tmux argument vectors for plan actions.

``action_args`` is the single dispatch point from the closed action set to
tmux commands. ``WindowTargets`` follows the window indices tmux hands out
while a plan runs, so windows whose names tmux would misread in a target
(``my.app``, ``a:b``, ``42``) are addressed by index instead.
"""

import re
from collections.abc import Sequence

from ...core.actions import (
    Action,
    CreateSession,
    CreateWindow,
    KillSession,
    KillWindow,
    SelectLayout,
    SendKeys,
    SplitPane,
    ZoomPane,
)
from ...core.model import State

SPLIT_FLAGS = {"vertical": "-v", "horizontal": "-h"}

# a target "session:name" resolves to exactly the window called name
_PLAIN_WINDOW_NAME = re.compile(r"^(?!\d+$)\w[\w-]*$")


def is_plain_window_name(name: str) -> bool:
    return bool(_PLAIN_WINDOW_NAME.match(name))


class WindowTargets:
    """Window index bookkeeping for one rendered plan.

    Seeded from the observed state; every rendered action is then replayed
    with ``track`` so later targets see the windows earlier actions created
    or killed. New windows get the first free index from ``base-index``, as
    tmux assigns them.
    """

    def __init__(self, state: State | None = None):
        self.base_index = state.window_base_index if state is not None else 0
        self._indexes: dict[str, dict[str, int]] = {}
        if state is not None:
            for session in state.sessions.values():
                self._indexes[session.name] = {
                    window.name: window.index
                    for window in session.windows
                    if window.index is not None
                }

    def index_of(self, session: str, window: str) -> int | None:
        return self._indexes.get(session, {}).get(window)

    def window(self, session: str, window: str) -> str:
        if not is_plain_window_name(window):
            index = self.index_of(session, window)
            if index is not None:
                return f"{session}:{index}"
        return f"{session}:{window}"

    def pane(self, session: str, window: str, pane: int) -> str:
        return f"{self.window(session, window)}.{pane}"

    def _next_free(self, session: str) -> int:
        used = set(self._indexes.get(session, {}).values())
        index = self.base_index
        while index in used:
            index += 1
        return index

    def track(self, action: Action) -> None:
        """Record the effect of ``action`` on window indices."""
        if isinstance(action, CreateSession):
            self._indexes[action.name] = (
                {action.window_name: self.base_index} if action.window_name else {}
            )
        elif isinstance(action, CreateWindow):
            index = self._next_free(action.session)
            self._indexes.setdefault(action.session, {})[action.name] = index
        elif isinstance(action, KillWindow):
            self._indexes.get(action.session, {}).pop(action.window, None)
        elif isinstance(action, KillSession):
            self._indexes.pop(action.name, None)


def action_args(action: Action, targets: WindowTargets | None = None) -> list[str]:
    """Map one action to its tmux argument vector."""
    if targets is None:
        targets = WindowTargets()

    if isinstance(action, CreateSession):
        args = ["new-session", "-d", "-s", action.name]
        if action.window_name:
            args += ["-n", action.window_name]
        if action.path:
            args += ["-c", action.path]
        return args

    if isinstance(action, CreateWindow):
        # "session:" so a session name is never read as a window index
        args = ["new-window", "-t", f"{action.session}:", "-n", action.name]
        if action.path:
            args += ["-c", action.path]
        return args

    if isinstance(action, SplitPane):
        args = ["split-window", "-t", targets.window(action.session, action.window)]
        if action.path:
            args += ["-c", action.path]
        if action.split in SPLIT_FLAGS:
            args.append(SPLIT_FLAGS[action.split])
        if action.size:
            args += ["-p", str(action.size)]
        return args

    if isinstance(action, SendKeys):
        return [
            "send-keys",
            "-t",
            targets.pane(action.session, action.window, action.pane),
            action.command,
            "Enter",
        ]

    if isinstance(action, SelectLayout):
        return [
            "select-layout",
            "-t",
            targets.window(action.session, action.window),
            action.layout,
        ]

    if isinstance(action, ZoomPane):
        return [
            "resize-pane",
            "-Z",
            "-t",
            targets.pane(action.session, action.window, action.pane),
        ]

    if isinstance(action, KillSession):
        return ["kill-session", "-t", action.name]

    if isinstance(action, KillWindow):
        return ["kill-window", "-t", targets.window(action.session, action.window)]

    raise TypeError(f"Unsupported action: {action!r}")


def render_commands(actions: Sequence[Action], state: State | None = None) -> list[list[str]]:
    """Argument vectors for a whole plan, in order, against ``state``."""
    targets = WindowTargets(state)
    commands = []
    for action in actions:
        commands.append(action_args(action, targets))
        targets.track(action)
    return commands


def set_environment_args(session: str, name: str, value: str) -> list[str]:
    return ["set-environment", "-t", session, name, value]


def attach_args(target: str, inside_client: bool) -> list[str]:
    """``switch-client`` from inside tmux, ``attach-session`` otherwise."""
    if inside_client:
        return ["switch-client", "-t", target]
    return ["attach-session", "-t", target]
