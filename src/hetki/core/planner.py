"""
Planning strategies: turn a ``Diff`` into an ordered ``Plan``.

Ordering guarantees shared by every strategy:
- kill actions for a scope come before create actions for that scope;
- inside a new window, splits come before keys, layout and zoom;
- sessions follow manifest order, and all actions for one session are
  emitted before the next session's;
- pane addresses already include the backend's ``pane_base_index``.
"""

from abc import ABC

from ..utils.logging import LogContext, get_logger
from .actions import (
    Action,
    CreateSession,
    CreateWindow,
    KillSession,
    KillWindow,
    Plan,
    SelectLayout,
    SendKeys,
    SplitPane,
    ZoomPane,
)
from .diff import Diff, WindowDiff, WindowMismatch, commands_match
from .enums import StrategyName
from .model import Session, Window

logger = get_logger(__name__, LogContext.PLANNER)


class Strategy(ABC):
    """Base planning strategy. Subclasses choose how destructive to be."""

    name: StrategyName
    kill_extra_sessions: bool = False
    kill_extra_windows: bool = False
    patch_mismatched: bool = True

    def __init__(self, pane_base_index: int = 0):
        self.pane_base_index = pane_base_index

    def plan(self, diff: Diff) -> Plan:
        actions: list[Action] = []

        if self.kill_extra_sessions:
            for session in sorted(diff.sessions.extra, key=lambda s: s.name):
                actions.append(KillSession(name=session.name))

        missing = {session.name: session for session in diff.sessions.missing}
        for name in diff.session_order():
            if name in missing:
                actions.extend(self.create_session(missing[name]))
            elif name in diff.windows:
                actions.extend(self.reconcile_session(name, diff.windows[name]))

        logger.debug(
            "Plan built",
            strategy=self.name.value,
            action_count=len(actions),
            pane_base_index=self.pane_base_index,
        )
        return Plan(actions=actions)

    def create_session(self, session: Session) -> list[Action]:
        """Create a session and every window in it."""
        if not session.windows:
            return [CreateSession(name=session.name, window_name="", path=session.root)]

        first, *rest = session.windows
        actions: list[Action] = [
            CreateSession(name=session.name, window_name=first.name, path=first.path)
        ]
        actions.extend(self.populate_window(session.name, first))
        for window in rest:
            actions.extend(self.create_window(session.name, window))
        return actions

    def create_window(self, session: str, window: Window) -> list[Action]:
        actions: list[Action] = [
            CreateWindow(session=session, name=window.name, path=window.path)
        ]
        actions.extend(self.populate_window(session, window))
        return actions

    def populate_window(self, session: str, window: Window) -> list[Action]:
        """Splits, then commands, then layout, then zoom for a fresh window."""
        actions: list[Action] = []

        for pane in window.panes[1:]:
            actions.append(
                SplitPane(
                    session=session,
                    window=window.name,
                    path=pane.path or window.path,
                    split=pane.split,
                    size=pane.size,
                )
            )

        for position, pane in enumerate(window.panes):
            if pane.command:
                actions.append(
                    SendKeys(
                        session=session,
                        window=window.name,
                        pane=position + self.pane_base_index,
                        command=pane.command,
                    )
                )

        if window.layout:
            actions.append(
                SelectLayout(session=session, window=window.name, layout=window.layout)
            )

        zoomed = window.zoomed_pane
        if zoomed is not None:
            actions.append(
                ZoomPane(
                    session=session,
                    window=window.name,
                    pane=zoomed + self.pane_base_index,
                )
            )

        return actions

    def reconcile_session(self, session: str, window_diff: WindowDiff) -> list[Action]:
        """Window-level fixes for a session present on both sides."""
        kills: list[Action] = []
        creates: list[Action] = []
        recreates: list[Action] = []
        patches: list[Action] = []

        if self.kill_extra_windows:
            for window in window_diff.extra:
                kills.append(KillWindow(session=session, window=window.name))

        for window in window_diff.missing:
            creates.extend(self.create_window(session, window))

        for mismatch in window_diff.mismatched:
            patch = self.patch_window(session, mismatch) if self.patch_mismatched else None
            if patch is None:
                kills.append(KillWindow(session=session, window=mismatch.actual.name))
                recreates.extend(self.create_window(session, mismatch.desired))
            else:
                patches.extend(patch)

        return kills + creates + recreates + patches

    def patch_window(self, session: str, mismatch: WindowMismatch) -> list[Action] | None:
        """Smallest set of actions fixing a mismatched window in place.

        Returns ``None`` when the pane structure differs and the window has to
        be recreated instead.
        """
        desired, actual = mismatch.desired, mismatch.actual
        if len(desired.panes) != len(actual.panes):
            return None
        for wanted, found in zip(desired.panes, actual.panes):
            if wanted.path and wanted.path != found.path:
                return None

        actions: list[Action] = []
        for position, (wanted, found) in enumerate(zip(desired.panes, actual.panes)):
            if wanted.command and not commands_match(wanted.command, found.command):
                actions.append(
                    SendKeys(
                        session=session,
                        window=desired.name,
                        pane=position + self.pane_base_index,
                        command=wanted.command,
                    )
                )

        if desired.layout and desired.layout != actual.layout:
            actions.append(
                SelectLayout(session=session, window=desired.name, layout=desired.layout)
            )
        return actions


class MergeStrategy(Strategy):
    """Additive reconciliation: creates what is missing, patches mismatches,
    and leaves extra sessions and windows alone."""

    name = StrategyName.MERGE


class ForceStrategy(Strategy):
    """Destructive reconciliation: kills extras and recreates mismatches."""

    name = StrategyName.FORCE
    kill_extra_sessions = True
    kill_extra_windows = True
    patch_mismatched = False


STRATEGIES: dict[StrategyName, type[Strategy]] = {
    StrategyName.MERGE: MergeStrategy,
    StrategyName.FORCE: ForceStrategy,
}


def get_strategy(name: str | StrategyName, pane_base_index: int = 0) -> Strategy:
    """Instantiate a strategy by name (``merge`` or ``force``)."""
    try:
        key = name if isinstance(name, StrategyName) else StrategyName(name.lower())
    except ValueError:
        raise ValueError(f"Unknown strategy: {name!r} (use 'merge' or 'force')") from None
    return STRATEGIES[key](pane_base_index=pane_base_index)
