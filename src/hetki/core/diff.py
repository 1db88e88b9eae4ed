"""
Structured difference between a desired and an actual ``State``.

``compare`` is pure: it reads both states and never mutates them. Missing
sessions carry their full window trees so the planner can create them in one
program; extra sessions carry only their names.
"""

import shlex
from dataclasses import dataclass, field

from .enums import CompareMode
from .model import Pane, Session, State, Window, key_of


@dataclass
class WindowMismatch:
    """Two windows sharing a key but differing in a compared field."""

    desired: Window
    actual: Window


@dataclass
class WindowDiff:
    """Per-session window buckets."""

    missing: list[Window] = field(default_factory=list)
    extra: list[Window] = field(default_factory=list)
    mismatched: list[WindowMismatch] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.missing or self.extra or self.mismatched)


@dataclass
class SessionDiff:
    missing: list[Session] = field(default_factory=list)
    extra: list[Session] = field(default_factory=list)


@dataclass
class Diff:
    """Sessions missing from or extra to the actual state, plus window diffs
    for the sessions present in both."""

    sessions: SessionDiff = field(default_factory=SessionDiff)
    windows: dict[str, WindowDiff] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    def session_order(self) -> list[str]:
        """Desired session names in manifest order.

        Falls back to missing sessions followed by the sessions with window
        diffs when the diff was built by hand.
        """
        if self.order:
            return list(self.order)
        names = [s.name for s in self.sessions.missing]
        return names + [name for name in self.windows if name not in names]

    def is_empty(self) -> bool:
        return (
            not self.sessions.missing
            and not self.sessions.extra
            and all(wd.is_empty() for wd in self.windows.values())
        )


def command_name(command: str) -> str:
    """Executable name of a shell command line (``vim a.txt`` -> ``vim``)."""
    try:
        words = shlex.split(command)
    except ValueError:
        words = command.split()
    if not words:
        return ""
    return words[0].rsplit("/", 1)[-1]


def commands_match(desired: str, actual: str) -> bool:
    """An empty desired command matches anything; otherwise the executable
    names must agree, since tmux reports the running process name."""
    if not desired:
        return True
    return command_name(desired) == command_name(actual)


def panes_match(desired: Pane, actual: Pane) -> bool:
    if desired.path and desired.path != actual.path:
        return False
    return commands_match(desired.command, actual.command)


def pane_lists_match(desired: list[Pane], actual: list[Pane]) -> bool:
    if len(desired) != len(actual):
        return False
    return all(panes_match(d, a) for d, a in zip(desired, actual))


def windows_equal(desired: Window, actual: Window, mode: CompareMode = CompareMode.STRICT) -> bool:
    """Compare the fields selected by ``mode``."""
    if CompareMode.NAME in mode and desired.name != actual.name:
        return False
    if CompareMode.PATH in mode and desired.path != actual.path:
        return False
    if CompareMode.INDEX in mode and desired.index != actual.index:
        return False
    if CompareMode.LAYOUT in mode and desired.layout != actual.layout:
        return False
    if CompareMode.COMMAND in mode and not commands_match(desired.command, actual.command):
        return False
    if CompareMode.PANES in mode and not pane_lists_match(desired.panes, actual.panes):
        return False
    return True


def windows_by_key(windows: list[Window]) -> dict[str, Window]:
    """Key windows by ``name|path``. A repeated key keeps the last window."""
    keyed: dict[str, Window] = {}
    for window in windows:
        keyed[key_of(window)] = window
    return keyed


def compare_windows(
    desired: list[Window], actual: list[Window], mode: CompareMode = CompareMode.DEFAULT
) -> WindowDiff:
    desired_map = windows_by_key(desired)
    actual_map = windows_by_key(actual)
    result = WindowDiff()

    for key, window in desired_map.items():
        other = actual_map.get(key)
        if other is None:
            result.missing.append(window)
        elif not windows_equal(window, other, mode):
            result.mismatched.append(WindowMismatch(desired=window, actual=other))

    for key, window in actual_map.items():
        if key not in desired_map:
            result.extra.append(window)

    return result


def compare(desired: State, actual: State, mode: CompareMode = CompareMode.DEFAULT) -> Diff:
    """Diff two states.

    Session buckets follow the iteration order of the state they come from,
    which for a desired state is manifest order.
    """
    diff = Diff(order=desired.session_names())

    for name, session in desired.sessions.items():
        if name not in actual.sessions:
            diff.sessions.missing.append(session)

    for name in actual.sessions:
        if name not in desired.sessions:
            diff.sessions.extra.append(Session(name=name))

    for name, session in desired.sessions.items():
        other = actual.sessions.get(name)
        if other is None:
            continue
        window_diff = compare_windows(session.windows, other.windows, mode)
        if not window_diff.is_empty():
            diff.windows[name] = window_diff

    return diff
