"""
Typed plan actions.

The set is closed: exactly the eight dataclasses below. They are frozen, are
produced by a planning strategy and consumed once by an executor, which maps
each one to a multiplexer command in a single dispatch function.
"""

from dataclasses import dataclass, field
from typing import Union


class ActionValidationError(ValueError):
    """An action is missing a required target."""

    pass


@dataclass(frozen=True)
class CreateSession:
    name: str
    window_name: str
    path: str = ""

    def describe(self) -> str:
        return f"# Create session: {self.name}"

    def validate(self) -> None:
        if not self.name:
            raise ActionValidationError("session name cannot be empty")


@dataclass(frozen=True)
class CreateWindow:
    session: str
    name: str
    path: str = ""

    def describe(self) -> str:
        return f"# Create window: {self.session}:{self.name}"

    def validate(self) -> None:
        if not self.session or not self.name:
            raise ActionValidationError("window session and name cannot be empty")


@dataclass(frozen=True)
class SplitPane:
    session: str
    window: str
    path: str = ""
    split: str | None = None
    size: int | None = None

    def describe(self) -> str:
        return f"# Split pane in: {self.session}:{self.window}"

    def validate(self) -> None:
        if not self.session or not self.window:
            raise ActionValidationError("split pane target cannot be empty")


@dataclass(frozen=True)
class SendKeys:
    session: str
    window: str
    pane: int
    command: str

    def describe(self) -> str:
        return f"# Send command to: {self.session}:{self.window}.{self.pane}"

    def validate(self) -> None:
        if not self.session or not self.window:
            raise ActionValidationError("send keys target cannot be empty")


@dataclass(frozen=True)
class SelectLayout:
    session: str
    window: str
    layout: str

    def describe(self) -> str:
        return f"# Set layout: {self.session}:{self.window} -> {self.layout}"

    def validate(self) -> None:
        if not self.session or not self.window or not self.layout:
            raise ActionValidationError(
                "select layout target and layout cannot be empty"
            )


@dataclass(frozen=True)
class ZoomPane:
    session: str
    window: str
    pane: int

    def describe(self) -> str:
        return f"# Zoom pane: {self.session}:{self.window}.{self.pane}"

    def validate(self) -> None:
        if not self.session or not self.window:
            raise ActionValidationError("zoom pane target cannot be empty")


@dataclass(frozen=True)
class KillSession:
    name: str

    def describe(self) -> str:
        return f"# Kill session: {self.name}"

    def validate(self) -> None:
        if not self.name:
            raise ActionValidationError("kill session name cannot be empty")


@dataclass(frozen=True)
class KillWindow:
    session: str
    window: str

    def describe(self) -> str:
        return f"# Kill window: {self.session}:{self.window}"

    def validate(self) -> None:
        if not self.session or not self.window:
            raise ActionValidationError("kill window target cannot be empty")


Action = Union[
    CreateSession,
    CreateWindow,
    SplitPane,
    SendKeys,
    SelectLayout,
    ZoomPane,
    KillSession,
    KillWindow,
]

ACTION_TYPES = (
    CreateSession,
    CreateWindow,
    SplitPane,
    SendKeys,
    SelectLayout,
    ZoomPane,
    KillSession,
    KillWindow,
)


@dataclass
class Plan:
    """An ordered action program."""

    actions: list[Action] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.actions

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self):
        return iter(self.actions)

    def describe(self) -> list[str]:
        return [action.describe() for action in self.actions]
