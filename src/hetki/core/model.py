"""
Session, window and pane value types shared by the whole pipeline.

The same ``State`` shape holds both the desired state (converted from a
manifest) and the actual state (parsed from the multiplexer inventory), which
is what lets the differ compare them field by field.
"""

from dataclasses import dataclass, field


@dataclass
class Pane:
    """A single pane inside a window. Panes are identified by position."""

    path: str = ""
    command: str = ""
    split: str | None = None
    size: int | None = None
    zoom: bool = False


@dataclass
class Window:
    """An ordered group of panes."""

    name: str
    path: str = ""
    index: int | None = None
    layout: str = ""
    panes: list[Pane] = field(default_factory=list)

    @property
    def command(self) -> str:
        """Command of the first pane, or an empty string."""
        return self.panes[0].command if self.panes else ""

    @property
    def zoomed_pane(self) -> int | None:
        """Position of the pane flagged for zoom, if any."""
        for position, pane in enumerate(self.panes):
            if pane.zoom:
                return position
        return None


@dataclass
class Session:
    """A named, ordered list of windows."""

    name: str
    root: str = ""
    windows: list[Window] = field(default_factory=list)
    workspace_path: str = ""

    def window(self, name: str) -> Window | None:
        for window in self.windows:
            if window.name == name:
                return window
        return None


@dataclass
class ActiveContext:
    """Where the invoking client currently sits, when run inside tmux."""

    session: str = ""
    window: str = ""
    pane: int = 0
    path: str = ""


@dataclass
class State:
    """Sessions keyed by name plus the backend's base indices.

    Insertion order of ``sessions`` follows the manifest for desired states;
    it carries no meaning for observed states.
    """

    sessions: dict[str, Session] = field(default_factory=dict)
    pane_base_index: int = 0
    window_base_index: int = 0
    active: ActiveContext | None = None

    def add_session(self, name: str) -> Session:
        """Return the session called ``name``, creating it when absent."""
        session = self.sessions.get(name)
        if session is None:
            session = Session(name=name)
            self.sessions[name] = session
        return session

    def session_names(self) -> list[str]:
        return list(self.sessions)

    def is_empty(self) -> bool:
        return not self.sessions


def new_state() -> State:
    """Create an empty state."""
    return State()


def key_of(window: Window) -> str:
    """Identity of a window for diffing: ``name|path``."""
    return f"{window.name}|{window.path}"
