"""Conversion of a normalized workspace into the desired ``State``."""

from ..core.model import Pane, State, Window, new_state
from .schema import WindowSpec, WorkspaceSpec


def window_to_state(window: WindowSpec, position: int = 0) -> Window:
    """Convert one normalized window. Names are already defaulted by the loader."""
    return Window(
        name=window.name or f"window-{position}",
        path=window.path or "",
        index=window.index,
        layout=window.layout or "",
        panes=[
            Pane(
                path=pane.path or "",
                command=pane.command or "",
                split=pane.split.value if pane.split else None,
                size=pane.size,
                zoom=pane.zoom,
            )
            for pane in window.panes
        ],
    )


def workspace_to_state(workspace: WorkspaceSpec) -> State:
    """Build the desired state; session order follows the manifest."""
    state = new_state()
    for session_spec in workspace.sessions:
        session = state.add_session(session_spec.name)
        session.root = session_spec.root or ""
        session.windows = [
            window_to_state(window, position)
            for position, window in enumerate(session_spec.windows)
        ]
    return state
