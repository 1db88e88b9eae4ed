"""Structural validation of a normalized workspace."""

from ..utils.logging import FieldError
from .schema import WorkspaceSpec

SESSION_NAME_FORBIDDEN = ".:"


def validate_workspace(workspace: WorkspaceSpec | None) -> list[FieldError]:
    """Collect every structural problem in ``workspace``.

    Field paths are session-qualified (``session.dev.window.editor``) so the
    same window name in two sessions is never ambiguous. An empty list means
    the workspace is valid.
    """
    if workspace is None:
        return [FieldError("workspace", "workspace is nil")]

    if not workspace.sessions:
        return [FieldError("sessions", "workspace has no sessions defined")]

    errors: list[FieldError] = []
    seen_sessions: set[str] = set()

    for position, session in enumerate(workspace.sessions):
        name = session.name.strip()
        if not name:
            errors.append(
                FieldError(f"sessions.{position}.name", "session name cannot be empty")
            )
            continue

        prefix = f"session.{session.name}"
        if session.name in seen_sessions:
            errors.append(FieldError(prefix, "duplicate session name"))
        if any(c in session.name for c in SESSION_NAME_FORBIDDEN):
            # tmux rewrites these to "_", so the session would never match
            errors.append(
                FieldError(f"{prefix}.name", "session name cannot contain '.' or ':'")
            )
        seen_sessions.add(session.name)

        if not session.windows:
            errors.append(FieldError(f"{prefix}.windows", "session has no windows"))
            continue

        seen_windows: set[str] = set()
        for index, window in enumerate(session.windows):
            window_name = window.name or f"window-{index}"
            field = f"{prefix}.window.{window_name}"

            if window_name in seen_windows:
                errors.append(FieldError(field, "duplicate window name"))
            seen_windows.add(window_name)

            if not window.path:
                errors.append(
                    FieldError(
                        f"{field}.path", "window has no path and session has no root"
                    )
                )

            zoomed = sum(1 for pane in window.panes if pane.zoom)
            if zoomed > 1:
                errors.append(
                    FieldError(
                        f"{field}.panes",
                        f"{zoomed} panes have zoom=true (only one allowed per window)",
                    )
                )

    return errors
