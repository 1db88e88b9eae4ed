"""Pydantic schemas for workspace manifests.

Two surface forms are accepted for ``sessions`` (an ordered list of session
objects, or a mapping of session name to windows) and two for each window list
(window objects, or bare path strings). Both are folded into the list form
here, before field validation runs.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.enums import SplitDirection

__all__ = [
    "PaneSpec",
    "WindowSpec",
    "SessionSpec",
    "WorkspaceSpec",
    "infer_name_from_path",
]


def infer_name_from_path(path: str | None) -> str:
    """Last segment of a path, ignoring trailing separators."""
    if not path:
        return ""
    return path.rstrip("/").split("/")[-1]


class PaneSpec(BaseModel):
    """A pane inside a window."""

    model_config = ConfigDict(frozen=True)

    path: str | None = None
    command: str | None = None
    split: SplitDirection | None = None
    size: int | None = Field(default=None, ge=1, le=99, description="Percent")
    zoom: bool = False


class WindowSpec(BaseModel):
    """A window; ``command`` is a single-pane shortcut that ``panes`` overrides."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    path: str | None = None
    index: int | None = None
    layout: str | None = None
    command: str | None = None
    panes: list[PaneSpec] = Field(default_factory=list)

    @field_validator("panes", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SessionSpec(BaseModel):
    """A session with its ordered windows."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    root: str | None = None
    windows: list[WindowSpec] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> Any:
        """YAML keys such as ``2024:`` decode as ints; blank names are reported later."""
        if value is None:
            return ""
        if isinstance(value, int | float):
            return str(value)
        return value

    @field_validator("windows", mode="before")
    @classmethod
    def desugar_windows(cls, value: Any) -> Any:
        """Turn bare path strings into ``{path, name}`` window objects."""
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        return [
            {"path": item, "name": infer_name_from_path(item)}
            if isinstance(item, str)
            else item
            for item in value
        ]


class WorkspaceSpec(BaseModel):
    """Root of a manifest: an ordered list of sessions."""

    model_config = ConfigDict(frozen=True)

    sessions: list[SessionSpec] = Field(default_factory=list)

    @field_validator("sessions", mode="before")
    @classmethod
    def desugar_sessions(cls, value: Any) -> Any:
        """Accept ``{name: windows}`` or ``{name: {root, windows}}`` mappings."""
        if value is None:
            return []
        if not isinstance(value, dict):
            return value

        sessions = []
        for name, body in value.items():
            if isinstance(body, dict):
                sessions.append({"name": name, **body})
            else:
                sessions.append({"name": name, "windows": body})
        return sessions

    def session_names(self) -> list[str]:
        return [s.name for s in self.sessions]

    @property
    def first_session(self) -> str | None:
        return self.sessions[0].name if self.sessions else None
