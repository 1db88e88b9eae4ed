"""
Workspace manifests: loading, normalization, validation and resolution.

A manifest is the user-authored YAML or JSON description of sessions, windows
and panes. This package turns one into a canonical ``WorkspaceSpec`` and from
there into the desired ``State`` the differ works on.
"""

from .convert import workspace_to_state
from .loader import expand_path, load_workspace
from .resolver import WorkspaceResolver, scan_workspaces
from .schema import PaneSpec, SessionSpec, WindowSpec, WorkspaceSpec
from .validator import validate_workspace

__all__ = [
    "PaneSpec",
    "SessionSpec",
    "WindowSpec",
    "WorkspaceResolver",
    "WorkspaceSpec",
    "expand_path",
    "load_workspace",
    "scan_workspaces",
    "validate_workspace",
    "workspace_to_state",
]
