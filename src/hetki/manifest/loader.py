"""Workspace manifest loading and normalization."""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..utils.logging import (
    FieldError,
    LogContext,
    ManifestError,
    ManifestValidationError,
    get_logger,
)
from .schema import PaneSpec, WindowSpec, WorkspaceSpec, infer_name_from_path
from .validator import validate_workspace

logger = get_logger(__name__, LogContext.MANIFEST)

SUPPORTED_EXTENSIONS = (".yaml", ".yml", ".json")


def expand_path(path: str | None) -> str:
    """Expand ``$VAR`` references and a leading ``~``."""
    if not path:
        return ""
    return os.path.expanduser(os.path.expandvars(path))


def read_manifest(path: Path) -> Any:
    """Read a manifest file and decode it according to its extension."""
    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ManifestError(
            f"unsupported format: {ext or '(none)'} (use .yaml, .yml, or .json)",
            context={"path": str(path)},
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"read manifest {path}: {e}", context={"path": str(path)})

    try:
        if ext == ".json":
            return json.loads(raw)
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ManifestError(f"parse yaml manifest {path}: {e}", context={"path": str(path)})
    except json.JSONDecodeError as e:
        raise ManifestError(f"parse json manifest {path}: {e}", context={"path": str(path)})


def decode_workspace(data: Any) -> WorkspaceSpec:
    """Decode already-parsed YAML/JSON data into the workspace schema."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ManifestError("manifest must be a mapping with a 'sessions' key")

    try:
        return WorkspaceSpec.model_validate(data)
    except ValidationError as e:
        errors = [
            FieldError(".".join(str(part) for part in err["loc"]), err["msg"])
            for err in e.errors()
        ]
        raise ManifestValidationError(errors)


def _normalize_panes(window: WindowSpec, name: str, path: str) -> list[PaneSpec]:
    if not window.panes:
        return [PaneSpec(path=path, command=window.command)]

    panes = []
    for position, pane in enumerate(window.panes):
        pane_path = expand_path(pane.path) or path
        if position == 0 and pane_path != path:
            logger.warning(
                "First pane path differs from window path; using window path",
                window=name,
                pane_path=pane_path,
                window_path=path,
            )
            pane_path = path
        panes.append(pane.model_copy(update={"path": pane_path}))
    return panes


def _normalize_window(window: WindowSpec, root: str, position: int) -> WindowSpec:
    path = expand_path(window.path) or root
    name = window.name or infer_name_from_path(path) or f"window-{position}"
    return window.model_copy(
        update={
            "name": name,
            "path": path,
            "panes": _normalize_panes(window, name, path),
        }
    )


def normalize_workspace(workspace: WorkspaceSpec) -> WorkspaceSpec:
    """Expand paths, inherit session roots, and default window names and panes.

    Returns a new workspace; the input is left untouched.
    """
    sessions = []
    for session in workspace.sessions:
        root = expand_path(session.root)
        windows = [
            _normalize_window(window, root, position)
            for position, window in enumerate(session.windows)
        ]
        sessions.append(session.model_copy(update={"root": root, "windows": windows}))
    return WorkspaceSpec(sessions=sessions)


def load_workspace(path: str | Path) -> WorkspaceSpec:
    """Load, normalize and validate a manifest.

    Raises:
        ManifestError: the file cannot be read or decoded
        ManifestValidationError: every structural problem found, at once
    """
    manifest_path = Path(expand_path(str(path)))
    data = read_manifest(manifest_path)
    workspace = normalize_workspace(decode_workspace(data))

    errors = validate_workspace(workspace)
    if errors:
        raise ManifestValidationError(errors, context={"path": str(manifest_path)})

    logger.debug(
        "Workspace loaded",
        path=str(manifest_path),
        sessions=workspace.session_names(),
    )
    return workspace


__all__ = [
    "SUPPORTED_EXTENSIONS",
    "decode_workspace",
    "expand_path",
    "load_workspace",
    "normalize_workspace",
    "read_manifest",
]
