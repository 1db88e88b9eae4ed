"""Locating workspace manifests by name or path."""

from pathlib import Path

from ..utils.logging import LogContext, ManifestNotFoundError, get_logger
from .loader import SUPPORTED_EXTENSIONS, expand_path

logger = get_logger(__name__, LogContext.MANIFEST)

LOCAL_MANIFEST_STEM = ".hetki"
DEFAULT_EXTENSION = ".yaml"
DEFAULT_CONFIG_DIR = "~/.config/hetki"


def has_valid_extension(name: str) -> bool:
    return Path(name).suffix.lower() in SUPPORTED_EXTENSIONS


def scan_workspaces(directory: str | Path) -> dict[str, Path]:
    """Map workspace names to manifest paths found directly under ``directory``.

    A missing directory yields an empty mapping.
    """
    root = Path(expand_path(str(directory)))
    if not root.is_dir():
        return {}

    workspaces: dict[str, Path] = {}
    for entry in sorted(root.iterdir()):
        if entry.is_file() and has_valid_extension(entry.name):
            workspaces.setdefault(entry.stem, entry)
    return workspaces


class WorkspaceResolver:
    """Resolves a user argument to an absolute manifest path.

    Resolution order:
    1. Empty argument: ``.hetki.yaml``, ``.hetki.yml``, ``.hetki.json`` in the
       current directory.
    2. Anything that looks like a path: expanded and checked for existence.
    3. A bare name: a file of that name in the current directory, then
       ``<config_dir>/workspaces/<name>{.yaml,.yml,.json}``.
    """

    def __init__(self, config_dir: str | Path = DEFAULT_CONFIG_DIR, cwd: Path | None = None):
        """Initialize resolver.

        Args:
            config_dir: Configuration directory holding ``workspaces/``
            cwd: Directory used for local lookups (defaults to the process cwd)
        """
        self.config_dir = Path(expand_path(str(config_dir)))
        self._cwd = cwd

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    @property
    def workspaces_dir(self) -> Path:
        return self.config_dir / "workspaces"

    def resolve(self, name_or_path: str | None) -> Path:
        """Return the absolute manifest path for ``name_or_path``.

        Raises:
            ManifestNotFoundError: nothing matched
        """
        if not name_or_path:
            return self._find_local_workspace()

        if self.is_path(name_or_path):
            return self._resolve_as_path(name_or_path)

        return self._find_named_workspace(name_or_path)

    def named_path(self, name: str) -> Path:
        """Where the named workspace lives (or would live) under the config dir."""
        if not has_valid_extension(name):
            name = name + DEFAULT_EXTENSION
        return self.workspaces_dir / name

    def local_path(self) -> Path:
        """Default location of the local workspace in the current directory."""
        return self.cwd / (LOCAL_MANIFEST_STEM + DEFAULT_EXTENSION)

    @staticmethod
    def is_path(value: str) -> bool:
        return "/" in value or "\\" in value or Path(value).is_absolute()

    def _resolve_as_path(self, value: str) -> Path:
        path = Path(expand_path(value))
        if not path.is_absolute():
            path = self.cwd / path
        if not path.exists():
            raise ManifestNotFoundError(
                f"workspace file not found: {path}\n"
                "Hint: Check the path or use a workspace name instead",
                context={"path": str(path)},
            )
        return path.resolve()

    def _find_named_workspace(self, name: str) -> Path:
        local = self.cwd / name
        if local.is_file():
            logger.debug("Resolved workspace in current directory", path=str(local))
            return local.resolve()

        for ext in SUPPORTED_EXTENSIONS:
            candidate = self.workspaces_dir / f"{name}{ext}"
            if candidate.is_file():
                logger.debug("Resolved named workspace", path=str(candidate))
                return candidate.resolve()

        raise ManifestNotFoundError(
            f"named workspace not found: {name}\n"
            f"Hint: List available workspaces with 'hetki list' or create "
            f"{self.named_path(name)}",
            context={"name": name},
        )

    def _find_local_workspace(self) -> Path:
        for ext in SUPPORTED_EXTENSIONS:
            candidate = self.cwd / f"{LOCAL_MANIFEST_STEM}{ext}"
            if candidate.is_file():
                logger.debug("Resolved local workspace", path=str(candidate))
                return candidate.resolve()

        raise ManifestNotFoundError(
            "no local workspace found (.hetki.{yaml,yml,json})\n"
            "Hint: Create one in this directory or specify a workspace name"
        )
