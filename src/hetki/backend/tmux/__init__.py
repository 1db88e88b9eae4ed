"""tmux backend."""

from ..registry import register_backend
from .backend import TmuxBackend
from .client import CommandResult, TmuxClient
from .executor import Executor, build_script
from .query import parse_inventory

register_backend("tmux", lambda **options: TmuxBackend(**options))

__all__ = [
    "CommandResult",
    "Executor",
    "TmuxBackend",
    "TmuxClient",
    "build_script",
    "parse_inventory",
]
