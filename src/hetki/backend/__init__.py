"""
Multiplexer backends.

Importing this package registers the built-in bindings. Only ``tmux`` is
implemented; ``zellij`` is a reserved name.
"""

from . import tmux  # noqa: F401  registers "tmux"
from .base import Backend
from .registry import available_backends, get_backend, register_backend

__all__ = ["Backend", "available_backends", "get_backend", "register_backend"]
