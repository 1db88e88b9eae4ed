"""Backend registry.

Populated once at import time (each binding registers itself) and read-only
afterwards.
"""

from collections.abc import Callable
from typing import Any

from ..utils.logging import BackendError
from .base import Backend

BackendFactory = Callable[..., Backend]

RESERVED_BACKENDS = ("zellij",)

_registry: dict[str, BackendFactory] = {}


def register_backend(name: str, factory: BackendFactory) -> None:
    """Register a backend factory under ``name``."""
    _registry[name] = factory


def available_backends() -> list[str]:
    return sorted(_registry)


def get_backend(name: str = "tmux", **options: Any) -> Backend:
    """Construct the backend registered as ``name``.

    Raises:
        BackendError: the name is unknown or reserved without an implementation
        BackendNotFoundError: the multiplexer binary is missing
    """
    factory = _registry.get(name)
    if factory is not None:
        return factory(**options)

    if name in RESERVED_BACKENDS:
        raise BackendError(f"backend {name!r} is reserved but not implemented")
    raise BackendError(
        f"unknown backend {name!r} (available: {', '.join(available_backends())})"
    )
