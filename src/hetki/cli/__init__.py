"""Command-line interface for hetki."""

from .main import main

__all__ = ["main"]
