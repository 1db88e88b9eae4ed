"""Configuration management module."""

from .loader import (
    HetkiConfig,
    config_search_paths,
    find_config_file,
    load_config,
    save_config,
)

__all__ = [
    "HetkiConfig",
    "config_search_paths",
    "find_config_file",
    "load_config",
    "save_config",
]
