"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.enums import CompareMode, StrategyName
from ..utils.logging import ConfigurationError, LogLevel

ENV_PREFIX = "HETKI_"
CONFIG_FILE_NAMES = ("config.yaml", "config.yml")


class HetkiConfig(BaseModel):
    """Configuration model for hetki."""

    # Backend
    backend: str = Field(default="tmux", description="Multiplexer backend name")
    socket_name: str | None = Field(
        default=None, description="tmux socket name (-L); default server when unset"
    )
    workspace_env_var: str = Field(
        default="HETKI_WORKSPACE_PATH",
        description="Session environment variable recording the manifest path",
    )

    # Workspaces
    config_dir: str = Field(
        default="~/.config/hetki",
        description="Directory holding named workspaces under workspaces/",
    )

    # Reconciliation
    default_strategy: str = Field(
        default=StrategyName.MERGE.value, description="Planning strategy: merge or force"
    )
    compare_mode: str = Field(
        default="default", description="Window comparison: default or strict"
    )

    # Logging
    log_level: str = Field(default=LogLevel.WARNING.value, description="Logging level")
    log_file: str | None = Field(default=None, description="Log file path")
    structured_logging: bool = Field(
        default=False, description="Emit JSON log records"
    )

    @field_validator("default_strategy")
    @classmethod
    def _check_strategy(cls, value: str) -> str:
        value = value.lower()
        if value not in {s.value for s in StrategyName}:
            raise ValueError("must be 'merge' or 'force'")
        return value

    @field_validator("compare_mode")
    @classmethod
    def _check_compare_mode(cls, value: str) -> str:
        CompareMode.from_string(value)
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {level.value for level in LogLevel}:
            raise ValueError(f"unknown log level {value!r}")
        return value

    def compare_flags(self) -> CompareMode:
        return CompareMode.from_string(self.compare_mode)


def config_search_paths() -> list[Path]:
    """Standard locations, most specific first."""
    paths = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        paths.append(Path(xdg) / "hetki" / "config.yaml")
    base = Path.home() / ".config" / "hetki"
    paths.extend(base / name for name in CONFIG_FILE_NAMES)
    return paths


def find_config_file(custom_path: str | None = None) -> Path | None:
    """Find configuration file in standard locations."""
    if custom_path:
        path = Path(custom_path).expanduser()
        if path.exists():
            return path
        raise ConfigurationError(f"Config file not found: {custom_path}")

    for path in config_search_paths():
        if path.exists():
            return path

    return None


def load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data


def load_env_vars() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    env_mappings = {
        f"{ENV_PREFIX}BACKEND": "backend",
        f"{ENV_PREFIX}SOCKET_NAME": "socket_name",
        f"{ENV_PREFIX}CONFIG_DIR": "config_dir",
        f"{ENV_PREFIX}DEFAULT_STRATEGY": "default_strategy",
        f"{ENV_PREFIX}COMPARE_MODE": "compare_mode",
        f"{ENV_PREFIX}LOG_LEVEL": "log_level",
        f"{ENV_PREFIX}LOG_FILE": "log_file",
        f"{ENV_PREFIX}STRUCTURED_LOGGING": "structured_logging",
    }

    for env_var, config_key in env_mappings.items():
        if env_var in os.environ:
            env_value = os.environ[env_var]
            if config_key == "structured_logging":
                config[config_key] = env_value.lower() in ("true", "1", "yes", "on")
            else:
                config[config_key] = env_value

    return config


def load_config(
    config_path: str | None = None,
    profile: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> HetkiConfig:
    """Load configuration from file and environment variables.

    Precedence order (highest to lowest):
    1. CLI flag overrides
    2. Environment variables
    3. Configuration file (with profile support)
    4. Default values
    """
    config_data: dict[str, Any] = {}

    config_file = find_config_file(config_path)
    if config_file:
        file_data = load_config_file(config_file)
        config_data.update({k: v for k, v in file_data.items() if k != "profiles"})

        profiles = file_data.get("profiles") or {}
        if profile and profile in profiles:
            config_data.update(profiles[profile])

    config_data.update(load_env_vars())

    if cli_overrides:
        config_data.update({k: v for k, v in cli_overrides.items() if v is not None})

    try:
        return HetkiConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def save_config(config: HetkiConfig, config_path: str | None = None) -> Path:
    """Save configuration to file."""
    if config_path:
        path = Path(config_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
    else:
        config_dir = Path.home() / ".config" / "hetki"
        config_dir.mkdir(parents=True, exist_ok=True)
        path = config_dir / "config.yaml"

    config_dict = config.model_dump()
    with open(path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=True)

    return path
