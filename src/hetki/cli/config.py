"""Configuration management commands."""

import click

from ..config.loader import (
    ENV_PREFIX,
    HetkiConfig,
    config_search_paths,
    find_config_file,
    load_config_file,
    save_config,
)
from .utils import error_handler, format_output, get_config, handle_error, quiet_echo


@click.group()
def config() -> None:
    """Manage configuration settings."""
    pass


@config.command()
@click.pass_context
@error_handler
def show(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = get_config(ctx)
    format_output(ctx, {"configuration": config_obj.model_dump()})


@config.command()
@click.argument("key")
@click.pass_context
@error_handler
def get(ctx: click.Context, key: str) -> None:
    """Get a configuration value."""
    config_obj = get_config(ctx)
    if key not in HetkiConfig.model_fields:
        handle_error(f"Unknown configuration key: {key}")
    format_output(ctx, {key: getattr(config_obj, key)})


@config.command()
@click.pass_context
@error_handler
def validate(ctx: click.Context) -> None:
    """Validate current configuration."""
    get_config(ctx)
    quiet_echo(ctx, "Configuration is valid")


@config.command()
@click.option("--path", help="Custom path for config file")
@click.pass_context
@error_handler
def init(ctx: click.Context, path: str | None) -> None:
    """Initialize configuration file with defaults."""
    saved_path = save_config(HetkiConfig(), path)
    quiet_echo(ctx, f"Configuration initialized at: {saved_path}")


@config.command()
@click.pass_context
@error_handler
def profiles(ctx: click.Context) -> None:
    """List available configuration profiles."""
    config_path = ctx.obj.get("config") if ctx.obj else None
    config_file = find_config_file(config_path)

    if not config_file:
        quiet_echo(ctx, "No configuration file found. Use 'config init' to create one.")
        return

    config_data = load_config_file(config_file)
    if not config_data.get("profiles"):
        quiet_echo(ctx, "No profiles defined in configuration file.")
        return

    format_output(ctx, {"profiles": list(config_data["profiles"].keys())})


@config.command()
def locations() -> None:
    """Show configuration file search locations."""
    click.echo("Configuration file search locations (in order):")
    for i, location in enumerate(config_search_paths(), 1):
        click.echo(f"  {i}. {location}")

    click.echo(f"\nEnvironment variables ({ENV_PREFIX}*):")
    for key in HetkiConfig.model_fields:
        if key == "workspace_env_var":
            continue
        click.echo(f"  {ENV_PREFIX}{key.upper()}")
