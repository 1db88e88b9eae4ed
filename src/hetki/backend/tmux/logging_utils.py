"""Logging utilities for tmux operations."""

import logging
from typing import Any

# Create tmux logger
tmux_logger = logging.getLogger("hetki.backend.tmux")


def log_query(session_count: int, pane_base_index: int, window_base_index: int) -> None:
    """Log an inventory query result."""
    message = (
        f"Inventory queried - sessions: {session_count} "
        f"(base-index: {window_base_index}, pane-base-index: {pane_base_index})"
    )
    tmux_logger.debug(message)


def log_query_failure(stderr: str) -> None:
    """Log an inventory query that failed and is treated as an empty server."""
    message = "Inventory query failed, treating server as empty"
    if stderr:
        message += f" - {stderr}"
    tmux_logger.info(message)


def log_batch_operation(command_count: int, status: str, context: dict[str, Any] | None = None) -> None:
    """Log a scripted batch."""
    message = f"Batch {status} - commands: {command_count}"
    if context:
        message += f" - {context}"

    if status == "error":
        tmux_logger.error(message)
    else:
        tmux_logger.info(message)


def log_server_recovery(first_command: list[str]) -> None:
    """Log the server-start recovery path."""
    message = f"No tmux server running, starting it with: {' '.join(first_command)}"
    tmux_logger.info(message)


def log_environment_update(session_name: str, variable: str, value: str) -> None:
    """Log a per-session environment update."""
    message = f"Session environment set - {session_name} ({variable}={value})"
    tmux_logger.debug(message)


def log_attach(target: str, inside_client: bool) -> None:
    """Log an attach or switch."""
    verb = "Switching client" if inside_client else "Attaching"
    tmux_logger.info(f"{verb} - {target}")
