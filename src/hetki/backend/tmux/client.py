"""tmux process invocation.

Captured, non-interactive commands go through ``libtmux`` (which also takes
care of the ``-L``/``-S`` socket arguments). Two things libtmux cannot do are
done with ``subprocess`` directly: feeding a script on stdin to ``source -``
and running ``attach-session`` with the terminal attached.
"""

import shutil
import subprocess  # nosec B404
from dataclasses import dataclass, field

import libtmux

from ...utils.logging import (
    BackendNotFoundError,
    LogContext,
    ServerNotRunningError,
    TmuxCommandError,
    get_logger,
)

logger = get_logger(__name__, LogContext.BACKEND)

SERVER_NOT_RUNNING_MARKERS = ("no server running", "error connecting to")


def is_server_not_running(stderr: str) -> bool:
    return any(marker in stderr for marker in SERVER_NOT_RUNNING_MARKERS)


@dataclass
class CommandResult:
    """Outcome of a captured tmux command."""

    args: list[str]
    returncode: int
    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return "\n".join(self.stdout)

    @property
    def error_output(self) -> str:
        return "\n".join(self.stderr)


def _command_error(
    args: list[str], returncode: int, stderr: str, script: str | None = None
) -> TmuxCommandError:
    error_cls = ServerNotRunningError if is_server_not_running(stderr) else TmuxCommandError
    message = f"tmux {' '.join(args)} failed (exit {returncode})"
    if stderr:
        message += f": {stderr}"
    return error_cls(message, args=args, returncode=returncode, stderr=stderr, script=script)


class TmuxClient:
    """Runs tmux commands against one server (default socket unless given)."""

    def __init__(self, socket_name: str | None = None, socket_path: str | None = None):
        """Initialize tmux client.

        Args:
            socket_name: tmux ``-L`` socket name
            socket_path: tmux ``-S`` socket path

        Raises:
            BackendNotFoundError: tmux is not on PATH
        """
        binary = shutil.which("tmux")
        if binary is None:
            raise BackendNotFoundError("tmux not found in PATH")
        self.binary = binary
        self.socket_name = socket_name
        self.socket_path = socket_path
        self._server = libtmux.Server(socket_name=socket_name, socket_path=socket_path)

    def _base_command(self) -> list[str]:
        command = [self.binary]
        if self.socket_name:
            command += ["-L", self.socket_name]
        if self.socket_path:
            command += ["-S", self.socket_path]
        return command

    def run(self, *args: str) -> CommandResult:
        """Run a captured command. Failures are returned, not raised."""
        proc = self._server.cmd(*args)
        result = CommandResult(
            args=list(args),
            returncode=proc.returncode if proc.returncode is not None else 0,
            stdout=list(proc.stdout or []),
            stderr=list(proc.stderr or []),
        )
        logger.debug("tmux command run", argv=list(args), returncode=result.returncode)
        return result

    def run_checked(self, *args: str) -> CommandResult:
        """Run a captured command, raising ``TmuxCommandError`` on failure."""
        result = self.run(*args)
        if not result.ok or result.stderr:
            raise _command_error(list(args), result.returncode, result.error_output)
        return result

    def source(self, script: str) -> None:
        """Feed ``script`` to ``tmux source -`` so the server applies it in one go.

        Raises:
            ServerNotRunningError: no server to talk to
            TmuxCommandError: any other failure; stderr and script are kept
        """
        proc = subprocess.run(  # nosec B603
            self._base_command() + ["source", "-"],
            input=script,
            capture_output=True,
            text=True,
        )
        stderr = (proc.stderr or "").strip()
        if proc.returncode != 0:
            raise _command_error(["source", "-"], proc.returncode, stderr, script=script)

    def interactive(self, *args: str) -> None:
        """Run a command attached to the caller's terminal (attach, switch)."""
        proc = subprocess.run(  # nosec B603
            self._base_command() + list(args),
            stderr=subprocess.PIPE,
            text=True,
        )
        if proc.returncode != 0:
            raise _command_error(list(args), proc.returncode, (proc.stderr or "").strip())
