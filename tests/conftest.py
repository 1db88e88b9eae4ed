"""
Pytest configuration and shared fixtures for hetki tests.
"""

import logging
import shlex
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest
import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hetki.backend.tmux.client import CommandResult, TmuxClient  # noqa: E402
from hetki.backend.tmux.query import INVENTORY_FIELDS  # noqa: E402
from hetki.core.diff import command_name  # noqa: E402
from hetki.utils.logging import ServerNotRunningError, TmuxCommandError  # noqa: E402

NO_SERVER = "no server running on /tmp/tmux-1000/default"


@dataclass
class FakePane:
    path: str
    command: str = "zsh"


@dataclass
class FakeWindow:
    name: str
    index: int
    panes: list[FakePane] = field(default_factory=list)
    layout: str = ""
    zoomed: int | None = None


@dataclass
class FakeSession:
    name: str
    id: int
    windows: list[FakeWindow] = field(default_factory=list)
    environment: dict[str, str] = field(default_factory=dict)


class FakeTmuxClient(TmuxClient):
    """In-memory tmux server that interprets the commands hetki generates."""

    def __init__(
        self,
        running: bool = False,
        base_index: int = 0,
        pane_base_index: int = 0,
        default_path: str = "/home/user",
    ):
        # No binary lookup and no libtmux server
        self.binary = "tmux"
        self.socket_name = None
        self.socket_path = None
        self.running = running
        self.query_fails = False
        self.base_index = base_index
        self.pane_base_index = pane_base_index
        self.default_path = default_path
        self.sessions: dict[str, FakeSession] = {}
        self.calls: list[list[str]] = []
        self.scripts: list[str] = []
        self.attached: list[list[str]] = []
        self._next_id = 0

    # -- helpers used by tests -------------------------------------------------

    def add_session(self, name: str, windows: list[tuple[str, list[tuple[str, str]]]]) -> None:
        """Seed a session: ``[(window, [(path, command), ...]), ...]``."""
        self.running = True
        session = FakeSession(name=name, id=self._new_id())
        for offset, (window_name, panes) in enumerate(windows):
            session.windows.append(
                FakeWindow(
                    name=window_name,
                    index=self.base_index + offset,
                    panes=[FakePane(path=p, command=c) for p, c in panes],
                )
            )
        self.sessions[name] = session

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id - 1

    # -- TmuxClient interface --------------------------------------------------

    def run(self, *args: str) -> CommandResult:
        args = list(args)
        self.calls.append(args)
        if args and args[0] == "start-server":
            return self._inventory(args)
        try:
            self._execute(args)
        except TmuxCommandError as e:
            return CommandResult(args=args, returncode=1, stderr=[e.stderr])
        return CommandResult(args=args, returncode=0)

    def source(self, script: str) -> None:
        self.scripts.append(script)
        if not self.running:
            raise ServerNotRunningError(
                "tmux source - failed", args=["source", "-"], returncode=1,
                stderr=NO_SERVER, script=script,
            )
        for line in script.splitlines():
            if line.strip():
                self._execute(shlex.split(line))

    def interactive(self, *args: str) -> None:
        self.attached.append(list(args))
        target = args[-1].split(":", 1)[0]
        if target not in self.sessions:
            raise TmuxCommandError(
                f"can't find session: {target}", args=list(args), returncode=1,
                stderr=f"can't find session: {target}",
            )

    # -- command interpretation ------------------------------------------------

    def _inventory(self, args: list[str]) -> CommandResult:
        if self.query_fails:
            return CommandResult(args=args, returncode=1, stderr=[NO_SERVER])
        stdout = [str(self.base_index), str(self.pane_base_index)]
        if not self.sessions:
            # start-server exits again straight away when there is nothing to keep
            self.running = False
            return CommandResult(args=args, returncode=0, stdout=stdout)
        fields = args[-1].split("|")
        # a trailing #{NAME} beyond the pane fields reads the session environment
        env_var = fields[-1][2:-1] if len(fields) > len(INVENTORY_FIELDS) else None
        for session in self.sessions.values():
            for window in session.windows:
                for position, pane in enumerate(window.panes):
                    row = [
                        f"${session.id}",
                        session.name,
                        window.name,
                        str(window.index),
                        "0",
                        str(position + self.pane_base_index),
                        "0",
                        pane.path,
                        pane.command,
                    ]
                    if env_var:
                        row.append(session.environment.get(env_var, ""))
                    assert len(row) == len(fields)
                    stdout.append("|".join(row))
        return CommandResult(args=args, returncode=0, stdout=stdout)

    def _fail(self, args: list[str], message: str) -> None:
        raise TmuxCommandError(message, args=args, returncode=1, stderr=message)

    @staticmethod
    def _option(args: list[str], flag: str) -> str | None:
        if flag in args:
            return args[args.index(flag) + 1]
        return None

    def _window(self, args: list[str], target: str) -> tuple[FakeSession, FakeWindow]:
        session_name, _, window_ref = target.partition(":")
        session = self.sessions.get(session_name)
        if session is None:
            self._fail(args, f"can't find session: {session_name}")
        # like tmux, the pane part starts at the first dot after the colon
        window_ref = window_ref.split(".", 1)[0]
        for window in session.windows:
            if str(window.index) == window_ref:
                return session, window
        for window in session.windows:
            if window.name == window_ref:
                return session, window
        self._fail(args, f"can't find window: {window_ref}")

    def _pane(self, args: list[str], target: str) -> FakePane:
        _, window = self._window(args, target)
        position = int(target.rsplit(".", 1)[1]) - self.pane_base_index
        if not 0 <= position < len(window.panes):
            self._fail(args, f"can't find pane: {target}")
        return window.panes[position]

    def _execute(self, args: list[str]) -> None:
        command = args[0]
        if command == "new-session":
            name = self._option(args, "-s")
            if name in self.sessions:
                self._fail(args, f"duplicate session: {name}")
            self.running = True
            path = self._option(args, "-c") or self.default_path
            window = FakeWindow(
                name=self._option(args, "-n") or "zsh",
                index=self.base_index,
                panes=[FakePane(path=path)],
            )
            self.sessions[name] = FakeSession(name=name, id=self._new_id(), windows=[window])
        elif command == "new-window":
            session_name = self._option(args, "-t").rstrip(":")
            session = self.sessions.get(session_name)
            if session is None:
                self._fail(args, f"can't find session: {session_name}")
            used = {w.index for w in session.windows}
            index = self.base_index
            while index in used:
                index += 1
            session.windows.append(
                FakeWindow(
                    name=self._option(args, "-n"),
                    index=index,
                    panes=[FakePane(path=self._option(args, "-c") or self.default_path)],
                )
            )
            session.windows.sort(key=lambda w: w.index)
        elif command == "split-window":
            _, window = self._window(args, self._option(args, "-t"))
            window.panes.append(FakePane(path=self._option(args, "-c") or self.default_path))
        elif command == "send-keys":
            pane = self._pane(args, self._option(args, "-t"))
            pane.command = command_name(args[3])
        elif command == "select-layout":
            _, window = self._window(args, self._option(args, "-t"))
            window.layout = args[-1]
        elif command == "resize-pane":
            target = self._option(args, "-t")
            _, window = self._window(args, target)
            self._pane(args, target)
            window.zoomed = int(target.rsplit(".", 1)[1])
        elif command == "kill-session":
            name = self._option(args, "-t")
            if self.sessions.pop(name, None) is None:
                self._fail(args, f"can't find session: {name}")
        elif command == "kill-window":
            session, window = self._window(args, self._option(args, "-t"))
            session.windows.remove(window)
            if not session.windows:
                del self.sessions[session.name]
        elif command == "set-environment":
            session = self.sessions.get(self._option(args, "-t"))
            if session is None:
                self._fail(args, "can't find session")
            session.environment[args[-2]] = args[-1]
        else:
            self._fail(args, f"unknown command: {command}")


@pytest.fixture
def fake_tmux() -> FakeTmuxClient:
    """A fresh fake tmux server with nothing running."""
    return FakeTmuxClient()


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Write a manifest (dict or raw text) and return its path."""

    def _write(data, name: str = "workspace.yaml") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from the user's config, tmux client and log handlers."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("TMUX", raising=False)
    for var in [
        "HETKI_BACKEND",
        "HETKI_SOCKET_NAME",
        "HETKI_CONFIG_DIR",
        "HETKI_DEFAULT_STRATEGY",
        "HETKI_COMPARE_MODE",
        "HETKI_LOG_LEVEL",
        "HETKI_LOG_FILE",
        "HETKI_STRUCTURED_LOGGING",
    ]:
        monkeypatch.delenv(var, raising=False)

    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level

    yield

    # drop handlers installed by setup_logging during the test
    for handler in root_logger.handlers[:]:
        if handler not in handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
