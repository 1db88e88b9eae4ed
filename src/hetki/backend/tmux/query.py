"""
Inventory query: what is currently running in tmux.

One tmux invocation chains four commands so the answer is consistent:

    start-server ; show-options -gv base-index ; show-options -gv pane-base-index ;
    list-panes -a -F <INVENTORY_FORMAT>|#{<workspace variable>}

The output is two lines with the base indices followed by one pipe-delimited
row per pane. The last field of a row is the session's recorded workspace
path, empty for sessions hetki did not build.
"""

import re
from dataclasses import dataclass

from ...core.model import ActiveContext, Pane, State, Window, new_state

INVENTORY_FIELDS = (
    "session_id",
    "session_name",
    "window_name",
    "window_index",
    "window_active",
    "pane_index",
    "pane_active",
    "pane_current_path",
    "pane_current_command",
)

INVENTORY_FORMAT = "|".join(f"#{{{name}}}" for name in INVENTORY_FIELDS)

# session_id .. pane_index; trailing fields may be absent on some tmux versions
MIN_FIELDS = 6

_INTEGER_LINE = re.compile(r"^\d+$")


def inventory_format(workspace_env_var: str | None = None) -> str:
    """Row format; with ``workspace_env_var`` a 10th field carries its value.

    tmux expands ``#{NAME}`` from the session environment when no format
    variable of that name exists.
    """
    if not workspace_env_var:
        return INVENTORY_FORMAT
    return f"{INVENTORY_FORMAT}|#{{{workspace_env_var}}}"


def inventory_args(workspace_env_var: str | None = None) -> list[str]:
    return [
        "start-server",
        ";",
        "show-options",
        "-gv",
        "base-index",
        ";",
        "show-options",
        "-gv",
        "pane-base-index",
        ";",
        "list-panes",
        "-a",
        "-F",
        inventory_format(workspace_env_var),
    ]


@dataclass(frozen=True)
class InventoryRow:
    """One pane as reported by ``list-panes``."""

    session_id: str
    session_name: str
    window_name: str
    window_index: str
    window_active: bool
    pane_index: str
    pane_active: bool
    pane_path: str
    pane_command: str
    workspace_path: str = ""

    @classmethod
    def from_line(cls, line: str) -> "InventoryRow | None":
        """Parse a row; ``None`` when it has fewer than ``MIN_FIELDS`` fields."""
        parts = line.split("|")
        if len(parts) < MIN_FIELDS:
            return None
        parts += [""] * (len(INVENTORY_FIELDS) + 1 - len(parts))
        return cls(
            session_id=parts[0],
            session_name=parts[1],
            window_name=parts[2],
            window_index=parts[3],
            window_active=parts[4] == "1",
            pane_index=parts[5],
            pane_active=parts[6] == "1",
            pane_path=parts[7],
            pane_command=parts[8],
            workspace_path="|".join(parts[9:]),
        )


def current_session_id(tmux_env: str | None) -> str | None:
    """Session id (``$N``) of the invoking client from ``$TMUX``.

    ``$TMUX`` looks like ``/tmp/tmux-1000/default,4242,3``; the last field is
    the session number.
    """
    if not tmux_env or not tmux_env.strip():
        return None
    parts = tmux_env.strip().split(",")
    if len(parts) < 3 or not parts[2]:
        return None
    return f"${parts[2]}"


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def parse_inventory(output: str, tmux_env: str | None = None) -> State:
    """Build the actual ``State`` from the inventory output.

    Panes are grouped by ``(session, window name)`` in first-seen order. Rows
    that are too short are skipped.
    """
    state = new_state()
    if not output.strip():
        return state

    lines = [line.strip() for line in output.splitlines()]
    header: list[int] = []
    while lines and len(header) < 2 and _INTEGER_LINE.match(lines[0]):
        header.append(int(lines.pop(0)))
    if header:
        state.window_base_index = header[0]
    if len(header) > 1:
        state.pane_base_index = header[1]

    active_id = current_session_id(tmux_env)

    for line in lines:
        if not line:
            continue
        row = InventoryRow.from_line(line)
        if row is None:
            continue

        session = state.add_session(row.session_name)
        if row.workspace_path and not session.workspace_path:
            session.workspace_path = row.workspace_path

        window = session.window(row.window_name)
        if window is None:
            window = Window(
                name=row.window_name,
                path=row.pane_path,
                index=_to_int(row.window_index),
            )
            session.windows.append(window)
        window.panes.append(Pane(path=row.pane_path, command=row.pane_command))

        if (
            active_id is not None
            and row.session_id == active_id
            and row.window_active
            and row.pane_active
        ):
            state.active = ActiveContext(
                session=row.session_name,
                window=row.window_name,
                pane=len(window.panes) - 1,
                path=row.pane_path,
            )

    return state
