"""Abstract base class for terminal multiplexer backends.

The planner and executor never name a multiplexer directly; the reconciler
talks to whichever ``Backend`` the registry hands out.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..core.actions import Action
from ..core.model import State


class Backend(ABC):
    """Capability set every multiplexer binding provides."""

    name: str = ""

    @abstractmethod
    def query_state(self) -> State:
        """Observe the running multiplexer.

        A server that is not running is reported as an empty state, not as an
        error, so the first run of a workspace plans a full creation.
        """

    @abstractmethod
    def apply(
        self,
        actions: Sequence[Action],
        sessions: Sequence[str] = (),
        workspace_path: str | None = None,
    ) -> None:
        """Apply actions atomically, then tag ``sessions`` with the manifest path."""

    @abstractmethod
    def dry_run(self, actions: Sequence[Action]) -> list[str]:
        """Render the commands ``apply`` would run, one per action."""

    @abstractmethod
    def attach(self, session: str) -> None:
        """Attach to ``session``, or switch to it from inside a client."""

    @abstractmethod
    def switch(self, target: str) -> None:
        """Switch to ``session``, ``session:window`` or ``session:window.pane``."""
