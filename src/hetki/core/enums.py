"""Shared enums for hetki."""

from enum import Enum, Flag


class CompareMode(Flag):
    """Window fields that take part in equality when diffing.

    ``NAME`` and ``PATH`` form the window key, so they always agree for two
    windows being compared; they are kept as flags so callers can express
    fully explicit modes.
    """

    NAME = 1
    PATH = 2
    INDEX = 4
    LAYOUT = 8
    COMMAND = 16
    PANES = 32

    STRICT = NAME | PATH | INDEX | LAYOUT | COMMAND | PANES
    # tmux reports neither layout names nor manifest indices back
    DEFAULT = NAME | PATH | COMMAND | PANES

    @classmethod
    def from_string(cls, value: str) -> "CompareMode":
        """Parse a mode name (``default`` or ``strict``)."""
        try:
            return {"default": cls.DEFAULT, "strict": cls.STRICT}[value.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown compare mode: {value!r} (use 'default' or 'strict')"
            ) from None


class SplitDirection(Enum):
    """Direction of a pane split."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class StrategyName(Enum):
    """Available planning strategies."""

    MERGE = "merge"
    FORCE = "force"
