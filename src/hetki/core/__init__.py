"""
Core reconciliation types: state model, diff, plan actions and strategies.

``hetki.core.reconciler`` ties them to a backend and is imported on its own,
since backends depend on this package.
"""

from .actions import Action, Plan
from .diff import Diff, compare
from .enums import CompareMode, SplitDirection, StrategyName
from .model import ActiveContext, Pane, Session, State, Window, key_of, new_state
from .planner import ForceStrategy, MergeStrategy, Strategy, get_strategy

__all__ = [
    "Action",
    "ActiveContext",
    "CompareMode",
    "Diff",
    "ForceStrategy",
    "MergeStrategy",
    "Pane",
    "Plan",
    "Session",
    "SplitDirection",
    "State",
    "Strategy",
    "StrategyName",
    "Window",
    "compare",
    "get_strategy",
    "key_of",
    "new_state",
]
