"""
Reconciliation pipeline.

resolve -> load -> desired state -> observe -> diff -> plan -> apply -> attach

Every stage is synchronous; the only blocking points are the backend calls.
Errors propagate unchanged to the caller.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ..backend import Backend, get_backend
from ..manifest import WorkspaceResolver, load_workspace, workspace_to_state
from ..manifest.schema import WorkspaceSpec
from ..utils.logging import LogContext, get_logger, log_performance
from .actions import Plan
from .diff import Diff, compare
from .enums import CompareMode, StrategyName
from .model import State
from .planner import get_strategy

logger = get_logger(__name__, LogContext.RECONCILER)


@dataclass
class PlanResult:
    """Everything computed before anything is applied."""

    path: Path
    workspace: WorkspaceSpec
    desired: State
    actual: State
    diff: Diff
    plan: Plan

    @property
    def sessions(self) -> list[str]:
        return self.workspace.session_names()


@dataclass
class StartResult:
    """Outcome of ``Reconciler.start``."""

    path: Path
    sessions: list[str]
    plan: Plan
    dry_run: bool = False
    commands: list[str] = field(default_factory=list)
    applied: bool = False
    attached: str | None = None


class Reconciler:
    """Brings the multiplexer in line with a workspace manifest."""

    def __init__(
        self,
        backend: Backend,
        resolver: WorkspaceResolver | None = None,
        compare_mode: CompareMode = CompareMode.DEFAULT,
        default_strategy: StrategyName = StrategyName.MERGE,
    ):
        self.backend = backend
        self.resolver = resolver or WorkspaceResolver()
        self.compare_mode = compare_mode
        self.default_strategy = default_strategy

    @classmethod
    def from_config(cls, config) -> "Reconciler":
        """Build a reconciler from a ``HetkiConfig``."""
        backend = get_backend(
            config.backend,
            socket_name=config.socket_name,
            workspace_env_var=config.workspace_env_var,
        )
        return cls(
            backend=backend,
            resolver=WorkspaceResolver(config.config_dir),
            compare_mode=config.compare_flags(),
            default_strategy=StrategyName(config.default_strategy),
        )

    def plan(
        self,
        name_or_path: str | None = None,
        force: bool = False,
        strict: bool = False,
    ) -> PlanResult:
        """Compute the plan for a workspace without applying it."""
        path = self.resolver.resolve(name_or_path)
        workspace = load_workspace(path)
        desired = workspace_to_state(workspace)
        actual = self.backend.query_state()

        mode = CompareMode.STRICT if strict else self.compare_mode
        diff = compare(desired, actual, mode)

        strategy_name = StrategyName.FORCE if force else self.default_strategy
        strategy = get_strategy(strategy_name, pane_base_index=actual.pane_base_index)
        plan = strategy.plan(diff)

        logger.info(
            "Workspace planned",
            workspace=str(path),
            strategy=strategy_name.value,
            action_count=len(plan),
        )
        return PlanResult(
            path=path,
            workspace=workspace,
            desired=desired,
            actual=actual,
            diff=diff,
            plan=plan,
        )

    @log_performance(LogContext.RECONCILER)
    def start(
        self,
        name_or_path: str | None = None,
        dry_run: bool = False,
        force: bool = False,
        strict: bool = False,
        attach: bool = True,
    ) -> StartResult:
        """Reconcile the workspace and attach to its first session.

        With ``dry_run`` the rendered commands are returned and nothing is
        applied or attached.
        """
        planned = self.plan(name_or_path, force=force, strict=strict)
        result = StartResult(path=planned.path, sessions=planned.sessions, plan=planned.plan)

        if dry_run:
            result.dry_run = True
            result.commands = self.backend.dry_run(planned.plan.actions)
            return result

        if not planned.plan.is_empty():
            self.backend.apply(
                planned.plan.actions,
                sessions=planned.sessions,
                workspace_path=str(planned.path),
            )
            result.applied = True
        else:
            logger.info("Workspace already up to date", workspace=str(planned.path))

        first = planned.workspace.first_session
        if attach and first:
            self.backend.attach(first)
            result.attached = first

        return result
