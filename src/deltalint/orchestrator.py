# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide what to lint, run the engine and report the verdict."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .config import DeltaLintConfig
from .discovery.filters import apply_filters
from .engine.base import LintEngine
from .invalidation import find_invalidation_triggers
from .models import LintFailure, LintSuccess
from .reporting.emit import ReportStatus, emit_report

if TYPE_CHECKING:
    from .cli.shared import CLILogger


class ChangeDetector(Protocol):
    """Source of the branch change set and manifest diff probe."""

    def changed_files(self, base_branch: str) -> list[str]: ...

    def diff_contains(self, base_branch: str, file_name: str, search_term: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class LintOptions:
    """Options parsed from the command line.

    Attributes:
        fix: Let the linter write automatic fixes.
        changed: Lint only files changed since the base branch.
        base_branch: Overrides the configured base branch when set.
    """

    fix: bool = False
    changed: bool = False
    base_branch: str | None = None


class RunMode(str, Enum):
    """Scope selected for a lint run."""

    FULL = "full"
    FILTERED = "filtered"
    NOOP = "noop"


class RunState(str, Enum):
    """Terminal state of a lint run."""

    REPORTED = "reported"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class LintPlan:
    """Targets chosen for a lint run and the reason for the choice."""

    mode: RunMode
    base_branch: str
    targets: tuple[str, ...] = ()
    triggers: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class LintRunReport:
    """Outcome of :meth:`LintOrchestrator.execute`."""

    plan: LintPlan
    state: RunState | None
    exit_code: int


class LintOrchestrator:
    """Incremental lint pipeline for a single repository."""

    def __init__(
        self,
        config: DeltaLintConfig,
        *,
        detector: ChangeDetector,
        engine: LintEngine,
        logger: CLILogger,
        root: Path,
    ) -> None:
        self._config = config
        self._detector = detector
        self._engine = engine
        self._logger = logger
        self._root = root

    def plan(self, options: LintOptions) -> LintPlan:
        """Resolve which paths to lint for ``options``.

        Without ``changed`` git is never queried and every source folder is
        linted. Otherwise a change to any trigger file widens the run to every
        source folder, and the filtered change set is linted.

        Args:
            options: Parsed command line options.

        Returns:
            LintPlan: Selected mode and targets.

        Raises:
            CommandError: If a git query fails.
        """

        base_branch = (options.base_branch or "").strip() or self._config.base_branch
        folders = tuple(self._config.source_folders)
        if not options.changed:
            return LintPlan(mode=RunMode.FULL, base_branch=base_branch, targets=folders)

        changed = self._detector.changed_files(base_branch)
        self._logger.debug(f"changed files count={len(changed)} base={base_branch}")
        triggers = find_invalidation_triggers(
            changed,
            base_branch=base_branch,
            probe=self._detector,
            triggers=self._config.triggers,
            linter_name=self._config.eslint.linter_name,
        )
        if triggers:
            return LintPlan(mode=RunMode.FULL, base_branch=base_branch, targets=folders, triggers=tuple(triggers))

        filtered = apply_filters(changed, self._config, self._root)
        if not filtered:
            return LintPlan(mode=RunMode.NOOP, base_branch=base_branch)
        return LintPlan(mode=RunMode.FILTERED, base_branch=base_branch, targets=tuple(filtered))

    def execute(self, options: LintOptions) -> LintRunReport:
        """Plan, lint and report.

        Args:
            options: Parsed command line options.

        Returns:
            LintRunReport: Plan, terminal state and process exit code. The
            state is ``None`` for a no-op run.

        Raises:
            CommandError: If change detection fails.
        """

        plan = self.plan(options)
        self._announce(plan)
        if plan.mode is RunMode.NOOP:
            return LintRunReport(plan=plan, state=None, exit_code=0)

        outcome = self._engine.lint(list(plan.targets), fix=options.fix)
        if isinstance(outcome, LintFailure):
            self._logger.fail(outcome.message)
            return LintRunReport(plan=plan, state=RunState.FAILED, exit_code=1)
        if not isinstance(outcome, LintSuccess):
            raise TypeError(f"Unexpected lint outcome: {outcome!r}")

        status = emit_report(outcome.result, self._logger)
        state = RunState.FAILED if status is ReportStatus.FAILED else RunState.REPORTED
        return LintRunReport(plan=plan, state=state, exit_code=status.exit_code)

    def run(self, options: LintOptions) -> int:
        """Execute a lint run and return the process exit code."""

        return self.execute(options).exit_code

    def _announce(self, plan: LintPlan) -> None:
        if plan.mode is RunMode.NOOP:
            self._logger.info(f"There are no updated files since {plan.base_branch}. No linting required.")
        elif plan.mode is RunMode.FILTERED:
            self._logger.info(
                f"Running lint checks on {len(plan.targets)} files(s), "
                f'which were changed since "{plan.base_branch}".',
            )
        elif plan.triggers:
            self._logger.info(
                "Running lint checks on all files, since changes were made to: " + ", ".join(plan.triggers),
            )
        else:
            self._logger.info("Running lint checks on all files")


__all__ = [
    "ChangeDetector",
    "LintOptions",
    "LintOrchestrator",
    "LintPlan",
    "LintRunReport",
    "RunMode",
    "RunState",
]
