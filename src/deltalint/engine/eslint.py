# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ESLint invocation through its command line and JSON formatter."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any, Final

from pydantic import ValidationError

from ..config import DeltaLintConfig
from ..models import LintFailure, LintFileResult, LintMessage, LintOutcome, LintSuccess, Severity
from ..process_utils import CommandOptions, run_command
from ..reporting.stylish import aggregate
from .base import LintEngineError

LOGGER = logging.getLogger(__name__)

EngineRunner = Callable[[Sequence[str]], CompletedProcess[str]]

_ESLINT_ERROR_LEVEL: Final[int] = 2
_ESLINT_WARNING_LEVEL: Final[int] = 1
# 0 = clean, 1 = lint errors; anything else is a crash or configuration problem.
_ESLINT_OK_CODES: Final[frozenset[int]] = frozenset({0, 1})


def _parse_message(raw: dict[str, Any]) -> LintMessage:
    severity_level = raw.get("severity")
    severity = Severity.ERROR if severity_level == _ESLINT_ERROR_LEVEL else Severity.WARNING
    return LintMessage(
        line=raw.get("line") or 0,
        column=raw.get("column") or 0,
        severity=severity,
        message=str(raw.get("message", "")).strip(),
        rule_id=raw.get("ruleId"),
        fixable=raw.get("fix") is not None,
    )


def parse_eslint_results(payload: Any) -> list[LintFileResult]:
    """Parse the payload of ``eslint --format json``.

    Args:
        payload: Decoded JSON document, expected to be a list of file results.

    Returns:
        list[LintFileResult]: One result per linted file.

    Raises:
        LintEngineError: If the payload does not have the expected shape.
    """

    if not isinstance(payload, list):
        raise LintEngineError("ESLint JSON output must be a list of file results")
    results: list[LintFileResult] = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        raw_messages = entry.get("messages") or []
        try:
            messages = tuple(_parse_message(item) for item in raw_messages if isinstance(item, dict))
            results.append(
                LintFileResult(
                    file_path=str(entry.get("filePath") or entry.get("filename") or ""),
                    messages=messages,
                    error_count=entry.get("errorCount", 0),
                    warning_count=entry.get("warningCount", 0),
                    fixable_error_count=entry.get("fixableErrorCount", 0),
                    fixable_warning_count=entry.get("fixableWarningCount", 0),
                )
            )
        except ValidationError as exc:
            raise LintEngineError(f"Unexpected ESLint result entry: {exc}") from exc
    return results


class EslintEngine:
    """Run ESLint over files or folders and aggregate its results."""

    def __init__(
        self,
        root: Path,
        config: DeltaLintConfig,
        *,
        runner: EngineRunner | None = None,
    ) -> None:
        """Create an engine bound to ``root``.

        Args:
            root: Directory ESLint runs in; targets are relative to it.
            config: Configuration providing the command and extensions.
            runner: Optional callable executing the command. Defaults to
                :func:`run_command` in ``root``.
        """

        self._root = root
        self._config = config
        self._runner = runner or self._default_runner

    def build_command(self, targets: Sequence[str], *, fix: bool) -> list[str]:
        """Return the ESLint command line for ``targets``.

        ``--ext`` only affects directory targets, so it is passed only when
        every target is a folder.
        """

        command = [*self._config.eslint.command, "--format", "json"]
        if self._config.eslint.use_ext_flag and targets and all(self._is_folder(target) for target in targets):
            for ext in self._config.extensions:
                command.extend(["--ext", ext])
        if fix:
            command.append("--fix")
        command.extend(targets)
        return command

    def lint(self, targets: Sequence[str], *, fix: bool) -> LintOutcome:
        """Lint ``targets`` and return the aggregated outcome.

        With ``fix`` ESLint writes its fixes to disk before reporting the
        remaining problems.

        Args:
            targets: Repository-relative files or folders.
            fix: Forward ``--fix`` to ESLint.

        Returns:
            LintOutcome: :class:`LintSuccess` with the aggregated result, or
            :class:`LintFailure` describing why ESLint produced no results.
        """

        command = self.build_command(targets, fix=fix)
        try:
            completed = self._runner(command)
            results = self._parse_output(completed)
        except (OSError, UnicodeError, LintEngineError) as exc:
            LOGGER.debug("eslint failed: %s", exc)
            return LintFailure(message=f"Error while running Linter on files: {exc}")
        return LintSuccess(result=aggregate(results))

    def _parse_output(self, completed: CompletedProcess[str]) -> list[LintFileResult]:
        if completed.returncode not in _ESLINT_OK_CODES:
            detail = (completed.stderr or completed.stdout or "").strip() or "no output"
            raise LintEngineError(f"ESLint exited with status {completed.returncode}: {detail}")
        try:
            payload = json.loads(completed.stdout or "")
        except json.JSONDecodeError as exc:
            raise LintEngineError(f"ESLint did not produce JSON output: {exc}") from exc
        return parse_eslint_results(payload)

    def _is_folder(self, target: str) -> bool:
        return target.endswith("/") or (self._root / target).is_dir()

    def _default_runner(self, command: Sequence[str]) -> CompletedProcess[str]:
        options = CommandOptions(cwd=self._root, fail_on_stderr=False)
        return run_command(command, options=options)


__all__ = ["EngineRunner", "EslintEngine", "parse_eslint_results"]
