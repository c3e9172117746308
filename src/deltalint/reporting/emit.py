# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Print lint results and decide the verdict."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..models import LintResult

if TYPE_CHECKING:
    from ..cli.shared import CLILogger


class ReportingError(RuntimeError):
    """Raised when lint results cannot be written to the console."""


class ReportStatus(str, Enum):
    """Verdict produced after printing a lint result."""

    PASSED = "passed"
    FINDINGS = "findings"
    FAILED = "failed"

    @property
    def exit_code(self) -> int:
        return 0 if self is ReportStatus.PASSED else 1


def _print_report(result: LintResult, logger: CLILogger) -> ReportStatus:
    try:
        if result.formatted_text:
            logger.echo(result.formatted_text)
        if result.has_findings:
            logger.fail(
                f"Lint checks failed with {result.error_count} error(s) and {result.warning_count} warning(s)",
            )
            return ReportStatus.FINDINGS
        logger.ok("Lint checks passed")
    except (OSError, UnicodeError) as exc:
        raise ReportingError(str(exc)) from exc
    return ReportStatus.PASSED


def emit_report(result: LintResult, logger: CLILogger) -> ReportStatus:
    """Print ``result`` verbatim followed by the pass/fail verdict.

    Args:
        result: Aggregated lint result.
        logger: User-facing logger.

    Returns:
        ReportStatus: ``FINDINGS`` when any error or warning was reported,
        ``FAILED`` when printing itself failed, ``PASSED`` otherwise.
    """

    try:
        return _print_report(result, logger)
    except ReportingError as exc:
        logger.fail(f"Error while displaying the lint results - {exc}")
        return ReportStatus.FAILED


__all__ = ["ReportStatus", "ReportingError", "emit_report"]
