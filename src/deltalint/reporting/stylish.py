# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plain-text rendering of lint results in ESLint's "stylish" layout."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import LintFileResult, LintMessage, LintResult

_SEPARATOR = "  "


def _pluralize(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


def _rows(messages: Sequence[LintMessage]) -> list[tuple[str, str, str, str]]:
    return [
        (
            f"{message.line}:{message.column}",
            message.severity.value,
            message.message.rstrip("."),
            message.rule_id or "",
        )
        for message in messages
    ]


def _render_table(rows: list[tuple[str, str, str, str]]) -> list[str]:
    widths = [max(len(row[index]) for row in rows) for index in range(3)]
    lines: list[str] = []
    for position, severity, message, rule in rows:
        cells = [position.ljust(widths[0]), severity.ljust(widths[1]), message.ljust(widths[2]), rule]
        lines.append(f"  {_SEPARATOR.join(cells)}".rstrip())
    return lines


def format_stylish(results: Sequence[LintFileResult]) -> str:
    """Render ``results`` as human-readable text.

    Args:
        results: Per-file lint results.

    Returns:
        str: Report text, or an empty string when no file has messages.
    """

    errors = sum(result.error_count for result in results)
    warnings = sum(result.warning_count for result in results)
    fixable_errors = sum(result.fixable_error_count for result in results)
    fixable_warnings = sum(result.fixable_warning_count for result in results)
    lines: list[str] = []
    for result in results:
        if not result.messages:
            continue
        lines.append("")
        lines.append(result.file_path)
        lines.extend(_render_table(_rows(result.messages)))
    total = errors + warnings
    if total == 0:
        return ""
    lines.append("")
    lines.append(
        f"✖ {total} {_pluralize('problem', total)} "
        f"({errors} {_pluralize('error', errors)}, {warnings} {_pluralize('warning', warnings)})"
    )
    if fixable_errors or fixable_warnings:
        lines.append(
            f"  {fixable_errors} {_pluralize('error', fixable_errors)} and "
            f"{fixable_warnings} {_pluralize('warning', fixable_warnings)} "
            "potentially fixable with the `--fix` option."
        )
    lines.append("")
    return "\n".join(lines)


def aggregate(results: Sequence[LintFileResult]) -> LintResult:
    """Sum warning and error counts and render the report text."""

    return LintResult(
        formatted_text=format_stylish(results),
        warning_count=sum(result.warning_count for result in results),
        error_count=sum(result.error_count for result in results),
    )


__all__ = ["aggregate", "format_stylish"]
