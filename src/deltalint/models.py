# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the deltalint package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Severity levels reported by ESLint."""

    ERROR = "error"
    WARNING = "warning"


class LintMessage(BaseModel):
    """Single diagnostic attached to a linted file."""

    model_config = ConfigDict(frozen=True)

    line: int = 0
    column: int = 0
    severity: Severity
    message: str
    rule_id: str | None = None
    fixable: bool = False


class LintFileResult(BaseModel):
    """Per-file result in the shape of ESLint's JSON formatter."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    messages: tuple[LintMessage, ...] = Field(default_factory=tuple)
    error_count: int = Field(default=0, ge=0)
    warning_count: int = Field(default=0, ge=0)
    fixable_error_count: int = Field(default=0, ge=0)
    fixable_warning_count: int = Field(default=0, ge=0)


@dataclass(frozen=True, slots=True)
class LintResult:
    """Aggregated outcome of one lint pass."""

    formatted_text: str
    warning_count: int
    error_count: int

    @property
    def has_findings(self) -> bool:
        return bool(self.error_count or self.warning_count)


@dataclass(frozen=True, slots=True)
class LintSuccess:
    """The engine ran and produced results, with or without findings."""

    result: LintResult


@dataclass(frozen=True, slots=True)
class LintFailure:
    """The engine could not produce results."""

    message: str


LintOutcome = LintSuccess | LintFailure


__all__ = [
    "LintFailure",
    "LintFileResult",
    "LintMessage",
    "LintOutcome",
    "LintResult",
    "LintSuccess",
    "Severity",
]
