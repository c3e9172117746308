# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint engine protocol."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..models import LintOutcome


class LintEngineError(RuntimeError):
    """Raised internally when the lint engine cannot produce results."""


@runtime_checkable
class LintEngine(Protocol):
    """External linter consumed by the orchestrator.

    Implementations never raise for engine failures; they return a
    :class:`~deltalint.models.LintFailure` instead.
    """

    def lint(self, targets: Sequence[str], *, fix: bool) -> LintOutcome:
        """Lint ``targets`` (files or folders) and return the outcome."""
        ...


__all__ = ["LintEngine", "LintEngineError"]
