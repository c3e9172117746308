# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint engine adapters."""

from __future__ import annotations

from .base import LintEngine, LintEngineError
from .eslint import EngineRunner, EslintEngine, parse_eslint_results

__all__ = ["EngineRunner", "EslintEngine", "LintEngine", "LintEngineError", "parse_eslint_results"]
