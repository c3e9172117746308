# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Incremental ESLint orchestration driven by git changes."""

from __future__ import annotations

from .config import ConfigError, DeltaLintConfig, load_config
from .orchestrator import LintOptions, LintOrchestrator, LintPlan, RunMode, RunState
from .process_utils import CommandError

__version__ = "0.1.0"

__all__ = [
    "CommandError",
    "ConfigError",
    "DeltaLintConfig",
    "LintOptions",
    "LintOrchestrator",
    "LintPlan",
    "RunMode",
    "RunState",
    "__version__",
    "load_config",
]
