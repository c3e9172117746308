# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rendering and printing of lint results."""

from __future__ import annotations

from .emit import ReportingError, ReportStatus, emit_report
from .stylish import aggregate, format_stylish

__all__ = ["ReportStatus", "ReportingError", "aggregate", "emit_report", "format_stylish"]
