# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Change detection and file filtering."""

from __future__ import annotations

from .filters import apply_filters, filter_existing, filter_extensions, filter_source_folders
from .git import (
    ChangeEntry,
    DiffProbe,
    GitChangeDetector,
    GitRunner,
    ordered_union,
    parse_change_entries,
    pick_paths,
)

__all__ = [
    "ChangeEntry",
    "DiffProbe",
    "GitChangeDetector",
    "GitRunner",
    "apply_filters",
    "filter_existing",
    "filter_extensions",
    "filter_source_folders",
    "ordered_union",
    "parse_change_entries",
    "pick_paths",
]
