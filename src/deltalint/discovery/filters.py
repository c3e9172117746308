# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow-list filters applied to the change set before linting."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from ..config import DeltaLintConfig


def filter_source_folders(files: Iterable[str], folders: Sequence[str]) -> list[str]:
    """Keep paths that start with one of ``folders``.

    Folder prefixes should not start with a slash but should end with one,
    otherwise ``libs`` would also match ``libs-legacy/``.
    """

    return [file for file in files if any(file.startswith(folder) for folder in folders)]


def filter_extensions(files: Iterable[str], extensions: Sequence[str]) -> list[str]:
    """Keep paths that end with one of ``extensions``."""

    return [file for file in files if any(file.endswith(ext) for ext in extensions)]


def filter_existing(files: Iterable[str], root: Path) -> list[str]:
    """Keep paths that currently exist relative to ``root``.

    The change set includes deleted files and deleted merge conflicts; checking
    the filesystem handles both without interpreting modification codes.
    """

    return [file for file in files if (root / file).exists()]


def apply_filters(files: Iterable[str], config: DeltaLintConfig, root: Path) -> list[str]:
    """Apply folder, extension and existence filters in that order.

    Args:
        files: Repository-relative changed paths.
        config: Configuration providing the allow-lists.
        root: Repository root used for the existence check.

    Returns:
        list[str]: Lintable paths in their original order.
    """

    in_folders = filter_source_folders(files, config.source_folders)
    with_extension = filter_extensions(in_folders, config.extensions)
    return filter_existing(with_extension, root)


__all__ = [
    "apply_filters",
    "filter_existing",
    "filter_extensions",
    "filter_source_folders",
]
