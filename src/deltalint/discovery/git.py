# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git-based change detection."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..process_utils import CommandOptions, run_cmd

LOGGER = logging.getLogger(__name__)

GitRunner = Callable[[Sequence[str]], str]


@dataclass(frozen=True, slots=True)
class ChangeEntry:
    """Single line of ``--name-status`` or ``--porcelain`` output."""

    modification_code: str
    path: str


@runtime_checkable
class DiffProbe(Protocol):
    """Answer whether a file's diff mentions a literal search term."""

    def diff_contains(self, base_branch: str, file_name: str, search_term: str) -> bool:
        """Return ``True`` when ``search_term`` appears in the diff of ``file_name``."""
        ...


def parse_change_entries(text: str) -> list[ChangeEntry]:
    """Parse porcelain-style status output into change entries.

    Each non-blank line is split on runs of whitespace; the first token is the
    modification code (``M``, ``AM``, ``??``, ``R100``...) and the second is the
    path. For renames this is the original path.

    Args:
        text: Raw output of ``git status --porcelain`` or
            ``git diff --name-status``.

    Returns:
        list[ChangeEntry]: Entries in output order.
    """

    stripped = text.strip()
    if not stripped:
        return []
    entries: list[ChangeEntry] = []
    for line in stripped.splitlines():
        tokens = line.split()
        if len(tokens) < 2:
            if tokens:
                LOGGER.debug("skipping malformed status line: %r", line)
            continue
        entries.append(ChangeEntry(modification_code=tokens[0], path=tokens[1]))
    return entries


def pick_paths(entries: Iterable[ChangeEntry]) -> list[str]:
    """Return the path of every entry, preserving order."""

    return [entry.path for entry in entries]


def ordered_union(*groups: Iterable[str]) -> list[str]:
    """Return the union of ``groups`` keeping first-seen order."""

    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for item in group:
            if item in seen:
                continue
            seen.add(item)
            merged.append(item)
    return merged


class GitChangeDetector:
    """Collect files changed on the current branch and probe their diffs."""

    def __init__(
        self,
        root: Path,
        *,
        runner: GitRunner | None = None,
        options: CommandOptions | None = None,
    ) -> None:
        """Create a detector bound to the repository at ``root``.

        Args:
            root: Repository working tree.
            runner: Optional callable executing a git command and returning
                its stdout. Defaults to :func:`run_cmd` in ``root``.
            options: Command options for the default runner. ``cwd`` is
                always forced to ``root``.
        """

        base_options = options or CommandOptions()
        self._options = CommandOptions(
            cwd=root,
            env=base_options.env,
            timeout=base_options.timeout,
            fail_on_stderr=base_options.fail_on_stderr,
        )
        self._runner = runner or self._default_runner

    def committed_changes(self, base_branch: str) -> list[str]:
        """Return files changed since HEAD diverged from ``base_branch``.

        If the count looks unusually large the branch has probably been merged
        with the latest base branch, whose changes then show up here too.
        """

        output = self._runner(["git", "diff", "--name-status", f"{base_branch}...HEAD"])
        return pick_paths(parse_change_entries(output))

    def uncommitted_changes(self) -> list[str]:
        """Return staged, unstaged and untracked files in the working tree."""

        output = self._runner(["git", "status", "--porcelain"])
        return pick_paths(parse_change_entries(output))

    def changed_files(self, base_branch: str) -> list[str]:
        """Return committed then uncommitted changes without duplicates.

        Deleted files are kept; callers filter on existence later.

        Args:
            base_branch: Branch the current work will be merged into.

        Returns:
            list[str]: Repository-relative paths in first-seen order.

        Raises:
            CommandError: If a git query fails.
        """

        committed = self.committed_changes(base_branch)
        uncommitted = self.uncommitted_changes()
        changed = ordered_union(committed, uncommitted)
        LOGGER.debug(
            "changed files committed=%d uncommitted=%d unique=%d",
            len(committed),
            len(uncommitted),
            len(changed),
        )
        return changed

    def diff_contains(self, base_branch: str, file_name: str, search_term: str) -> bool:
        """Return whether ``search_term`` appears in the diff of ``file_name``.

        Both the committed diff against ``base_branch`` and the uncommitted
        diff against ``HEAD`` are searched as raw text with zero context lines,
        so removed lines, headers and comments all count as matches.

        Args:
            base_branch: Branch the current work diverged from.
            file_name: Repository-relative path to inspect.
            search_term: Literal text to look for.

        Returns:
            bool: ``True`` when either diff contains ``search_term``.

        Raises:
            CommandError: If a git query fails.
        """

        committed_diff = self._runner(["git", "diff", "--unified=0", f"{base_branch}...HEAD", "--", file_name])
        uncommitted_diff = self._runner(["git", "diff", "--unified=0", "HEAD", "--", file_name])
        return search_term in committed_diff or search_term in uncommitted_diff

    def _default_runner(self, cmd: Sequence[str]) -> str:
        return run_cmd(cmd, options=self._options)


__all__ = [
    "ChangeEntry",
    "DiffProbe",
    "GitChangeDetector",
    "GitRunner",
    "ordered_union",
    "parse_change_entries",
    "pick_paths",
]
