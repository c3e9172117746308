# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect changes that invalidate previous lint results.

Changing only ``.eslintrc`` and ``Button.tsx`` must not lint just
``Button.tsx``: the new rule may fail anywhere. Three files can do this: the
ignore file, the rule configuration and the package manifest. The manifest
changes for many unrelated reasons, so it only counts when its diff mentions
the linter by name, which catches linter and plugin upgrades.
"""

from __future__ import annotations

from collections.abc import Collection

from .config import TriggerFilesConfig
from .discovery.git import DiffProbe


def find_invalidation_triggers(
    changed_files: Collection[str],
    *,
    base_branch: str,
    probe: DiffProbe,
    triggers: TriggerFilesConfig,
    linter_name: str,
) -> list[str]:
    """Return the trigger files present in ``changed_files``.

    Every rule is evaluated; an empty result means the change set can be
    linted on its own.

    Args:
        changed_files: Repository-relative paths changed on the branch.
        base_branch: Branch used for the manifest diff probe.
        probe: Diff probe consulted for the manifest file.
        triggers: Names of the ignore, rule-config and manifest files.
        linter_name: Literal searched for in the manifest diff.

    Returns:
        list[str]: Trigger file names in rule order.

    Raises:
        CommandError: If the manifest diff probe fails.
    """

    found: list[str] = []
    if triggers.ignore_file in changed_files:
        found.append(triggers.ignore_file)
    if triggers.rule_config in changed_files:
        found.append(triggers.rule_config)
    if triggers.manifest in changed_files and probe.diff_contains(base_branch, triggers.manifest, linter_name):
        found.append(triggers.manifest)
    return found


__all__ = ["find_invalidation_triggers"]
