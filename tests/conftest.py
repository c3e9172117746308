# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from rich.console import Console

from deltalint.cli.shared import CLILogger


def git(repo: Path, *args: str) -> str:
    """Run a git command in ``repo`` for test setup."""

    completed = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Return a repository with one commit on its default branch."""

    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.name", "DeltaLintTest")
    git(repo, "config", "user.email", "deltalint@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "components").mkdir()
    (repo / "components" / "App.tsx").write_text("export const App = 1;\n", encoding="utf-8")
    (repo / "package.json").write_text('{"name": "demo"}\n', encoding="utf-8")
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "initial")
    return repo


@pytest.fixture
def logger() -> CLILogger:
    """Return a colourless logger writing to the captured stdout."""

    return CLILogger(console=Console(no_color=True, highlight=False), use_emoji=False, use_color=False)


class FakeGit:
    """Scripted git runner keyed by the command line."""

    def __init__(self, responses: dict[tuple[str, ...], str]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, cmd: Sequence[str]) -> str:
        key = tuple(cmd)
        self.calls.append(key)
        return self.responses.get(key, "")


@pytest.fixture
def fake_git() -> Callable[[dict[tuple[str, ...], str]], FakeGit]:
    """Return a factory for scripted git runners."""

    return FakeGit


@pytest.fixture
def run_git() -> Callable[..., str]:
    """Return the git helper used to script repository state."""

    return git
