# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Smoke tests for the deltalint command line."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from deltalint.cli import app as app_module
from deltalint.cli.app import app
from deltalint.cli.shared import CLILogger
from deltalint.config import DeltaLintConfig
from deltalint.orchestrator import LintOptions
from deltalint.process_utils import CommandError


class RecordingOrchestrator:
    def __init__(self, exit_code: int = 0, error: Exception | None = None) -> None:
        self.exit_code = exit_code
        self.error = error
        self.options: list[LintOptions] = []
        self.config: DeltaLintConfig | None = None

    def run(self, options: LintOptions) -> int:
        self.options.append(options)
        if self.error is not None:
            raise self.error
        return self.exit_code


def _install(monkeypatch: pytest.MonkeyPatch, orchestrator: RecordingOrchestrator) -> None:
    def _build(root: Path, config: DeltaLintConfig, logger: CLILogger) -> RecordingOrchestrator:
        orchestrator.config = config
        return orchestrator

    monkeypatch.setattr(app_module, "build_orchestrator", _build)


def test_flags_are_parsed_into_options(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    orchestrator = RecordingOrchestrator()
    _install(monkeypatch, orchestrator)

    result = CliRunner().invoke(
        app,
        ["--fix", "--changed", "--base-branch", "develop", "--root", str(tmp_path), "--no-emoji"],
    )

    assert result.exit_code == 0, result.output
    assert orchestrator.options == [LintOptions(fix=True, changed=True, base_branch="develop")]
    assert orchestrator.config is not None
    assert orchestrator.config.base_branch == "develop"


def test_defaults_request_full_run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    orchestrator = RecordingOrchestrator()
    _install(monkeypatch, orchestrator)

    result = CliRunner().invoke(app, ["--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert orchestrator.options == [LintOptions()]


def test_lint_exit_code_is_forwarded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, RecordingOrchestrator(exit_code=1))

    result = CliRunner().invoke(app, ["--root", str(tmp_path)])

    assert result.exit_code == 1


def test_timeout_option_reaches_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    orchestrator = RecordingOrchestrator()
    _install(monkeypatch, orchestrator)

    result = CliRunner().invoke(app, ["--root", str(tmp_path), "--timeout", "2.5"])

    assert result.exit_code == 0, result.output
    assert orchestrator.config is not None
    assert orchestrator.config.process.timeout == 2.5


def test_uncaught_errors_print_message_and_exit_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    error = CommandError(["git", "status"], 128, "", "fatal: not a git repository")
    _install(monkeypatch, RecordingOrchestrator(error=error))

    result = CliRunner().invoke(app, ["--changed", "--root", str(tmp_path), "--no-emoji", "--no-color"])

    assert result.exit_code == 1
    assert "Error: fatal: not a git repository" in result.output


def test_invalid_configuration_exits_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, RecordingOrchestrator())
    (tmp_path / "deltalint.toml").write_text("base_branch = ''\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


FAKE_ESLINT = """\
import json
import sys
from pathlib import Path

Path({log!r}).write_text(json.dumps(sys.argv[1:]), encoding="utf-8")
targets = [arg for arg in sys.argv[1:] if not arg.startswith("-") and arg != "json"]
print(json.dumps([
    {{
        "filePath": target,
        "messages": [
            {{"ruleId": "no-console", "severity": 2, "message": "Unexpected console statement.", "line": 1, "column": 1}}
        ],
        "errorCount": 1,
        "warningCount": 0,
    }}
    for target in targets
]))
sys.exit(1 if targets else 0)
"""


def _install_fake_eslint(repo: Path, scratch: Path) -> Path:
    log = scratch / "eslint-argv.json"
    script = scratch / "fake_eslint.py"
    script.write_text(FAKE_ESLINT.format(log=str(log)), encoding="utf-8")
    command = json.dumps([sys.executable, str(script)])
    (repo / "deltalint.toml").write_text(f"[eslint]\ncommand = {command}\n", encoding="utf-8")
    return log


def test_changed_run_without_source_changes_is_a_noop(git_repo: Path, run_git, tmp_path: Path) -> None:
    base = run_git(git_repo, "rev-parse", "--abbrev-ref", "HEAD").strip()
    log = _install_fake_eslint(git_repo, tmp_path)

    result = CliRunner().invoke(
        app,
        ["--changed", "--base-branch", base, "--root", str(git_repo), "--no-emoji", "--no-color"],
    )

    assert result.exit_code == 0, result.output
    assert "No linting required" in result.output
    assert not log.exists()


def test_changed_run_lints_modified_source_file(git_repo: Path, run_git, tmp_path: Path) -> None:
    base = run_git(git_repo, "rev-parse", "--abbrev-ref", "HEAD").strip()
    log = _install_fake_eslint(git_repo, tmp_path)
    (git_repo / "components" / "App.tsx").write_text("console.log(1);\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        ["--changed", "--base-branch", base, "--root", str(git_repo), "--no-emoji", "--no-color"],
    )

    assert result.exit_code == 1, result.output
    assert json.loads(log.read_text(encoding="utf-8")) == ["--format", "json", "components/App.tsx"]
    assert 'Running lint checks on 1 files(s), which were changed since "' in result.output
    assert "no-console" in result.output
    assert "Lint checks failed with 1 error(s) and 0 warning(s)" in result.output
