# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the ESLint engine adapter."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from deltalint.config import DeltaLintConfig
from deltalint.engine import EslintEngine, LintEngineError, parse_eslint_results
from deltalint.models import LintFailure, LintSuccess, Severity

PAYLOAD = [
    {
        "filePath": "/repo/components/App.tsx",
        "messages": [
            {
                "ruleId": "no-unused-vars",
                "severity": 2,
                "message": "'a' is defined but never used.",
                "line": 3,
                "column": 7,
            },
            {
                "ruleId": "semi",
                "severity": 1,
                "message": "Missing semicolon.",
                "line": 4,
                "column": 12,
                "fix": {"range": [40, 40], "text": ";"},
            },
        ],
        "errorCount": 1,
        "warningCount": 1,
        "fixableErrorCount": 0,
        "fixableWarningCount": 1,
    },
    {
        "filePath": "/repo/libs/clean.ts",
        "messages": [],
        "errorCount": 0,
        "warningCount": 0,
    },
]


class RecordingRunner:
    def __init__(self, returncode: int = 0, stdout: str = "[]", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.commands: list[list[str]] = []

    def __call__(self, command: Sequence[str]) -> CompletedProcess[str]:
        self.commands.append(list(command))
        return CompletedProcess(list(command), self.returncode, self.stdout, self.stderr)


def _config() -> DeltaLintConfig:
    config = DeltaLintConfig()
    config.eslint.command = ["eslint"]
    return config


def test_parse_eslint_results_maps_severity_and_fixable() -> None:
    results = parse_eslint_results(PAYLOAD)

    assert [result.file_path for result in results] == ["/repo/components/App.tsx", "/repo/libs/clean.ts"]
    first = results[0]
    assert [message.severity for message in first.messages] == [Severity.ERROR, Severity.WARNING]
    assert [message.fixable for message in first.messages] == [False, True]
    assert first.messages[0].rule_id == "no-unused-vars"


def test_parse_eslint_results_rejects_non_list() -> None:
    with pytest.raises(LintEngineError):
        parse_eslint_results({"filePath": "x"})


def test_folder_targets_receive_extension_flags(tmp_path: Path) -> None:
    engine = EslintEngine(tmp_path, _config(), runner=RecordingRunner())
    command = engine.build_command(["components/", "libs/"], fix=False)

    assert command[:3] == ["eslint", "--format", "json"]
    assert command.count("--ext") == 4
    assert command[-2:] == ["components/", "libs/"]
    assert "--fix" not in command


def test_file_targets_skip_extension_flags(tmp_path: Path) -> None:
    engine = EslintEngine(tmp_path, _config(), runner=RecordingRunner())
    command = engine.build_command(["components/App.tsx"], fix=True)

    assert "--ext" not in command
    assert command[-2:] == ["--fix", "components/App.tsx"]


def test_extension_flags_can_be_disabled(tmp_path: Path) -> None:
    config = _config()
    config.eslint.use_ext_flag = False
    engine = EslintEngine(tmp_path, config, runner=RecordingRunner())

    assert "--ext" not in engine.build_command(["components/"], fix=False)


def test_lint_aggregates_counts_on_findings(tmp_path: Path) -> None:
    runner = RecordingRunner(returncode=1, stdout=json.dumps(PAYLOAD))
    outcome = EslintEngine(tmp_path, _config(), runner=runner).lint(["components/App.tsx"], fix=False)

    assert isinstance(outcome, LintSuccess)
    assert outcome.result.error_count == 1
    assert outcome.result.warning_count == 1
    assert "no-unused-vars" in outcome.result.formatted_text
    assert runner.commands[0][-1] == "components/App.tsx"


def test_lint_clean_run(tmp_path: Path) -> None:
    outcome = EslintEngine(tmp_path, _config(), runner=RecordingRunner()).lint(["libs/"], fix=True)

    assert isinstance(outcome, LintSuccess)
    assert not outcome.result.has_findings
    assert outcome.result.formatted_text == ""


def test_lint_crash_is_reported_as_failure(tmp_path: Path) -> None:
    runner = RecordingRunner(returncode=2, stdout="", stderr="Oops! Something went wrong!")
    outcome = EslintEngine(tmp_path, _config(), runner=runner).lint(["libs/"], fix=False)

    assert isinstance(outcome, LintFailure)
    assert "Something went wrong" in outcome.message


def test_lint_invalid_json_is_reported_as_failure(tmp_path: Path) -> None:
    runner = RecordingRunner(returncode=0, stdout="not json")
    outcome = EslintEngine(tmp_path, _config(), runner=runner).lint(["libs/"], fix=False)

    assert isinstance(outcome, LintFailure)
    assert outcome.message.startswith("Error while running Linter on files")


def test_lint_missing_executable_is_reported_as_failure(tmp_path: Path) -> None:
    config = _config()
    config.eslint.command = ["definitely-not-eslint-deltalint"]
    outcome = EslintEngine(tmp_path, config).lint(["libs/"], fix=False)

    assert isinstance(outcome, LintFailure)


@pytest.mark.parametrize(
    "error",
    [
        PermissionError(13, "Permission denied", "eslint"),
        UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid continuation byte"),
    ],
)
def test_lint_runner_errors_are_reported_as_failure(tmp_path: Path, error: Exception) -> None:
    def _raising(command: Sequence[str]) -> CompletedProcess[str]:
        raise error

    outcome = EslintEngine(tmp_path, _config(), runner=_raising).lint(["components/App.tsx"], fix=False)

    assert isinstance(outcome, LintFailure)
    assert outcome.message.startswith("Error while running Linter on files")
