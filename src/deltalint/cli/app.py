# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from ..config import DeltaLintConfig, load_config
from ..discovery.git import GitChangeDetector
from ..engine.eslint import EslintEngine
from ..logging import configure_diagnostics
from ..orchestrator import LintOptions, LintOrchestrator
from ..process_utils import CommandOptions
from .shared import CLILogger, build_cli_logger

app = typer.Typer(
    name="deltalint",
    help="Run ESLint on the whole repository or only on files changed since the base branch.",
    add_completion=False,
    no_args_is_help=False,
)


def build_orchestrator(root: Path, config: DeltaLintConfig, logger: CLILogger) -> LintOrchestrator:
    """Wire the git detector and ESLint engine for ``root``.

    Args:
        root: Repository root.
        config: Effective configuration.
        logger: User-facing logger.

    Returns:
        LintOrchestrator: Ready-to-run orchestrator.
    """

    command_options = CommandOptions(
        cwd=root,
        timeout=config.process.timeout,
        fail_on_stderr=config.process.fail_on_stderr,
    )
    return LintOrchestrator(
        config,
        detector=GitChangeDetector(root, options=command_options),
        engine=EslintEngine(root, config),
        logger=logger,
        root=root,
    )


def _config_overrides(base_branch: str | None, timeout: float | None) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if base_branch is not None:
        overrides["base_branch"] = base_branch
    if timeout is not None:
        overrides["process"] = {"timeout": timeout}
    return overrides


@app.command()
def lint(
    fix: Annotated[bool, typer.Option("--fix", help="Let ESLint apply automatic fixes.")] = False,
    changed: Annotated[
        bool,
        typer.Option("--changed", help="Lint only files changed since the base branch."),
    ] = False,
    base_branch: Annotated[
        str | None,
        typer.Option("--base-branch", help="Branch the current work will be merged into."),
    ] = None,
    root: Annotated[Path, typer.Option("--root", "-r", help="Repository root.")] = Path(),
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Configuration file replacing deltalint.toml."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=0, help="Seconds to wait for each git command."),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Trace git and ESLint commands.")] = False,
) -> None:
    """Lint the repository, or only the files changed on this branch with ``--changed``."""

    logger = build_cli_logger(emoji=not no_emoji, debug=debug, no_color=no_color)
    configure_diagnostics(debug=debug)
    resolved_root = root.expanduser().resolve()
    options = LintOptions(fix=fix, changed=changed, base_branch=base_branch)
    try:
        config = load_config(
            resolved_root,
            config_path=config_path,
            overrides=_config_overrides(base_branch, timeout),
        )
        orchestrator = build_orchestrator(resolved_root, config, logger)
        exit_code = orchestrator.run(options)
    except Exception as exc:  # noqa: BLE001 - outermost boundary reports and exits 1
        message = str(exc)
        if message:
            logger.fail(message)
        raise typer.Exit(code=1) from exc
    raise typer.Exit(code=exit_code)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "build_orchestrator", "lint", "main"]
