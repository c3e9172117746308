# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; commands are passed as argument
# lists and ``shell=True`` is never used.
import subprocess  # nosec B404
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

LOGGER = logging.getLogger(__name__)

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Execution options shared by every command invocation.

    Attributes:
        cwd: Working directory for the subprocess, ``None`` for the current one.
        env: Full replacement environment, ``None`` to inherit.
        timeout: Seconds to wait before giving up, ``None`` waits forever.
        fail_on_stderr: Treat any standard-error output as a failure, even
            when the process exits with status ``0``.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    fail_on_stderr: bool = True


class CommandError(RuntimeError):
    """Raised when a command writes to stderr, exits non-zero, or times out."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """

        message = (stderr or "").strip() or f"Command '{command[0]}' exited with status {returncode}"
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` on ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list with an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` capturing text output without raising on exit status.

    A timeout is reported as a completed process with return code ``124`` and
    the timeout message appended to stderr.

    Args:
        args: Command and argument sequence to execute.
        options: Execution options; defaults apply when omitted.

    Returns:
        CompletedProcess[str]: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args)
    LOGGER.debug("running command=%s cwd=%s", " ".join(args), resolved_options.cwd or ".")
    started = time.perf_counter()
    try:
        # Bandit: argument lists only, never shell expansion.
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
        completed = subprocess.CompletedProcess(
            args=list(normalized),
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )
    LOGGER.debug(
        "finished command=%s returncode=%s elapsed=%.3fs",
        args[0],
        completed.returncode,
        time.perf_counter() - started,
    )
    return completed


def run_cmd(args: Sequence[str], *, options: CommandOptions | None = None) -> str:
    """Run ``args`` and return its standard output.

    With ``fail_on_stderr`` enabled any stderr output is fatal, whatever the
    exit status. Otherwise stderr is only logged and a non-zero exit status is
    fatal instead. Timeouts are always fatal.

    Args:
        args: Command and argument sequence to execute.
        options: Execution options; defaults apply when omitted.

    Returns:
        str: Captured standard output.

    Raises:
        CommandError: When the command fails under the active stderr policy.
    """

    resolved_options = options or CommandOptions()
    completed = run_command(args, options=resolved_options)
    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    if completed.returncode == TIMEOUT_RETURNCODE and resolved_options.timeout is not None:
        raise CommandError(args, completed.returncode, stdout, stderr)
    if resolved_options.fail_on_stderr:
        if stderr:
            raise CommandError(args, completed.returncode, stdout, stderr)
        return stdout
    if stderr:
        LOGGER.debug("stderr from %s: %s", args[0], stderr.strip())
    if completed.returncode != 0:
        raise CommandError(args, completed.returncode, stdout, stderr)
    return stdout


__all__ = [
    "CommandError",
    "CommandOptions",
    "TIMEOUT_RETURNCODE",
    "run_cmd",
    "run_command",
]
