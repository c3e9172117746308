# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI helpers: the user-facing logger adapter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from rich.console import Console
from rich.text import Text

from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI presentation flags."""

    console: Console
    use_emoji: bool
    use_color: bool = True
    debug_enabled: bool = False
    _key_value_re: re.Pattern[str] = field(default=re.compile(r"([\w-]+)=(\".*?\"|\S+)"), repr=False)

    def fail(self, message: str) -> None:
        """Log a failure message in red on stderr."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self._color_flag())

    def ok(self, message: str) -> None:
        """Log a success message in green."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self._color_flag())

    def info(self, message: str) -> None:
        """Log an informational message."""

        core_info(message, use_emoji=False, use_color=self._color_flag())

    def echo(self, message: str) -> None:
        """Write ``message`` verbatim, without markup or highlighting.

        Args:
            message: Text written to standard output.
        """

        self.console.print(Text(message), end="" if message.endswith("\n") else "\n")

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        Args:
            message: Debug payload rendered with simple ``key=value`` highlighting.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            key, raw_value = match.group(1), match.group(2)
            text.append(key, style="bold magenta")
            text.append("=", style="dim")
            text.append(raw_value, style="bold blue" if key in {"command", "cmd"} else "bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)

    def _color_flag(self) -> bool | None:
        return None if self.use_color else False


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a :class:`CLILogger` configured for the provided presentation flags.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(no_color=no_color, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, use_color=not no_color, debug_enabled=debug)


__all__ = ["CLILogger", "build_cli_logger"]
