# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import logging

from rich.logging import RichHandler
from rich.text import Text

from .console import detect_tty, get_console_manager

ERROR_PREFIX = "Error: "


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    text: Text,
    *,
    use_emoji: bool,
    use_color: bool | None = None,
    stderr: bool = False,
) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji, stderr=stderr)
    if not color_enabled:
        text = Text(text.plain)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(Text(f"{emoji('ℹ️ ', use_emoji)}{msg}"), use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message in green.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    text = Text(f"{emoji('✅ ', use_emoji)}{msg}", style="green")
    _print_line(text, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message to stderr with a bold red ``Error:`` prefix.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    text = Text(emoji("❌ ", use_emoji))
    text.append(ERROR_PREFIX, style="bold red")
    text.append(msg, style="red")
    _print_line(text, use_emoji=use_emoji, use_color=use_color, stderr=True)


def configure_diagnostics(*, debug: bool) -> None:
    """Route ``logging`` records through Rich when debug output is requested.

    Args:
        debug: ``True`` to emit debug records for command execution.
    """

    root_logger = logging.getLogger("deltalint")
    if not debug:
        root_logger.setLevel(logging.WARNING)
        return
    if not any(isinstance(handler, RichHandler) for handler in root_logger.handlers):
        console = get_console_manager().get(color=detect_tty(), emoji=False, stderr=True)
        root_logger.addHandler(RichHandler(console=console, show_path=False, markup=False))
    root_logger.setLevel(logging.DEBUG)


__all__ = ["ERROR_PREFIX", "configure_diagnostics", "emoji", "fail", "info", "ok"]
