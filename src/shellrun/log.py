"""Leveled terminal reporting for shellrun runs."""

from __future__ import annotations

import os
import sys
from enum import IntEnum
from typing import Protocol

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LOG_LEVEL_NAMES = ("trace", "debug", "info", "success", "warning", "error")

_LEVEL_BY_NAME = {
    "trace": LogLevel.TRACE,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "success": LogLevel.SUCCESS,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}
DEFAULT_LEVEL = LogLevel.INFO


def normalize_level(value: str | None) -> LogLevel:
    """Map a level name to a ``LogLevel``; unknown or empty names fall back to INFO."""
    if value is None:
        return DEFAULT_LEVEL
    normalized = value.strip().lower()
    if not normalized:
        return DEFAULT_LEVEL
    return _LEVEL_BY_NAME.get(normalized, DEFAULT_LEVEL)


def level_from_env() -> LogLevel:
    return normalize_level(os.environ.get("SHELLRUN_LOG_LEVEL"))


def no_color_from_env() -> bool:
    return bool(os.environ.get("NO_COLOR") or os.environ.get("SHELLRUN_NO_COLOR"))


def _default_style(level: LogLevel) -> str:
    if level is LogLevel.TRACE:
        return "dim"
    if level is LogLevel.DEBUG:
        return "cyan"
    if level is LogLevel.SUCCESS:
        return "green"
    if level is LogLevel.WARNING:
        return "yellow"
    if level is LogLevel.ERROR:
        return "bold red"
    return ""


class Reporter(Protocol):
    """Leveled message sink used by the launcher components."""

    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleReporter:
    """Reporter that prints styled messages with rich.

    Warnings and errors go to stderr, everything else to stdout. Messages
    below ``level`` are dropped.
    """

    def __init__(self, level: LogLevel | None = None, *, no_color: bool | None = None) -> None:
        self.level = level if level is not None else level_from_env()
        self.no_color = no_color if no_color is not None else no_color_from_env()

    def is_enabled(self, level: LogLevel) -> bool:
        return level >= self.level

    def console(self, *, stderr: bool) -> Console:
        return Console(
            file=sys.stderr if stderr else sys.stdout,
            soft_wrap=True,
            highlight=False,
            no_color=self.no_color,
        )

    def emit(
        self,
        level: LogLevel,
        message: str,
        *,
        style: str | None = None,
        stderr: bool | None = None,
    ) -> None:
        if not self.is_enabled(level):
            return
        target_stderr = stderr if stderr is not None else level >= LogLevel.WARNING
        text = Text(message, style=style or _default_style(level))
        self.console(stderr=target_stderr).print(text)

    def trace(self, message: str) -> None:
        self.emit(LogLevel.TRACE, message)

    def debug(self, message: str) -> None:
        self.emit(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self.emit(LogLevel.INFO, message)

    def success(self, message: str) -> None:
        self.emit(LogLevel.SUCCESS, message)

    def warning(self, message: str) -> None:
        self.emit(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        self.emit(LogLevel.ERROR, message)
