"""Launch failure contracts.

Components raise LaunchFailure on expected validation, authorization or
runtime errors. Programmer bugs raise normal exceptions. The top-level run
boundary catches LaunchFailure, reports it and exits with ``exit_code``.
"""

from __future__ import annotations

from typing import Literal

LaunchFailureCode = Literal[
    "validation_failed",
    "authorization_failed",
    "spawn_failed",
    "elevation_failed",
]


class LaunchFailure(Exception):
    """Expected launcher failure."""

    exit_code = 1

    def __init__(
        self,
        code: LaunchFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class ValidationFailedError(LaunchFailure):
    """Validation failed (missing target, bad configuration value)."""

    exit_code = 2

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("validation_failed", message, recovery_hint=recovery_hint)


class AuthorizationFailedError(LaunchFailure):
    """The password gate was not passed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("authorization_failed", message, recovery_hint=recovery_hint)


class SpawnFailedError(LaunchFailure):
    """The OS refused to start a launch."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("spawn_failed", message, recovery_hint=recovery_hint)


class ElevationFailedError(LaunchFailure):
    """The elevated relaunch could not be requested."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("elevation_failed", message, recovery_hint=recovery_hint)


def describe_failure(error: LaunchFailure) -> str:
    """Return the user-facing text for a failure, including its hint."""
    message = str(error)
    if error.recovery_hint:
        return f"{message} ({error.recovery_hint})"
    return message
