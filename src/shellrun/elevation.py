"""Self-relaunch with elevated privileges.

A run whose command line carries ``--elevate`` never proceeds normally: the
same program is started again through the ``runas`` verb without the flag,
and the current process exits whatever the outcome of that request.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Sequence

from .errors import ElevationFailedError, describe_failure
from .exec import ProcessConfig, SpawnRequest, SpawnRunner, join_command_line, spawn_with_runner
from .log import Reporter

ELEVATION_FLAG = "--elevate"
ELEVATION_VERB = "runas"
ELEVATION_EXIT_CODE = 1


class RunState(Enum):
    NORMAL = "normal"
    ELEVATION_REQUESTED = "elevation_requested"


def detect_run_state(argv: Sequence[str]) -> RunState:
    """Return the run state for raw command-line tokens (program name excluded)."""
    if ELEVATION_FLAG in argv:
        return RunState.ELEVATION_REQUESTED
    return RunState.NORMAL


def strip_elevation_flag(argv: Sequence[str]) -> list[str]:
    """Drop every token equal to the elevation flag, keeping all others intact.

    Example:
        >>> strip_elevation_flag(["-a", "--elevated", "--elevate", "-f", "x"])
        ['-a', '--elevated', '-f', 'x']
    """
    return [token for token in argv if token != ELEVATION_FLAG]


def current_program() -> tuple[str, list[str]]:
    """Return the executable and leading arguments that start this program again."""
    if getattr(sys, "frozen", False):
        return sys.executable, []
    script = sys.argv[0] if sys.argv else ""
    if script and not script.endswith(".py"):
        path = Path(script)
        if path.is_file() and os.access(path, os.X_OK):
            return str(path.resolve()), []
    return sys.executable, ["-m", "shellrun"]


def relaunch_elevated(
    argv: Sequence[str],
    *,
    reporter: Reporter,
    runner: SpawnRunner | None = None,
    program: tuple[str, list[str]] | None = None,
) -> int:
    """Request an elevated relaunch and return the exit code for this process.

    Args:
        argv: Raw command-line tokens of this process, program name excluded.
        reporter: Receives the error when the request cannot be made.
        runner: Spawn adapter; defaults to the subprocess runner.
        program: Executable and leading arguments; defaults to ``current_program()``.

    Returns:
        ``ELEVATION_EXIT_CODE``, whether or not the request succeeded.
    """
    executable, leading = program if program is not None else current_program()
    forwarded = [*leading, *strip_elevation_flag(argv)]
    request = SpawnRequest(
        target=executable,
        arguments=join_command_line(forwarded) if forwarded else None,
        config=ProcessConfig(verb=ELEVATION_VERB),
    )
    reporter.debug(f"requesting elevated relaunch: {executable} {request.arguments or ''}")
    result = spawn_with_runner(request, runner=runner)
    if not result.ok:
        detail = result.failure.detail if result.failure is not None else "unknown error"
        reporter.error(describe_failure(ElevationFailedError(f"elevation failed: {detail}")))
    return ELEVATION_EXIT_CODE
