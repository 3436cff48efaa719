"""Top-level orchestration of a shellrun run.

``run`` is the outermost boundary of a run: it unlocks, validates,
transforms the arguments and launches (or dumps them in debug mode), and turns
every failure into a report plus an exit code.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable

from . import io
from .arguments import transform_arguments
from .debug import print_debug_info
from .errors import AuthorizationFailedError, LaunchFailure, ValidationFailedError, describe_failure
from .exec import SpawnRunner
from .launch import launch_all
from .log import Reporter
from .models import LaunchOptions
from .unlock import try_unlock


def target_exists(target: str) -> bool:
    """Return whether ``target`` is an existing path or a command on ``PATH``."""
    try:
        if Path(target).expanduser().exists():
            return True
    except OSError:
        return False
    return shutil.which(target) is not None


def validate_target(options: LaunchOptions) -> None:
    """Fail unless the target exists; debug runs skip the check."""
    if options.flags.debug:
        return
    if not target_exists(options.target):
        raise ValidationFailedError(
            f"file not found: {options.target}",
            recovery_hint="check --file, or use --debug to inspect the run",
        )


def run(
    options: LaunchOptions,
    *,
    reporter: Reporter,
    runner: SpawnRunner | None = None,
    prompt: Callable[[str], str] = io.prompt_secret,
    pause: Callable[[], None] = io.pause,
    sleep: Callable[[int], None] | None = None,
) -> int:
    """Execute one run and return the process exit code."""
    try:
        if not try_unlock(options.secret, reporter=reporter, prompt=prompt):
            raise AuthorizationFailedError("run aborted: password not accepted")
        validate_target(options)
        transformed = transform_arguments(options)
        reporter.debug(
            f"mode={options.instance_mode} reorganized={len(transformed.reorganized)} "
            f"process={len(transformed.process)}"
        )
        if options.flags.debug:
            print_debug_info(options, transformed)
        else:
            report = launch_all(
                options,
                transformed.process,
                reporter=reporter,
                runner=runner,
                sleep=sleep,
            )
            if report.failures:
                reporter.warning(
                    f"{len(report.failures)} of {len(report.results)} launch(es) failed"
                )
        if options.flags.pause:
            pause()
        return 0
    except LaunchFailure as exc:
        reporter.error(describe_failure(exc))
        return exc.exit_code
    except Exception as exc:
        reporter.error(f"fatal: {exc}")
        return 1
