"""Sequential launching of the target process."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from .errors import SpawnFailedError, describe_failure
from .exec import ProcessConfig, SpawnRequest, SpawnResult, SpawnRunner, spawn_with_runner
from .log import Reporter
from .models import LaunchOptions


@dataclass
class LaunchReport:
    """Every launch attempt of a run, in launch order."""

    results: list[SpawnResult] = field(default_factory=list)

    @property
    def failures(self) -> list[SpawnResult]:
        return [result for result in self.results if not result.ok]


def build_process_config(options: LaunchOptions) -> ProcessConfig:
    """Build the process settings shared by every launch of a run.

    Example:
        >>> build_process_config(LaunchOptions(target="x", flags={"hide": True})).hidden
        True
    """
    return ProcessConfig(
        workdir=Path(options.workdir) if options.workdir is not None else None,
        verb=options.verb,
        use_shell=options.flags.shell,
        hidden=options.flags.hide,
        utf8_input=options.unicode.input,
        utf8_output=options.unicode.output,
        utf8_error=options.unicode.error,
    )


def _sleep_ms(milliseconds: int) -> None:
    time.sleep(milliseconds / 1000)


def _report_spawn_failure(reporter: Reporter, result: SpawnResult) -> None:
    detail = result.failure.detail if result.failure is not None else "unknown error"
    error = SpawnFailedError(
        f"failed to launch {result.request.target}: {detail}",
        recovery_hint="continuing with the next launch",
    )
    reporter.error(describe_failure(error))


def launch_all(
    options: LaunchOptions,
    process_arguments: Sequence[str],
    *,
    reporter: Reporter,
    runner: SpawnRunner | None = None,
    sleep: Callable[[int], None] | None = None,
) -> LaunchReport:
    """Launch the target once per process argument.

    With no process arguments the target is launched once without an
    argument string. Launches happen strictly in order; ``sleep`` is called
    with ``options.delay`` between two launches (never after the last one)
    when the delay is positive. A failed launch is reported and the loop goes
    on.

    Args:
        options: Run options.
        process_arguments: Per-launch argument strings.
        reporter: Receives launch debug output and failures.
        runner: Spawn adapter; defaults to the subprocess runner.
        sleep: Blocking wait taking milliseconds; defaults to ``time.sleep``.

    Returns:
        ``LaunchReport`` with one result per launch.
    """
    config = build_process_config(options)
    wait = sleep or _sleep_ms
    queue: list[str | None] = list(process_arguments) if process_arguments else [None]
    report = LaunchReport()
    for index, arguments in enumerate(queue):
        request = SpawnRequest(target=options.target, arguments=arguments, config=config)
        suffix = f" {arguments}" if arguments else ""
        reporter.debug(f"launch {index + 1}/{len(queue)}: {options.target}{suffix}")
        result = spawn_with_runner(request, runner=runner)
        report.results.append(result)
        if not result.ok:
            _report_spawn_failure(reporter, result)
        if options.delay > 0 and index != len(queue) - 1:
            wait(options.delay)
    return report
