"""Command-line interface for shellrun."""

from __future__ import annotations

import sys
from typing import Annotated, Optional

import typer

from . import __version__, config, runner
from .elevation import RunState, detect_run_state, relaunch_elevated
from .errors import LaunchFailure, describe_failure
from .log import LOG_LEVEL_NAMES, ConsoleReporter, normalize_level
from .models import INSTANCE_MODE_VALUES, VERB_VALUES, LaunchOptions, RuntimeFlags, UnicodeStreams

REMARKS = """\
Types: si runs one instance with the arguments joined; sir does the same with
reorganized arguments; mi runs one instance per argument; mir runs one
instance per reorganized argument.

Verbs: edit opens the document in an editor; find searches from the executed
directory; open launches the file or its associated application; print prints
the document; properties shows its properties; runas launches as
administrator.

Pass --elevate anywhere on the command line to restart shellrun with
elevated privileges; the flag is removed before the restart.
"""

app = typer.Typer(add_completion=False)


def _choice_callback(name: str, allowed: tuple[str, ...]):
    def validate(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        normalized = value.strip().lower()
        if normalized not in allowed:
            raise typer.BadParameter(f"expected one of: {', '.join(allowed)}", param_hint=name)
        return normalized

    return validate


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"shellrun {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    epilog=REMARKS,
)
def launch(
    ctx: typer.Context,
    file: Annotated[
        str,
        typer.Option(
            "-f", "--file", help="The name of a document or application file to run."
        ),
    ],
    args: Annotated[
        Optional[list[str]],
        typer.Option("-a", "--args", help="Argument to pass to the process (repeatable)."),
    ] = None,
    workdir: Annotated[
        Optional[str],
        typer.Option("-w", "--workdir", help="Working directory for the started process."),
    ] = None,
    type_: Annotated[
        Optional[str],
        typer.Option(
            "-t",
            "--type",
            help="How to run the program: si, sir, mi or mir.",
            callback=_choice_callback("--type", INSTANCE_MODE_VALUES),
        ),
    ] = None,
    verb: Annotated[
        Optional[str],
        typer.Option(
            "-v",
            "--verb",
            help="Shell verb: edit, find, open, print, properties or runas.",
            callback=_choice_callback("--verb", VERB_VALUES),
        ),
    ] = None,
    delay: Annotated[
        Optional[int],
        typer.Option("-d", "--delay", min=0, help="Milliseconds to wait between launches."),
    ] = None,
    shell: Annotated[
        bool, typer.Option("-h", "--shell", help="Use shell execution.")
    ] = False,
    password: Annotated[
        Optional[str],
        typer.Option("-p", "--pass", help="Require this password before running."),
    ] = None,
    separator: Annotated[
        Optional[str],
        typer.Option("-s", "--separator", help="Separator used to join arguments."),
    ] = None,
    split: Annotated[
        Optional[list[str]],
        typer.Option("-l", "--split", help="Delimiter used to split arguments (repeatable)."),
    ] = None,
    quotation: Annotated[
        Optional[str],
        typer.Option("-q", "--quotation", help="Quotation mark for reorganized arguments."),
    ] = None,
    expand: Annotated[
        bool, typer.Option("--expand", help="Expand environment variables in arguments.")
    ] = False,
    hide: Annotated[
        bool, typer.Option("--hide", help="Start processes without a window.")
    ] = False,
    debug: Annotated[
        bool, typer.Option("--debug", help="Show the resolved run instead of launching.")
    ] = False,
    pause: Annotated[
        bool, typer.Option("--pause", help="Wait for Enter before exiting.")
    ] = False,
    unicode_input: Annotated[
        bool, typer.Option("--unicode-input", help="Redirect standard input as UTF-8.")
    ] = False,
    unicode_output: Annotated[
        bool, typer.Option("--unicode-output", help="Redirect standard output as UTF-8.")
    ] = False,
    unicode_error: Annotated[
        bool, typer.Option("--unicode-error", help="Redirect standard error as UTF-8.")
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Reporting level: trace, debug, info, success, warning or error.",
            callback=_choice_callback("--log-level", (*LOG_LEVEL_NAMES, "warn")),
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colored output.")
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "-V",
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Run a document or application once or many times."""
    del version
    try:
        user_config = config.load_user_config()
        mode = config.resolve_instance_mode_default(type_, user_config)
        joiner = config.resolve_separator_default(separator, user_config)
        wait = config.resolve_delay_default(delay, user_config)
        level = config.resolve_log_level_default(log_level, user_config)
    except LaunchFailure as exc:
        ConsoleReporter(no_color=True if no_color else None).error(describe_failure(exc))
        raise typer.Exit(exc.exit_code) from None

    level_name = level.value
    if debug and level.source != "cli":
        level_name = "debug"
    reporter = ConsoleReporter(
        normalize_level(level_name) if level_name is not None else None,
        no_color=True if no_color else None,
    )
    for resolved in (mode, joiner, wait):
        reporter.debug(f"{resolved.flag}={resolved.value!r} ({resolved.source})")

    options = LaunchOptions(
        target=file,
        arguments=tuple(args or ()),
        workdir=workdir,
        verb=verb,
        instance_mode=mode.value,
        flags=RuntimeFlags(debug=debug, expand=expand, shell=shell, pause=pause, hide=hide),
        unicode=UnicodeStreams(input=unicode_input, output=unicode_output, error=unicode_error),
        delay=wait.value,
        secret=password,
        separator=joiner.value,
        split_delimiters=tuple(split) if split else None,
        quotation=quotation,
        remaining=tuple(ctx.args),
    )
    raise typer.Exit(runner.run(options, reporter=reporter))


def main(argv: list[str] | None = None) -> None:
    """Console script entrypoint.

    An elevation request is handled before any option parsing and always
    ends this process.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if detect_run_state(args) is RunState.ELEVATION_REQUESTED:
        raise SystemExit(relaunch_elevated(args, reporter=ConsoleReporter()))
    app(args=args, prog_name="shellrun")
