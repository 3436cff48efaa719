"""Process spawning for shellrun launches."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

SpawnFailureReason = Literal[
    "not_found",
    "access_denied",
    "invalid_arguments",
    "unsupported",
    "os_error",
]

# Windows ShowWindow constants.
SW_HIDE = 0
SW_SHOWNORMAL = 1


@dataclass(frozen=True)
class ProcessConfig:
    """Per-launch process settings; every field applies independently."""

    workdir: Path | None = None
    verb: str | None = None
    use_shell: bool = False
    hidden: bool = False
    utf8_input: bool = False
    utf8_output: bool = False
    utf8_error: bool = False

    @property
    def redirects_streams(self) -> bool:
        return self.utf8_input or self.utf8_output or self.utf8_error


@dataclass(frozen=True)
class SpawnRequest:
    """Typed launch request."""

    target: str
    arguments: str | None = None
    config: ProcessConfig = ProcessConfig()


@dataclass(frozen=True)
class SpawnFailure:
    """Why the OS refused a launch."""

    reason: SpawnFailureReason
    detail: str


@dataclass(frozen=True)
class SpawnResult:
    """Outcome of a single launch attempt."""

    request: SpawnRequest
    ok: bool
    pid: int | None = None
    failure: SpawnFailure | None = None


class SpawnRunner(Protocol):
    """Runtime process-spawning interface."""

    def spawn(self, request: SpawnRequest) -> SpawnResult: ...


def _failed(request: SpawnRequest, reason: SpawnFailureReason, detail: str) -> SpawnResult:
    return SpawnResult(request=request, ok=False, failure=SpawnFailure(reason, detail))


def _failure_from_os_error(request: SpawnRequest, exc: OSError) -> SpawnResult:
    if isinstance(exc, FileNotFoundError):
        return _failed(request, "not_found", f"not found: {request.target}")
    if isinstance(exc, PermissionError):
        return _failed(request, "access_denied", f"access denied: {request.target}")
    return _failed(request, "os_error", f"{request.target}: {exc.strerror or exc}")


def join_command_line(argv: list[str]) -> str:
    """Quote ``argv`` into a single command-line string for this platform."""
    if os.name == "nt":
        return subprocess.list2cmdline(argv)
    return shlex.join(argv)


def system_editor_default() -> str:
    """Return the editor command used for the ``edit`` verb off Windows."""
    for name in ("VISUAL", "EDITOR"):
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return "vi"


def _posix_opener() -> str:
    return "open" if sys.platform == "darwin" else "xdg-open"


def posix_verb_command(verb: str, target: str, arguments: str | None) -> list[str] | None:
    """Translate a shell verb into a command for POSIX hosts.

    Returns ``None`` for verbs that have no POSIX equivalent. The argument
    string is forwarded to the verb's command; ``xdg-open`` takes none, so
    arguments with ``open`` there raise ``ValueError``.
    """
    extra = shlex.split(arguments) if arguments else []
    if verb == "open":
        opener = _posix_opener()
        if not extra:
            return [opener, target]
        if opener == "open":
            return [opener, target, "--args", *extra]
        raise ValueError(f"{opener} does not accept arguments for {target}")
    if verb == "edit":
        return [*shlex.split(system_editor_default()), *extra, target]
    if verb == "print":
        return ["lp", *extra, target]
    if verb == "runas":
        return ["sudo", target, *extra]
    return None


class SubprocessSpawnRunner:
    """Default spawn adapter backed by ``subprocess`` and ``os.startfile``.

    Launches are not waited on unless a UTF-8 stream override redirects one
    of the standard streams; in that case the redirected output is relayed
    to this process's own streams once the child exits. A redirected input
    stream is fed with this process's standard input, read once and handed
    to every launch of the run.
    """

    def __init__(self) -> None:
        self._parent_input: str | None = None

    def _read_parent_input(self) -> str:
        if self._parent_input is None:
            self._parent_input = sys.stdin.read() if sys.stdin is not None else ""
        return self._parent_input

    def spawn(self, request: SpawnRequest) -> SpawnResult:
        config = request.config
        try:
            if config.verb is not None and os.name == "nt":
                return self._start_with_verb(request)
            return self._popen(request)
        except ValueError as exc:
            return _failed(request, "invalid_arguments", f"invalid arguments: {exc}")
        except OSError as exc:
            return _failure_from_os_error(request, exc)

    def _start_with_verb(self, request: SpawnRequest) -> SpawnResult:
        config = request.config
        if config.redirects_streams:
            return _failed(
                request,
                "unsupported",
                "stream encoding overrides cannot be combined with a verb",
            )
        os.startfile(  # type: ignore[attr-defined]
            request.target,
            config.verb,
            request.arguments or "",
            str(config.workdir) if config.workdir is not None else None,
            SW_HIDE if config.hidden else SW_SHOWNORMAL,
        )
        return SpawnResult(request=request, ok=True)

    def _command(self, request: SpawnRequest) -> list[str] | str | None:
        config = request.config
        if config.verb is not None:
            return posix_verb_command(config.verb, request.target, request.arguments)
        if config.use_shell or os.name == "nt":
            # The argument string is passed through verbatim.
            line = join_command_line([request.target])
            if request.arguments:
                line = f"{line} {request.arguments}"
            return line
        return [request.target, *shlex.split(request.arguments or "")]

    def _popen(self, request: SpawnRequest) -> SpawnResult:
        config = request.config
        command = self._command(request)
        if command is None:
            return _failed(
                request,
                "unsupported",
                f"verb {config.verb!r} is not supported on this platform",
            )

        popen_kwargs: dict[str, object] = {
            "cwd": config.workdir,
            "shell": config.use_shell and config.verb is None,
        }
        if config.redirects_streams:
            popen_kwargs["encoding"] = "utf-8"
            popen_kwargs["errors"] = "replace"
        if config.utf8_input:
            popen_kwargs["stdin"] = subprocess.PIPE
        if config.utf8_output:
            popen_kwargs["stdout"] = subprocess.PIPE
        if config.utf8_error:
            popen_kwargs["stderr"] = subprocess.PIPE
        if config.hidden and os.name == "nt":
            startupinfo = subprocess.STARTUPINFO()  # type: ignore[attr-defined]
            startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW  # type: ignore[attr-defined]
            startupinfo.wShowWindow = SW_HIDE
            popen_kwargs["startupinfo"] = startupinfo
            popen_kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW  # type: ignore[attr-defined]

        process = subprocess.Popen(command, **popen_kwargs)  # type: ignore[call-overload]
        if config.redirects_streams:
            child_input = self._read_parent_input() if config.utf8_input else None
            stdout, stderr = process.communicate(input=child_input)
            if stdout:
                sys.stdout.write(stdout)
                sys.stdout.flush()
            if stderr:
                sys.stderr.write(stderr)
                sys.stderr.flush()
        return SpawnResult(request=request, ok=True, pid=process.pid)


_DEFAULT_SPAWN_RUNNER: SpawnRunner = SubprocessSpawnRunner()


def spawn_with_runner(request: SpawnRequest, *, runner: SpawnRunner | None = None) -> SpawnResult:
    """Execute a launch request with the given runner."""
    active_runner = runner or _DEFAULT_SPAWN_RUNNER
    return active_runner.spawn(request)
