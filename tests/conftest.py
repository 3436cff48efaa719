# ruff: noqa: E402

import builtins
import getpass
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import shellrun.io as io
from shellrun.exec import SpawnFailure, SpawnRequest, SpawnResult


class RecordingReporter:
    """Reporter that keeps every message with its level."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def _record(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def debug(self, message: str) -> None:
        self._record("debug", message)

    def info(self, message: str) -> None:
        self._record("info", message)

    def success(self, message: str) -> None:
        self._record("success", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def at(self, level: str) -> list[str]:
        return [message for recorded, message in self.messages if recorded == level]


class FakeSpawnRunner:
    """Spawn runner that records requests and fails on chosen arguments."""

    def __init__(self, fail_on: set[str | None] | None = None) -> None:
        self.requests: list[SpawnRequest] = []
        self.fail_on = fail_on or set()

    def spawn(self, request: SpawnRequest) -> SpawnResult:
        self.requests.append(request)
        if request.arguments in self.fail_on:
            return SpawnResult(
                request=request,
                ok=False,
                failure=SpawnFailure("access_denied", f"access denied: {request.target}"),
            )
        return SpawnResult(request=request, ok=True, pid=1000 + len(self.requests))

    @property
    def arguments(self) -> list[str | None]:
        return [request.arguments for request in self.requests]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def spawner() -> FakeSpawnRunner:
    return FakeSpawnRunner()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "SHELLRUN_TYPE",
        "SHELLRUN_SEPARATOR",
        "SHELLRUN_DELAY",
        "SHELLRUN_LOG_LEVEL",
        "SHELLRUN_NO_COLOR",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SHELLRUN_CONFIG", str(tmp_path / "missing-config.json"))
    monkeypatch.setattr(io, "_use_questionary", lambda: False)

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)
    monkeypatch.setattr(getpass, "getpass", fail_input)

