"""End-to-end tests for a run, with the spawn and prompt seams faked."""

from __future__ import annotations

from pathlib import Path

import pytest

from shellrun import runner
from shellrun.models import LaunchOptions, RuntimeFlags


@pytest.fixture
def target(tmp_path: Path) -> str:
    path = tmp_path / "tool.exe"
    path.write_text("")
    return str(path)


def _no_prompt(text: str) -> str:
    raise AssertionError("prompted unexpectedly")


def test_multi_instance_launches_each_argument(target: str, reporter, spawner) -> None:
    sleeps: list[int] = []
    options = LaunchOptions(target=target, arguments=("a", "b"), instance_mode="mi", delay=0)

    code = runner.run(options, reporter=reporter, runner=spawner, sleep=sleeps.append)

    assert code == 0
    assert spawner.arguments == ["a", "b"]
    assert sleeps == []


def test_single_instance_joins_with_separator(target: str, reporter, spawner) -> None:
    options = LaunchOptions(target=target, arguments=("a", "b"), instance_mode="si", separator=",")

    code = runner.run(options, reporter=reporter, runner=spawner)

    assert code == 0
    assert spawner.arguments == ["a,b"]


def test_multi_instance_reorganized_splits_arguments(target: str, reporter, spawner) -> None:
    options = LaunchOptions(
        target=target,
        arguments=("a;b", "c"),
        instance_mode="mir",
        split_delimiters=(";",),
    )

    code = runner.run(options, reporter=reporter, runner=spawner)

    assert code == 0
    assert spawner.arguments == ["a", "b", "c"]


def test_missing_target_aborts_before_launch(tmp_path: Path, reporter, spawner) -> None:
    options = LaunchOptions(target=str(tmp_path / "missing.exe"), arguments=("a",))

    code = runner.run(options, reporter=reporter, runner=spawner)

    assert code != 0
    assert spawner.requests == []
    errors = reporter.at("error")
    assert len(errors) == 1
    assert "file not found" in errors[0]


def test_target_on_path_is_accepted(monkeypatch: pytest.MonkeyPatch, reporter, spawner) -> None:
    monkeypatch.setattr(runner.shutil, "which", lambda name: f"/usr/bin/{name}")

    code = runner.run(LaunchOptions(target="tool"), reporter=reporter, runner=spawner)

    assert code == 0
    assert spawner.arguments == [None]


def test_debug_mode_dumps_instead_of_launching(
    tmp_path: Path, reporter, spawner, capsys: pytest.CaptureFixture[str]
) -> None:
    options = LaunchOptions(
        target=str(tmp_path / "missing.exe"),
        arguments=("a;b",),
        instance_mode="mir",
        split_delimiters=(";",),
        flags=RuntimeFlags(debug=True),
        remaining=("--unknown",),
    )

    code = runner.run(options, reporter=reporter, runner=spawner)

    assert code == 0
    assert spawner.requests == []
    output = capsys.readouterr().out
    assert "Process arguments" in output
    assert "--unknown" in output


def test_locked_run_launches_after_password(target: str, reporter, spawner) -> None:
    answers = iter(["wrong", "secret"])
    options = LaunchOptions(target=target, secret="secret")

    code = runner.run(
        options, reporter=reporter, runner=spawner, prompt=lambda text: next(answers)
    )

    assert code == 0
    assert spawner.arguments == [None]
    assert len(reporter.at("warning")) == 1


def test_failed_unlock_aborts_before_validation_and_launch(
    tmp_path: Path, reporter, spawner
) -> None:
    options = LaunchOptions(target=str(tmp_path / "missing.exe"), secret="secret")

    code = runner.run(options, reporter=reporter, runner=spawner, prompt=lambda text: "no")

    assert code == 1
    assert spawner.requests == []
    assert reporter.at("warning")[-1] == "authorization failed"
    assert all("file not found" not in message for message in reporter.at("error"))


def test_spawn_failures_do_not_change_exit_code(target: str, reporter, spawner) -> None:
    spawner.fail_on = {"a"}
    options = LaunchOptions(target=target, arguments=("a", "b"), instance_mode="mi")

    code = runner.run(options, reporter=reporter, runner=spawner, prompt=_no_prompt)

    assert code == 0
    assert spawner.arguments == ["a", "b"]
    assert "1 of 2 launch(es) failed" in reporter.at("warning")


def test_pause_waits_after_the_loop(target: str, reporter, spawner) -> None:
    events: list[str] = []

    class PausingRunner:
        def spawn(self, request):
            events.append("spawn")
            return spawner.spawn(request)

    options = LaunchOptions(target=target, flags=RuntimeFlags(pause=True))

    code = runner.run(
        options, reporter=reporter, runner=PausingRunner(), pause=lambda: events.append("pause")
    )

    assert code == 0
    assert events == ["spawn", "pause"]


def test_unexpected_error_becomes_fatal_report(target: str, reporter) -> None:
    class BrokenRunner:
        def spawn(self, request):
            raise RuntimeError("boom")

    code = runner.run(LaunchOptions(target=target), reporter=reporter, runner=BrokenRunner())

    assert code == 1
    assert reporter.at("error") == ["fatal: boom"]
