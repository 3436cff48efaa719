"""Tests for the password gate."""

from __future__ import annotations

from typing import Callable

from shellrun import unlock


def _answers(*values: str) -> tuple[Callable[[str], str], list[str]]:
    prompts: list[str] = []
    remaining = list(values)

    def prompt(text: str) -> str:
        prompts.append(text)
        return remaining.pop(0)

    return prompt, prompts


def test_unlocked_run_does_not_prompt(reporter) -> None:
    prompt, prompts = _answers()

    assert unlock.try_unlock(None, reporter=reporter, prompt=prompt) is True
    assert prompts == []
    assert reporter.messages == []


def test_three_wrong_passwords_fail(reporter) -> None:
    prompt, prompts = _answers("x", "ABC", "abc ")

    assert unlock.try_unlock("abc", reporter=reporter, prompt=prompt) is False
    assert prompts == [unlock.PASSWORD_PROMPT] * 3
    warnings = reporter.at("warning")
    assert len(warnings) == 3
    assert "2 attempts left" in warnings[0]
    assert "1 attempt left" in warnings[1]
    assert warnings[2] == "authorization failed"
    assert reporter.at("error") == []


def test_correct_password_on_second_attempt(reporter) -> None:
    prompt, prompts = _answers("nope", "abc")

    assert unlock.try_unlock("abc", reporter=reporter, prompt=prompt) is True
    assert len(prompts) == 2
    assert reporter.at("warning") == ["wrong password, 2 attempts left"]


def test_correct_password_first_time_reports_nothing(reporter) -> None:
    prompt, _ = _answers("abc")

    assert unlock.try_unlock("abc", reporter=reporter, prompt=prompt) is True
    assert reporter.messages == []


def test_empty_password_must_be_entered_exactly(reporter) -> None:
    prompt, _ = _answers("")

    assert unlock.try_unlock("", reporter=reporter, prompt=prompt) is True
