"""Password gate for locked runs.

The configured password is compared with plain string equality. It is an
access prompt for casual use, not a protection against a determined user.
"""

from __future__ import annotations

from typing import Callable

from .io import prompt_secret
from .log import Reporter

MAX_ATTEMPTS = 3
PASSWORD_PROMPT = "Enter password: "


def _mismatch_message(attempts_left: int) -> str:
    if attempts_left <= 0:
        return "authorization failed"
    noun = "attempt" if attempts_left == 1 else "attempts"
    return f"wrong password, {attempts_left} {noun} left"


def try_unlock(
    secret: str | None,
    *,
    reporter: Reporter,
    prompt: Callable[[str], str] = prompt_secret,
) -> bool:
    """Ask for the password until it matches or attempts run out.

    Args:
        secret: Configured password; ``None`` means the run is not locked.
        reporter: Receives one warning per wrong password.
        prompt: Reads one line of hidden input.

    Returns:
        ``True`` once a prompt matches ``secret`` exactly (or when there is no
        secret), ``False`` after ``MAX_ATTEMPTS`` consecutive mismatches.
    """
    if secret is None:
        return True
    attempts_left = MAX_ATTEMPTS
    while attempts_left > 0:
        if prompt(PASSWORD_PROMPT) == secret:
            return True
        attempts_left -= 1
        reporter.warning(_mismatch_message(attempts_left))
    return False
