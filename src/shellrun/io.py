"""Console prompts used by shellrun runs."""

from __future__ import annotations

import getpass
import sys

import questionary


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def prompt_secret(text: str) -> str:
    """Read a line of hidden input.

    Args:
        text: Prompt label shown to the user.

    Returns:
        The entered text. An aborted prompt (Ctrl-C in the interactive
        prompt) yields an empty string, which never matches a password.

    Example:
        Enter password: ********
    """
    if _use_questionary():
        value = questionary.password(text).ask()
        return "" if value is None else str(value)
    return getpass.getpass(text)


def pause(text: str = "Press Enter to continue...") -> None:
    """Block until the user presses Enter; EOF ends the wait."""
    try:
        input(text)
    except EOFError:
        return
