"""Argument reorganization for shellrun.

Raw arguments go through expansion, splitting and quoting to produce the
*reorganized* arguments. The instance mode then picks either those or the
raw arguments and decides whether they are joined into one launch or used
one per launch.

Example:
    >>> split_argument("a;b,,c", [";", ","])
    ['a', 'b', '', 'c']
    >>> reorganize_arguments(["x;y"], split_delimiters=[";"])
    ('x', 'y')
"""

from __future__ import annotations

import os
import re
from typing import Iterable, Sequence

from .models import LaunchOptions, TransformedArguments
from .modes import resolve_instance_mode


_PERCENT_REFERENCE_RE = re.compile(r"%([^%]+)%")
_WHITESPACE_RE = re.compile(r"\s")


def expand_percent_references(value: str) -> str:
    """Replace ``%NAME%`` references with environment values.

    Quotes and ``$`` carry no meaning. Unknown names are left untouched.

    Example:
        >>> expand_percent_references("%SHELLRUN_UNSET_NAME%/x")
        '%SHELLRUN_UNSET_NAME%/x'
    """

    def replace(match: re.Match[str]) -> str:
        found = os.environ.get(match.group(1))
        return match.group(0) if found is None else found

    return _PERCENT_REFERENCE_RE.sub(replace, value)


def expand_variables(value: str) -> str:
    """Expand environment-variable references in ``value``.

    Uses the host platform's rules: ``%NAME%`` only on Windows (names are
    case-insensitive there), ``$NAME`` and ``${NAME}`` elsewhere. Unknown
    variables are left untouched.
    """
    if os.name == "nt":
        return expand_percent_references(value)
    return os.path.expandvars(value)


def split_argument(value: str, delimiters: Iterable[str]) -> list[str]:
    """Split ``value`` on any of ``delimiters``.

    At each position the delimiters are tried in the given order. Adjacent
    delimiters are not merged, so empty segments are kept. Empty delimiter
    strings are ignored; when none is left, every whitespace character is a
    delimiter.
    """
    usable = [delimiter for delimiter in delimiters if delimiter]
    if not usable:
        return _WHITESPACE_RE.split(value)
    pattern = "|".join(re.escape(delimiter) for delimiter in usable)
    return re.split(pattern, value)


def reorganize_arguments(
    arguments: Sequence[str],
    *,
    expand: bool = False,
    split_delimiters: Sequence[str] | None = None,
    quotation: str | None = None,
) -> tuple[str, ...]:
    """Expand, split and quote raw arguments.

    When ``quotation`` is set, every element collected so far is wrapped
    again after each raw argument is processed, so earlier elements carry
    one mark pair per remaining raw argument.

    Example:
        >>> reorganize_arguments(["a", "b"], quotation="'")
        ("''a''", "'b'")
    """
    reorganized: list[str] = []
    for argument in arguments:
        value = expand_variables(argument) if expand else argument
        if split_delimiters is None:
            reorganized.append(value)
        else:
            reorganized.extend(split_argument(value, split_delimiters))
        if quotation is not None:
            reorganized = [f"{quotation}{item}{quotation}" for item in reorganized]
    return tuple(reorganized)


def build_process_arguments(
    selected: Sequence[str], *, joins_into_one: bool, separator: str
) -> tuple[str, ...]:
    """Return the per-launch argument strings for ``selected``.

    Example:
        >>> build_process_arguments(["a", "b"], joins_into_one=True, separator=",")
        ('a,b',)
        >>> build_process_arguments([], joins_into_one=True, separator=",")
        ()
    """
    if not selected:
        return ()
    if joins_into_one:
        return (separator.join(selected),)
    return tuple(selected)


def transform_arguments(options: LaunchOptions) -> TransformedArguments:
    """Compute the reorganized and process arguments for a run."""
    traits = resolve_instance_mode(options.instance_mode)
    reorganized = reorganize_arguments(
        options.arguments,
        expand=options.flags.expand,
        split_delimiters=options.split_delimiters,
        quotation=options.quotation,
    )
    selected = reorganized if traits.uses_reorganized else options.arguments
    process = build_process_arguments(
        selected,
        joins_into_one=traits.joins_into_one,
        separator=options.separator,
    )
    return TransformedArguments(reorganized=reorganized, process=process)
