"""Instance-mode resolution.

Each instance-mode code fixes two independent choices: whether launches use
the reorganized arguments or the raw ones, and whether all arguments are
joined into a single launch or dispatched one per launch.

Example:
    >>> resolve_instance_mode("sir")
    InstanceModeTraits(uses_reorganized=True, joins_into_one=True)
"""

from __future__ import annotations

from typing import NamedTuple


class InstanceModeTraits(NamedTuple):
    uses_reorganized: bool
    joins_into_one: bool


_TRAITS_BY_MODE = {
    "si": InstanceModeTraits(uses_reorganized=False, joins_into_one=True),
    "sir": InstanceModeTraits(uses_reorganized=True, joins_into_one=True),
    "mi": InstanceModeTraits(uses_reorganized=False, joins_into_one=False),
    "mir": InstanceModeTraits(uses_reorganized=True, joins_into_one=False),
}


def resolve_instance_mode(code: str) -> InstanceModeTraits:
    """Return the traits for an instance-mode code.

    Args:
        code: One of ``si``, ``sir``, ``mi`` or ``mir``.

    Returns:
        The ``InstanceModeTraits`` for the code.

    Raises:
        ValueError: If the code is not a known instance mode.
    """
    try:
        return _TRAITS_BY_MODE[code]
    except KeyError:
        raise ValueError(f"unsupported instance mode {code!r}") from None


def is_single_instance(code: str) -> bool:
    return resolve_instance_mode(code).joins_into_one


def is_multi_instance(code: str) -> bool:
    return not resolve_instance_mode(code).joins_into_one


def is_reorganized(code: str) -> bool:
    return resolve_instance_mode(code).uses_reorganized
