"""Default resolution for shellrun options.

Defaults come, in order of precedence, from the command line, ``SHELLRUN_*``
environment variables, the user config file and built-in values. The user
config file is JSON validated with Pydantic.

Example:
    >>> resolve_separator_default(",", UserConfig()).source
    'cli'
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import paths
from .errors import ValidationFailedError
from .log import LOG_LEVEL_NAMES
from .models import DEFAULT_INSTANCE_MODE, DEFAULT_SEPARATOR, INSTANCE_MODE_VALUES, InstanceMode

T = TypeVar("T")

DefaultSource = Literal["cli", "env", "config", "built-in"]


class UserConfig(BaseModel):
    """Per-user defaults loaded from ``config.json``.

    Example:
        >>> UserConfig.model_validate({"type": "MIR", "delay": 250}).type
        'mir'
    """

    model_config = ConfigDict(extra="ignore")

    type: InstanceMode | None = None
    separator: str | None = None
    delay: int | None = Field(default=None, ge=0)
    log_level: Literal["trace", "debug", "info", "success", "warning", "warn", "error"] | None = None

    @field_validator("type", "log_level", mode="before")
    @classmethod
    def normalize_choice(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


@dataclass(frozen=True)
class ResolvedCliDefault(Generic[T]):
    """Represent one resolved option value and where it came from."""

    flag: str
    value: T
    source: DefaultSource
    env_var: str | None = None
    raw_env_value: str | None = None


def load_user_config(path: Path | None = None) -> UserConfig:
    """Load the user config file; a missing file yields empty defaults.

    Raises:
        ValidationFailedError: If the file is unreadable, not JSON or invalid.
    """
    config_path = path or paths.user_config_path()
    if not config_path.exists():
        return UserConfig()
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValidationFailedError(
            f"cannot read config file {config_path}: {exc}",
            recovery_hint="fix or remove the file",
        ) from exc
    try:
        return UserConfig.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ValidationFailedError(
            f"invalid config file {config_path}: {location}: {first['msg']}",
            recovery_hint="fix or remove the file",
        ) from exc


def _normalize_choice(value: str, *, source: str, allowed: tuple[str, ...]) -> str:
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise ValidationFailedError(f"{source} must be one of: " + ", ".join(allowed))
    return normalized


def resolve_instance_mode_default(
    explicit: str | None, user_config: UserConfig
) -> ResolvedCliDefault[str]:
    """Resolve the value for ``--type``."""
    if explicit is not None:
        return ResolvedCliDefault(
            flag="--type",
            value=_normalize_choice(explicit, source="type", allowed=INSTANCE_MODE_VALUES),
            source="cli",
        )
    raw = os.environ.get("SHELLRUN_TYPE", "").strip()
    if raw:
        return ResolvedCliDefault(
            flag="--type",
            value=_normalize_choice(raw, source="SHELLRUN_TYPE", allowed=INSTANCE_MODE_VALUES),
            source="env",
            env_var="SHELLRUN_TYPE",
            raw_env_value=raw,
        )
    if user_config.type is not None:
        return ResolvedCliDefault(flag="--type", value=user_config.type, source="config")
    return ResolvedCliDefault(flag="--type", value=DEFAULT_INSTANCE_MODE, source="built-in")


def resolve_separator_default(
    explicit: str | None, user_config: UserConfig
) -> ResolvedCliDefault[str]:
    """Resolve the value for ``--separator``; an empty string is a valid separator."""
    if explicit is not None:
        return ResolvedCliDefault(flag="--separator", value=explicit, source="cli")
    raw = os.environ.get("SHELLRUN_SEPARATOR")
    if raw is not None:
        return ResolvedCliDefault(
            flag="--separator",
            value=raw,
            source="env",
            env_var="SHELLRUN_SEPARATOR",
            raw_env_value=raw,
        )
    if user_config.separator is not None:
        return ResolvedCliDefault(flag="--separator", value=user_config.separator, source="config")
    return ResolvedCliDefault(flag="--separator", value=DEFAULT_SEPARATOR, source="built-in")


def resolve_delay_default(
    explicit: int | None, user_config: UserConfig
) -> ResolvedCliDefault[int]:
    """Resolve the value for ``--delay`` in milliseconds."""
    if explicit is not None:
        return ResolvedCliDefault(flag="--delay", value=explicit, source="cli")
    raw = os.environ.get("SHELLRUN_DELAY", "").strip()
    if raw:
        try:
            value = int(raw)
        except ValueError:
            raise ValidationFailedError(
                "SHELLRUN_DELAY must be an integer number of milliseconds"
            ) from None
        if value < 0:
            raise ValidationFailedError("SHELLRUN_DELAY must not be negative")
        return ResolvedCliDefault(
            flag="--delay",
            value=value,
            source="env",
            env_var="SHELLRUN_DELAY",
            raw_env_value=raw,
        )
    if user_config.delay is not None:
        return ResolvedCliDefault(flag="--delay", value=user_config.delay, source="config")
    return ResolvedCliDefault(flag="--delay", value=0, source="built-in")


def resolve_log_level_default(
    explicit: str | None, user_config: UserConfig
) -> ResolvedCliDefault[str | None]:
    """Resolve the reporter level name.

    ``SHELLRUN_LOG_LEVEL`` is read by the reporter itself, so only the flag
    and the config file are considered here; ``None`` defers to it.
    """
    if explicit is not None:
        value = _normalize_choice(explicit, source="log level", allowed=(*LOG_LEVEL_NAMES, "warn"))
        return ResolvedCliDefault(flag="--log-level", value=value, source="cli")
    if os.environ.get("SHELLRUN_LOG_LEVEL", "").strip():
        return ResolvedCliDefault(
            flag="--log-level",
            value=None,
            source="env",
            env_var="SHELLRUN_LOG_LEVEL",
            raw_env_value=os.environ["SHELLRUN_LOG_LEVEL"],
        )
    if user_config.log_level is not None:
        return ResolvedCliDefault(flag="--log-level", value=user_config.log_level, source="config")
    return ResolvedCliDefault(flag="--log-level", value=None, source="built-in")
