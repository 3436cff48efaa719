"""Pydantic models for shellrun launch options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

INSTANCE_MODE_VALUES = ("si", "sir", "mi", "mir")
InstanceMode = Literal["si", "sir", "mi", "mir"]

VERB_VALUES = ("edit", "find", "open", "print", "properties", "runas")
Verb = Literal["edit", "find", "open", "print", "properties", "runas"]

DEFAULT_SEPARATOR = " "
DEFAULT_INSTANCE_MODE: InstanceMode = "mi"


def _lower_choice(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class RuntimeFlags(BaseModel):
    """Independent runtime switches.

    Attributes:
        debug: Dump the resolved run instead of launching anything.
        expand: Expand environment variables inside raw arguments.
        shell: Launch through the host shell instead of direct execution.
        pause: Wait for Enter before exiting.
        hide: Start launched processes without a window.

    Example:
        >>> RuntimeFlags(expand=True).shell
        False
    """

    model_config = ConfigDict(frozen=True)

    debug: bool = False
    expand: bool = False
    shell: bool = False
    pause: bool = False
    hide: bool = False


class UnicodeStreams(BaseModel):
    """Per-stream UTF-8 overrides; each one redirects that stream.

    Example:
        >>> UnicodeStreams(output=True).any
        True
    """

    model_config = ConfigDict(frozen=True)

    input: bool = False
    output: bool = False
    error: bool = False

    @property
    def any(self) -> bool:
        return self.input or self.output or self.error


class LaunchOptions(BaseModel):
    """Validated, read-only description of one launcher run.

    Attributes:
        target: Executable or document to launch.
        arguments: Raw arguments as given on the command line.
        workdir: Working directory for launched processes.
        verb: Shell verb used to launch the target.
        instance_mode: One of ``si``, ``sir``, ``mi``, ``mir``.
        flags: Runtime switches.
        unicode: UTF-8 stream overrides.
        delay: Milliseconds to wait between consecutive launches.
        secret: Password required before anything is launched.
        separator: Text placed between arguments in single-instance modes.
        split_delimiters: Delimiters used to split each raw argument.
        quotation: Mark wrapped around reorganized arguments.
        remaining: Unrecognized command-line tokens.

    Example:
        >>> LaunchOptions(target="notepad", instance_mode="SIR").instance_mode
        'sir'
    """

    model_config = ConfigDict(frozen=True)

    target: str
    arguments: tuple[str, ...] = ()
    workdir: str | None = None
    verb: Verb | None = None
    instance_mode: InstanceMode = DEFAULT_INSTANCE_MODE
    flags: RuntimeFlags = Field(default_factory=RuntimeFlags)
    unicode: UnicodeStreams = Field(default_factory=UnicodeStreams)
    delay: int = Field(default=0, ge=0)
    secret: str | None = None
    separator: str = DEFAULT_SEPARATOR
    split_delimiters: tuple[str, ...] | None = None
    quotation: str | None = None
    remaining: tuple[str, ...] = ()

    @field_validator("instance_mode", "verb", mode="before")
    @classmethod
    def normalize_choice(cls, value: object) -> object:
        return _lower_choice(value)

    @field_validator("arguments", "remaining", mode="before")
    @classmethod
    def normalize_sequence(cls, value: object) -> object:
        if value is None:
            return ()
        return value

    @field_validator("split_delimiters", mode="before")
    @classmethod
    def normalize_delimiters(cls, value: object) -> object:
        if isinstance(value, (list, tuple)) and not value:
            return None
        return value

    @property
    def is_locked(self) -> bool:
        return self.secret is not None


@dataclass(frozen=True)
class TransformedArguments:
    """Argument sets derived once per run.

    ``reorganized`` holds the expanded/split/quoted arguments; ``process``
    holds exactly what each launch receives.
    """

    reorganized: tuple[str, ...]
    process: tuple[str, ...]
