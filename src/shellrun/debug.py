"""Debug dump of a resolved run."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import LaunchOptions, TransformedArguments


def format_value(value: object) -> str:
    """Render a value the way the debug table shows it.

    Example:
        >>> format_value(None)
        ''
        >>> format_value(("a", "b"))
        '[a], [b]'
        >>> format_value(True)
        '[True]'
    """
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(f"[{item}]" for item in value)
    return f"[{value}]"


def variables_table(options: LaunchOptions) -> Table:
    table = Table(title="Variables", box=box.SIMPLE, show_header=False)
    table.add_column("Name", style="bold")
    table.add_column("Value")
    rows: list[tuple[str, object]] = [
        ("File", options.target),
        ("Workdir", options.workdir),
        ("Type", options.instance_mode),
        ("Verb", options.verb),
        ("Split", options.split_delimiters),
        ("Separator", options.separator),
        ("Quotation", options.quotation),
        ("Delay", options.delay),
        ("Expand", options.flags.expand),
        ("Shell", options.flags.shell),
        ("Hide", options.flags.hide),
        ("Pause", options.flags.pause),
        ("Unicode", _unicode_streams(options)),
        ("Lock", options.is_locked),
    ]
    for name, value in rows:
        table.add_row(name, Text(format_value(value)))
    return table


def _unicode_streams(options: LaunchOptions) -> tuple[str, ...]:
    streams = options.unicode
    names = [
        name
        for name, enabled in (
            ("input", streams.input),
            ("output", streams.output),
            ("error", streams.error),
        )
        if enabled
    ]
    return tuple(names)


def items_table(title: str, items: Sequence[str]) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Item", style="bold")
    table.add_column("Value")
    for index, item in enumerate(items):
        table.add_row(Text(f"Item[{index}]"), Text(item))
    return table


def print_debug_info(
    options: LaunchOptions,
    transformed: TransformedArguments,
    *,
    console: Console | None = None,
) -> None:
    """Print the resolved variables and every argument set."""
    console = console or Console()
    console.print(variables_table(options))
    console.print(items_table("Process arguments", transformed.process))
    console.print(items_table("Reorganized arguments", transformed.reorganized))
    console.print(items_table("Initial arguments", options.arguments))
    console.print(items_table("Unrecognized arguments", options.remaining))
