"""Terminal output helpers for the filtex CLI."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console

from filtex.color import should_use_color


class ColorArgs(Protocol):
    """Command arguments carrying the color preference."""

    color_flag: bool | None


def setup_output(args: ColorArgs) -> bool:
    """Resolve whether command output should be colored."""
    return should_use_color(args.color_flag)


def build_console(color_enabled: bool) -> Console:
    """Build the console used for command output."""
    if color_enabled:
        return Console(force_terminal=True, highlight=False, emoji=False)
    return Console(no_color=True, highlight=False, emoji=False, soft_wrap=True)


def lines_to_text(lines: list[str]) -> str:
    if not lines:
        return ""
    return "\n".join(lines)


def print_output(console: Console, text: str, color_enabled: bool, end: str = "\n") -> None:
    """Print text, interpreting Rich markup only when color is enabled."""
    console.print(text, markup=color_enabled, end=end)
