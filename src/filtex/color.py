"""Color support for CLI output using Rich markup."""

import sys

from rich.markup import escape


NODE_TYPE_STYLE = "bold cyan"
VALUE_STYLE = "green"
NEGATED_STYLE = "red"
DIM_STYLE = "dim white"


def should_use_color(color_flag: bool | None) -> bool:
    """Determine if color should be used based on flag and TTY detection.

    Args:
        color_flag: Explicit color preference (True/False) or None for auto-detect

    Returns:
        True if colors should be used, False otherwise
    """
    if color_flag is None:
        return sys.stdout.isatty()
    return color_flag


def colorize(text: str, style: str, enabled: bool) -> str:
    """Apply Rich markup style to text if enabled.

    Args:
        text: Text to colorize
        style: Rich style string (e.g., "green", "bold white")
        enabled: Whether coloring is enabled

    Returns:
        Styled text if enabled, original text otherwise
    """
    if not enabled:
        return text
    return f"[{style}]{escape(text)}[/]"


def node_type(text: str, enabled: bool) -> str:
    """Style a node type label."""
    return colorize(text, NODE_TYPE_STYLE, enabled)


def node_value(text: str, enabled: bool) -> str:
    return colorize(text, VALUE_STYLE, enabled)


def negated(text: str, enabled: bool) -> str:
    return colorize(text, NEGATED_STYLE, enabled)


def dim(text: str, enabled: bool) -> str:
    return colorize(text, DIM_STYLE, enabled)
