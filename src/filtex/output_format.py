"""Output formats for parsed expressions."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, is_dataclass
from decimal import Decimal
from enum import StrEnum

from rich.console import Console
from rich.syntax import Syntax

from filtex.color import dim, negated, node_type, node_value
from filtex.expression.ast import Between, Combinator, Comparison, IsNull, MatchesAdvanced, Node
from filtex.expression.trees import is_negated, type_option
from filtex.expression.unparse import format_value, to_expression
from filtex.tui import lines_to_text, print_output


logger = logging.getLogger("filtex")

DEFAULT_OUTPUT_THEME = "github-dark"

_SYNTAX_LANGUAGES: dict[str, str] = {
    "json": "json",
}


class OutputFormat(StrEnum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"


class OutputFormatError(RuntimeError):
    """Raised when output formatting fails."""


@dataclass(frozen=True)
class OutputOperation:
    """One prepared output operation."""

    kind: str
    text: str | None = None
    renderable: object | None = None
    color_enabled: bool = False
    end: str = "\n"


@dataclass(frozen=True)
class PreparedOutput:
    """Prepared output operations ready for console rendering."""

    operations: tuple[OutputOperation, ...]


def resolve_output_format(value: str) -> OutputFormat:
    """Return the output format named by value.

    Raises:
        OutputFormatError: If the format is not supported
    """
    normalized = value.strip().lower()
    try:
        return OutputFormat(normalized)
    except ValueError as exc:
        supported = ", ".join(item.value for item in OutputFormat)
        raise OutputFormatError(
            f"Unsupported output format '{value}'. Supported: {supported}"
        ) from exc


def _to_json_compatible(value: object) -> object:
    """Convert AST values into JSON-compatible data."""
    if isinstance(value, Node):
        return node_payload(value)
    if isinstance(value, Decimal):
        return format_value(value)
    if isinstance(value, StrEnum):
        return value.value
    if isinstance(value, tuple | list):
        return [_to_json_compatible(item) for item in value]
    if is_dataclass(value) and not isinstance(value, type):
        return {
            item.name: _to_json_compatible(getattr(value, item.name))
            for item in fields(value)
            if getattr(value, item.name) is not None
        }
    return value


def node_payload(node: Node) -> dict[str, object]:
    """Build the JSON payload for a node; the "is_" field is emitted as "is"."""
    payload: dict[str, object] = {"type": node.type}
    for item in fields(node):
        if item.name == "id":
            continue
        key = "is" if item.name == "is_" else item.name
        value = getattr(node, item.name)
        if value is None:
            continue
        payload[key] = _to_json_compatible(value)
    return payload


def _leaf_detail(node: Node) -> str:
    if isinstance(node, Comparison):
        return ", ".join(format_value(value) for value in node.values)
    if isinstance(node, Between):
        low = format_value(node.low)
        high = format_value(node.high)
        return f"{node.bounds[0]}{low}, {high}{node.bounds[1]}"
    if isinstance(node, IsNull):
        return ""
    if isinstance(node, MatchesAdvanced):
        return json.dumps(node.expression, ensure_ascii=False)
    return to_expression(node)


def format_tree_lines(node: Node, color_enabled: bool, indent: str = "") -> list[str]:
    """Format a tree as indented lines, one node per line."""
    if isinstance(node, Combinator):
        label = f"{node.type} ({node.op})"
        lines = [f"{indent}{node_type(label, color_enabled)}"]
        for child in node.children:
            lines.extend(format_tree_lines(child, color_enabled, indent + "  "))
        return lines

    label = type_option(node)
    styled = negated(label, color_enabled) if is_negated(node) else node_type(label, color_enabled)
    detail = _leaf_detail(node)
    if not detail:
        return [f"{indent}{styled}"]
    return [f"{indent}{styled} {node_value(detail, color_enabled)}"]


def _write_plain_output(console: Console, text: str) -> None:
    """Write plain output directly to console stream."""
    console.file.write(f"{text}\n")
    console.file.flush()


def print_prepared_output(console: Console, prepared_output: PreparedOutput) -> None:
    """Print already prepared output operations."""
    for operation in prepared_output.operations:
        if operation.kind == "plain_write":
            if operation.text is not None:
                _write_plain_output(console, operation.text)
            continue
        if operation.kind == "print_output":
            if operation.text is not None:
                print_output(
                    console,
                    operation.text,
                    operation.color_enabled,
                    end=operation.end,
                )
            continue
        if operation.renderable is not None:
            console.print(operation.renderable)
            continue
        console.print(operation.text if operation.text is not None else "", markup=False)


def _normalize_syntax_theme(out_theme: str) -> str:
    """Return a valid theme name for syntax rendering."""
    normalized_theme = out_theme.strip()
    if normalized_theme:
        return normalized_theme
    return DEFAULT_OUTPUT_THEME


def _prepare_output(
    text: str,
    color_enabled: bool,
    output_format: str,
    out_theme: str,
) -> PreparedOutput:
    """Prepare output with syntax highlighting when available."""
    if color_enabled:
        language = _SYNTAX_LANGUAGES.get(output_format)
        if language is not None:
            return PreparedOutput(
                operations=(
                    OutputOperation(
                        kind="console_print",
                        renderable=Syntax(
                            text,
                            language,
                            theme=_normalize_syntax_theme(out_theme),
                            line_numbers=False,
                            word_wrap=True,
                        ),
                    ),
                )
            )
    return PreparedOutput(operations=(OutputOperation(kind="plain_write", text=text),))


def prepare_node_output(
    node: Node,
    output_format: OutputFormat,
    color_enabled: bool,
    out_theme: str,
    summary: str | None = None,
) -> PreparedOutput:
    """Prepare a parsed tree, and optionally its summary, for printing."""
    if output_format == OutputFormat.JSON:
        payload: dict[str, object] = {
            "expression": to_expression(node),
            "ast": node_payload(node),
        }
        if summary is not None:
            payload["summary"] = summary
        return _prepare_output(
            json.dumps(payload, ensure_ascii=True, indent=2),
            color_enabled,
            OutputFormat.JSON,
            out_theme,
        )

    lines = format_tree_lines(node, color_enabled)
    if summary is not None:
        lines.append(dim(summary, color_enabled))
    return PreparedOutput(
        operations=(
            OutputOperation(
                kind="print_output",
                text=lines_to_text(lines),
                color_enabled=color_enabled,
            ),
        )
    )
