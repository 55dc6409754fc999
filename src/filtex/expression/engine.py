"""Entrypoints tying parsing, fallback, normalization and summaries together."""

from __future__ import annotations

import logging

from filtex.expression.ast import Node
from filtex.expression.errors import FilterSyntaxError
from filtex.expression.fallback import to_advanced
from filtex.expression.families import FamilyKind, coerce_family
from filtex.expression.parser import parse_expression
from filtex.expression.summary import describe, with_field
from filtex.expression.transforms import normalize


logger = logging.getLogger("filtex")


def parse_filter_expression(
    family: FamilyKind | str,
    text: str,
    previous: Node | None = None,
) -> Node:
    """Parse and normalize text, falling back to a MatchesAdvanced node.

    Syntax errors never escape; an unknown family raises UnsupportedFamilyError.
    """
    family_kind = coerce_family(family)
    try:
        node = parse_expression(family_kind, text)
    except FilterSyntaxError as exc:
        logger.debug("Falling back to advanced %s expression: %s", family_kind, exc)
        return to_advanced(text, previous)
    return normalize(family_kind, node)


def summarize(
    family: FamilyKind | str,
    text: str,
    locale: str = "en",
    field: str | None = None,
    include_field: bool = True,
    quote_advanced: bool = False,
) -> str:
    """Describe expression text as a localized sentence."""
    node = parse_filter_expression(family, text)
    summary = describe(node, locale, quote_advanced)
    if include_field:
        return with_field(summary, field, locale)
    return summary
