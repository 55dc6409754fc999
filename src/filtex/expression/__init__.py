"""Public API for filter expression parsing, normalization and summaries."""

from filtex.expression.ast import Between, Combinator, Comparison, IsNull, MatchesAdvanced, Node
from filtex.expression.engine import parse_filter_expression, summarize
from filtex.expression.errors import (
    FilterExpressionError,
    FilterSyntaxError,
    InvariantViolation,
    UnsupportedFamilyError,
)
from filtex.expression.fallback import to_advanced
from filtex.expression.families import FamilyKind, resolve_family, sub_types
from filtex.expression.parser import parse_date, parse_expression, parse_location, parse_number
from filtex.expression.summary import describe
from filtex.expression.transforms import normalize
from filtex.expression.unparse import to_expression


__all__ = [
    "Between",
    "Combinator",
    "Comparison",
    "FamilyKind",
    "FilterExpressionError",
    "FilterSyntaxError",
    "InvariantViolation",
    "IsNull",
    "MatchesAdvanced",
    "Node",
    "UnsupportedFamilyError",
    "describe",
    "normalize",
    "parse_date",
    "parse_expression",
    "parse_filter_expression",
    "parse_location",
    "parse_number",
    "resolve_family",
    "sub_types",
    "summarize",
    "to_advanced",
    "to_expression",
]
