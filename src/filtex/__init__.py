"""filtex - Parse, normalize and describe filter expressions."""

from filtex.expression import (
    FamilyKind,
    describe,
    normalize,
    parse_expression,
    parse_filter_expression,
    resolve_family,
    sub_types,
    summarize,
    to_advanced,
    to_expression,
)


__version__ = "0.1.0"

__all__ = [
    "FamilyKind",
    "__version__",
    "describe",
    "normalize",
    "parse_expression",
    "parse_filter_expression",
    "resolve_family",
    "sub_types",
    "summarize",
    "to_advanced",
    "to_expression",
]
