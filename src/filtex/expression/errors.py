"""Errors for filter expression parsing and normalization."""


class FilterExpressionError(Exception):
    """Base exception for filter expression failures."""


class FilterSyntaxError(FilterExpressionError):
    """Raised when expression text does not match its family grammar."""


class InvariantViolation(FilterExpressionError):
    """Raised when a transform receives a tree shape it cannot handle."""


class UnsupportedFamilyError(FilterExpressionError, ValueError):
    """Raised when no grammar exists for the requested expression family."""
