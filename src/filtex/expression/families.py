"""Expression families and their grammar metadata."""

from __future__ import annotations

from enum import StrEnum

from filtex.expression.errors import UnsupportedFamilyError


class FamilyKind(StrEnum):
    """Semantic type of a filterable field, selecting grammar and transforms."""

    NUMBER = "number"
    DATE = "date"
    LOCATION = "location"
    STRING = "string"
    TIER = "tier"


def coerce_family(family: FamilyKind | str) -> FamilyKind:
    """Convert a family name (any case) to FamilyKind.

    Raises:
        UnsupportedFamilyError: If the name is not a known family
    """
    if isinstance(family, FamilyKind):
        return family
    try:
        return FamilyKind(family.strip().lower())
    except ValueError as exc:
        supported = ", ".join(kind.value for kind in FamilyKind)
        raise UnsupportedFamilyError(
            f"Unknown expression family '{family}'. Supported: {supported}"
        ) from exc


def resolve_family(is_numeric: bool, field_kind: str | None = None) -> FamilyKind:
    """Pick the expression family for a field."""
    if is_numeric:
        return FamilyKind.NUMBER
    match (field_kind or "").lower():
        case "date" | "date_time" | "datetime":
            return FamilyKind.DATE
        case "location":
            return FamilyKind.LOCATION
        case "tier":
            return FamilyKind.TIER
        case _:
            return FamilyKind.STRING


_SHARED_SUB_TYPES = ("null", "!null", "matchesAdvanced")

SUB_TYPES: dict[FamilyKind, tuple[str, ...]] = {
    FamilyKind.NUMBER: (
        "=",
        ">",
        ">=",
        "<",
        "<=",
        "between",
        "!=",
        "!between",
        *_SHARED_SUB_TYPES,
    ),
    FamilyKind.DATE: (
        "on",
        "year",
        "fiscalYear",
        "quarter",
        "fiscalQuarter",
        "month",
        "day",
        "before",
        "after",
        "range",
        "rangeInterval",
        "monthInterval",
        "past",
        "lastInterval",
        "pastAgo",
        "fromNow",
        "relativeRange",
        "this",
        "next",
        "last",
        "thisRange",
        *_SHARED_SUB_TYPES,
    ),
    FamilyKind.LOCATION: (
        "anywhere",
        "location",
        "circle",
        "box",
        *_SHARED_SUB_TYPES,
    ),
    FamilyKind.STRING: ("matchesAdvanced",),
    FamilyKind.TIER: ("matchesAdvanced",),
}


def sub_types(family: FamilyKind | str) -> tuple[str, ...]:
    """List the node type options a family's grammar can produce.

    Negated variants are prefixed with "!".
    """
    return SUB_TYPES[coerce_family(family)]
