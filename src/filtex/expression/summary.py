"""Render normalized expression trees as localized sentences."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from filtex.expression.ast import (
    AND,
    EQ,
    Absolute,
    Anywhere,
    Between,
    Box,
    Circle,
    Combinator,
    Comparison,
    DateLiteral,
    DateRange,
    DayLiteral,
    Interval,
    IsNull,
    LastInterval,
    Location,
    MatchesAdvanced,
    MonthInterval,
    Node,
    On,
    Past,
    Point,
    RangeInterval,
    Relative,
    RelativeRange,
    RelativeUnit,
    ThisRange,
    ThisUnit,
)
from filtex.expression.locales import message, resolve_locale
from filtex.expression.trees import is_negated, tree_to_list
from filtex.expression.unparse import format_date, format_location, format_month, format_value


_TENTH = Decimal("0.1")


def _coordinate(value: Decimal, positive: str, negative: str) -> str:
    rounded = abs(value).quantize(_TENTH, rounding=ROUND_HALF_EVEN)
    return f"{rounded}°{positive if value >= 0 else negative}"


def format_corner(location: Location, locale: str) -> str:
    """Format a box corner in degrees, e.g. "72.3°N, 173.1°W"."""
    latitude = _coordinate(location.latitude, message(locale, "north"), message(locale, "south"))
    longitude = _coordinate(location.longitude, message(locale, "east"), message(locale, "west"))
    return f"{latitude}, {longitude}"


def _interval(interval: Interval, locale: str) -> str:
    key = f"unit.{interval.unit.value}" if interval.value == 1 else f"unit.{interval.unit.value}s"
    return f"{format_value(interval.value)} {message(locale, key)}"


def _relative_point(interval: Interval, from_now: bool, locale: str) -> str:
    return message(locale, "from_now" if from_now else "ago", interval=_interval(interval, locale))


def _unit_point(node: ThisUnit, locale: str) -> str:
    return message(locale, node.op, unit=message(locale, f"unit.{node.unit.value}"))


def _describe_comparison(node: Comparison, locale: str) -> str:
    values = [format_value(value) for value in dict.fromkeys(node.values)]
    joined = f" {message(locale, 'or')} ".join(values)
    if node.op == EQ:
        return message(locale, "is" if node.is_ else "is_not", values=joined)
    return message(locale, "compare" if node.is_ else "compare_not", op=node.op, value=joined)


def _describe_between(node: Between, locale: str) -> str:
    text = f"{node.bounds[0]}{format_value(node.low)}, {format_value(node.high)}{node.bounds[1]}"
    return message(locale, "in_range" if node.is_ else "not_in_range", range=text)


def _describe_date_literal(node: DateLiteral, locale: str) -> str:
    if node.kind == "month":
        return message(locale, "month", month=format_month(node.year, node.month or 1))
    if node.kind == "quarter":
        return message(locale, "quarter", quarter=f"{node.year:04d}-Q{node.quarter}")
    if node.kind == "fiscalQuarter":
        return message(locale, "fiscal_quarter", quarter=f"FY{node.year:04d}-Q{node.quarter}")
    if node.kind == "fiscalYear":
        return message(locale, "fiscal_year", year=f"FY{node.year:04d}")
    return message(locale, "year", year=f"{node.year:04d}")


def _describe_date(node: Node, locale: str) -> str | None:
    if isinstance(node, DateLiteral):
        return _describe_date_literal(node, locale)
    if isinstance(node, On):
        return message(locale, "on", date=format_date(node.date))
    if isinstance(node, DayLiteral):
        return message(locale, "is_point", point=message(locale, f"day.{node.day}"))
    if isinstance(node, Absolute):
        return message(locale, node.type, date=format_date(node.date))
    if isinstance(node, DateRange):
        return message(locale, "range", start=format_date(node.start), end=format_date(node.end))
    if isinstance(node, RangeInterval):
        return message(
            locale,
            "range_interval",
            interval=_interval(node.interval, locale),
            start=format_date(node.start),
        )
    if isinstance(node, MonthInterval):
        return message(
            locale,
            "range_interval",
            interval=_interval(node.interval, locale),
            start=format_month(node.year, node.month),
        )
    if isinstance(node, Past | LastInterval):
        complete = isinstance(node, Past) and node.complete
        key = "past_complete" if complete else "past"
        return message(locale, key, interval=_interval(node.interval, locale))
    if isinstance(node, Relative):
        point = _relative_point(node.interval, node.from_now, locale)
        return message(locale, "is_point", point=point)
    if isinstance(node, RelativeRange):
        return message(
            locale,
            "relative_range",
            interval=_interval(node.end, locale),
            point=_relative_point(node.start, node.from_now, locale),
        )
    if isinstance(node, ThisUnit):
        point = _unit_point(node, locale)
        if node.before is None:
            return message(locale, "is_point", point=point)
        return message(locale, node.type, date=point)
    if isinstance(node, ThisRange):
        return message(
            locale,
            "this_range",
            start=message(locale, f"unit.{node.start_unit.value}"),
            end=message(locale, f"unit.{node.end_unit.value}"),
        )
    if isinstance(node, RelativeUnit):
        return message(
            locale, node.type, date=_relative_point(node.interval, node.from_now, locale)
        )
    return None


def _describe_location(node: Node, locale: str) -> str | None:
    if isinstance(node, Anywhere):
        return message(locale, "anywhere")
    if isinstance(node, Point):
        return format_location(node.location)
    if isinstance(node, Circle):
        return message(
            locale,
            "circle",
            distance=format_value(node.distance),
            unit=message(locale, f"distance.{node.unit.value}"),
            location=format_location(node.location),
        )
    if isinstance(node, Box):
        return message(
            locale,
            "box",
            start=format_corner(node.start, locale),
            end=format_corner(node.end, locale),
        )
    return None


def describe_item(node: Node, locale: str, quote_advanced: bool = False) -> str:
    """Describe one list item; an AND combinator reads "left and right"."""
    if isinstance(node, Combinator):
        if node.op == AND:
            left = describe_item(node.left, locale, quote_advanced)
            right = describe_item(node.right, locale, quote_advanced)
            return f"{left} {message(locale, 'and')} {right}"
        return describe(node, locale, quote_advanced)
    if isinstance(node, Comparison):
        return _describe_comparison(node, locale)
    if isinstance(node, Between):
        return _describe_between(node, locale)
    if isinstance(node, IsNull):
        return message(locale, "null" if node.is_ else "not_null")
    if isinstance(node, MatchesAdvanced):
        if not node.expression:
            return message(locale, "any_value")
        if quote_advanced:
            return message(locale, "quote", text=node.expression)
        return node.expression
    text = _describe_location(node, locale)
    if text is None:
        text = _describe_date(node, locale)
    if text is None:
        raise TypeError(f"Unsupported node: {type(node).__name__}")
    return text


def describe(node: Node, locale: str = "en", quote_advanced: bool = False) -> str:
    """Describe a normalized tree as a sentence.

    Positive items are joined with "or", negated items with "and", and the two
    groups with ", and ", e.g. `is 23, and is not 42 or 43`.
    """
    locale = resolve_locale(locale)
    items = tree_to_list(node)
    positive = [
        describe_item(item, locale, quote_advanced) for item in items if not is_negated(item)
    ]
    negative = [
        describe_item(item, locale, quote_advanced) for item in items if is_negated(item)
    ]
    groups = []
    if positive:
        groups.append(f" {message(locale, 'or')} ".join(positive))
    if negative:
        groups.append(f" {message(locale, 'and')} ".join(negative))
    return message(locale, "group_join").join(groups)


def with_field(summary: str, field: str | None, locale: str = "en") -> str:
    """Attach a field label to a summary using the locale's placement."""
    if not field:
        return summary
    return message(locale, "field", field=field, summary=summary)
