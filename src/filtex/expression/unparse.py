"""Convert expression trees back to canonical expression text."""

from __future__ import annotations

from decimal import Decimal

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
    DateValue,
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
    Value,
)
from filtex.expression.trees import tree_to_list


def format_value(value: Value) -> str:
    """Format a number without exponent notation."""
    if isinstance(value, Decimal):
        text = format(value, "f")
        return "0" if text == "-0" else text
    return str(value)


def format_date(value: DateValue) -> str:
    """Format a date as YYYY/MM/DD with an optional HH:MM[:SS]."""
    text = f"{value.year:04d}/{value.month:02d}/{value.day:02d}"
    if value.hour is None:
        return text
    text += f" {value.hour:02d}:{value.minute or 0:02d}"
    if value.second is not None:
        text += f":{value.second:02d}"
    return text


def format_month(year: int, month: int) -> str:
    return f"{year:04d}/{month:02d}"


def format_location(location: Location) -> str:
    return f"{format_value(location.latitude)}, {format_value(location.longitude)}"


def format_interval(interval: Interval) -> str:
    """Format an interval, e.g. "1 day" or "3 fiscal years"."""
    words = interval.unit.words
    if interval.value != 1:
        words += "s"
    return f"{format_value(interval.value)} {words}"


def _direction(from_now: bool) -> str:
    return "from now" if from_now else "ago"


def _before_after(before: bool) -> str:
    return "before" if before else "after"


def _comparison_text(node: Comparison) -> str:
    prefix = "" if node.is_ else "not "
    if node.op == EQ:
        return ",".join(f"{prefix}{format_value(value)}" for value in node.values)
    return ",".join(f"{prefix}{node.op}{format_value(value)}" for value in node.values)


def _between_text(node: Between) -> str:
    text = f"{node.bounds[0]}{format_value(node.low)},{format_value(node.high)}{node.bounds[1]}"
    return text if node.is_ else f"not {text}"


def _date_literal_text(node: DateLiteral) -> str:
    if node.kind == "month":
        return format_month(node.year, node.month or 1)
    if node.kind == "quarter":
        return f"{node.year:04d}-Q{node.quarter}"
    if node.kind == "fiscalQuarter":
        return f"FY{node.year:04d}-Q{node.quarter}"
    if node.kind == "fiscalYear":
        return f"FY{node.year:04d}"
    return f"{node.year:04d}"


def _date_text(node: Node) -> str | None:
    """Render date leaves, or None for other node types."""
    if isinstance(node, DateLiteral):
        return _date_literal_text(node)
    if isinstance(node, On):
        return format_date(node.date)
    if isinstance(node, DayLiteral):
        return node.day
    if isinstance(node, Absolute):
        return f"{_before_after(node.before)} {format_date(node.date)}"
    if isinstance(node, DateRange):
        return f"{format_date(node.start)} to {format_date(node.end)}"
    if isinstance(node, RangeInterval):
        return f"{format_date(node.start)} for {format_interval(node.interval)}"
    if isinstance(node, MonthInterval):
        return f"{format_month(node.year, node.month)} for {format_interval(node.interval)}"
    if isinstance(node, Past):
        if node.complete:
            value = format_value(node.interval.value)
            return f"{value} complete {format_interval(node.interval).split(' ', 1)[1]}"
        return format_interval(node.interval)
    if isinstance(node, LastInterval):
        return f"last {format_interval(node.interval)}"
    if isinstance(node, Relative):
        return f"{format_interval(node.interval)} {_direction(node.from_now)}"
    if isinstance(node, RelativeRange):
        return (
            f"{format_interval(node.start)} {_direction(node.from_now)}"
            f" for {format_interval(node.end)}"
        )
    if isinstance(node, ThisUnit):
        text = f"{node.op} {node.unit.words}"
        return text if node.before is None else f"{_before_after(node.before)} {text}"
    if isinstance(node, ThisRange):
        return f"this {node.start_unit.words} to {node.end_unit.words}"
    if isinstance(node, RelativeUnit):
        return (
            f"{_before_after(node.before)} {format_interval(node.interval)}"
            f" {_direction(node.from_now)}"
        )
    return None


def to_expression(node: Node) -> str:
    """Render a tree as expression text that parses back to the same tree.

    OR chains list positive items first, e.g. `NOT 10,[1,5)` gives `[1,5),not 10`.
    """
    if isinstance(node, Combinator):
        if node.op == AND:
            return f"{to_expression(node.left)} and {to_expression(node.right)}"
        return ",".join(to_expression(item) for item in tree_to_list(node))
    if isinstance(node, Comparison):
        return _comparison_text(node)
    if isinstance(node, Between):
        return _between_text(node)
    if isinstance(node, IsNull):
        return "null" if node.is_ else "not null"
    if isinstance(node, MatchesAdvanced):
        return node.expression
    if isinstance(node, Anywhere):
        return ""
    if isinstance(node, Point):
        return format_location(node.location)
    if isinstance(node, Circle):
        return (
            f"{format_value(node.distance)} {node.unit.value} from "
            f"{format_location(node.location)}"
        )
    if isinstance(node, Box):
        return (
            f"inside box from {format_location(node.start)} to {format_location(node.end)}"
        )
    text = _date_text(node)
    if text is None:
        raise TypeError(f"Unsupported node: {type(node).__name__}")
    return text
