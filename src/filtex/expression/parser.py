"""Parsers for number, date and location filter expressions."""

from __future__ import annotations

import calendar
import re
from collections.abc import Callable, Generator
from dataclasses import replace
from decimal import Decimal

from parsy import ParseError, Parser, eof, fail, generate, regex, seq, string

from filtex.expression.ast import (
    AND,
    EQ,
    GE,
    GT,
    LE,
    LT,
    OR,
    Absolute,
    Anywhere,
    Between,
    Box,
    Circle,
    Comparison,
    DateLiteral,
    DateRange,
    DateUnit,
    DateValue,
    DayLiteral,
    DistanceUnit,
    Interval,
    IsNull,
    LastInterval,
    Location,
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
from filtex.expression.errors import FilterSyntaxError, UnsupportedFamilyError
from filtex.expression.families import FamilyKind, coerce_family
from filtex.expression.trees import fold_right


NUMBER_PATTERN = r"-?(?:\d+(?:\.\d+)?|\.\d+)(?![\d.])"

DAY_NAMES = (
    "today",
    "yesterday",
    "tomorrow",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_DATE_PATTERN = re.compile(
    r"(\d{4})[/-](\d{1,2})[/-](\d{1,2})(?:\s+(\d{1,2}):(\d{2})(?::(\d{2}))?)?(?![\d:/-])"
)
_MONTH_PATTERN = re.compile(r"(\d{4})[/-](\d{1,2})(?![\d:/-])")
_YEAR_PATTERN = re.compile(r"(\d{4})(?![\d/:-])")
_QUARTER_PATTERN = re.compile(r"(\d{4})-Q([1-4])(?![\d])", re.IGNORECASE)
_FISCAL_QUARTER_PATTERN = re.compile(r"FY(\d{4})-Q([1-4])(?![\d])", re.IGNORECASE)
_FISCAL_YEAR_PATTERN = re.compile(r"FY(\d{4})(?![\d-])", re.IGNORECASE)
_DATE_UNIT_PATTERN = re.compile(
    r"(?:fiscal\s+year|fiscal\s+quarter|year|quarter|month|week|day|hour|minute|second)s?"
    r"(?![A-Za-z])",
    re.IGNORECASE,
)
_DISTANCE_UNIT_PATTERN = re.compile(
    r"(?:miles?|kilometers?|meters?|feet|foot)(?![A-Za-z])", re.IGNORECASE
)


def _parse_line_and_column(line_info: str) -> tuple[int, int]:
    """Parse line and column from parsy line info string."""
    line_text, sep, column_text = line_info.partition(":")
    if sep == "":
        return (0, 0)
    if not line_text.isdigit() or not column_text.isdigit():
        return (0, 0)
    return (int(line_text), int(column_text))


def _format_parse_error(text: str, family: str, exc: ParseError) -> str:
    """Build parse error message with a pointer into the expression."""
    line_number, column_number = _parse_line_and_column(exc.line_info())
    lines = text.splitlines() or [text]
    error_line = lines[line_number] if 0 <= line_number < len(lines) else text
    pointer = " " * max(column_number, 0) + "^"
    return f"Invalid {family} expression: {exc}\n\n{error_line}\n{pointer}"


_WS = regex(r"\s*")


def _lexeme(parser: Parser) -> Parser:
    """Consume optional whitespace after parser."""
    return parser << _WS


def _symbol(value: str) -> Parser:
    """Build a symbol token parser."""
    return _lexeme(string(value))


def _keyword(name: str) -> Parser:
    """Build a case-insensitive keyword parser with identifier boundary."""
    return _lexeme(regex(re.compile(rf"{name}(?![A-Za-z0-9_])", re.IGNORECASE)).desc(name))


def _token(pattern: re.Pattern[str], description: str) -> Parser:
    """Build a token parser returning the regex groups of the match."""

    def _groups(text: str) -> tuple[str, ...]:
        match = pattern.match(text)
        if match is None:
            raise FilterSyntaxError(f"Invalid {description}: {text}")
        return match.groups()

    return _lexeme(regex(pattern).map(_groups)).desc(description)


def _number_token() -> Parser:
    return _lexeme(regex(NUMBER_PATTERN).map(Decimal)).desc("number")


def _negate(node: Node) -> Node:
    """Clear the "is" flag of a predicate."""
    if isinstance(node, Comparison | Between):
        return replace(node, is_=False)
    raise FilterSyntaxError(f"Cannot negate {node.type}")


def range_node(bounds: str, low: Decimal | None, high: Decimal | None) -> Node | None:
    """Build a range, or a one-sided comparison when one end is missing."""
    if low is not None and high is not None:
        return Between(bounds, low, high)
    if low is not None:
        return Comparison(GE if bounds[0] == "[" else GT, (low,))
    if high is not None:
        return Comparison(LE if bounds[1] == "]" else LT, (high,))
    return None


def _single_value(node: Comparison) -> bool:
    return node.is_ and len(node.values) == 1


def _fuse_inside_range(first: Node, second: Node) -> Node | None:
    """Fuse `>a AND <b` (either order) into a range."""
    if not isinstance(first, Comparison) or not isinstance(second, Comparison):
        return None
    if not (_single_value(first) and _single_value(second)):
        return None
    lower_ops = (GT, GE)
    upper_ops = (LT, LE)
    if first.op in lower_ops and second.op in upper_ops:
        lower, upper = first, second
    elif first.op in upper_ops and second.op in lower_ops:
        lower, upper = second, first
    else:
        return None
    bounds = ("[" if lower.op == GE else "(") + ("]" if upper.op == LE else ")")
    return Between(bounds, lower.values[0], upper.values[0])


def _fuse_outside_range(first: Node, second: Node) -> Node | None:
    """Fuse `<a OR >b` (either order, a <= b) into a negated range.

    The excluded range includes an end-point exactly when the comparison
    that produced it does, so `<=7 OR >80.44` gives `NOT [7,80.44)`.
    """
    if not isinstance(first, Comparison) or not isinstance(second, Comparison):
        return None
    if not (_single_value(first) and _single_value(second)):
        return None
    below_ops = (LT, LE)
    above_ops = (GT, GE)
    if first.op in below_ops and second.op in above_ops:
        below, above = first, second
    elif first.op in above_ops and second.op in below_ops:
        below, above = second, first
    else:
        return None
    low = below.values[0]
    high = above.values[0]
    if not isinstance(low, Decimal) or not isinstance(high, Decimal) or low > high:
        return None
    bounds = ("[" if below.op == LE else "(") + ("]" if above.op == GE else ")")
    return Between(bounds, low, high, is_=False)


def _chain_list(clause: Parser, separator: Parser, op: str) -> Parser:
    """Build parser for separated clauses folded into a right-leaning chain."""

    @generate
    def parser() -> Generator[Parser, object, Node]:
        first = yield clause
        if not isinstance(first, Node):
            raise FilterSyntaxError("Invalid list item")
        rest = yield (separator >> clause).many()
        if not isinstance(rest, list):
            raise FilterSyntaxError("Invalid list")
        return fold_right(op, [first, *rest])

    return parser


def _build_bracket_range_parser(number: Parser) -> Parser:
    """Build parser for `[low,high]`, `(low,high)` and mixed-bracket ranges."""
    low_bound = _keyword("-inf").result(None) | number
    high_bound = _keyword("inf").result(None) | number

    @generate
    def bracket_range() -> Generator[Parser, object, Node]:
        left = yield _lexeme(regex(r"[\[(]"))
        low = yield low_bound.optional()
        yield _symbol(",")
        high = yield high_bound.optional()
        right = yield _lexeme(regex(r"[\])]"))
        if not isinstance(left, str) or not isinstance(right, str):
            raise FilterSyntaxError("Invalid range brackets")
        node = range_node(left + right, _as_decimal(low), _as_decimal(high))
        if node is None:
            return (yield fail("range bound"))
        return node

    return bracket_range


def _build_to_range_parser(number: Parser, to_kw: Parser) -> Parser:
    """Build parser for `low to high`, `low to` and `to high`."""

    @generate
    def to_range() -> Generator[Parser, object, Node]:
        low = yield number.optional()
        yield to_kw
        high = yield number.optional()
        node = range_node("[]", _as_decimal(low), _as_decimal(high))
        if node is None:
            return (yield fail("number"))
        return node

    return to_range


def _as_decimal(value: object) -> Decimal | None:
    if value is None or isinstance(value, Decimal):
        return value
    raise FilterSyntaxError(f"Invalid number: {value}")


def _build_conjunction_parser(atom: Parser, and_kw: Parser) -> Parser:
    """Build parser for AND-joined terms; `>a AND <b` becomes a range."""

    @generate
    def conjunction() -> Generator[Parser, object, Node]:
        first = yield atom
        rest = yield (and_kw >> atom).many()
        if not isinstance(first, Node) or not isinstance(rest, list):
            raise FilterSyntaxError("Invalid conjunction")
        terms: list[Node] = [first, *rest]
        if len(terms) == 2:
            fused = _fuse_inside_range(terms[0], terms[1])
            if fused is not None:
                return fused
        return fold_right(AND, terms)

    return conjunction


def _build_outside_range_parser(one_sided: Parser, or_kw: Parser) -> Parser:
    """Build parser for `<a OR >b`, which excludes a range."""

    @generate
    def outside() -> Generator[Parser, object, Node]:
        first = yield one_sided
        yield or_kw
        second = yield one_sided
        if not isinstance(first, Node) or not isinstance(second, Node):
            raise FilterSyntaxError("Invalid range")
        fused = _fuse_outside_range(first, second)
        if fused is None:
            return (yield fail("range outside two bounds"))
        return fused

    return outside


def _make_number_parser() -> Parser:
    """Create the number expression parser."""
    number = _number_token()
    not_kw = _keyword("not")
    null_kw = _keyword("null")
    and_kw = _keyword("and")
    or_kw = _keyword("or")
    to_kw = _keyword("to")

    negation = not_kw | _symbol("!=") | _symbol("<>")
    operator = _lexeme(regex(r">=|<=|>|<(?!>)|="))
    one_sided_operator = _lexeme(regex(r">=|<=|>|<(?!>)"))

    comparison = seq(operator, number).combine(lambda op, value: Comparison(op, (value,)))
    one_sided = seq(one_sided_operator, number).combine(
        lambda op, value: Comparison(op, (value,))
    )
    bare_value = number.map(lambda value: Comparison(EQ, (value,)))
    bracket_range = _build_bracket_range_parser(number)
    to_range = _build_to_range_parser(number, to_kw)
    predicate = bracket_range | to_range | comparison | bare_value

    null_term = seq(not_kw.optional(), null_kw).combine(
        lambda negated, _null: IsNull(negated is None)
    )

    @generate
    def term() -> Generator[Parser, object, Node]:
        negated = yield negation.optional()
        node = yield predicate
        if not isinstance(node, Node):
            raise FilterSyntaxError("Invalid predicate")
        return node if negated is None else _negate(node)

    atom = null_term | term
    conjunction = _build_conjunction_parser(atom, and_kw)
    outside = _build_outside_range_parser(one_sided, or_kw)
    clause = outside | conjunction
    expression = _chain_list(clause, _symbol(",") | or_kw, OR)
    return _WS >> expression << eof


def _to_date_value(groups: tuple[str, ...]) -> DateValue | None:
    """Convert date regex groups to a DateValue, or None if not a real date."""
    year, month, day = (int(group) for group in groups[:3])
    hour, minute, second = (None if group is None else int(group) for group in groups[3:])
    if not 1 <= month <= 12 or not 1 <= day <= calendar.monthrange(year, month)[1]:
        return None
    if hour is not None and (hour > 23 or minute is None or minute > 59):
        return None
    if second is not None and second > 59:
        return None
    return DateValue(year, month, day, hour, minute, second)


def _to_date_unit(text: str) -> DateUnit:
    normalized = "_".join(text.lower().split())
    return DateUnit(normalized.removesuffix("s"))


def _build_date_value_parser() -> Parser:
    date_token = _token(_DATE_PATTERN, "date")

    @generate
    def date_value() -> Generator[Parser, object, DateValue]:
        groups = yield date_token
        if not isinstance(groups, tuple):
            raise FilterSyntaxError("Invalid date")
        value = _to_date_value(groups)
        if value is None:
            return (yield fail("valid date"))
        return value

    return date_value


def _build_month_parser() -> Parser:
    month_token = _token(_MONTH_PATTERN, "month")

    @generate
    def month() -> Generator[Parser, object, tuple[int, int]]:
        groups = yield month_token
        if not isinstance(groups, tuple):
            raise FilterSyntaxError("Invalid month")
        year, month_number = int(groups[0]), int(groups[1])
        if not 1 <= month_number <= 12:
            return (yield fail("valid month"))
        return (year, month_number)

    return month


def _make_date_parser() -> Parser:
    """Create the date expression parser."""
    integer = _lexeme(regex(r"\d+(?![\d.])").map(Decimal)).desc("integer")
    unit = _lexeme(regex(_DATE_UNIT_PATTERN).map(_to_date_unit)).desc("unit")
    interval = seq(integer, unit).combine(Interval)
    date_value = _build_date_value_parser()
    month = _build_month_parser()

    this_kw = _keyword("this")
    to_kw = _keyword("to")
    for_kw = _keyword("for")
    before_after = _keyword("before").result(True) | _keyword("after").result(False)
    unit_op = (
        _keyword("this").result("this")
        | _keyword("next").result("next")
        | _keyword("last").result("last")
    )
    direction = _keyword("ago").result(False) | (_keyword("from") >> _keyword("now")).result(True)

    null_term = seq(_keyword("not").optional(), _keyword("null")).combine(
        lambda negated, _null: IsNull(negated is None)
    )
    this_range = seq(this_kw >> unit, to_kw >> unit).combine(ThisRange)
    last_interval = (_keyword("last") >> interval).map(LastInterval)
    this_unit = seq(unit_op, unit).combine(ThisUnit)
    anchored_unit = seq(before_after, unit_op, unit).combine(
        lambda before, op, unit_value: ThisUnit(op, unit_value, before)
    )
    relative_unit = seq(before_after, interval, direction.optional()).combine(
        lambda before, interval_value, from_now: RelativeUnit(
            interval_value, before, bool(from_now)
        )
    )
    absolute = seq(before_after, date_value).combine(
        lambda before, date: Absolute(date, before)
    )
    relative_range = seq(interval, direction, for_kw >> interval).combine(
        lambda start, from_now, end: RelativeRange(start, end, from_now)
    )
    relative = seq(interval, direction).combine(Relative)
    past_complete = seq(integer, _keyword("complete") >> unit).combine(
        lambda value, unit_value: Past(Interval(value, unit_value), complete=True)
    )
    past = interval.map(Past)
    date_range = seq(date_value, to_kw >> date_value).combine(DateRange)
    range_interval = seq(date_value, for_kw >> interval).combine(RangeInterval)
    on = date_value.map(On)
    month_interval = seq(month, for_kw >> interval).combine(
        lambda year_month, span: MonthInterval(year_month[0], year_month[1], span)
    )
    month_literal = month.map(
        lambda year_month: DateLiteral("month", year_month[0], month=year_month[1])
    )
    fiscal_quarter = _token(_FISCAL_QUARTER_PATTERN, "fiscal quarter").map(
        lambda groups: DateLiteral("fiscalQuarter", int(groups[0]), quarter=int(groups[1]))
    )
    fiscal_year = _token(_FISCAL_YEAR_PATTERN, "fiscal year").map(
        lambda groups: DateLiteral("fiscalYear", int(groups[0]))
    )
    quarter = _token(_QUARTER_PATTERN, "quarter").map(
        lambda groups: DateLiteral("quarter", int(groups[0]), quarter=int(groups[1]))
    )
    year = _token(_YEAR_PATTERN, "year").map(lambda groups: DateLiteral("year", int(groups[0])))
    day = _lexeme(
        regex(re.compile(rf"(?:{'|'.join(DAY_NAMES)})(?![A-Za-z])", re.IGNORECASE))
    ).map(lambda text: DayLiteral(text.lower()))

    item = (
        null_term
        | this_range
        | last_interval
        | this_unit
        | anchored_unit
        | relative_unit
        | absolute
        | relative_range
        | relative
        | past_complete
        | past
        | date_range
        | range_interval
        | on
        | month_interval
        | month_literal
        | fiscal_quarter
        | fiscal_year
        | quarter
        | year
        | day
    )
    return _WS >> _chain_list(item, _symbol(","), OR) << eof


def _to_distance_unit(text: str) -> DistanceUnit:
    normalized = text.lower()
    if normalized in ("foot", "feet"):
        return DistanceUnit.FEET
    if not normalized.endswith("s"):
        normalized += "s"
    return DistanceUnit(normalized)


def _make_location_parser() -> Parser:
    """Create the location expression parser."""
    coordinate = _number_token()
    location = seq(coordinate << _symbol(","), coordinate).combine(Location)
    distance_unit = _lexeme(regex(_DISTANCE_UNIT_PATTERN).map(_to_distance_unit)).desc("unit")

    null_kw = _keyword("null")
    null_term = (
        ((_keyword("not") | _symbol("-")) >> null_kw).result(IsNull(False))
        | null_kw.result(IsNull(True))
    )
    box = (_keyword("inside") >> _keyword("box") >> _keyword("from") >> location).bind(
        lambda start: (_keyword("to") >> location).map(lambda end: Box(start, end))
    )
    circle = seq(coordinate, distance_unit, _keyword("from") >> location).combine(Circle)
    point = location.map(Point)

    item = null_term | box | circle | point
    return _WS >> item.optional().map(lambda node: Anywhere() if node is None else node) << eof


NUMBER_PARSER = _make_number_parser()
DATE_PARSER = _make_date_parser()
LOCATION_PARSER = _make_location_parser()


def _run(parser: Parser, family: FamilyKind, text: str) -> Node:
    try:
        result = parser.parse(text)
    except ParseError as exc:
        raise FilterSyntaxError(_format_parse_error(text, family, exc)) from exc
    if isinstance(result, Node):
        return result
    raise FilterSyntaxError(f"{family} parser did not produce an expression")


def parse_number(text: str) -> Node:
    """Parse number expression text, e.g. `[0,20],>30`."""
    return _run(NUMBER_PARSER, FamilyKind.NUMBER, text)


def parse_date(text: str) -> Node:
    """Parse date expression text, e.g. `3 days ago for 2 days`."""
    return _run(DATE_PARSER, FamilyKind.DATE, text)


def parse_location(text: str) -> Node:
    """Parse location expression text, e.g. `40 miles from 36.97, -122.03`."""
    return _run(LOCATION_PARSER, FamilyKind.LOCATION, text)


PARSERS: dict[FamilyKind, Callable[[str], Node]] = {
    FamilyKind.NUMBER: parse_number,
    FamilyKind.DATE: parse_date,
    FamilyKind.LOCATION: parse_location,
}


def parse_expression(family: FamilyKind | str, text: str) -> Node:
    """Parse text with the grammar of the given family.

    Raises:
        FilterSyntaxError: If the text does not fully match the grammar
        UnsupportedFamilyError: If the family has no grammar
    """
    family_kind = coerce_family(family)
    parse = PARSERS.get(family_kind)
    if parse is None:
        raise UnsupportedFamilyError(f"No grammar for {family_kind} expressions")
    return parse(text)
