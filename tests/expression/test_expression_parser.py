"""Tests for number, date and location expression parsers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from filtex.expression.ast import (
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
    Combinator,
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
from filtex.expression.engine import parse_filter_expression
from filtex.expression.errors import FilterSyntaxError, UnsupportedFamilyError
from filtex.expression.parser import parse_date, parse_expression, parse_location, parse_number


def _d(text: str) -> Decimal:
    return Decimal(text)


def _eq(*values: str, is_: bool = True) -> Comparison:
    return Comparison(EQ, tuple(_d(value) for value in values), is_)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("5", _eq("5")),
        ("not 5", _eq("5", is_=False)),
        ("<> 5", _eq("5", is_=False)),
        ("!= 5", _eq("5", is_=False)),
        ("= 5", _eq("5")),
        (
            "[0,20],>30",
            Combinator(OR, Between("[]", _d("0"), _d("20")), Comparison(GT, (_d("30"),))),
        ),
        ("5.5 to 10", Between("[]", _d("5.5"), _d("10"))),
        ("not 3 to 80.44", Between("[]", _d("3"), _d("80.44"), is_=False)),
        ("1 to", Comparison(GE, (_d("1"),))),
        ("to 100", Comparison(LE, (_d("100"),))),
        (">= 5.5 AND <=10", Between("[]", _d("5.5"), _d("10"))),
        (">7 AND <80.44", Between("()", _d("7"), _d("80.44"))),
        ("<=80.44  AND    >.1", Between("(]", _d("0.1"), _d("80.44"))),
        ("<7 OR >80.44", Between("()", _d("7"), _d("80.44"), is_=False)),
        ("<= 7 OR >80.44", Between("[)", _d("7"), _d("80.44"), is_=False)),
        (">=80.44  OR    <.1", Between("(]", _d("0.1"), _d("80.44"), is_=False)),
        ("<=7 OR >=80.44", Between("[]", _d("7"), _d("80.44"), is_=False)),
        ("(1, inf)", Comparison(GT, (_d("1"),))),
        ("(1,)", Comparison(GT, (_d("1"),))),
        ("(-inf,100]", Comparison(LE, (_d("100"),))),
        ("(,100)", Comparison(LT, (_d("100"),))),
        ("[,10]", Comparison(LE, (_d("10"),))),
        ("[0.1,   -4)", Between("[)", _d("0.1"), _d("-4"))),
        ("NOT[2, 4]", Between("[]", _d("2"), _d("4"), is_=False)),
        ("NOT(0.1, .11111)", Between("()", _d("0.1"), _d("0.11111"), is_=False)),
        ("NULL", IsNull()),
        ("NOT NULL", IsNull(False)),
        ("nUll", IsNull()),
        ("1, 3, 5", Combinator(OR, _eq("1"), Combinator(OR, _eq("3"), _eq("5")))),
        ("1 OR 3", Combinator(OR, _eq("1"), _eq("3"))),
    ],
)
def test_parse_number_shapes(text: str, expected: Node) -> None:
    """Number grammar should build the expected tree."""
    assert parse_number(text) == expected


def test_parse_number_keeps_decimal_scale() -> None:
    """Numbers keep their written scale and gain a leading zero."""
    node = parse_number("-1.0 to .75")

    assert isinstance(node, Between)
    assert str(node.low) == "-1.0"
    assert str(node.high) == "0.75"


def test_parse_number_outside_range_needs_ordered_bounds() -> None:
    """An OR of bounds that overlap stays a plain OR list."""
    node = parse_number("<=80 OR >=7")

    assert node == Combinator(OR, Comparison(LE, (_d("80"),)), Comparison(GE, (_d("7"),)))


def test_parse_number_and_without_range_is_combinator() -> None:
    """AND of terms that do not bound a range stays an AND combinator."""
    node = parse_number(">1 AND >2")

    assert isinstance(node, Combinator)
    assert node.op == "AND"


def test_parse_number_equals_list_merges_on_normalize() -> None:
    """`=1,2` parses as an OR list; normalization folds it into one comparison."""
    node = parse_number("=1,2")

    assert node == Combinator(OR, _eq("1"), _eq("2"))
    assert parse_filter_expression("number", "=1,2") == Comparison(EQ, (_d("1"), _d("2")))
    assert parse_filter_expression("number", "=1, 2 to 5") == Combinator(
        OR, _eq("1"), Between("[]", _d("2"), _d("5"))
    )


@pytest.mark.parametrize(
    "text",
    [
        "",
        "(,)",
        "AND",
        "OR",
        "[inf,10]",
        "0.1.1.1",
        "0.....1",
        "--1",
        "foo",
        "seventeen",
        "^12345",
        "1234^, 567",
        "1,",
        ",1",
        "\U0001f600",
        "!@#$%",
        "not a filter###",
    ],
)
def test_parse_number_rejects_invalid_text(text: str) -> None:
    """Invalid number text should raise FilterSyntaxError."""
    with pytest.raises(FilterSyntaxError):
        parse_number(text)


def test_parse_error_points_at_position() -> None:
    """Syntax errors should name the family and point into the text."""
    with pytest.raises(FilterSyntaxError) as exc_info:
        parse_number("1234^, 567")

    message = str(exc_info.value)
    assert message.startswith("Invalid number expression")
    assert "1234^, 567\n    ^" in message


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2018/05/29", On(DateValue(2018, 5, 29))),
        ("2018-05-29", On(DateValue(2018, 5, 29))),
        (
            "2018/05/10 for 3 days",
            RangeInterval(DateValue(2018, 5, 10), Interval(_d("3"), DateUnit.DAY)),
        ),
        ("after 2018/05/10", Absolute(DateValue(2018, 5, 10), before=False)),
        ("before 2018/05/10", Absolute(DateValue(2018, 5, 10), before=True)),
        ("2018/05", DateLiteral("month", 2018, month=5)),
        ("2018/05 for 2 months", MonthInterval(2018, 5, Interval(_d("2"), DateUnit.MONTH))),
        (
            "2018/05/10 05:00 for 5 hours",
            RangeInterval(DateValue(2018, 5, 10, 5, 0), Interval(_d("5"), DateUnit.HOUR)),
        ),
        ("2018", DateLiteral("year", 2018)),
        ("FY2018", DateLiteral("fiscalYear", 2018)),
        ("FY2018-Q1", DateLiteral("fiscalQuarter", 2018, quarter=1)),
        ("2018-Q4", DateLiteral("quarter", 2018, quarter=4)),
        ("this day", ThisUnit("this", DateUnit.DAY)),
        ("next week", ThisUnit("next", DateUnit.WEEK)),
        ("last week", ThisUnit("last", DateUnit.WEEK)),
        ("this fiscal quarter", ThisUnit("this", DateUnit.FISCAL_QUARTER)),
        ("this year to second", ThisRange(DateUnit.YEAR, DateUnit.SECOND)),
        ("3 days", Past(Interval(_d("3"), DateUnit.DAY))),
        ("3 complete days", Past(Interval(_d("3"), DateUnit.DAY), complete=True)),
        ("last 3 days", LastInterval(Interval(_d("3"), DateUnit.DAY))),
        ("3 days ago", Relative(Interval(_d("3"), DateUnit.DAY), from_now=False)),
        ("3 days from now", Relative(Interval(_d("3"), DateUnit.DAY), from_now=True)),
        (
            "3 months ago for 2 days",
            RelativeRange(
                Interval(_d("3"), DateUnit.MONTH), Interval(_d("2"), DateUnit.DAY), False
            ),
        ),
        (
            "3 days from now for 2 weeks",
            RelativeRange(Interval(_d("3"), DateUnit.DAY), Interval(_d("2"), DateUnit.WEEK), True),
        ),
        (
            "before 3 days ago",
            RelativeUnit(Interval(_d("3"), DateUnit.DAY), before=True, from_now=False),
        ),
        ("before this week", ThisUnit("this", DateUnit.WEEK, before=True)),
        ("after next month", ThisUnit("next", DateUnit.MONTH, before=False)),
        ("before 2018-01-01 12:00:00", Absolute(DateValue(2018, 1, 1, 12, 0, 0), before=True)),
        (
            "2018-05-18 12:00:00 to 2018-05-18 14:00:00",
            DateRange(DateValue(2018, 5, 18, 12, 0, 0), DateValue(2018, 5, 18, 14, 0, 0)),
        ),
        ("today", DayLiteral("today")),
        ("Monday", DayLiteral("monday")),
        ("NOT NULL", IsNull(False)),
        (
            "2018/05/29, 2018/06/01",
            Combinator(OR, On(DateValue(2018, 5, 29)), On(DateValue(2018, 6, 1))),
        ),
    ],
)
def test_parse_date_shapes(text: str, expected: Node) -> None:
    """Date grammar should build the expected tree."""
    assert parse_date(text) == expected


@pytest.mark.parametrize(
    "text",
    ["not a valid date", "-1", "2018/13/01", "2018/02/30", "2018/05/29 25:00", "3 parsecs", ""],
)
def test_parse_date_rejects_invalid_text(text: str) -> None:
    """Invalid date text should raise FilterSyntaxError."""
    with pytest.raises(FilterSyntaxError):
        parse_date(text)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", Anywhere()),
        ("NULL", IsNull()),
        ("NOT NULL", IsNull(False)),
        ("-NULL", IsNull(False)),
        ("36.97, -122.03", Point(Location(_d("36.97"), _d("-122.03")))),
        (
            "40 miles from -36.97, -122.03",
            Circle(_d("40"), DistanceUnit.MILES, Location(_d("-36.97"), _d("-122.03"))),
        ),
        (
            "1 kilometer from 0, 0",
            Circle(_d("1"), DistanceUnit.KILOMETERS, Location(_d("0"), _d("0"))),
        ),
        (
            "inside box from 72.33, -173.14 to 14.39, -61.70",
            Box(Location(_d("72.33"), _d("-173.14")), Location(_d("14.39"), _d("-61.70"))),
        ),
    ],
)
def test_parse_location_shapes(text: str, expected: Node) -> None:
    """Location grammar should build the expected tree."""
    assert parse_location(text) == expected


@pytest.mark.parametrize("text", ["foo", "36.97", "40 parsecs from 1, 2", "inside box from 1, 2"])
def test_parse_location_rejects_invalid_text(text: str) -> None:
    """Invalid location text should raise FilterSyntaxError."""
    with pytest.raises(FilterSyntaxError):
        parse_location(text)


def test_parse_expression_dispatches_on_family() -> None:
    """parse_expression should pick the grammar by family name."""
    assert parse_expression("number", "5") == _eq("5")
    assert parse_expression("DATE", "2018") == DateLiteral("year", 2018)
    assert parse_expression("location", "") == Anywhere()


@pytest.mark.parametrize("family", ["string", "tier", "unknown"])
def test_parse_expression_unsupported_family(family: str) -> None:
    """Families without a grammar should raise UnsupportedFamilyError."""
    with pytest.raises(UnsupportedFamilyError):
        parse_expression(family, "5")
