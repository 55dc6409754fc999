"""AST nodes for filter expressions."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import TypeAlias


Value: TypeAlias = Decimal | str

EQ = "="
GT = ">"
GE = ">="
LT = "<"
LE = "<="
COMPARISON_OPS = (EQ, GT, GE, LT, LE)

OR = "OR"
AND = "AND"
COMBINATOR_OPS = (OR, AND)

BOUNDS = ("[]", "[)", "(]", "()")


class DateUnit(StrEnum):
    """Unit of time used by relative date expressions."""

    YEAR = "year"
    FISCAL_YEAR = "fiscal_year"
    QUARTER = "quarter"
    FISCAL_QUARTER = "fiscal_quarter"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"

    @property
    def words(self) -> str:
        """Return the unit as it is typed in an expression, e.g. "fiscal year"."""
        return self.value.replace("_", " ")


class DistanceUnit(StrEnum):
    """Unit of distance used by location circles."""

    FEET = "feet"
    METERS = "meters"
    KILOMETERS = "kilometers"
    MILES = "miles"


@dataclass(frozen=True, slots=True)
class Location:
    """Geographic coordinate."""

    latitude: Decimal
    longitude: Decimal


@dataclass(frozen=True, slots=True)
class DateValue:
    """Calendar date with an optional time of day."""

    year: int
    month: int
    day: int
    hour: int | None = None
    minute: int | None = None
    second: int | None = None


@dataclass(frozen=True, slots=True)
class Interval:
    """Length of time, e.g. 3 days."""

    value: Decimal
    unit: DateUnit


@dataclass(frozen=True, slots=True)
class Node:
    """Base AST node type.

    ``id`` addresses a node for structural edits only. It never takes part in
    equality, hashing, or rendering.
    """

    id: int | None = field(default=None, kw_only=True, compare=False, repr=False)

    @property
    def type(self) -> str:
        """Filter model type name, e.g. "between" or "," for OR."""
        raise NotImplementedError

    @property
    def children(self) -> tuple[Node, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class Comparison(Node):
    """Single predicate comparing the field with one or more values."""

    op: str
    values: tuple[Value, ...]
    is_: bool = True

    def __post_init__(self) -> None:
        if self.op not in COMPARISON_OPS:
            raise ValueError(f"Unknown comparison operator: {self.op}")
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError("Comparison requires at least one value")

    @property
    def type(self) -> str:
        return self.op


@dataclass(frozen=True, slots=True)
class Between(Node):
    """Range predicate; bounds select inclusivity per side."""

    bounds: str
    low: Value
    high: Value
    is_: bool = True

    def __post_init__(self) -> None:
        if self.bounds not in BOUNDS:
            raise ValueError(f"Unknown range bounds: {self.bounds}")

    @property
    def type(self) -> str:
        return "between"


@dataclass(frozen=True, slots=True)
class IsNull(Node):
    """Null check; negated means "is not null"."""

    is_: bool = True

    @property
    def type(self) -> str:
        return "null"


@dataclass(frozen=True, slots=True)
class Combinator(Node):
    """Logical AND/OR of two sub-expressions."""

    op: str
    left: Node
    right: Node

    def __post_init__(self) -> None:
        if self.op not in COMBINATOR_OPS:
            raise ValueError(f"Unknown combinator: {self.op}")
        if self.left is None or self.right is None:
            raise ValueError("Combinator children must not be None")

    @property
    def type(self) -> str:
        return "," if self.op == OR else "and"

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class MatchesAdvanced(Node):
    """Free-text expression kept verbatim because it could not be parsed."""

    expression: str

    @property
    def type(self) -> str:
        return "matchesAdvanced"


@dataclass(frozen=True, slots=True)
class Anywhere(Node):
    """Location filter that matches every location."""

    @property
    def type(self) -> str:
        return "anywhere"


@dataclass(frozen=True, slots=True)
class Point(Node):
    """Exact geographic location."""

    location: Location

    @property
    def type(self) -> str:
        return "location"


@dataclass(frozen=True, slots=True)
class Circle(Node):
    """Locations within a distance of a center point."""

    distance: Decimal
    unit: DistanceUnit
    location: Location

    @property
    def type(self) -> str:
        return "circle"


@dataclass(frozen=True, slots=True)
class Box(Node):
    """Locations inside a box between two corners."""

    start: Location
    end: Location

    @property
    def type(self) -> str:
        return "box"


@dataclass(frozen=True, slots=True)
class DateLiteral(Node):
    """Calendar period: year, fiscalYear, quarter, fiscalQuarter or month."""

    kind: str
    year: int
    quarter: int | None = None
    month: int | None = None

    @property
    def type(self) -> str:
        return self.kind


@dataclass(frozen=True, slots=True)
class On(Node):
    """A single date or date-time."""

    date: DateValue

    @property
    def type(self) -> str:
        return "on"


@dataclass(frozen=True, slots=True)
class DayLiteral(Node):
    """Named day: today, yesterday, tomorrow, or a weekday."""

    day: str

    @property
    def type(self) -> str:
        return "day"


@dataclass(frozen=True, slots=True)
class Absolute(Node):
    """Open range before or after a fixed date."""

    date: DateValue
    before: bool

    @property
    def type(self) -> str:
        return "before" if self.before else "after"


@dataclass(frozen=True, slots=True)
class DateRange(Node):
    """Range between two fixed dates."""

    start: DateValue
    end: DateValue

    @property
    def type(self) -> str:
        return "range"


@dataclass(frozen=True, slots=True)
class RangeInterval(Node):
    """Range starting at a fixed date and lasting an interval."""

    start: DateValue
    interval: Interval

    @property
    def type(self) -> str:
        return "rangeInterval"


@dataclass(frozen=True, slots=True)
class MonthInterval(Node):
    """Range starting at a month and lasting an interval."""

    year: int
    month: int
    interval: Interval

    @property
    def type(self) -> str:
        return "monthInterval"


@dataclass(frozen=True, slots=True)
class Past(Node):
    """The interval leading up to now, e.g. "3 days" or "3 complete days"."""

    interval: Interval
    complete: bool = False

    @property
    def type(self) -> str:
        return "past"


@dataclass(frozen=True, slots=True)
class LastInterval(Node):
    """Explicit trailing interval, e.g. "last 3 days"."""

    interval: Interval

    @property
    def type(self) -> str:
        return "lastInterval"


@dataclass(frozen=True, slots=True)
class Relative(Node):
    """Point an interval away from now, e.g. "3 days ago"."""

    interval: Interval
    from_now: bool

    @property
    def type(self) -> str:
        return "fromNow" if self.from_now else "pastAgo"


@dataclass(frozen=True, slots=True)
class RelativeRange(Node):
    """Range starting an interval away from now, e.g. "3 months ago for 2 days"."""

    start: Interval
    end: Interval
    from_now: bool

    @property
    def type(self) -> str:
        return "relativeRange"


@dataclass(frozen=True, slots=True)
class ThisUnit(Node):
    """Current, next or last calendar unit, optionally anchored before/after it."""

    op: str
    unit: DateUnit
    before: bool | None = None

    def __post_init__(self) -> None:
        if self.op not in ("this", "next", "last"):
            raise ValueError(f"Unknown relative unit: {self.op}")

    @property
    def type(self) -> str:
        if self.before is None:
            return self.op
        return "before" if self.before else "after"


@dataclass(frozen=True, slots=True)
class ThisRange(Node):
    """From the start of the current unit up to the current finer unit."""

    start_unit: DateUnit
    end_unit: DateUnit

    @property
    def type(self) -> str:
        return "thisRange"


@dataclass(frozen=True, slots=True)
class RelativeUnit(Node):
    """Open range before or after a relative point, e.g. "before 3 days ago"."""

    interval: Interval
    before: bool
    from_now: bool

    @property
    def type(self) -> str:
        return "before" if self.before else "after"


PREDICATE_TYPES = (Comparison, Between, IsNull)
