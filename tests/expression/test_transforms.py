"""Tests for expression normalization passes."""

from __future__ import annotations

from decimal import Decimal

import pytest

from filtex.expression.ast import (
    EQ,
    GT,
    OR,
    Between,
    Combinator,
    Comparison,
    IsNull,
    MatchesAdvanced,
)
from filtex.expression.errors import InvariantViolation
from filtex.expression.parser import parse_date, parse_location, parse_number
from filtex.expression.transforms import (
    merge_multi_value_nodes,
    merge_nodes,
    normalize,
    number_transform,
    remove_duplicate_not_nodes,
)


def _eq(*values: int, is_: bool = True) -> Comparison:
    return Comparison(EQ, tuple(Decimal(value) for value in values), is_)


def _normalize(text: str):
    return normalize("number", parse_number(text))


def test_normalize_merges_equal_values() -> None:
    """A list of equality values should merge into one comparison."""
    assert _normalize("1,2,3") == _eq(1, 2, 3)


@pytest.mark.parametrize("text", ["1, not 2", "not 1, not 2", "<> 1, <> 2", "!= 1, != 2"])
def test_normalize_merges_negations(text: str) -> None:
    """A lone or uniform negation should merge into one negated comparison."""
    assert _normalize(text) == _eq(1, 2, is_=False)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("23, not 42, 43", _eq(23, 42, 43, is_=False)),
        ("not 66, 99, 4", _eq(66, 99, 4, is_=False)),
        ("23, not 42, not 43", Combinator(OR, _eq(23), _eq(42, 43, is_=False))),
        ("23, not 42, not 42", Combinator(OR, _eq(23), _eq(42, 42, is_=False))),
        ("23,NOT NULL,NOT NULL", Combinator(OR, _eq(23), IsNull(False))),
        (
            "1, >5, 2, 3",
            Combinator(
                OR,
                _eq(1),
                Combinator(OR, Comparison(GT, (Decimal(5),)), _eq(2, 3)),
            ),
        ),
    ],
)
def test_normalize_number_shapes(text: str, expected: object) -> None:
    """Number normalization should produce the canonical shape."""
    assert _normalize(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "1,2,3",
        "1, not 2",
        "not 1, not 2",
        "23, not 42, 43",
        "23, not 42, not 43",
        "23, not 42, not 42",
        "23,NOT NULL,NOT NULL",
        "NOT 10,[1,5)",
        "23,NOT [30,40]",
        "(1,100],500,600,(800,900],[2000,)",
        ">10 AND <=20 OR 90",
        "5",
    ],
)
def test_normalize_is_idempotent(text: str) -> None:
    """Normalizing a normalized tree should not change it."""
    once = _normalize(text)

    assert normalize("number", once) == once


def test_normalize_leaves_unrelated_nodes_in_place() -> None:
    """Ranges between equality runs keep their position."""
    node = _normalize("(1,100],500,600,(800,900],[2000,)")

    assert isinstance(node, Combinator)
    assert isinstance(node.left, Between)
    assert isinstance(node.right, Combinator)
    assert node.right.left == _eq(500, 600)


def test_merge_nodes_preserves_order_and_duplicates() -> None:
    """Merging should concatenate values in order without removing duplicates."""
    assert merge_nodes(_eq(2, 1), _eq(3)).values == (Decimal(2), Decimal(1), Decimal(3))
    assert merge_nodes(_eq(2, 1), _eq(3)) != merge_nodes(_eq(1, 2), _eq(3))
    assert merge_nodes(_eq(1), _eq(1)).values == (Decimal(1), Decimal(1))


def test_merge_nodes_negated_unless_both_positive() -> None:
    """The merged flag is positive only when both inputs are positive."""
    assert merge_nodes(_eq(1), _eq(2)).is_ is True
    assert merge_nodes(_eq(1), _eq(2, is_=False)).is_ is False
    assert merge_nodes(_eq(1, is_=False), _eq(2, is_=False)).is_ is False


@pytest.mark.parametrize(
    ("left", "right"),
    [
        (_eq(1), Comparison(GT, (Decimal(2),))),
        (Comparison(GT, (Decimal(1),)), Comparison(GT, (Decimal(2),))),
        (_eq(1), Between("[]", Decimal(1), Decimal(2))),
        (MatchesAdvanced("foo"), _eq(1)),
    ],
)
def test_merge_nodes_rejects_unmergeable_nodes(left: object, right: object) -> None:
    """Merging mismatched or non-mergeable nodes should fail loudly."""
    with pytest.raises(InvariantViolation):
        merge_nodes(left, right)  # type: ignore[arg-type]


def test_merge_multi_value_nodes_without_targets_is_identity() -> None:
    """A chain without target comparisons should come back unchanged."""
    root = parse_number("[1,2],>5,NULL")

    assert merge_multi_value_nodes(root, EQ, allow_different_is=False) == root


def test_remove_duplicate_not_nodes_drops_second_copy() -> None:
    """Two equal negated items should collapse to one."""
    root = Combinator(OR, _eq(1), Combinator(OR, _eq(5, is_=False), _eq(5, is_=False)))

    assert remove_duplicate_not_nodes(root) == Combinator(OR, _eq(1), _eq(5, is_=False))


def test_remove_duplicate_not_nodes_keeps_distinct_negations() -> None:
    """Different negated items should both be kept."""
    root = Combinator(OR, _eq(5, is_=False), IsNull(False))

    assert remove_duplicate_not_nodes(root) == root


def test_remove_duplicate_not_nodes_collapses_pair() -> None:
    """A tree made of two duplicates collapses to the first one."""
    root = Combinator(OR, IsNull(False), IsNull(False))

    assert remove_duplicate_not_nodes(root) == IsNull(False)


def test_number_transform_ignores_ids() -> None:
    """Trees differing only by ids should normalize to equal trees."""
    plain = Combinator(OR, _eq(1), _eq(2))
    numbered = Combinator(
        OR,
        Comparison(EQ, (Decimal(1),), id=7),
        Comparison(EQ, (Decimal(2),), id=3),
        id=11,
    )

    assert plain == numbered
    assert number_transform(plain) == number_transform(numbered)


@pytest.mark.parametrize(
    ("family", "root"),
    [
        ("date", parse_date("2018/05/29, 2018/06/01")),
        ("date", parse_date("3 days ago")),
        ("location", parse_location("40 miles from -36.97, -122.03")),
        ("location", parse_location("")),
    ],
)
def test_normalize_date_and_location_unchanged(family: str, root: object) -> None:
    """Date and location trees have nothing to merge."""
    assert normalize(family, root) == root  # type: ignore[arg-type]


def test_normalize_leaves_advanced_node_untouched() -> None:
    """Fallback nodes are already canonical."""
    node = MatchesAdvanced("foo bar", id=1)

    assert normalize("number", node) is node
