"""Normalization passes applied to freshly parsed expression trees."""

from __future__ import annotations

import logging
from dataclasses import replace

from filtex.expression.ast import EQ, OR, Combinator, Comparison, MatchesAdvanced, Node
from filtex.expression.errors import InvariantViolation
from filtex.expression.families import FamilyKind, coerce_family
from filtex.expression.trees import (
    count_nots,
    is_negated,
    number_nodes,
    remove_node,
    tree_to_list,
)


logger = logging.getLogger("filtex")

MERGEABLE_OPS: dict[FamilyKind, tuple[str, ...]] = {
    FamilyKind.NUMBER: (EQ,),
    FamilyKind.DATE: (),
    FamilyKind.LOCATION: (),
}


def merge_nodes(left: Node, right: Node) -> Comparison:
    """Merge two comparisons of the same mergeable operator.

    Values are concatenated in order and duplicates pass through. The merged
    node is negated unless both inputs are positive.

    Raises:
        InvariantViolation: If the nodes are not comparisons of one mergeable operator
    """
    if not isinstance(left, Comparison) or not isinstance(right, Comparison):
        raise InvariantViolation(f"Cannot merge {left.type} with {right.type}")
    if left.op != right.op:
        raise InvariantViolation(f"Cannot merge '{left.op}' with '{right.op}'")
    if left.op != EQ:
        raise InvariantViolation(f"Operator '{left.op}' is not mergeable")
    return Comparison(left.op, left.values + right.values, left.is_ and right.is_)


def _can_merge(left: Node, right: Node, op: str, allow_different_is: bool) -> bool:
    return (
        isinstance(left, Comparison)
        and isinstance(right, Comparison)
        and left.op == right.op == op
        and (left.is_ == right.is_ or allow_different_is)
    )


def _is_or(node: Node) -> bool:
    return isinstance(node, Combinator) and node.op == OR


def merge_nodes_with_same_type(root: Node, op: str, allow_different_is: bool) -> Node:
    """Merge comparisons at the head of an OR chain.

    The head is merged with the next item while they are mergeable. When only
    two items remain and they merge, the chain collapses into one comparison.
    """
    node = root
    while (
        isinstance(node, Combinator)
        and _is_or(node)
        and isinstance(node.right, Combinator)
        and _is_or(node.right)
        and _can_merge(node.left, node.right.left, op, allow_different_is)
    ):
        following = node.right
        node = Combinator(node.op, merge_nodes(node.left, following.left), following.right)

    if (
        isinstance(node, Combinator)
        and _is_or(node)
        and _can_merge(node.left, node.right, op, allow_different_is)
    ):
        node = merge_nodes(node.left, node.right)
    return node


def merge_multi_value_nodes(root: Node, op: str, allow_different_is: bool) -> Node:
    """Merge runs of same-operator comparisons at every depth of an OR chain."""
    spine: list[Combinator] = []
    node = merge_nodes_with_same_type(root, op, allow_different_is)
    while isinstance(node, Combinator) and _is_or(node):
        spine.append(node)
        node = merge_nodes_with_same_type(node.right, op, allow_different_is)

    rebuilt = node
    for combinator in reversed(spine):
        rebuilt = replace(combinator, right=rebuilt)
    return rebuilt


def remove_duplicate_not_nodes(root: Node) -> Node:
    """Drop the second of exactly two equal negated items of the OR chain."""
    numbered, _table = number_nodes(root)
    negated = [item for item in tree_to_list(numbered) if is_negated(item)]
    if len(negated) != 2 or negated[0] != negated[1]:
        return numbered
    duplicate_id = negated[1].id
    if duplicate_id is None:
        raise InvariantViolation("Numbered node has no id")
    logger.debug("Removing duplicate negated %s node", negated[1].type)
    pruned = remove_node(numbered, duplicate_id)
    if pruned is None:
        raise InvariantViolation("Removing a duplicate emptied the expression")
    return pruned


def number_transform(root: Node) -> Node:
    """Canonicalize a number expression.

    Equality comparisons along the OR chain are merged. A lone negation lets
    positive and negated values merge, so `1, not 2` becomes `not 1, 2`. With
    two negations the second one is dropped when both are equal.
    """
    nots = count_nots(root)
    allow_different_is = nots == 1
    logger.debug("Number transform: %d negated, allow differing is=%s", nots, allow_different_is)
    merged = merge_multi_value_nodes(root, EQ, allow_different_is)
    if nots == 2:
        return remove_duplicate_not_nodes(merged)
    return merged


def normalize(family: FamilyKind | str, root: Node) -> Node:
    """Apply the transform passes for the family to a parsed tree."""
    family_kind = coerce_family(family)
    if isinstance(root, MatchesAdvanced):
        return root
    if family_kind == FamilyKind.NUMBER:
        return number_transform(root)
    node = root
    for op in MERGEABLE_OPS.get(family_kind, ()):
        node = merge_multi_value_nodes(node, op, allow_different_is=False)
    return node
