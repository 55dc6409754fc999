"""Traversal and structural-edit utilities for filter ASTs."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

from filtex.expression.ast import OR, PREDICATE_TYPES, Combinator, Comparison, Node


def is_negated(node: Node) -> bool:
    """Return whether node is a predicate with its "is" flag cleared."""
    return isinstance(node, PREDICATE_TYPES) and not node.is_


def type_option(node: Node) -> str:
    """Return the node type, prefixed with "!" when negated (e.g. "!between")."""
    return f"!{node.type}" if is_negated(node) else node.type


def walk(root: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def count_nots(root: Node) -> int:
    """Count negated predicates anywhere in the tree.

    A negated comparison counts once per value, so merged negations keep
    their weight when a normalized tree is normalized again.
    """
    count = 0
    for node in walk(root):
        if not is_negated(node):
            continue
        count += len(node.values) if isinstance(node, Comparison) else 1
    return count


def or_items(root: Node) -> list[Node]:
    """Flatten an OR chain into its items, left to right."""
    items: list[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Combinator) and node.op == OR:
            stack.append(node.right)
            stack.append(node.left)
        else:
            items.append(node)
    return items


def tree_to_list(root: Node) -> list[Node]:
    """Flatten the OR chain in order, positive items first, then negated items.

    An AND combinator is a single item.
    """
    items = or_items(root)
    positive = [item for item in items if not is_negated(item)]
    negative = [item for item in items if is_negated(item)]
    return positive + negative


def fold_right(op: str, terms: list[Node]) -> Node:
    """Fold terms into a right-leaning chain, so [a, b, c] becomes (a, (b, c))."""
    if not terms:
        raise ValueError("Cannot fold an empty list of terms")
    current = terms[-1]
    for term in reversed(terms[:-1]):
        current = Combinator(op, term, current)
    return current


def number_nodes(root: Node) -> tuple[Node, dict[int, Node]]:
    """Give every node a unique id.

    Existing ids are kept unless they clash with an id already handed out.
    Ids are handed out in pre-order. Returns the numbered tree and a table
    from id to node.
    """
    used: set[int] = set()

    def _assign(node: Node) -> int:
        if node.id is not None and node.id not in used:
            used.add(node.id)
            return node.id
        candidate = len(used)
        while candidate in used:
            candidate += 1
        used.add(candidate)
        return candidate

    ordered = [(node, _assign(node)) for node in walk(root)]

    # Reverse pre-order visits both subtrees before their parent, left last.
    table: dict[int, Node] = {}
    built: list[Node] = []
    for node, node_id in reversed(ordered):
        if isinstance(node, Combinator):
            left = built.pop()
            right = built.pop()
            numbered: Node = replace(node, left=left, right=right, id=node_id)
        else:
            numbered = replace(node, id=node_id)
        table[node_id] = numbered
        built.append(numbered)
    return built[0], table


def remove_node(root: Node, node_id: int) -> Node | None:
    """Remove the node with the given id from an OR chain.

    Returns None when the root itself is removed. Nodes below anything other
    than an OR combinator are not searched.
    """
    spine: list[tuple[Combinator, Node | None]] = []
    node = root
    rest: Node | None
    while True:
        if node.id == node_id:
            rest = None
            break
        if not (isinstance(node, Combinator) and node.op == OR):
            rest = node
            break
        spine.append((node, remove_node(node.left, node_id)))
        node = node.right

    for combinator, left in reversed(spine):
        if left is None:
            continue
        rest = left if rest is None else replace(combinator, left=left, right=rest)
    return rest
