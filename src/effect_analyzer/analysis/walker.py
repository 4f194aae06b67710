"""Cycle-safe pre-order traversal over IR nodes."""

from __future__ import annotations

from typing import Callable

from effect_analyzer.ir.nodes import CHILD_KEYS, Node, NodeKind

ChildKeys = Callable[[NodeKind], tuple[str, ...]]


def _default_keys(kind: NodeKind) -> tuple[str, ...]:
    return CHILD_KEYS[kind]


def traverse(root: Node, visit: Callable[[Node], None], child_keys: ChildKeys = _default_keys) -> None:
    """Visit every node under root once, depth-first, parents before children.

    Child order follows `child_keys`; empty slots and holes are skipped.
    """
    visited: set[Node] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        visit(node)
        stack.extend(reversed(list(node.children(child_keys(node.kind)))))


def find_nodes_of_kind(root: Node, kind: NodeKind, child_keys: ChildKeys = _default_keys) -> list[Node]:
    found: list[Node] = []

    def collect(node: Node) -> None:
        if node.kind is kind:
            found.append(node)

    traverse(root, collect, child_keys)
    return found


def ancestors(node: Node):
    """Yield parents from the nearest outward."""
    current = node.parent
    while current is not None:
        yield current
        current = current.parent
