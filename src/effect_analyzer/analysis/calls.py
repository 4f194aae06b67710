"""Call-site resolution and synchrony checks."""

from __future__ import annotations

from effect_analyzer.ir.nodes import FUNCTION_KINDS, Node, NodeKind
from effect_analyzer.ir.scope import Reference


def call_site_of(ref: Reference) -> Node | None:
    """The CALL whose callee chain starts at this reference.

    Walks outward through member-access objects, so `list.push(x)` and
    `ref.current.focus()` both resolve from their leftmost identifier.
    """
    return call_site_of_node(ref.identifier)


def call_site_of_node(node: Node) -> Node | None:
    current = node
    while current.parent is not None and current.parent.kind is NodeKind.MEMBER and current.key == "object":
        current = current.parent
    parent = current.parent
    if parent is not None and parent.kind is NodeKind.CALL and current.key == "callee":
        return parent
    return None


def is_immediately_invoked(fn: Node) -> bool:
    parent = fn.parent
    return parent is not None and parent.kind is NodeKind.CALL and fn.key == "callee"


def is_synchronous(node: Node, boundary: Node) -> bool:
    """True when `node` runs while `boundary` is executing.

    Walking outward, any async function, function declaration or function
    literal that is not invoked on the spot means the code may run later.
    """
    current: Node | None = node
    while current is not None:
        if current is boundary:
            return True
        if current.kind in FUNCTION_KINDS:
            if current.attrs.get("is_async") or current.kind is NodeKind.FUNCTION_DECLARATION:
                return False
            if not is_immediately_invoked(current):
                return False
        current = current.parent
    return False
