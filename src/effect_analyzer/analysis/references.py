"""Reference locator: identifier references within a subtree."""

from __future__ import annotations

from effect_analyzer.analysis.walker import find_nodes_of_kind
from effect_analyzer.ir.nodes import Node, NodeKind
from effect_analyzer.ir.scope import Reference, ScopeAnalysis


def locate(root: Node | None, oracle: ScopeAnalysis) -> list[Reference]:
    """References under root in pre-order.

    Identifiers the oracle does not know as references (member properties,
    object keys, declaration names without initializers) are dropped.
    """
    if root is None:
        return []
    refs: list[Reference] = []
    for ident in find_nodes_of_kind(root, NodeKind.IDENTIFIER, oracle.child_keys_of):
        ref = oracle.reference_for(ident)
        if ref is not None:
            refs.append(ref)
    return refs


def locate_all(roots: list[Node | None], oracle: ScopeAnalysis) -> list[Reference]:
    refs: list[Reference] = []
    for root in roots:
        refs.extend(locate(root, oracle))
    return refs
