"""Origin resolver: trace a reference back to the references it derives from.

A reference's origins are the leaves reached by following its binding's
definitions: declarator initializers and local function bodies are expanded
into their own references, recursively. Parameters, imports, implicit
globals and the state/setter/handle variables of ``useState``/``useRef``
declarators are leaves. Mid-stream references never appear in the result.
"""

from __future__ import annotations

from effect_analyzer.analysis.classify import (
    is_any_input_parameter,
    is_use_ref_call,
    is_use_state_call,
)
from effect_analyzer.analysis.references import locate
from effect_analyzer.ir.nodes import Node
from effect_analyzer.ir.scope import Binding, DefKind, Reference, ScopeAnalysis


def _is_plain_local(binding: Binding) -> bool:
    """Every def is a non-input parameter or a catch parameter."""
    for d in binding.defs:
        if d.kind is DefKind.CATCH_CLAUSE:
            continue
        if d.kind is DefKind.PARAMETER and not is_any_input_parameter(binding):
            continue
        return False
    return not binding.is_implicit_global


def _expansion(binding: Binding) -> list[Node]:
    """Nodes whose references a binding derives from."""
    nodes: list[Node] = []
    for d in binding.defs:
        if d.kind is DefKind.VARIABLE:
            init = d.node.get("init")
            if init is None or is_use_state_call(init) or is_use_ref_call(init):
                continue
            nodes.append(init)
        elif d.kind is DefKind.FUNCTION_NAME:
            body = d.node.get("body")
            if body is not None:
                nodes.append(body)
    return nodes


def resolve(ref: Reference, oracle: ScopeAnalysis, visited: set[Reference] | None = None) -> list[Reference]:
    """Leaf origins of `ref`, in discovery order, each Reference at most once."""
    if visited is None:
        visited = set()
    binding = oracle.resolve(ref)
    if binding is None:
        return []
    if _is_plain_local(binding):
        return []

    visited.add(ref)
    upstream: list[Reference] = []
    for node in _expansion(binding):
        for inner in locate(node, oracle):
            if inner in visited:
                continue
            upstream.extend(resolve(inner, oracle, visited))

    if not upstream:
        return [ref]
    return _unique(upstream)


def resolve_all(refs: list[Reference], oracle: ScopeAnalysis) -> list[Reference]:
    """Origins of several references, each trace with its own visited set."""
    leaves: list[Reference] = []
    for ref in refs:
        leaves.extend(resolve(ref, oracle))
    return _unique(leaves)


def origins_of(node: Node | None, oracle: ScopeAnalysis) -> list[Reference]:
    """Origins of every reference inside a subtree."""
    return resolve_all(locate(node, oracle), oracle)


def _unique(refs: list[Reference]) -> list[Reference]:
    seen: set[Reference] = set()
    out: list[Reference] = []
    for ref in refs:
        if ref not in seen:
            seen.add(ref)
            out.append(ref)
    return out
