"""Effect extraction: recognize `useEffect(callback, deps?)` call sites."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from effect_analyzer.analysis.classify import enclosing_component, is_use_effect_call
from effect_analyzer.analysis.references import locate
from effect_analyzer.analysis.walker import find_nodes_of_kind
from effect_analyzer.ir.nodes import Node, NodeKind
from effect_analyzer.ir.scope import Reference, ScopeAnalysis

log = logging.getLogger(__name__)

_CALLBACK_KINDS = frozenset({NodeKind.ARROW_FUNCTION, NodeKind.FUNCTION_EXPRESSION})


@dataclass
class EffectCall:
    node: Node                              # the CALL
    callback: Node                          # arrow function or function expression
    dependencies: Node | None               # ARRAY, or None when omitted
    callback_refs: list[Reference]
    dependency_refs: list[Reference] | None
    has_cleanup: bool
    component: Node | None                  # enclosing component / custom hook

    @property
    def line(self) -> int:
        return self.node.line


def has_cleanup(callback: Node) -> bool:
    """Block body with a top-level `return <value>`."""
    body = callback.get("body")
    if body is None or body.kind is not NodeKind.BLOCK:
        return False
    return any(
        stmt.kind is NodeKind.RETURN and stmt.get("argument") is not None
        for stmt in body.items("body")
        if stmt is not None
    )


def extract_effect(node: Node, oracle: ScopeAnalysis) -> EffectCall | None:
    """EffectCall for a recognized effect call, or None."""
    if not is_use_effect_call(node):
        return None
    args = node.items("arguments")
    if not args or args[0] is None or args[0].kind not in _CALLBACK_KINDS:
        return None
    callback = args[0]

    dependencies = None
    if len(args) > 1:
        dependencies = args[1]
        if dependencies is None or dependencies.kind is not NodeKind.ARRAY:
            return None

    return EffectCall(
        node=node,
        callback=callback,
        dependencies=dependencies,
        callback_refs=locate(callback.get("body"), oracle),
        dependency_refs=locate(dependencies, oracle) if dependencies is not None else None,
        has_cleanup=has_cleanup(callback),
        component=enclosing_component(node),
    )


def find_effect_calls(program: Node, oracle: ScopeAnalysis) -> list[EffectCall]:
    """Every effect call in the file, in source order."""
    effects: list[EffectCall] = []
    for call in find_nodes_of_kind(program, NodeKind.CALL, oracle.child_keys_of):
        effect = extract_effect(call, oracle)
        if effect is not None:
            effects.append(effect)
    log.debug("Found %d effect calls", len(effects))
    return effects
