"""Rules about the effect itself: empty bodies and state-driven event handlers."""

from __future__ import annotations

from effect_analyzer.analysis.classify import is_state
from effect_analyzer.analysis.walker import find_nodes_of_kind
from effect_analyzer.ir.nodes import NodeKind
from effect_analyzer.rules.base import Diagnostic, EffectSite


def check_empty_effect(site: EffectSite) -> list[Diagnostic]:
    if site.effect.callback_refs:
        return []
    return [site.report("empty-effect", site.effect.node, "avoidEmptyEffect")]


def check_event_handler(site: EffectSite) -> list[Diagnostic]:
    """`if (state) { ... }` with no else: the effect is standing in for an event."""
    if site.effect.dependency_refs is None:
        return []
    out = []
    for branch in find_nodes_of_kind(site.effect.callback, NodeKind.IF, site.oracle.child_keys_of):
        if branch.get("alternate") is not None or not site.is_synchronous(branch):
            continue
        test = branch.get("test")
        origins = site.origins_in(test)
        if origins and all(is_state(o.binding) for o in origins):
            out.append(site.report("event-handler", test, "avoidEventHandler"))
    return out
