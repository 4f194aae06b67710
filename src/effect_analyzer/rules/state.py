"""Rules about component state set from inside an effect."""

from __future__ import annotations

import logging

from effect_analyzer.analysis.classify import (
    all_internal,
    enclosing_function,
    is_external,
    is_input_parameter,
    is_use_state_call,
    state_declarator,
)
from effect_analyzer.analysis.walker import find_nodes_of_kind
from effect_analyzer.ir.nodes import Node, NodeKind, same_shape
from effect_analyzer.rules.base import Diagnostic, EffectSite

log = logging.getLogger(__name__)


def check_initialize_state(site: EffectSite) -> list[Diagnostic]:
    """Setter calls in an effect that runs once, on mount."""
    effect = site.effect
    if effect.dependency_refs is None or effect.has_cleanup:
        return []
    if effect.dependency_refs:
        return []
    out = []
    for setter in site.setter_calls:
        args = setter.call.items("arguments")
        first = args[0] if args else None
        out.append(site.report(
            "initialize-state", setter.call, "avoidInitializingState",
            state=site.state_label(setter),
            arguments=first.text if first is not None else "undefined",
        ))
    return out


def check_derived_state(site: EffectSite) -> list[Diagnostic]:
    effect = site.effect
    if effect.dependency_refs is None or effect.has_cleanup:
        return []
    out = []
    for setter in site.setter_calls:
        args = site.argument_origins(setter.call)
        if all_internal(args):
            out.append(site.report(
                "derived-state", setter.call, "avoidDerivedState", state=site.state_label(setter),
            ))
            continue
        in_deps = bool(args) and all(o.binding in site.dependency_bindings for o in args)
        if in_deps and site.call_site_count(setter.origin.binding) == 1:
            out.append(site.report(
                "derived-state", setter.call, "avoidSingleSetter", state=site.state_label(setter),
            ))
    return out


def check_chain_state_updates(site: EffectSite) -> list[Diagnostic]:
    """Setter calls with constant arguments, run because other state changed."""
    effect = site.effect
    if effect.dependency_refs is None or effect.has_cleanup:
        return []
    if not all_internal(site.dependency_origins):
        return []
    out = []
    for setter in site.setter_calls:
        args = site.argument_origins(setter.call)
        if all_internal(args) or any(is_external(o) for o in args):
            continue
        out.append(site.report("chain-state-updates", setter.call, "avoidChainingStateUpdates"))
    return out


def check_adjust_state_on_prop_change(site: EffectSite) -> list[Diagnostic]:
    if site.effect.dependency_refs is None:
        return []
    if not any(is_input_parameter(o.binding) for o in site.dependency_origins):
        return []
    out = []
    for setter in site.setter_calls:
        args = site.argument_origins(setter.call)
        if args and all(is_input_parameter(o.binding) for o in args):
            continue
        out.append(site.report(
            "adjust-state-on-prop-change", setter.call, "avoidAdjustingStateWhenAPropChanges",
        ))
    return out


# ── Reset all ────────────────────────────────────────────────────────────


def _is_undefined(node: Node | None) -> bool:
    return node is None or node.is_identifier("undefined")


def _same_value(initial: Node | None, value: Node | None) -> bool:
    if _is_undefined(initial):
        return _is_undefined(value)
    return same_shape(initial, value)


def _first_argument(call: Node | None) -> Node | None:
    if call is None:
        return None
    args = call.items("arguments")
    return args[0] if args else None


def count_state_hooks(fn: Node) -> int:
    """useState calls made by `fn` itself, not by functions nested in it."""
    return sum(
        1 for call in find_nodes_of_kind(fn, NodeKind.CALL)
        if is_use_state_call(call) and enclosing_function(call) is fn
    )


def check_reset_all_state(site: EffectSite) -> list[Diagnostic]:
    """Every state of the component set back to its initial value on an input change."""
    effect = site.effect
    if effect.dependency_refs is None or effect.component is None:
        return []
    setters = site.setter_calls
    if not setters:
        return []

    reset: set[Node] = set()
    for setter in setters:
        # derived setters hide what is being set
        if setter.reference.binding is not setter.origin.binding:
            return []
        declarator = state_declarator(setter.origin.binding)
        if declarator is None:
            return []
        if not _same_value(_first_argument(declarator.get("init")), _first_argument(setter.call)):
            return []
        reset.add(declarator)

    if len(reset) != count_state_hooks(effect.component):
        return []
    prop = next((o for o in site.dependency_origins if is_input_parameter(o.binding)), None)
    if prop is None:
        return []
    log.debug("Effect at line %d resets all %d states", effect.line, len(reset))
    return [site.report(
        "reset-all-state-on-prop-change", effect.node, "avoidResettingAllStateWhenAPropChanges",
        prop=prop.name,
    )]
