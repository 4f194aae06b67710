"""Rules about effects that reach up into the parent component.

The parent is reached through input-parameter callbacks (`onChange(x)`) and
through refs: either a local ref whose registered callbacks call props, or a
ref handed down by the parent and dereferenced inside the effect.
"""

from __future__ import annotations

from effect_analyzer.analysis.calls import call_site_of
from effect_analyzer.analysis.classify import (
    is_any_input_parameter,
    is_input_parameter,
    is_mutable_handle,
    is_state,
)
from effect_analyzer.analysis.references import locate_all
from effect_analyzer.ir.nodes import NodeKind
from effect_analyzer.ir.scope import Reference
from effect_analyzer.rules.base import Diagnostic, EffectSite


def check_manage_parent(site: EffectSite) -> list[Diagnostic]:
    effect = site.effect
    if effect.dependency_refs is None or not effect.callback_refs:
        return []
    origins = site.origins_in(effect.callback) + site.dependency_origins
    if origins and all(is_input_parameter(o.binding) for o in origins):
        return [site.report("manage-parent", effect.node, "avoidManagingParent")]
    return []


def check_pass_live_state(site: EffectSite) -> list[Diagnostic]:
    if site.effect.dependency_refs is None:
        return []
    out = []
    for callback in site.input_callback_calls:
        args = site.argument_origins(callback.call)
        if any(is_state(o.binding) for o in args):
            out.append(site.report(
                "pass-live-state-to-parent", callback.call, "avoidPassingLiveStateToParent",
            ))
    return out


def check_pass_data(site: EffectSite) -> list[Diagnostic]:
    if site.effect.dependency_refs is None:
        return []
    out = []
    for callback in site.input_callback_calls:
        if not callback.call.items("arguments"):
            out.append(site.report("pass-data-to-parent", callback.call, "avoidParentChildCoupling"))
            continue
        args = site.argument_origins(callback.call)
        if args and not any(
            is_state(o.binding) or is_any_input_parameter(o.binding) or is_mutable_handle(o.binding)
            for o in args
        ):
            out.append(site.report("pass-data-to-parent", callback.call, "avoidPassingDataToParent"))
    return out


def _calls_input_callback(origin: Reference) -> bool:
    return call_site_of(origin) is not None and is_input_parameter(origin.binding)


def _dereferences_received_ref(origin: Reference) -> bool:
    """`<param>.current` on a ref the parent passed in."""
    if not is_any_input_parameter(origin.binding):
        return False
    member = origin.identifier.parent
    if member is None or member.kind is not NodeKind.MEMBER or origin.identifier.key != "object":
        return False
    prop = member.get("property")
    return not member.attrs.get("computed") and prop is not None and prop.is_identifier("current")


def check_pass_ref(site: EffectSite) -> list[Diagnostic]:
    if site.effect.dependency_refs is None:
        return []
    out = []

    for callback in site.input_callback_calls:
        args = site.argument_origins(callback.call)
        if args and all(is_mutable_handle(o.binding) for o in args):
            out.append(site.report("pass-ref-to-parent", callback.call, "avoidPassingRefToParent"))

    for handle in site.handle_calls:
        arg_refs = locate_all(handle.call.items("arguments"), site.oracle)
        origins = [o for ref in arg_refs for o in site.origins(ref)]
        if any(_calls_input_callback(o) for o in origins):
            out.append(site.report("pass-ref-to-parent", handle.call, "avoidPropCallbackInRefCallback"))

    reported = {d.node for d in out}
    for ref in site.effect.callback_refs:
        call = call_site_of(ref)
        if call is None or call in reported or not site.is_synchronous(ref.identifier):
            continue
        if any(_dereferences_received_ref(o) for o in site.origins(ref)):
            reported.add(call)
            out.append(site.report("pass-ref-to-parent", call, "avoidReceivingRefFromParent"))
    return out
