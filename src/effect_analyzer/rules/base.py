"""Shared rule context: the Diagnostic value and per-effect helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from effect_analyzer.analysis.calls import call_site_of, is_synchronous
from effect_analyzer.analysis.classify import (
    is_input_parameter,
    is_mutable_handle,
    is_state_setter,
    state_name,
)
from effect_analyzer.analysis.effects import EffectCall
from effect_analyzer.analysis.origins import origins_of, resolve, resolve_all
from effect_analyzer.analysis.references import locate_all
from effect_analyzer.ir.nodes import Node
from effect_analyzer.ir.scope import Binding, Reference, ScopeAnalysis


@dataclass(frozen=True, eq=False)
class Diagnostic:
    rule_id: str
    node: Node
    message_key: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def line(self) -> int:
        return self.node.line

    @property
    def column(self) -> int:
        return self.node.column


@dataclass
class CalleeCall:
    """A synchronous call inside an effect and the origin that qualified it."""
    reference: Reference   # callee-chain reference inside the callback
    call: Node             # the CALL
    origin: Reference      # leaf origin that matched


class EffectSite:
    """One effect call plus memoized origin lookups for the rules."""

    def __init__(self, effect: EffectCall, oracle: ScopeAnalysis) -> None:
        self.effect = effect
        self.oracle = oracle

    # ── Origins ──────────────────────────────────────────────────────────

    def origins(self, ref: Reference) -> list[Reference]:
        return resolve(ref, self.oracle)

    def argument_origins(self, call: Node) -> list[Reference]:
        return resolve_all(locate_all(call.items("arguments"), self.oracle), self.oracle)

    def origins_in(self, node: Node | None) -> list[Reference]:
        return origins_of(node, self.oracle)

    @cached_property
    def dependency_origins(self) -> list[Reference]:
        return resolve_all(self.effect.dependency_refs or [], self.oracle)

    @cached_property
    def dependency_bindings(self) -> set[Binding]:
        return {o.binding for o in self.dependency_origins if o.binding is not None}

    def is_synchronous(self, node: Node) -> bool:
        return is_synchronous(node, self.effect.callback)

    # ── Qualified calls ──────────────────────────────────────────────────

    def _callee_calls(self, matches) -> list[CalleeCall]:
        """Synchronous callback calls with an origin accepted by `matches`."""
        found: list[CalleeCall] = []
        for ref in self.effect.callback_refs:
            call = call_site_of(ref)
            if call is None or not self.is_synchronous(ref.identifier):
                continue
            for origin in self.origins(ref):
                if matches(origin):
                    found.append(CalleeCall(reference=ref, call=call, origin=origin))
                    break
        return found

    @cached_property
    def setter_calls(self) -> list[CalleeCall]:
        return self._callee_calls(
            lambda o: call_site_of(o) is not None and is_state_setter(o.binding)
        )

    @cached_property
    def input_callback_calls(self) -> list[CalleeCall]:
        return self._callee_calls(
            lambda o: call_site_of(o) is not None and is_input_parameter(o.binding)
        )

    @cached_property
    def handle_calls(self) -> list[CalleeCall]:
        return self._callee_calls(lambda o: is_mutable_handle(o.binding))

    def call_site_count(self, binding: Binding) -> int:
        """Calls anywhere in the file whose callee chain starts at this binding."""
        return sum(1 for r in self.oracle.references_of(binding) if call_site_of(r) is not None)

    # ── Reporting ────────────────────────────────────────────────────────

    @staticmethod
    def state_label(call: CalleeCall) -> str:
        return state_name(call.origin.binding) or call.origin.name

    def report(self, rule_id: str, node: Node, message_key: str, **data: Any) -> Diagnostic:
        return Diagnostic(rule_id=rule_id, node=node, message_key=message_key, data=data)
