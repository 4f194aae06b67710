"""Pattern rules over effect call sites.

Provides:
    analyze_tree(program, oracle, enabled=None) -> list[Diagnostic]

Rules run per effect call in registry order. When
reset-all-state-on-prop-change fires it is the only diagnostic for that
call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Collection

from effect_analyzer.analysis.effects import EffectCall, find_effect_calls
from effect_analyzer.ir.nodes import Node
from effect_analyzer.ir.scope import ScopeAnalysis
from effect_analyzer.rules.base import Diagnostic, EffectSite
from effect_analyzer.rules.lifecycle import check_empty_effect, check_event_handler
from effect_analyzer.rules.parent import (
    check_manage_parent,
    check_pass_data,
    check_pass_live_state,
    check_pass_ref,
)
from effect_analyzer.rules.state import (
    check_adjust_state_on_prop_change,
    check_chain_state_updates,
    check_derived_state,
    check_initialize_state,
    check_reset_all_state,
)

log = logging.getLogger(__name__)

RESET_ALL = "reset-all-state-on-prop-change"


@dataclass(frozen=True)
class Rule:
    id: str
    check: Callable[[EffectSite], list[Diagnostic]]


RULES: tuple[Rule, ...] = (
    Rule(RESET_ALL, check_reset_all_state),
    Rule("empty-effect", check_empty_effect),
    Rule("initialize-state", check_initialize_state),
    Rule("derived-state", check_derived_state),
    Rule("chain-state-updates", check_chain_state_updates),
    Rule("adjust-state-on-prop-change", check_adjust_state_on_prop_change),
    Rule("event-handler", check_event_handler),
    Rule("manage-parent", check_manage_parent),
    Rule("pass-live-state-to-parent", check_pass_live_state),
    Rule("pass-data-to-parent", check_pass_data),
    Rule("pass-ref-to-parent", check_pass_ref),
)

RULE_IDS: tuple[str, ...] = tuple(rule.id for rule in RULES)


def run_rules(
    effect: EffectCall,
    oracle: ScopeAnalysis,
    enabled: Collection[str] | None = None,
) -> list[Diagnostic]:
    """All diagnostics for one effect call."""
    site = EffectSite(effect, oracle)
    diagnostics: list[Diagnostic] = []
    for rule in RULES:
        if enabled is not None and rule.id not in enabled:
            continue
        found = rule.check(site)
        if rule.id == RESET_ALL and found:
            return found
        diagnostics.extend(found)
    return diagnostics


def analyze_tree(
    program: Node,
    oracle: ScopeAnalysis,
    enabled: Collection[str] | None = None,
) -> list[Diagnostic]:
    """Run every enabled rule over every effect call in a parsed file."""
    diagnostics: list[Diagnostic] = []
    for effect in find_effect_calls(program, oracle):
        found = run_rules(effect, oracle, enabled)
        log.debug("Effect at line %d: %d diagnostics", effect.line, len(found))
        diagnostics.extend(found)
    return diagnostics


__all__ = ["Diagnostic", "RULES", "RULE_IDS", "Rule", "analyze_tree", "run_rules"]
