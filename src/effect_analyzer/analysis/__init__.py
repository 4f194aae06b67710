"""Reference-flow analysis over effect call sites.

Provides:
    find_effect_calls(program, oracle) -> list[EffectCall]
    resolve(ref, oracle) -> list[Reference]
"""

from __future__ import annotations

from effect_analyzer.analysis.calls import call_site_of, is_synchronous
from effect_analyzer.analysis.classify import OriginKind, all_internal, classify
from effect_analyzer.analysis.effects import EffectCall, extract_effect, find_effect_calls
from effect_analyzer.analysis.origins import origins_of, resolve, resolve_all
from effect_analyzer.analysis.references import locate
from effect_analyzer.analysis.walker import find_nodes_of_kind, traverse

__all__ = [
    "EffectCall",
    "OriginKind",
    "all_internal",
    "call_site_of",
    "classify",
    "extract_effect",
    "find_effect_calls",
    "find_nodes_of_kind",
    "is_synchronous",
    "locate",
    "origins_of",
    "resolve",
    "resolve_all",
    "traverse",
]
