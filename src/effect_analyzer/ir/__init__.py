"""IR (Intermediate Representation) package for effect-analyzer.

Provides:
    parse_program(source, dialect) -> (Node, ScopeAnalysis)
"""

from __future__ import annotations

from effect_analyzer.ir.js_frontend import SourceParseError, dialect_for_path, parse_source
from effect_analyzer.ir.nodes import CHILD_KEYS, Node, NodeKind
from effect_analyzer.ir.scope import ScopeAnalysis, analyze_scopes


def parse_program(source: str, dialect: str = "javascript") -> tuple[Node, ScopeAnalysis]:
    """Parse source and build its binding oracle.

    Raises:
        SourceParseError: the source has syntax errors.
    """
    program = parse_source(source, dialect)
    return program, analyze_scopes(program)


__all__ = [
    "CHILD_KEYS",
    "Node",
    "NodeKind",
    "ScopeAnalysis",
    "SourceParseError",
    "analyze_scopes",
    "dialect_for_path",
    "parse_program",
    "parse_source",
]
