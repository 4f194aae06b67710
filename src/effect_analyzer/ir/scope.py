"""Scope analysis: declarations, references and name resolution for one file.

Two passes over the IR:
  1. Declare: build module/function/block/catch scopes and record every
     declaration with hoisting (``var`` and function names go to the
     enclosing function scope, ``let``/``const``/``class`` to the block).
  2. Resolve: visit identifiers in reference position, look the name up
     through the scope chain and attach a Reference to its Binding. Names
     declared nowhere in the file resolve to an implicit global Binding
     with no defs.

ScopeAnalysis is the binding oracle the analysis core consumes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from effect_analyzer.ir.nodes import CHILD_KEYS, FUNCTION_KINDS, Node, NodeKind

log = logging.getLogger(__name__)


class DefKind(str, Enum):
    PARAMETER = "Parameter"
    VARIABLE = "Variable"
    IMPORT_BINDING = "ImportBinding"
    FUNCTION_NAME = "FunctionName"
    CLASS_NAME = "ClassName"
    CATCH_CLAUSE = "CatchClause"


@dataclass(eq=False)
class Def:
    kind: DefKind
    name: Node   # the declaring IDENTIFIER
    node: Node   # declarator, function, class, import specifier or catch clause


@dataclass(eq=False)
class Binding:
    name: str
    scope: Scope
    defs: list[Def] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)

    @property
    def is_implicit_global(self) -> bool:
        return not self.defs


@dataclass(eq=False)
class Reference:
    identifier: Node
    binding: Binding | None
    is_write: bool = False

    @property
    def name(self) -> str:
        return self.identifier.attrs.get("name", "")


@dataclass(eq=False)
class Scope:
    kind: str                  # "global"|"module"|"function"|"block"|"catch"|"class"
    node: Node | None
    parent: Scope | None
    variables: dict[str, Binding] = field(default_factory=dict)

    def lookup(self, name: str) -> Binding | None:
        scope: Scope | None = self
        while scope is not None:
            binding = scope.variables.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        return None

    def function_scope(self) -> Scope:
        """Nearest scope that receives hoisted declarations."""
        scope = self
        while scope.kind not in ("function", "module", "global") and scope.parent is not None:
            scope = scope.parent
        return scope


class ScopeAnalysis:
    """Binding oracle for one parsed file."""

    def __init__(self, program: Node) -> None:
        self.program = program
        self.global_scope = Scope("global", None, None)
        self._scope_of: dict[Node, Scope] = {}
        self._declared_names: set[Node] = set()
        self._written_names: set[Node] = set()
        self._references: dict[Node, Reference] = {}

        module = Scope("module", program, self.global_scope)
        self._scope_of[program] = module
        self._declare_children(program, module)
        self._resolve(program, self.global_scope)
        log.debug("Scope analysis: %d references", len(self._references))

    # ── Oracle API ───────────────────────────────────────────────────────

    def reference_for(self, identifier: Node) -> Reference | None:
        """Reference at this identifier, or None when it is not in reference position."""
        return self._references.get(identifier)

    def resolve(self, ref: Reference) -> Binding | None:
        return ref.binding

    def references_of(self, binding: Binding) -> list[Reference]:
        return list(binding.references)

    @staticmethod
    def child_keys_of(kind: NodeKind) -> tuple[str, ...]:
        return CHILD_KEYS[kind]

    def scope_of(self, node: Node) -> Scope | None:
        return self._scope_of.get(node)

    # ── Pass 1: declarations ─────────────────────────────────────────────

    def _declare(self, scope: Scope, ident: Node | None, kind: DefKind, node: Node) -> None:
        if ident is None or ident.kind is not NodeKind.IDENTIFIER:
            return
        name = ident.attrs["name"]
        binding = scope.variables.get(name)
        if binding is None:
            binding = Binding(name=name, scope=scope)
            scope.variables[name] = binding
        binding.defs.append(Def(kind=kind, name=ident, node=node))
        self._declared_names.add(ident)

    def _pattern_names(self, pattern: Node | None, scope: Scope) -> list[Node]:
        """Identifiers a pattern binds; nested default values are declared in `scope`."""
        names: list[Node] = []
        stack = [pattern]
        while stack:
            current = stack.pop()
            if current is None:
                continue
            kind = current.kind
            if kind is NodeKind.IDENTIFIER:
                names.append(current)
            elif kind is NodeKind.ARRAY_PATTERN:
                stack.extend(reversed(current.items("elements")))
            elif kind is NodeKind.OBJECT_PATTERN:
                stack.extend(reversed(current.items("properties")))
            elif kind is NodeKind.PROPERTY:
                if current.attrs.get("computed") and current.get("key") is not None:
                    self._declare_node(current.get("key"), scope)
                stack.append(current.get("value"))
            elif kind is NodeKind.REST:
                stack.append(current.get("argument"))
            elif kind is NodeKind.ASSIGNMENT_PATTERN:
                self._declare_node(current.get("right"), scope)
                stack.append(current.get("left"))
            else:
                # member targets in assignment patterns bind nothing
                self._declare_node(current, scope)
        return names

    def _declare_children(self, node: Node, scope: Scope) -> None:
        for child in node.children():
            self._declare_node(child, scope)

    def _declare_node(self, node: Node | None, scope: Scope) -> None:
        if node is None:
            return
        kind = node.kind

        if kind in FUNCTION_KINDS:
            self._declare_function(node, scope)
        elif kind is NodeKind.VARIABLE_DECLARATION:
            target = scope.function_scope() if node.attrs.get("kind") == "var" else scope
            for declarator in node.items("declarations"):
                if declarator is None:
                    continue
                self._scope_of.setdefault(declarator, scope)
                init = declarator.get("init")
                for ident in self._pattern_names(declarator.get("id"), scope):
                    self._declare(target, ident, DefKind.VARIABLE, declarator)
                    if init is not None:
                        self._written_names.add(ident)
                self._declare_node(init, scope)
        elif kind is NodeKind.CLASS:
            ident = node.get("id")
            if node.attrs.get("declaration"):
                self._declare(scope, ident, DefKind.CLASS_NAME, node)
                class_scope = Scope("class", node, scope)
            else:
                class_scope = Scope("class", node, scope)
                self._declare(class_scope, ident, DefKind.CLASS_NAME, node)
            self._scope_of[node] = class_scope
            self._declare_children(node, class_scope)
        elif kind is NodeKind.CATCH:
            catch_scope = Scope("catch", node, scope)
            self._scope_of[node] = catch_scope
            for ident in self._pattern_names(node.get("param"), catch_scope):
                self._declare(catch_scope, ident, DefKind.CATCH_CLAUSE, node)
            self._declare_body(node.get("body"), catch_scope)
        elif kind is NodeKind.IMPORT_DECLARATION:
            for spec in node.items("specifiers"):
                if spec is not None:
                    self._declare(scope.function_scope(), spec.get("local"), DefKind.IMPORT_BINDING, spec)
        elif kind in (NodeKind.BLOCK, NodeKind.LOOP):
            block_scope = Scope("block", node, scope)
            self._scope_of[node] = block_scope
            self._declare_children(node, block_scope)
        else:
            self._declare_children(node, scope)

    def _declare_function(self, fn: Node, scope: Scope) -> None:
        fn_scope = Scope("function", fn, scope)
        self._scope_of[fn] = fn_scope
        ident = fn.get("id")
        if fn.kind is NodeKind.FUNCTION_DECLARATION:
            self._declare(scope.function_scope(), ident, DefKind.FUNCTION_NAME, fn)
        elif ident is not None:
            self._declare(fn_scope, ident, DefKind.FUNCTION_NAME, fn)
        for param in fn.items("params"):
            for name in self._pattern_names(param, fn_scope):
                self._declare(fn_scope, name, DefKind.PARAMETER, fn)
        self._declare_body(fn.get("body"), fn_scope)

    def _declare_body(self, body: Node | None, scope: Scope) -> None:
        """A function or catch body shares the scope of its owner."""
        if body is None:
            return
        if body.kind is NodeKind.BLOCK:
            self._scope_of[body] = scope
            self._declare_children(body, scope)
        else:
            self._declare_node(body, scope)

    # ── Pass 2: references ───────────────────────────────────────────────

    def _resolve(self, root: Node, scope: Scope) -> None:
        stack: list[tuple[Node, Scope]] = [(root, scope)]
        while stack:
            node, current = stack.pop()
            current = self._scope_of.get(node, current)
            if node.kind is NodeKind.IDENTIFIER:
                self._record(node, current)
                continue
            children = list(node.children())
            stack.extend((child, current) for child in reversed(children))

    def _record(self, ident: Node, scope: Scope) -> None:
        is_write = False
        if ident in self._declared_names:
            if ident not in self._written_names:
                return
            is_write = True
        elif not _in_reference_position(ident):
            return
        elif ident.key == "left" and ident.parent is not None and ident.parent.kind is NodeKind.ASSIGNMENT:
            is_write = True
        elif ident.parent is not None and ident.parent.kind is NodeKind.UPDATE:
            is_write = True

        name = ident.attrs["name"]
        binding = scope.lookup(name)
        if binding is None:
            binding = Binding(name=name, scope=self.global_scope)
            self.global_scope.variables[name] = binding
        ref = Reference(identifier=ident, binding=binding, is_write=is_write)
        binding.references.append(ref)
        self._references[ident] = ref


def _in_reference_position(ident: Node) -> bool:
    parent = ident.parent
    if parent is None:
        return True
    if parent.kind is NodeKind.MEMBER and ident.key == "property":
        return bool(parent.attrs.get("computed"))
    if parent.kind is NodeKind.PROPERTY and ident.key == "key":
        return bool(parent.attrs.get("computed"))
    if parent.kind is NodeKind.IMPORT_SPECIFIER:
        return False
    return True


def analyze_scopes(program: Node) -> ScopeAnalysis:
    """Build the binding oracle for a PROGRAM node."""
    return ScopeAnalysis(program)
