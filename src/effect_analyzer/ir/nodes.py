"""IR node dataclass and the closed set of node kinds.

A Node is a tagged tree element produced by the frontend. Children live in
named slots (``CHILD_KEYS[kind]`` gives their order); scalar facts such as an
identifier's name, an operator or an ``async`` flag live in ``attrs``.
Nodes compare by identity, so they can be used as dict keys and in visited
sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Union


class NodeKind(str, Enum):
    PROGRAM = "program"
    EXPRESSION_STATEMENT = "expression_statement"
    BLOCK = "block"
    RETURN = "return"
    IF = "if"
    LOOP = "loop"
    TRY = "try"
    CATCH = "catch"
    FUNCTION_DECLARATION = "function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    ARROW_FUNCTION = "arrow_function"
    CLASS = "class"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    IMPORT_DECLARATION = "import_declaration"
    IMPORT_SPECIFIER = "import_specifier"
    EXPORT = "export"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    TEMPLATE_LITERAL = "template_literal"
    CALL = "call"
    NEW = "new"
    MEMBER = "member"
    ARRAY = "array"
    OBJECT = "object"
    PROPERTY = "property"
    SPREAD = "spread"
    ARRAY_PATTERN = "array_pattern"
    OBJECT_PATTERN = "object_pattern"
    ASSIGNMENT_PATTERN = "assignment_pattern"
    REST = "rest"
    BINARY = "binary"
    UNARY = "unary"
    UPDATE = "update"
    ASSIGNMENT = "assignment"
    CONDITIONAL = "conditional"
    AWAIT = "await"
    SEQUENCE = "sequence"
    JSX = "jsx"
    OTHER = "other"


# Slot order per kind. Every NodeKind has an entry.
CHILD_KEYS: dict[NodeKind, tuple[str, ...]] = {
    NodeKind.PROGRAM: ("body",),
    NodeKind.EXPRESSION_STATEMENT: ("expression",),
    NodeKind.BLOCK: ("body",),
    NodeKind.RETURN: ("argument",),
    NodeKind.IF: ("test", "consequent", "alternate"),
    NodeKind.LOOP: ("init", "left", "right", "test", "update", "body"),
    NodeKind.TRY: ("block", "handler", "finalizer"),
    NodeKind.CATCH: ("param", "body"),
    NodeKind.FUNCTION_DECLARATION: ("id", "params", "body"),
    NodeKind.FUNCTION_EXPRESSION: ("id", "params", "body"),
    NodeKind.ARROW_FUNCTION: ("params", "body"),
    NodeKind.CLASS: ("id", "superclass", "body"),
    NodeKind.VARIABLE_DECLARATION: ("declarations",),
    NodeKind.VARIABLE_DECLARATOR: ("id", "init"),
    NodeKind.IMPORT_DECLARATION: ("specifiers",),
    NodeKind.IMPORT_SPECIFIER: ("local",),
    NodeKind.EXPORT: ("declaration",),
    NodeKind.IDENTIFIER: (),
    NodeKind.LITERAL: (),
    NodeKind.TEMPLATE_LITERAL: ("expressions",),
    NodeKind.CALL: ("callee", "arguments"),
    NodeKind.NEW: ("callee", "arguments"),
    NodeKind.MEMBER: ("object", "property"),
    NodeKind.ARRAY: ("elements",),
    NodeKind.OBJECT: ("properties",),
    NodeKind.PROPERTY: ("key", "value"),
    NodeKind.SPREAD: ("argument",),
    NodeKind.ARRAY_PATTERN: ("elements",),
    NodeKind.OBJECT_PATTERN: ("properties",),
    NodeKind.ASSIGNMENT_PATTERN: ("left", "right"),
    NodeKind.REST: ("argument",),
    NodeKind.BINARY: ("left", "right"),
    NodeKind.UNARY: ("argument",),
    NodeKind.UPDATE: ("argument",),
    NodeKind.ASSIGNMENT: ("left", "right"),
    NodeKind.CONDITIONAL: ("test", "consequent", "alternate"),
    NodeKind.AWAIT: ("argument",),
    NodeKind.SEQUENCE: ("expressions",),
    NodeKind.JSX: ("children",),
    NodeKind.OTHER: ("children",),
}

FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.ARROW_FUNCTION,
})

Slot = Union["Node", list[Union["Node", None]], None]


@dataclass(eq=False)
class Node:
    kind: NodeKind
    line: int                 # 1-based
    column: int               # 0-based
    end_line: int
    end_column: int
    text: str                 # source text covered by the node
    slots: dict[str, Slot] = field(default_factory=dict)
    attrs: dict[str, Any] = field(default_factory=dict)
    parent: Node | None = field(default=None, repr=False)
    key: str | None = field(default=None, repr=False)  # slot name in parent

    def get(self, key: str) -> Node | None:
        """Single-node slot, or None when empty or list-valued."""
        value = self.slots.get(key)
        return value if isinstance(value, Node) else None

    def items(self, key: str) -> list[Node | None]:
        """List slot contents; holes stay as None."""
        value = self.slots.get(key)
        if isinstance(value, list):
            return value
        return []

    def children(self, keys: tuple[str, ...] | None = None) -> Iterator[Node]:
        """Yield non-empty children in slot order."""
        for key in CHILD_KEYS[self.kind] if keys is None else keys:
            value = self.slots.get(key)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if item is not None:
                        yield item

    @property
    def name(self) -> str | None:
        return self.attrs.get("name")

    def is_identifier(self, name: str | None = None) -> bool:
        if self.kind is not NodeKind.IDENTIFIER:
            return False
        return name is None or self.attrs.get("name") == name

    def adopt(self) -> Node:
        """Point every child's parent/key back at this node."""
        for key, value in self.slots.items():
            if isinstance(value, Node):
                value.parent = self
                value.key = key
            elif isinstance(value, list):
                for item in value:
                    if item is not None:
                        item.parent = self
                        item.key = key
        return self


# Attributes that carry source positions or formatting rather than meaning.
_POSITIONAL_ATTRS = frozenset({"shorthand"})


def same_shape(a: Node | None, b: Node | None) -> bool:
    """Structural equality: kind, attrs and children, ignoring positions."""
    if a is None or b is None:
        return a is b
    if a.kind is not b.kind:
        return False
    if a.kind is NodeKind.LITERAL:
        return a.attrs.get("raw") == b.attrs.get("raw")
    a_attrs = {k: v for k, v in a.attrs.items() if k not in _POSITIONAL_ATTRS}
    b_attrs = {k: v for k, v in b.attrs.items() if k not in _POSITIONAL_ATTRS}
    if a_attrs != b_attrs:
        return False
    for key in CHILD_KEYS[a.kind]:
        av, bv = a.slots.get(key), b.slots.get(key)
        if isinstance(av, list) or isinstance(bv, list):
            al = av if isinstance(av, list) else []
            bl = bv if isinstance(bv, list) else []
            if len(al) != len(bl):
                return False
            if not all(same_shape(x, y) for x, y in zip(al, bl)):
                return False
        elif not same_shape(av, bv):
            return False
    return True
