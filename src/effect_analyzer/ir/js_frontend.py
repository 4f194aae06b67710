"""tree-sitter frontend: parses JavaScript / JSX / TypeScript into IR Nodes.

The converter is a dispatch table keyed on tree-sitter node types. Anything
without a handler becomes an OTHER node whose children are its converted
named children, so unfamiliar syntax still contributes its identifiers.
Comments, type annotations and type-only declarations are dropped; TS
expression wrappers (``as``, ``satisfies``, ``!``) are unwrapped.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Callable

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node as TSNode, Parser

from effect_analyzer.ir.nodes import Node, NodeKind

log = logging.getLogger(__name__)

# File suffix → grammar dialect
DIALECTS: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Node types with no runtime meaning
_DROPPED = frozenset({
    "comment",
    "empty_statement",
    "hash_bang_line",
    "type_annotation",
    "type_arguments",
    "type_parameters",
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
    "ambient_declaration",
    "implements_clause",
    "accessibility_modifier",
    "override_modifier",
    "function_signature",
    "abstract_method_signature",
    "index_signature",
    "asserts_annotation",
    "type_predicate_annotation",
    "opting_type_annotation",
    "omitting_type_annotation",
})

# TS expression wrappers: (node type, index of the wrapped expression)
_UNWRAPPED = {
    "as_expression": 0,
    "satisfies_expression": 0,
    "non_null_expression": 0,
    "type_assertion": -1,
    "parenthesized_expression": 0,
}

_LITERALS = frozenset({"string", "number", "regex", "true", "false", "null"})


class SourceParseError(Exception):
    """The source text could not be parsed without errors."""

    def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


def dialect_for_path(path: Path | str) -> str | None:
    """Grammar dialect for a file suffix, or None if unsupported."""
    return DIALECTS.get(Path(path).suffix.lower())


@lru_cache(maxsize=None)
def _parser(dialect: str) -> Parser:
    if dialect == "javascript":
        language = Language(tree_sitter_javascript.language())
    elif dialect == "typescript":
        language = Language(tree_sitter_typescript.language_typescript())
    elif dialect == "tsx":
        language = Language(tree_sitter_typescript.language_tsx())
    else:
        raise ValueError(f"Unknown dialect: {dialect!r}")
    return Parser(language)


def parse_source(source: str, dialect: str = "javascript") -> Node:
    """Parse source text and return the PROGRAM node.

    Raises SourceParseError when tree-sitter reports a syntax error.
    """
    data = source.encode("utf-8")
    tree = _parser(dialect).parse(data)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        line, column = (bad.start_point[0] + 1, bad.start_point[1]) if bad else (0, 0)
        raise SourceParseError(f"Syntax error at line {line}, column {column}", line, column)
    program = _Converter(data).convert(root)
    if program is None or program.kind is not NodeKind.PROGRAM:
        raise SourceParseError("Source did not produce a program")
    log.debug("Parsed %d bytes as %s", len(data), dialect)
    return program


def _first_error(ts: TSNode) -> TSNode | None:
    stack = [ts]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(reversed(current.children))
    return None


class _Converter:
    """Converts one tree-sitter CST into IR Nodes."""

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._handlers: dict[str, Callable[[TSNode], Node | None]] = {
            "program": self._program,
            "expression_statement": self._expression_statement,
            "statement_block": self._block,
            "return_statement": self._return,
            "if_statement": self._if,
            "for_statement": self._for,
            "for_in_statement": self._for_in,
            "while_statement": self._while,
            "do_statement": self._while,
            "try_statement": self._try,
            "lexical_declaration": self._declaration,
            "variable_declaration": self._declaration,
            "variable_declarator": self._declarator,
            "function_declaration": self._function_declaration,
            "generator_function_declaration": self._function_declaration,
            "function_expression": self._function_expression,
            "function": self._function_expression,
            "generator_function": self._function_expression,
            "arrow_function": self._arrow_function,
            "class_declaration": self._class,
            "abstract_class_declaration": self._class,
            "class": self._class,
            "call_expression": self._call,
            "new_expression": self._new,
            "member_expression": self._member,
            "subscript_expression": self._subscript,
            "identifier": self._identifier,
            "property_identifier": self._identifier,
            "shorthand_property_identifier": self._identifier,
            "shorthand_property_identifier_pattern": self._identifier,
            "undefined": self._identifier,
            "template_string": self._template,
            "binary_expression": self._binary,
            "unary_expression": self._unary,
            "update_expression": self._update,
            "assignment_expression": self._assignment,
            "augmented_assignment_expression": self._assignment,
            "ternary_expression": self._ternary,
            "await_expression": self._await,
            "sequence_expression": self._sequence,
            "array": self._array,
            "object": self._object,
            "spread_element": self._spread,
            "object_pattern": self._pattern,
            "array_pattern": self._pattern,
            "assignment_pattern": self._pattern,
            "rest_pattern": self._pattern,
            "jsx_element": self._jsx,
            "jsx_self_closing_element": self._jsx,
            "jsx_fragment": self._jsx,
            "import_statement": self._import,
            "export_statement": self._export,
        }

    # ── Core helpers ─────────────────────────────────────────────────────

    def _make(self, node_kind: NodeKind, ts: TSNode, slots: dict | None = None, /, **attrs) -> Node:
        node = Node(
            kind=node_kind,
            line=ts.start_point[0] + 1,
            column=ts.start_point[1],
            end_line=ts.end_point[0] + 1,
            end_column=ts.end_point[1],
            text=self._source[ts.start_byte:ts.end_byte].decode("utf-8", errors="replace"),
            slots=slots or {},
            attrs=attrs,
        )
        return node.adopt()

    def _text(self, ts: TSNode) -> str:
        return self._source[ts.start_byte:ts.end_byte].decode("utf-8", errors="replace")

    def _named(self, ts: TSNode) -> list[TSNode]:
        return [c for c in ts.named_children if c.type not in _DROPPED]

    def convert(self, ts: TSNode | None) -> Node | None:
        if ts is None or ts.type in _DROPPED:
            return None
        if ts.type in _UNWRAPPED:
            inner = self._named(ts)
            return self.convert(inner[_UNWRAPPED[ts.type]]) if inner else None
        if ts.type in _LITERALS:
            return self._make(NodeKind.LITERAL, ts, raw=self._text(ts))
        handler = self._handlers.get(ts.type)
        if handler is not None:
            return handler(ts)
        return self._generic(ts)

    def _convert_all(self, nodes: list[TSNode]) -> list[Node]:
        out = []
        for child in nodes:
            node = self.convert(child)
            if node is not None:
                out.append(node)
        return out

    def _generic(self, ts: TSNode) -> Node:
        return self._make(
            NodeKind.OTHER, ts, {"children": self._convert_all(self._named(ts))}, type=ts.type,
        )

    @staticmethod
    def _is_async(ts: TSNode) -> bool:
        return any(c.type == "async" for c in ts.children)

    # ── Statements ───────────────────────────────────────────────────────

    def _program(self, ts: TSNode) -> Node:
        return self._make(NodeKind.PROGRAM, ts, {"body": self._convert_all(self._named(ts))})

    def _expression_statement(self, ts: TSNode) -> Node | None:
        inner = self._named(ts)
        if not inner:
            return None
        return self._make(NodeKind.EXPRESSION_STATEMENT, ts, {"expression": self.convert(inner[0])})

    def _block(self, ts: TSNode) -> Node:
        return self._make(NodeKind.BLOCK, ts, {"body": self._convert_all(self._named(ts))})

    def _return(self, ts: TSNode) -> Node:
        inner = self._named(ts)
        return self._make(NodeKind.RETURN, ts, {"argument": self.convert(inner[0]) if inner else None})

    def _if(self, ts: TSNode) -> Node:
        alternate = None
        else_clause = ts.child_by_field_name("alternative")
        if else_clause is not None:
            inner = self._named(else_clause)
            alternate = self.convert(inner[0]) if inner else None
        return self._make(NodeKind.IF, ts, {
            "test": self.convert(ts.child_by_field_name("condition")),
            "consequent": self.convert(ts.child_by_field_name("consequence")),
            "alternate": alternate,
        })

    def _for(self, ts: TSNode) -> Node:
        return self._make(NodeKind.LOOP, ts, {
            "init": self.convert(ts.child_by_field_name("initializer")),
            "test": self.convert(ts.child_by_field_name("condition")),
            "update": self.convert(ts.child_by_field_name("increment")),
            "body": self.convert(ts.child_by_field_name("body")),
        }, type="for")

    def _for_in(self, ts: TSNode) -> Node:
        kind = ts.child_by_field_name("kind")
        left_ts = ts.child_by_field_name("left")
        if kind is not None and left_ts is not None:
            # `for (const x of xs)` declares x without an initializer
            declarator = self._make(NodeKind.VARIABLE_DECLARATOR, left_ts, {
                "id": self._pattern(left_ts), "init": None,
            })
            left = self._make(NodeKind.VARIABLE_DECLARATION, left_ts, {
                "declarations": [declarator],
            }, kind=self._text(kind))
        else:
            left = self._pattern(left_ts) if left_ts is not None else None
        return self._make(NodeKind.LOOP, ts, {
            "left": left,
            "right": self.convert(ts.child_by_field_name("right")),
            "body": self.convert(ts.child_by_field_name("body")),
        }, type="for_in")

    def _while(self, ts: TSNode) -> Node:
        return self._make(NodeKind.LOOP, ts, {
            "test": self.convert(ts.child_by_field_name("condition")),
            "body": self.convert(ts.child_by_field_name("body")),
        }, type=ts.type.removesuffix("_statement"))

    def _try(self, ts: TSNode) -> Node:
        handler = None
        catch_ts = ts.child_by_field_name("handler")
        if catch_ts is not None:
            param_ts = catch_ts.child_by_field_name("parameter")
            handler = self._make(NodeKind.CATCH, catch_ts, {
                "param": self._pattern(param_ts) if param_ts is not None else None,
                "body": self.convert(catch_ts.child_by_field_name("body")),
            })
        finalizer = None
        finally_ts = ts.child_by_field_name("finalizer")
        if finally_ts is not None:
            finalizer = self.convert(finally_ts.child_by_field_name("body"))
        return self._make(NodeKind.TRY, ts, {
            "block": self.convert(ts.child_by_field_name("body")),
            "handler": handler,
            "finalizer": finalizer,
        })

    # ── Declarations ─────────────────────────────────────────────────────

    def _declaration(self, ts: TSNode) -> Node:
        if ts.type == "variable_declaration":
            kind = "var"
        else:
            kind_ts = ts.child_by_field_name("kind")
            kind = self._text(kind_ts) if kind_ts is not None else "let"
        declarators = [c for c in ts.named_children if c.type == "variable_declarator"]
        return self._make(NodeKind.VARIABLE_DECLARATION, ts, {
            "declarations": self._convert_all(declarators),
        }, kind=kind)

    def _declarator(self, ts: TSNode) -> Node:
        return self._make(NodeKind.VARIABLE_DECLARATOR, ts, {
            "id": self._pattern(ts.child_by_field_name("name")),
            "init": self.convert(ts.child_by_field_name("value")),
        })

    def _params(self, ts: TSNode | None) -> list[Node]:
        if ts is None:
            return []
        return [self._pattern(c) for c in self._named(ts)]

    def _function_declaration(self, ts: TSNode) -> Node:
        name = ts.child_by_field_name("name")
        return self._make(NodeKind.FUNCTION_DECLARATION, ts, {
            "id": self._identifier(name) if name is not None else None,
            "params": self._params(ts.child_by_field_name("parameters")),
            "body": self.convert(ts.child_by_field_name("body")),
        }, is_async=self._is_async(ts))

    def _function_expression(self, ts: TSNode) -> Node:
        name = ts.child_by_field_name("name")
        return self._make(NodeKind.FUNCTION_EXPRESSION, ts, {
            "id": self._identifier(name) if name is not None else None,
            "params": self._params(ts.child_by_field_name("parameters")),
            "body": self.convert(ts.child_by_field_name("body")),
        }, is_async=self._is_async(ts))

    def _method(self, ts: TSNode) -> Node:
        return self._make(NodeKind.FUNCTION_EXPRESSION, ts, {
            "id": None,
            "params": self._params(ts.child_by_field_name("parameters")),
            "body": self.convert(ts.child_by_field_name("body")),
        }, is_async=self._is_async(ts), method=True)

    def _arrow_function(self, ts: TSNode) -> Node:
        single = ts.child_by_field_name("parameter")
        if single is not None:
            params = [self._pattern(single)]
        else:
            params = self._params(ts.child_by_field_name("parameters"))
        body = self.convert(ts.child_by_field_name("body"))
        return self._make(NodeKind.ARROW_FUNCTION, ts, {
            "params": params,
            "body": body,
        }, is_async=self._is_async(ts), expression=body is not None and body.kind is not NodeKind.BLOCK)

    def _class(self, ts: TSNode) -> Node:
        name = ts.child_by_field_name("name")
        superclass = None
        members: list[Node] = []
        for child in ts.named_children:
            if child.type == "class_heritage":
                superclass = self._generic(child)
        body = ts.child_by_field_name("body")
        if body is not None:
            for member in self._named(body):
                if member.type == "method_definition":
                    members.append(self._method(member))
                elif member.type in ("field_definition", "public_field_definition"):
                    value = self.convert(member.child_by_field_name("value"))
                    members.append(self._make(
                        NodeKind.OTHER, member, {"children": [value] if value else []}, type=member.type,
                    ))
                elif member.type == "class_static_block":
                    members.append(self._generic(member))
        return self._make(NodeKind.CLASS, ts, {
            "id": self._identifier(name) if name is not None else None,
            "superclass": superclass,
            "body": members,
        }, declaration=ts.type != "class")

    # ── Expressions ──────────────────────────────────────────────────────

    def _identifier(self, ts: TSNode) -> Node:
        return self._make(NodeKind.IDENTIFIER, ts, name=self._text(ts))

    def _arguments(self, ts: TSNode | None) -> list[Node]:
        if ts is None:
            return []
        if ts.type == "template_string":
            # tagged template: tag`...`
            return [self._template(ts)]
        return self._convert_all(self._named(ts))

    def _call(self, ts: TSNode) -> Node:
        optional = any(c.type == "optional_chain" for c in ts.children)
        return self._make(NodeKind.CALL, ts, {
            "callee": self.convert(ts.child_by_field_name("function")),
            "arguments": self._arguments(ts.child_by_field_name("arguments")),
        }, optional=optional)

    def _new(self, ts: TSNode) -> Node:
        return self._make(NodeKind.NEW, ts, {
            "callee": self.convert(ts.child_by_field_name("constructor")),
            "arguments": self._arguments(ts.child_by_field_name("arguments")),
        })

    def _member(self, ts: TSNode) -> Node:
        prop = ts.child_by_field_name("property")
        optional = any(c.type == "optional_chain" for c in ts.children)
        return self._make(NodeKind.MEMBER, ts, {
            "object": self.convert(ts.child_by_field_name("object")),
            "property": self._identifier(prop) if prop is not None else None,
        }, computed=False, optional=optional)

    def _subscript(self, ts: TSNode) -> Node:
        optional = any(c.type == "optional_chain" for c in ts.children)
        return self._make(NodeKind.MEMBER, ts, {
            "object": self.convert(ts.child_by_field_name("object")),
            "property": self.convert(ts.child_by_field_name("index")),
        }, computed=True, optional=optional)

    def _template(self, ts: TSNode) -> Node:
        expressions: list[Node] = []
        for child in ts.named_children:
            if child.type == "template_substitution":
                expressions.extend(self._convert_all(self._named(child)))
        return self._make(NodeKind.TEMPLATE_LITERAL, ts, {"expressions": expressions}, raw=self._text(ts))

    def _operator(self, ts: TSNode) -> str:
        op = ts.child_by_field_name("operator")
        return self._text(op) if op is not None else ""

    def _binary(self, ts: TSNode) -> Node:
        return self._make(NodeKind.BINARY, ts, {
            "left": self.convert(ts.child_by_field_name("left")),
            "right": self.convert(ts.child_by_field_name("right")),
        }, operator=self._operator(ts))

    def _unary(self, ts: TSNode) -> Node:
        return self._make(NodeKind.UNARY, ts, {
            "argument": self.convert(ts.child_by_field_name("argument")),
        }, operator=self._operator(ts))

    def _update(self, ts: TSNode) -> Node:
        return self._make(NodeKind.UPDATE, ts, {
            "argument": self.convert(ts.child_by_field_name("argument")),
        }, operator=self._operator(ts))

    def _assignment(self, ts: TSNode) -> Node:
        left = ts.child_by_field_name("left")
        operator = self._operator(ts) if ts.type == "augmented_assignment_expression" else "="
        return self._make(NodeKind.ASSIGNMENT, ts, {
            "left": self._pattern(left) if left is not None else None,
            "right": self.convert(ts.child_by_field_name("right")),
        }, operator=operator)

    def _ternary(self, ts: TSNode) -> Node:
        return self._make(NodeKind.CONDITIONAL, ts, {
            "test": self.convert(ts.child_by_field_name("condition")),
            "consequent": self.convert(ts.child_by_field_name("consequence")),
            "alternate": self.convert(ts.child_by_field_name("alternative")),
        })

    def _await(self, ts: TSNode) -> Node:
        inner = self._named(ts)
        return self._make(NodeKind.AWAIT, ts, {"argument": self.convert(inner[0]) if inner else None})

    def _sequence(self, ts: TSNode) -> Node:
        return self._make(NodeKind.SEQUENCE, ts, {"expressions": self._convert_all(self._named(ts))})

    def _array(self, ts: TSNode) -> Node:
        return self._make(NodeKind.ARRAY, ts, {"elements": self._convert_all(self._named(ts))})

    def _spread(self, ts: TSNode) -> Node:
        inner = self._named(ts)
        return self._make(NodeKind.SPREAD, ts, {"argument": self.convert(inner[0]) if inner else None})

    def _key(self, ts: TSNode | None) -> tuple[Node | None, bool]:
        """Convert a property key; returns (node, computed)."""
        if ts is None:
            return None, False
        if ts.type == "computed_property_name":
            inner = self._named(ts)
            return (self.convert(inner[0]) if inner else None), True
        if ts.type in ("property_identifier", "identifier"):
            return self._identifier(ts), False
        if ts.type in ("string", "number"):
            return self._make(NodeKind.LITERAL, ts, raw=self._text(ts)), False
        return self._make(NodeKind.OTHER, ts, {"children": []}, type=ts.type), False

    def _object(self, ts: TSNode) -> Node:
        properties: list[Node] = []
        for child in self._named(ts):
            if child.type == "pair":
                key, computed = self._key(child.child_by_field_name("key"))
                properties.append(self._make(NodeKind.PROPERTY, child, {
                    "key": key,
                    "value": self.convert(child.child_by_field_name("value")),
                }, computed=computed))
            elif child.type == "shorthand_property_identifier":
                properties.append(self._make(NodeKind.PROPERTY, child, {
                    "key": None,
                    "value": self._identifier(child),
                }, computed=False, shorthand=True))
            elif child.type == "method_definition":
                key, computed = self._key(child.child_by_field_name("name"))
                properties.append(self._make(NodeKind.PROPERTY, child, {
                    "key": key,
                    "value": self._method(child),
                }, computed=computed))
            else:
                node = self.convert(child)
                if node is not None:
                    properties.append(node)
        return self._make(NodeKind.OBJECT, ts, {"properties": properties})

    # ── Patterns ─────────────────────────────────────────────────────────

    def _pattern(self, ts: TSNode) -> Node | None:
        kind = ts.type
        if kind in ("identifier", "shorthand_property_identifier_pattern", "undefined"):
            return self._identifier(ts)
        if kind in ("required_parameter", "optional_parameter"):
            # TS parameter wrapper: pattern [: type] [= default]
            target = ts.child_by_field_name("pattern")
            pattern = self._pattern(target) if target is not None else None
            default = ts.child_by_field_name("value")
            if default is None:
                return pattern
            return self._make(NodeKind.ASSIGNMENT_PATTERN, ts, {
                "left": pattern, "right": self.convert(default),
            })
        if kind == "object_pattern":
            return self._make(NodeKind.OBJECT_PATTERN, ts, {
                "properties": [p for p in (self._object_pattern_entry(c) for c in self._named(ts)) if p],
            })
        if kind == "array_pattern":
            return self._make(NodeKind.ARRAY_PATTERN, ts, {"elements": self._array_pattern_elements(ts)})
        if kind in ("assignment_pattern", "object_assignment_pattern"):
            left = ts.child_by_field_name("left")
            return self._make(NodeKind.ASSIGNMENT_PATTERN, ts, {
                "left": self._pattern(left) if left is not None else None,
                "right": self.convert(ts.child_by_field_name("right")),
            })
        if kind == "rest_pattern":
            inner = self._named(ts)
            return self._make(NodeKind.REST, ts, {"argument": self._pattern(inner[0]) if inner else None})
        if kind == "parenthesized_expression":
            inner = self._named(ts)
            return self._pattern(inner[0]) if inner else None
        return self.convert(ts)

    def _object_pattern_entry(self, ts: TSNode) -> Node | None:
        if ts.type == "pair_pattern":
            key, computed = self._key(ts.child_by_field_name("key"))
            value = ts.child_by_field_name("value")
            return self._make(NodeKind.PROPERTY, ts, {
                "key": key,
                "value": self._pattern(value) if value is not None else None,
            }, computed=computed)
        if ts.type in ("shorthand_property_identifier_pattern", "object_assignment_pattern"):
            return self._make(NodeKind.PROPERTY, ts, {
                "key": None,
                "value": self._pattern(ts),
            }, computed=False, shorthand=True)
        return self._pattern(ts)

    def _array_pattern_elements(self, ts: TSNode) -> list[Node | None]:
        # holes are positions between commas with no element
        elements: list[Node | None] = []
        current: Node | None = None
        for child in ts.children:
            if child.type == ",":
                elements.append(current)
                current = None
            elif child.type == "]":
                if current is not None:
                    elements.append(current)
            elif child.is_named and child.type not in _DROPPED:
                current = self._pattern(child)
        return elements

    # ── JSX ──────────────────────────────────────────────────────────────

    def _jsx(self, ts: TSNode) -> Node:
        return self._make(NodeKind.JSX, ts, {"children": self._jsx_parts(ts)})

    def _jsx_parts(self, ts: TSNode) -> list[Node]:
        """Attribute values and child expressions; tag names are not references."""
        parts: list[Node] = []
        for child in ts.named_children:
            kind = child.type
            if kind == "jsx_opening_element":
                parts.extend(self._jsx_parts(child))
            elif kind == "jsx_attribute":
                parts.extend(self._convert_all(self._named(child)[1:]))
            elif kind == "jsx_expression":
                parts.extend(self._convert_all(self._named(child)))
            elif kind in ("jsx_element", "jsx_self_closing_element", "jsx_fragment"):
                parts.append(self._jsx(child))
            elif ts.type == "jsx_fragment" and kind not in ("jsx_text", "html_character_reference"):
                node = self.convert(child)
                if node is not None:
                    parts.append(node)
        return parts

    # ── Modules ──────────────────────────────────────────────────────────

    def _import(self, ts: TSNode) -> Node:
        specifiers: list[Node] = []
        source = ts.child_by_field_name("source")
        for clause in ts.named_children:
            if clause.type != "import_clause":
                continue
            for item in clause.named_children:
                if item.type == "identifier":
                    specifiers.append(self._specifier(item, item, "default"))
                elif item.type == "namespace_import":
                    names = [c for c in item.named_children if c.type == "identifier"]
                    if names:
                        specifiers.append(self._specifier(item, names[0], "*"))
                elif item.type == "named_imports":
                    for spec in item.named_children:
                        if spec.type != "import_specifier":
                            continue
                        name = spec.child_by_field_name("name")
                        alias = spec.child_by_field_name("alias")
                        local = alias if alias is not None else name
                        if local is not None and local.type == "identifier":
                            imported = self._text(name).strip("'\"") if name is not None else ""
                            specifiers.append(self._specifier(spec, local, imported))
        return self._make(NodeKind.IMPORT_DECLARATION, ts, {"specifiers": specifiers},
                          source=self._text(source).strip("'\"") if source is not None else "")

    def _specifier(self, ts: TSNode, local: TSNode, imported: str) -> Node:
        return self._make(NodeKind.IMPORT_SPECIFIER, ts, {"local": self._identifier(local)}, imported=imported)

    def _export(self, ts: TSNode) -> Node:
        declaration = ts.child_by_field_name("declaration") or ts.child_by_field_name("value")
        if declaration is not None:
            return self._make(NodeKind.EXPORT, ts, {"declaration": self.convert(declaration)})
        if ts.child_by_field_name("source") is not None:
            # re-export from another module; no local references
            return self._make(NodeKind.EXPORT, ts, {"declaration": None})
        names: list[Node] = []
        for clause in ts.named_children:
            if clause.type != "export_clause":
                continue
            for spec in clause.named_children:
                name = spec.child_by_field_name("name") if spec.type == "export_specifier" else None
                if name is not None and name.type == "identifier":
                    names.append(self._identifier(name))
        local = self._make(NodeKind.OTHER, ts, {"children": names}, type="export_clause")
        return self._make(NodeKind.EXPORT, ts, {"declaration": local})
