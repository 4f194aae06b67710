"""Origin classification: state, setters, input parameters and mutable handles.

All predicates are computed on demand from a Binding's definitions; nothing
is cached on the IR. Component and hook recognition are naming heuristics:
a component is a capitalized function, a custom hook is ``use`` followed by
a capital letter.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from effect_analyzer.analysis.walker import ancestors
from effect_analyzer.ir.nodes import FUNCTION_KINDS, Node, NodeKind
from effect_analyzer.ir.scope import Binding, DefKind, Reference

# Higher-order wrappers that leave a component's props untouched
PURE_WRAPPERS = frozenset({"memo", "forwardRef"})


class OriginKind(str, Enum):
    STATE = "State"
    STATE_SETTER = "StateSetter"
    INPUT_PARAMETER = "InputParameter"
    OPAQUE_INPUT_PARAMETER = "OpaqueInputParameter"
    MUTABLE_HANDLE = "MutableHandle"
    UNKNOWN = "Unknown"


# ── Hook calls ───────────────────────────────────────────────────────────


def is_hook_call(node: Node | None, name: str) -> bool:
    """CALL to `name` or `React.<name>`."""
    if node is None or node.kind is not NodeKind.CALL:
        return False
    return callee_name(node.get("callee")) == name


def callee_name(callee: Node | None) -> str | None:
    """Name of a bare or `React.`-qualified callee."""
    if callee is None:
        return None
    if callee.kind is NodeKind.IDENTIFIER:
        return callee.name
    if callee.kind is NodeKind.MEMBER and not callee.attrs.get("computed"):
        obj, prop = callee.get("object"), callee.get("property")
        if obj is not None and obj.is_identifier("React") and prop is not None:
            return prop.name
    return None


def is_use_state_call(node: Node | None) -> bool:
    return is_hook_call(node, "useState")


def is_use_ref_call(node: Node | None) -> bool:
    return is_hook_call(node, "useRef")


def is_use_effect_call(node: Node | None) -> bool:
    return is_hook_call(node, "useEffect")


# ── Components and hooks ─────────────────────────────────────────────────


def _declared_name(fn: Node) -> tuple[str | None, Node | None]:
    """(name, wrapping call) for a function declaration or declarator init."""
    if fn.kind is NodeKind.FUNCTION_DECLARATION:
        ident = fn.get("id")
        return (ident.name if ident is not None else None), None

    wrapper = None
    holder = fn
    parent = fn.parent
    if parent is not None and parent.kind is NodeKind.CALL and fn.key == "arguments":
        args = parent.items("arguments")
        if not args or args[0] is not fn:
            return None, None
        wrapper = parent
        holder = parent
        parent = parent.parent
    if parent is not None and parent.kind is NodeKind.VARIABLE_DECLARATOR and holder.key == "init":
        ident = parent.get("id")
        if ident is not None and ident.kind is NodeKind.IDENTIFIER:
            return ident.name, wrapper
    return None, None


def _is_pure_wrapper(call: Node) -> bool:
    return callee_name(call.get("callee")) in PURE_WRAPPERS


def is_component(fn: Node) -> bool:
    name, _ = _declared_name(fn)
    return bool(name) and name[0].isupper()


def is_hoc_component(fn: Node) -> bool:
    """Component whose function is wrapped by an unrecognized higher-order call."""
    name, wrapper = _declared_name(fn)
    return bool(name) and name[0].isupper() and wrapper is not None and not _is_pure_wrapper(wrapper)


def is_custom_hook(fn: Node) -> bool:
    name, wrapper = _declared_name(fn)
    if not name or wrapper is not None:
        return False
    return name.startswith("use") and len(name) > 3 and name[3] == name[3].upper()


def is_component_or_hook(fn: Node) -> bool:
    return fn.kind in FUNCTION_KINDS and (is_component(fn) or is_custom_hook(fn))


def enclosing_function(node: Node) -> Node | None:
    return next((a for a in ancestors(node) if a.kind in FUNCTION_KINDS), None)


def enclosing_component(node: Node) -> Node | None:
    """Nearest enclosing function, if it is a component or custom hook."""
    fn = enclosing_function(node)
    return fn if fn is not None and is_component_or_hook(fn) else None


# ── Binding predicates ───────────────────────────────────────────────────


def _state_position(binding: Binding | None) -> int | None:
    """Index of this binding inside a `useState` array pattern, if any."""
    if binding is None:
        return None
    for d in binding.defs:
        if d.kind is not DefKind.VARIABLE:
            continue
        pattern = d.node.get("id")
        if pattern is None or pattern.kind is not NodeKind.ARRAY_PATTERN:
            continue
        if not is_use_state_call(d.node.get("init")):
            continue
        elements = pattern.items("elements")
        if not 1 <= len(elements) <= 2:
            continue
        for index, element in enumerate(elements):
            if element is d.name:
                return index
    return None


def is_state(binding: Binding | None) -> bool:
    return _state_position(binding) == 0


def is_state_setter(binding: Binding | None) -> bool:
    return _state_position(binding) == 1


def state_declarator(binding: Binding | None) -> Node | None:
    """The `useState` declarator a state or setter binding comes from."""
    if _state_position(binding) is None:
        return None
    for d in binding.defs:
        if d.kind is DefKind.VARIABLE and is_use_state_call(d.node.get("init")):
            return d.node
    return None


def state_name(binding: Binding | None) -> str | None:
    """Name of the state variable (or the setter, when the state is elided)."""
    declarator = state_declarator(binding)
    if declarator is None:
        return None
    for element in declarator.get("id").items("elements"):
        if element is not None and element.kind is NodeKind.IDENTIFIER:
            return element.name
    return None


def _parameter_functions(binding: Binding | None) -> list[Node]:
    if binding is None:
        return []
    return [d.node for d in binding.defs if d.kind is DefKind.PARAMETER]


def is_input_parameter(binding: Binding | None) -> bool:
    """Parameter of a component or custom hook not hidden behind a HOC."""
    for fn in _parameter_functions(binding):
        if is_custom_hook(fn) or (is_component(fn) and not is_hoc_component(fn)):
            return True
    return False


def is_opaque_input_parameter(binding: Binding | None) -> bool:
    """Parameter of a component wrapped by an unrecognized higher-order call."""
    return any(is_hoc_component(fn) for fn in _parameter_functions(binding))


def is_any_input_parameter(binding: Binding | None) -> bool:
    return is_input_parameter(binding) or is_opaque_input_parameter(binding)


def is_mutable_handle(binding: Binding | None) -> bool:
    if binding is None:
        return False
    return any(
        d.kind is DefKind.VARIABLE and is_use_ref_call(d.node.get("init"))
        for d in binding.defs
    )


def classify(binding: Binding | None) -> OriginKind:
    if is_state(binding):
        return OriginKind.STATE
    if is_state_setter(binding):
        return OriginKind.STATE_SETTER
    if is_input_parameter(binding):
        return OriginKind.INPUT_PARAMETER
    if is_opaque_input_parameter(binding):
        return OriginKind.OPAQUE_INPUT_PARAMETER
    if is_mutable_handle(binding):
        return OriginKind.MUTABLE_HANDLE
    return OriginKind.UNKNOWN


# ── Reference-level helpers ──────────────────────────────────────────────


def is_internal(ref: Reference) -> bool:
    """State, or a non-opaque input parameter."""
    return is_state(ref.binding) or is_input_parameter(ref.binding)


def all_internal(refs: Iterable[Reference]) -> bool:
    """Non-empty and every origin internal."""
    refs = list(refs)
    return bool(refs) and all(is_internal(ref) for ref in refs)


def is_external(ref: Reference) -> bool:
    return not is_internal(ref)
