"""Tests for origin resolution (tracing references to their leaves)."""

from __future__ import annotations

import textwrap

from effect_analyzer.analysis.classify import is_input_parameter, is_state, is_state_setter
from effect_analyzer.analysis.origins import origins_of, resolve
from effect_analyzer.analysis.walker import find_nodes_of_kind
from effect_analyzer.ir import parse_program
from effect_analyzer.ir.nodes import NodeKind


def analyze(code: str):
    return parse_program(textwrap.dedent(code))


def last_ref(program, oracle, name: str):
    """The last non-write reference to `name` in source order."""
    found = []
    for ident in find_nodes_of_kind(program, NodeKind.IDENTIFIER):
        ref = oracle.reference_for(ident)
        if ident.name == name and ref is not None and not ref.is_write:
            found.append(ref)
    assert found, f"no reference to {name}"
    return found[-1]


class TestLeaves:
    def test_input_parameter_is_a_leaf(self):
        program, oracle = analyze("function F({ a }) { use(a); }")
        ref = last_ref(program, oracle, "a")
        assert resolve(ref, oracle) == [ref]

    def test_state_variable_is_a_leaf(self):
        program, oracle = analyze("""
            function F() {
              const [s, setS] = useState(0);
              use(s);
            }
        """)
        ref = last_ref(program, oracle, "s")
        (origin,) = resolve(ref, oracle)
        assert origin is ref
        assert is_state(origin.binding)

    def test_global_is_a_leaf(self):
        program, oracle = analyze("use(window);")
        ref = last_ref(program, oracle, "window")
        assert resolve(ref, oracle) == [ref]

    def test_import_is_a_leaf(self):
        program, oracle = analyze("import { api } from './api'; use(api);")
        ref = last_ref(program, oracle, "api")
        assert resolve(ref, oracle) == [ref]

    def test_plain_parameter_contributes_nothing(self):
        program, oracle = analyze("items.map((item) => use(item));")
        ref = last_ref(program, oracle, "item")
        assert resolve(ref, oracle) == []

    def test_catch_parameter_contributes_nothing(self):
        program, oracle = analyze("try {} catch (err) { use(err); }")
        assert resolve(last_ref(program, oracle, "err"), oracle) == []

    def test_literal_initializer_is_a_leaf(self):
        program, oracle = analyze("const limit = 10; use(limit);")
        ref = last_ref(program, oracle, "limit")
        assert resolve(ref, oracle) == [ref]


class TestIndirection:
    def test_three_hops_back_to_input_parameter(self):
        program, oracle = analyze("""
            function F({ a }) {
              const [s, setS] = useState();
              const b = a;
              const c = b;
              const d = c;
              useEffect(() => setS(d), [d]);
            }
        """)
        ref = last_ref(program, oracle, "d")
        origins = resolve(ref, oracle)
        assert len(origins) == 1
        assert origins[0].name == "a"
        assert is_input_parameter(origins[0].binding)

    def test_mid_stream_references_dropped(self):
        program, oracle = analyze("""
            function F({ first, last }) {
              const full = first + ' ' + last;
              use(full);
            }
        """)
        names = [o.name for o in resolve(last_ref(program, oracle, "full"), oracle)]
        assert names == ["first", "last"]

    def test_local_function_body_traced(self):
        program, oracle = analyze("""
            function F() {
              const [n, setN] = useState(0);
              function bump() { setN(n + 1); }
              bump();
            }
        """)
        origins = resolve(last_ref(program, oracle, "bump"), oracle)
        assert [o.name for o in origins] == ["setN", "n"]
        assert is_state_setter(origins[0].binding)

    def test_arrow_parameters_inside_traced_function_ignored(self):
        program, oracle = analyze("""
            function F() {
              const [v, setV] = useState();
              const handler = (x) => setV(x);
              handler(1);
            }
        """)
        origins = resolve(last_ref(program, oracle, "handler"), oracle)
        assert [o.name for o in origins] == ["setV"]

    def test_origins_of_subtree(self):
        program, oracle = analyze("""
            function F({ p }) {
              const q = p * 2;
              use(q + JSON.parse(x));
            }
        """)
        call = [c for c in find_nodes_of_kind(program, NodeKind.CALL) if c.get("callee").name == "use"][0]
        names = sorted(o.name for o in origins_of(call.items("arguments")[0], oracle))
        assert names == ["JSON", "p", "x"]


class TestCycles:
    def test_mutual_recursion_terminates(self):
        program, oracle = analyze("""
            function ping() { return pong(); }
            function pong() { return ping(); }
            ping();
        """)
        origins = resolve(last_ref(program, oracle, "ping"), oracle)
        assert len(origins) == len(set(origins))
        assert len(origins) <= 1

    def test_self_reference_returned_at_most_once(self):
        program, oracle = analyze("""
            const loop = () => loop();
            loop();
        """)
        origins = resolve(last_ref(program, oracle, "loop"), oracle)
        assert len(origins) == 1

    def test_reassigned_variable_terminates(self):
        program, oracle = analyze("""
            let x = y;
            let y = x;
            use(x);
        """)
        origins = resolve(last_ref(program, oracle, "x"), oracle)
        assert len(origins) == len(set(origins))
