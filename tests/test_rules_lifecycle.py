"""Tests for empty-effect and event-handler."""

from __future__ import annotations

import textwrap

from effect_analyzer.scanner import analyze_source


def findings(code: str, *rules: str) -> list[tuple[str, str]]:
    diags = analyze_source(textwrap.dedent(code), "Component.jsx", enabled=set(rules) or None)
    return [(d.rule_id, d.message_key) for d in diags]


class TestEmptyEffect:
    def test_empty_block(self):
        assert findings("useEffect(() => {}, []);") == [("empty-effect", "avoidEmptyEffect")]

    def test_without_dependencies(self):
        assert findings("useEffect(() => {});", "empty-effect") == [("empty-effect", "avoidEmptyEffect")]

    def test_comments_only(self):
        assert findings("""
            function Page() {
              useEffect(() => {
                // nothing here yet
              }, []);
            }
        """, "empty-effect") == [("empty-effect", "avoidEmptyEffect")]

    def test_literal_only_body_has_no_references(self):
        assert findings("useEffect(() => { return 1; }, []);", "empty-effect") == [
            ("empty-effect", "avoidEmptyEffect"),
        ]

    def test_non_empty(self):
        assert findings("useEffect(() => { console.log('mounted'); }, []);", "empty-effect") == []


class TestEventHandler:
    def test_state_flag_drives_side_effect(self):
        code = """
            function Form() {
              const [submitted, setSubmitted] = useState(false);
              useEffect(() => {
                if (submitted) {
                  post('/api/register');
                }
              }, [submitted]);
            }
        """
        assert findings(code, "event-handler") == [("event-handler", "avoidEventHandler")]

    def test_reported_on_the_condition(self):
        diags = analyze_source(textwrap.dedent("""
            function Form() {
              const [open, setOpen] = useState(false);
              useEffect(() => {
                if (open) show();
              }, [open]);
            }
        """), "Form.jsx", enabled={"event-handler"})
        (d,) = diags
        assert d.node.text == "open"
        assert d.line == 5

    def test_else_branch(self):
        assert findings("""
            function Form() {
              const [submitted, setSubmitted] = useState(false);
              useEffect(() => {
                if (submitted) { post(); } else { reset(); }
              }, [submitted]);
            }
        """, "event-handler") == []

    def test_prop_condition(self):
        assert findings("""
            function Modal({ open }) {
              useEffect(() => {
                if (open) { show(); }
              }, [open]);
            }
        """, "event-handler") == []

    def test_mixed_condition(self):
        assert findings("""
            function Form() {
              const [submitted, setSubmitted] = useState(false);
              useEffect(() => {
                if (submitted && navigator.onLine) { post(); }
              }, [submitted]);
            }
        """, "event-handler") == []

    def test_condition_inside_deferred_callback(self):
        assert findings("""
            function Form() {
              const [submitted, setSubmitted] = useState(false);
              useEffect(() => {
                setTimeout(() => {
                  if (submitted) { post(); }
                }, 0);
              }, [submitted]);
            }
        """, "event-handler") == []

    def test_missing_dependencies(self):
        assert findings("""
            function Form() {
              const [submitted, setSubmitted] = useState(false);
              useEffect(() => {
                if (submitted) { post(); }
              });
            }
        """, "event-handler") == []
