"""Tests for manage-parent and the pass-*-to-parent rules."""

from __future__ import annotations

import textwrap

from effect_analyzer.scanner import analyze_source


def findings(code: str, *rules: str) -> list[tuple[str, str]]:
    diags = analyze_source(textwrap.dedent(code), "Child.jsx", enabled=set(rules) or None)
    return [(d.rule_id, d.message_key) for d in diags]


class TestManageParent:
    def test_only_props(self):
        assert findings("""
            function Child({ onChange, value }) {
              useEffect(() => {
                onChange(value);
              }, [onChange, value]);
            }
        """) == [("manage-parent", "avoidManagingParent")]

    def test_state_involved(self):
        assert findings("""
            function Child({ onChange }) {
              const [value, setValue] = useState('');
              useEffect(() => {
                onChange(value);
              }, [onChange, value]);
            }
        """, "manage-parent") == []

    def test_empty_callback(self):
        assert findings("""
            function Child({ value }) {
              useEffect(() => {}, [value]);
            }
        """, "manage-parent") == []


class TestPassLiveState:
    def test_state_passed_up(self):
        assert findings("""
            function Toggle({ onToggle }) {
              const [on, setOn] = useState(false);
              useEffect(() => {
                onToggle(on);
              }, [on, onToggle]);
            }
        """) == [("pass-live-state-to-parent", "avoidPassingLiveStateToParent")]

    def test_state_passed_through_local(self):
        assert findings("""
            function Toggle({ onToggle }) {
              const [on, setOn] = useState(false);
              useEffect(() => {
                const payload = { on };
                onToggle(payload);
              }, [on]);
            }
        """, "pass-live-state-to-parent") == [
            ("pass-live-state-to-parent", "avoidPassingLiveStateToParent"),
        ]

    def test_deferred_callback(self):
        assert findings("""
            function Toggle({ onToggle }) {
              const [on, setOn] = useState(false);
              useEffect(() => {
                const id = setTimeout(() => onToggle(on), 10);
              }, [on]);
            }
        """, "pass-live-state-to-parent") == []


class TestPassData:
    def test_external_data_passed_up(self):
        assert findings("""
            function Loader({ onLoad }) {
              useEffect(() => {
                const data = readCache('/api/items');
                onLoad(data);
              }, [onLoad]);
            }
        """, "pass-data-to-parent") == [("pass-data-to-parent", "avoidPassingDataToParent")]

    def test_no_arguments(self):
        assert findings("""
            function Loader({ onReady }) {
              useEffect(() => {
                onReady();
              }, []);
            }
        """, "pass-data-to-parent") == [("pass-data-to-parent", "avoidParentChildCoupling")]

    def test_prop_argument(self):
        assert findings("""
            function Loader({ onLoad, id }) {
              useEffect(() => {
                onLoad(id);
              }, [id]);
            }
        """, "pass-data-to-parent") == []

    def test_literal_argument(self):
        assert findings("""
            function Loader({ onLoad }) {
              useEffect(() => {
                onLoad('ready');
              }, []);
            }
        """, "pass-data-to-parent") == []

    def test_async_fetch_is_not_reported(self):
        assert findings("""
            function Loader({ onLoad }) {
              useEffect(() => {
                fetch('/api').then((res) => onLoad(res));
              }, [onLoad]);
            }
        """, "pass-data-to-parent") == []

    def test_opaque_callback_is_ignored(self):
        assert findings("""
            const Loader = withRouter(({ onReady }) => {
              useEffect(() => {
                onReady();
              }, []);
            });
        """, "pass-data-to-parent") == []


class TestPassRef:
    def test_ref_passed_up(self):
        assert findings("""
            function Input({ onMount }) {
              const inputRef = useRef(null);
              useEffect(() => {
                onMount(inputRef);
              }, [onMount]);
            }
        """) == [("pass-ref-to-parent", "avoidPassingRefToParent")]

    def test_prop_callback_registered_on_ref(self):
        assert findings("""
            function List({ onScroll }) {
              const listRef = useRef(null);
              useEffect(() => {
                listRef.current.addEventListener('scroll', () => onScroll());
              }, [onScroll]);
            }
        """, "pass-ref-to-parent") == [("pass-ref-to-parent", "avoidPropCallbackInRefCallback")]

    def test_ref_received_from_parent(self):
        assert findings("""
            function Input({ inputRef }) {
              useEffect(() => {
                inputRef.current.focus();
              }, [inputRef]);
            }
        """, "pass-ref-to-parent") == [("pass-ref-to-parent", "avoidReceivingRefFromParent")]

    def test_local_ref_is_fine(self):
        assert findings("""
            function Input() {
              const inputRef = useRef(null);
              useEffect(() => {
                inputRef.current.focus();
              }, []);
            }
        """, "pass-ref-to-parent") == []
