"""Tests for the command-line entry point."""

from __future__ import annotations

import json

from click.testing import CliRunner

from effect_analyzer import __version__
from effect_analyzer.cli import main
from effect_analyzer.config import CONFIG_FILENAME

EMPTY_EFFECT = "function App() {\n  useEffect(() => {}, []);\n}\n"
CLEAN = "function App() {\n  return null;\n}\n"


def run(*args: str):
    return CliRunner().invoke(main, list(args))


def test_findings_exit_nonzero(tmp_path):
    (tmp_path / "App.jsx").write_text(EMPTY_EFFECT)
    result = run(str(tmp_path))
    assert result.exit_code == 1
    assert "App.jsx:2:3:" in result.output
    assert "[empty-effect]" in result.output


def test_clean_exit_zero(tmp_path):
    (tmp_path / "App.jsx").write_text(CLEAN)
    result = run(str(tmp_path))
    assert result.exit_code == 0
    assert "0 finding(s) in 1 file(s)" in result.output


def test_json_format(tmp_path):
    (tmp_path / "App.jsx").write_text(EMPTY_EFFECT)
    result = run(str(tmp_path), "--format", "json")
    data = json.loads(result.output)
    assert data["finding_count"] == 1
    assert data["counts_by_rule"] == {"empty-effect": 1}


def test_markdown_to_file(tmp_path):
    (tmp_path / "App.jsx").write_text(EMPTY_EFFECT)
    out = tmp_path / "report.md"
    result = run(str(tmp_path / "App.jsx"), "-f", "md", "-o", str(out))
    assert result.exit_code == 1
    assert "Report written to" in result.output
    assert out.read_text().startswith("# Effect Analysis Report")


def test_ignore_rule(tmp_path):
    (tmp_path / "App.jsx").write_text(EMPTY_EFFECT)
    result = run(str(tmp_path), "--ignore", "empty-effect")
    assert result.exit_code == 0


def test_select_rule(tmp_path):
    (tmp_path / "App.jsx").write_text(EMPTY_EFFECT)
    result = run(str(tmp_path), "--select", "derived-state", "--select", "initialize-state")
    assert result.exit_code == 0


def test_unknown_rule_rejected(tmp_path):
    result = run(str(tmp_path), "--select", "no-such-rule")
    assert result.exit_code == 2


def test_config_file_discovered(tmp_path):
    (tmp_path / "App.jsx").write_text(EMPTY_EFFECT)
    (tmp_path / CONFIG_FILENAME).write_text("rules:\n  empty-effect: false\n")
    assert run(str(tmp_path)).exit_code == 0


def test_bad_config_is_usage_error(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text("rules:\n  bogus: true\n")
    result = run(str(tmp_path))
    assert result.exit_code == 2
    assert "unknown rule ids: bogus" in result.output


def test_list_rules():
    result = run("--list-rules")
    assert result.exit_code == 0
    assert "reset-all-state-on-prop-change" in result.output
    assert "Disallow empty effects." in result.output


def test_paths_required():
    assert run().exit_code == 2


def test_version():
    result = run("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_derived_state_component(tmp_path):
    (tmp_path / "F.jsx").write_text(
        "function F({ a, b }) {\n"
        "  const [s, setS] = useState();\n"
        "  useEffect(() => setS(a + b), [a, b]);\n"
        "}\n"
    )
    result = run(str(tmp_path))
    assert result.exit_code == 1
    assert "[derived-state]" in result.output
    assert "analysis error" not in result.output


def test_unparseable_file_exits_with_failure(tmp_path):
    (tmp_path / "Broken.jsx").write_text("function App( {\n")
    result = run(str(tmp_path))
    assert result.exit_code == 3
    assert "Broken.jsx: parse error" in result.output


def test_failure_wins_over_findings(tmp_path):
    (tmp_path / "App.jsx").write_text(EMPTY_EFFECT)
    (tmp_path / "Broken.jsx").write_text("function App( {\n")
    assert run(str(tmp_path)).exit_code == 3
