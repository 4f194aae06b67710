"""Tests for YAML configuration loading and rule selection."""

from __future__ import annotations

import textwrap

import pytest

from effect_analyzer.config import CONFIG_FILENAME, AnalyzerConfig, ConfigError, load_config
from effect_analyzer.rules import RULE_IDS
from effect_analyzer.utils import MAX_FILE_SIZE


def write(path, text: str):
    path.write_text(textwrap.dedent(text))
    return path


class TestDefaults:
    def test_all_rules_enabled(self):
        assert AnalyzerConfig().enabled_rules() == list(RULE_IDS)

    def test_default_limits(self):
        config = AnalyzerConfig()
        assert config.max_file_size == MAX_FILE_SIZE
        assert ".tsx" in config.extensions
        assert "node_modules" in config.exclude_dirs

    def test_no_file_gives_defaults(self, tmp_path):
        assert load_config(root=tmp_path) == AnalyzerConfig()


class TestLoading:
    def test_discovered_in_root(self, tmp_path):
        write(tmp_path / CONFIG_FILENAME, """
            rules:
              empty-effect: false
            extensions: [jsx, .tsx]
        """)
        config = load_config(root=tmp_path)
        assert "empty-effect" not in config.enabled_rules()
        assert config.extensions == [".jsx", ".tsx"]

    def test_explicit_path_wins(self, tmp_path):
        write(tmp_path / CONFIG_FILENAME, "max_file_size: 10\n")
        other = write(tmp_path / "other.yaml", "max_file_size: 20\n")
        assert load_config(other, root=tmp_path).max_file_size == 20

    def test_empty_file(self, tmp_path):
        path = write(tmp_path / "c.yaml", "")
        assert load_config(path) == AnalyzerConfig()

    @pytest.mark.parametrize("text", [
        "rules:\n  no-such-rule: true\n",
        "unexpected: 1\n",
        "max_file_size: 0\n",
        "- a\n- b\n",
        "rules: [unclosed\n",
    ])
    def test_invalid(self, tmp_path, text):
        path = write(tmp_path / "c.yaml", text)
        with pytest.raises(ConfigError):
            load_config(path)

    def test_unreadable(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")


class TestSelection:
    def test_select_narrows(self):
        assert AnalyzerConfig().enabled_rules(select=["event-handler", "empty-effect"]) == [
            "empty-effect", "event-handler",
        ]

    def test_ignore_removes(self):
        enabled = AnalyzerConfig().enabled_rules(ignore=["derived-state"])
        assert "derived-state" not in enabled
        assert len(enabled) == len(RULE_IDS) - 1

    def test_select_cannot_reenable_disabled_rule(self):
        config = AnalyzerConfig(rules={"empty-effect": False})
        assert config.enabled_rules(select=["empty-effect"]) == []

    def test_registry_order_kept(self):
        enabled = AnalyzerConfig().enabled_rules(select=list(reversed(RULE_IDS)))
        assert enabled == list(RULE_IDS)
