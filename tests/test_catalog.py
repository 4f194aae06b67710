"""Tests for the bundled rule catalog."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from effect_analyzer.rules import RULE_IDS
from effect_analyzer.rules.catalog import RuleMeta, format_message, load_catalog


def test_catalog_covers_every_rule():
    assert sorted(load_catalog()) == sorted(RULE_IDS)


def test_every_rule_has_description_url_and_messages():
    for rule_id, meta in load_catalog().items():
        assert meta.id == rule_id
        assert meta.description
        assert meta.url.startswith("https://")
        assert meta.messages


def test_catalog_is_read_only():
    catalog = load_catalog()
    with pytest.raises(TypeError):
        catalog["empty-effect"] = None  # type: ignore[index]
    with pytest.raises(ValidationError):
        catalog["empty-effect"].description = "changed"


def test_catalog_loaded_once():
    assert load_catalog() is load_catalog()


def test_format_message_fills_state():
    text = format_message("derived-state", "avoidDerivedState", {"state": "fullName"})
    assert '"fullName"' in text
    assert "{state}" not in text


def test_format_message_fills_arguments():
    text = format_message("initialize-state", "avoidInitializingState", {"state": "s", "arguments": "0"})
    assert '"s"' in text and '"0"' in text


def test_format_message_keeps_missing_placeholder():
    text = format_message("reset-all-state-on-prop-change", "avoidResettingAllStateWhenAPropChanges")
    assert "{prop}" in text


def test_folded_messages_are_single_line():
    for meta in load_catalog().values():
        for message in meta.messages.values():
            assert "\n" not in message


def test_unknown_message_key():
    with pytest.raises(KeyError):
        format_message("empty-effect", "noSuchMessage")


def test_rule_meta_model():
    meta = RuleMeta(id="x", description="d", messages={"m": "text"})
    assert meta.url == ""
