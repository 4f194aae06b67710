"""Rule catalog: loads rules/catalog.yaml into frozen pydantic models."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Mapping

import yaml
from pydantic import BaseModel, ConfigDict


class RuleMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    url: str = ""
    messages: dict[str, str]


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


@lru_cache(maxsize=1)
def load_catalog() -> Mapping[str, RuleMeta]:
    """Parse the bundled catalog once; the mapping is read-only."""
    text = resources.files("effect_analyzer.rules").joinpath("catalog.yaml").read_text(encoding="utf-8")
    raw = yaml.safe_load(text) or {}
    return MappingProxyType({rule_id: RuleMeta(id=rule_id, **body) for rule_id, body in raw.items()})


def format_message(rule_id: str, message_key: str, data: Mapping[str, str] | None = None) -> str:
    """Render a message template; unknown placeholders are left as written."""
    template = load_catalog()[rule_id].messages[message_key]
    return template.format_map(_KeepMissing(data or {}))
