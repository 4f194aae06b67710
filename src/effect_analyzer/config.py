"""Analyzer configuration: YAML file → AnalyzerConfig."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from effect_analyzer.rules import RULE_IDS
from effect_analyzer.utils import MAX_FILE_SIZE, SKIP_DIRS, SOURCE_EXTENSIONS

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".effect-analyzer.yaml"


class ConfigError(Exception):
    """The configuration file is unreadable or invalid."""


class AnalyzerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rules: dict[str, bool] = Field(default_factory=dict)   # rule id → enabled
    extensions: list[str] = Field(default_factory=lambda: list(SOURCE_EXTENSIONS))
    exclude_dirs: list[str] = Field(default_factory=lambda: sorted(SKIP_DIRS))
    max_file_size: int = Field(default=MAX_FILE_SIZE, gt=0)

    @field_validator("rules")
    @classmethod
    def _known_rules(cls, value: dict[str, bool]) -> dict[str, bool]:
        unknown = sorted(set(value) - set(RULE_IDS))
        if unknown:
            raise ValueError(f"unknown rule ids: {', '.join(unknown)}")
        return value

    @field_validator("extensions")
    @classmethod
    def _dotted(cls, value: list[str]) -> list[str]:
        return [e if e.startswith(".") else f".{e}" for e in value]

    def enabled_rules(
        self,
        select: Iterable[str] = (),
        ignore: Iterable[str] = (),
    ) -> list[str]:
        """Rule ids to run: config toggles, then `select` narrows, then `ignore` removes."""
        enabled = [r for r in RULE_IDS if self.rules.get(r, True)]
        select = list(select)
        if select:
            enabled = [r for r in enabled if r in select]
        ignored = set(ignore)
        return [r for r in enabled if r not in ignored]


def load_config(path: Path | None = None, root: Path | None = None) -> AnalyzerConfig:
    """Load configuration from `path`, or `<root>/.effect-analyzer.yaml` if present.

    Raises:
        ConfigError: the file cannot be read, is not YAML, or fails validation.
    """
    if path is None and root is not None:
        candidate = root / CONFIG_FILENAME
        if candidate.is_file():
            path = candidate
    if path is None:
        return AnalyzerConfig()

    log.info("Loading config from %s", path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if raw is None:
        return AnalyzerConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    try:
        return AnalyzerConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e
