"""Pydantic models for scan reports."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field, computed_field


# ── Findings ────────────────────────────────────────────────────────────────

class Finding(BaseModel):
    file: str
    line: int
    column: int           # 1-based
    end_line: int
    end_column: int       # 1-based, exclusive
    rule_id: str          # "derived-state", "empty-effect", ...
    message_key: str      # "avoidDerivedState", ...
    message: str
    data: dict[str, str] = Field(default_factory=dict)
    snippet: str = ""
    url: str = ""


class FileReport(BaseModel):
    path: str
    effects: int = 0                 # effect calls recognized in the file
    findings: list[Finding] = Field(default_factory=list)
    error: str | None = None         # parse or analysis failure, if any

    @computed_field
    @property
    def ok(self) -> bool:
        return self.error is None


# ── Scan ────────────────────────────────────────────────────────────────────

class ScanReport(BaseModel):
    created_at: str = ""
    root: str = ""
    files: list[FileReport] = Field(default_factory=list)
    rules: list[str] = Field(default_factory=list)   # enabled rule ids

    @property
    def findings(self) -> list[Finding]:
        return [f for report in self.files for f in report.findings]

    # ── Counts (serialized for CI consumers) ──

    @computed_field
    @property
    def files_scanned(self) -> int:
        return len(self.files)

    @computed_field
    @property
    def files_failed(self) -> int:
        return sum(1 for f in self.files if f.error is not None)

    @computed_field
    @property
    def effects_analyzed(self) -> int:
        return sum(f.effects for f in self.files)

    @computed_field
    @property
    def finding_count(self) -> int:
        return sum(len(f.findings) for f in self.files)

    @computed_field
    @property
    def counts_by_rule(self) -> dict[str, int]:
        counts = Counter(f.rule_id for f in self.findings)
        return dict(sorted(counts.items()))
