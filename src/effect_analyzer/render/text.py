"""Render scan results as compiler-style text, one line per finding."""

from __future__ import annotations

from effect_analyzer.models import ScanReport


def render_text(report: ScanReport) -> str:
    lines = [
        f"{f.file}:{f.line}:{f.column}: {f.message} [{f.rule_id}]"
        for f in sorted(report.findings, key=lambda f: (f.file, f.line, f.column))
    ]
    for failed in report.files:
        if failed.error:
            lines.append(f"{failed.path}: {failed.error}")
    lines.append(
        f"{report.finding_count} finding(s) in {report.files_scanned} file(s), "
        f"{report.effects_analyzed} effect(s) analyzed"
    )
    return "\n".join(lines)
