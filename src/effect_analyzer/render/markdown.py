"""Render scan results as a Markdown report."""

from __future__ import annotations

from collections import defaultdict

from effect_analyzer.models import Finding, ScanReport
from effect_analyzer.rules.catalog import load_catalog


def render_markdown(report: ScanReport) -> str:
    """Produce a full Markdown report from a ScanReport."""
    sections: list[str] = []
    catalog = load_catalog()

    # ── Title ────────────────────────────────────────────────────────────
    sections.append("# Effect Analysis Report\n")

    # ── Summary box ──────────────────────────────────────────────────────
    summary_lines = [
        f"- **Root**: `{report.root}`",
        f"- **Files scanned**: {report.files_scanned}",
        f"- **Effects analyzed**: {report.effects_analyzed}",
        f"- **Findings**: {report.finding_count}",
    ]
    if report.files_failed:
        summary_lines.append(f"- **Files skipped (errors)**: {report.files_failed}")
    sections.append("\n".join(summary_lines) + "\n")

    if not report.finding_count:
        sections.append("No effect anti-patterns found.\n")

    # ── By rule ──────────────────────────────────────────────────────────
    if report.counts_by_rule:
        sections.append("## Findings by Rule\n")
        sections.append("| Rule | Count | Description |")
        sections.append("|---|---|---|")
        for rule_id, count in report.counts_by_rule.items():
            meta = catalog.get(rule_id)
            desc = meta.description if meta else ""
            link = f"[`{rule_id}`]({meta.url})" if meta and meta.url else f"`{rule_id}`"
            sections.append(f"| {link} | {count} | {desc} |")
        sections.append("")

    # ── By file ──────────────────────────────────────────────────────────
    by_file: dict[str, list[Finding]] = defaultdict(list)
    for f in report.findings:
        by_file[f.file].append(f)

    if by_file:
        sections.append("## Findings by File\n")
        for path in sorted(by_file):
            sections.append(f"### `{path}`\n")
            sections.append("| Location | Rule | Message |")
            sections.append("|---|---|---|")
            for f in sorted(by_file[path], key=lambda f: (f.line, f.column)):
                message = f.message.replace("|", "\\|")
                sections.append(f"| {f.line}:{f.column} | `{f.rule_id}` | {message} |")
            sections.append("")

    # ── Errors ───────────────────────────────────────────────────────────
    failed = [f for f in report.files if f.error]
    if failed:
        sections.append("## Skipped Files\n")
        for f in failed:
            sections.append(f"- `{f.path}`: {f.error}")
        sections.append("")

    return "\n".join(sections)
