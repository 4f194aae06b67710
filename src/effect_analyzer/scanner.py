"""File scanner: discover sources, analyze each one, collect a ScanReport."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Collection

from effect_analyzer.analysis.effects import find_effect_calls
from effect_analyzer.config import AnalyzerConfig
from effect_analyzer.ir import SourceParseError, dialect_for_path, parse_program
from effect_analyzer.models import FileReport, Finding, ScanReport
from effect_analyzer.rules import Diagnostic, analyze_tree, run_rules
from effect_analyzer.rules.catalog import format_message, load_catalog
from effect_analyzer.utils import discover_files, snippet

log = logging.getLogger(__name__)


def analyze_source(
    source: str,
    filename: str = "<input>.jsx",
    *,
    enabled: Collection[str] | None = None,
) -> list[Diagnostic]:
    """Parse one source text and return its diagnostics.

    The grammar is picked from the filename suffix (JavaScript when unknown).

    Raises:
        SourceParseError: the source has syntax errors.
    """
    program, oracle = parse_program(source, dialect_for_path(filename) or "javascript")
    return analyze_tree(program, oracle, enabled)


def _to_finding(diagnostic: Diagnostic, rel: str, source: str) -> Finding:
    node = diagnostic.node
    data = {k: str(v) for k, v in diagnostic.data.items()}
    return Finding(
        file=rel,
        line=node.line,
        column=node.column + 1,
        end_line=node.end_line,
        end_column=node.end_column + 1,
        rule_id=diagnostic.rule_id,
        message_key=diagnostic.message_key,
        message=format_message(diagnostic.rule_id, diagnostic.message_key, data),
        data=data,
        snippet=snippet(source, node.line),
        url=load_catalog()[diagnostic.rule_id].url,
    )


def scan_file(path: Path, root: Path, enabled: Collection[str] | None = None) -> FileReport:
    """Analyze a single file. Failures are recorded on the report, never raised."""
    rel = str(path.relative_to(root))
    report = FileReport(path=rel)
    try:
        source = path.read_text(encoding="utf-8", errors="replace")
        program, oracle = parse_program(source, dialect_for_path(path) or "javascript")
        effects = find_effect_calls(program, oracle)
        report.effects = len(effects)
        for effect in effects:
            for diagnostic in run_rules(effect, oracle, enabled):
                report.findings.append(_to_finding(diagnostic, rel, source))
    except SourceParseError as e:
        log.warning("Skipping %s: %s", rel, e)
        report.error = f"parse error: {e}"
    except Exception as e:
        log.exception("Analysis failed for %s (non-fatal)", rel)
        report.error = f"analysis error: {e}"
    return report


def scan(paths: list[Path], config: AnalyzerConfig | None = None, enabled: Collection[str] | None = None) -> ScanReport:
    """Scan files and directories.

    Args:
        paths: Files or directories. Directories are walked with the
               config's extensions, exclude_dirs and max_file_size.
        config: Analyzer configuration (defaults when None).
        enabled: Rule ids to run. Defaults to config.enabled_rules().

    Returns:
        ScanReport with one FileReport per analyzed file.
    """
    config = config or AnalyzerConfig()
    rules = list(enabled) if enabled is not None else config.enabled_rules()

    targets: list[tuple[Path, Path]] = []
    for path in paths:
        path = path.resolve()
        if path.is_dir():
            for f in discover_files(path, config.extensions, config.exclude_dirs, config.max_file_size):
                targets.append((f, path))
        else:
            targets.append((path, path.parent))

    root = paths[0].resolve() if len(paths) == 1 else Path.cwd()
    log.info("Scanning %d files under %s", len(targets), root)

    report = ScanReport(
        created_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        root=str(root),
        rules=rules,
    )
    for fpath, base in targets:
        report.files.append(scan_file(fpath, base, rules))

    log.info(
        "Scan complete: %d files, %d effects, %d findings",
        report.files_scanned, report.effects_analyzed, report.finding_count,
    )
    return report
