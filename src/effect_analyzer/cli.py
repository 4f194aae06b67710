"""CLI entry point for effect-analyzer."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from effect_analyzer import __version__
from effect_analyzer.config import ConfigError, load_config
from effect_analyzer.rules import RULE_IDS
from effect_analyzer.rules.catalog import load_catalog
from effect_analyzer.scanner import scan


def _list_rules(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    for rule_id, meta in load_catalog().items():
        click.echo(f"{rule_id:32} {meta.description}")
    ctx.exit()


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["text", "md", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "-o", "--output",
    type=click.Path(resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="Config file. Defaults to .effect-analyzer.yaml in the first PATH, if present.",
)
@click.option(
    "--select", multiple=True, type=click.Choice(RULE_IDS),
    help="Only run these rules (repeatable).",
)
@click.option(
    "--ignore", multiple=True, type=click.Choice(RULE_IDS),
    help="Skip these rules (repeatable).",
)
@click.option(
    "--list-rules", is_flag=True, expose_value=False, is_eager=True, callback=_list_rules,
    help="List available rules and exit.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    paths: tuple[str, ...],
    fmt: str,
    output: str | None,
    config_path: str | None,
    select: tuple[str, ...],
    ignore: tuple[str, ...],
    verbose: bool,
) -> None:
    """Find React effects that you might not need.

    Exits 1 when there are findings and 3 when any file failed to analyze.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    targets = [Path(p) for p in paths]
    first = targets[0]
    try:
        config = load_config(
            Path(config_path) if config_path else None,
            root=first if first.is_dir() else first.parent,
        )
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    report = scan(targets, config, enabled=config.enabled_rules(select, ignore))

    if fmt == "json":
        text = json.dumps(report.model_dump(), indent=2)
    elif fmt == "md":
        from effect_analyzer.render.markdown import render_markdown
        text = render_markdown(report)
    else:
        from effect_analyzer.render.text import render_text
        text = render_text(report)

    if output:
        Path(output).write_text(text)
        click.echo(f"Report written to {output}")
    else:
        click.echo(text)

    if report.files_failed:
        sys.exit(3)
    sys.exit(1 if report.finding_count else 0)


if __name__ == "__main__":
    main()
