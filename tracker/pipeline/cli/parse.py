"""
Parse Commands
--------------

Commands for turning project notes into the activity document.

Commands:
    - parse: Parse all notes, write the activity document
    - inspect: Parse a single note and print its records as JSON
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Tuple

import click

from tracker.core.config import TrackerConfig
from tracker.core.exceptions import ConfigError
from tracker.core.logging_manager import TrackerLogger, handle_cli_error
from tracker.core.paths import DEFAULT_CONFIG_PATH
from tracker.pipeline.aggregate import summarize
from tracker.pipeline.note_parser import parse_note_file
from tracker.pipeline.runner import RunResult, run


def load_config(
    config_path: Optional[str],
    vault: Optional[str],
    folder: Optional[str],
    outputs: Tuple[str, ...],
    pattern: Optional[str],
    no_fallback: bool,
) -> TrackerConfig:
    """
    Build the run configuration from a config file and CLI overrides.

    An explicit ``--config`` must exist. Without one, the default
    config.yaml is used when present; otherwise ``--vault`` is required.
    """
    if config_path:
        config = TrackerConfig.from_file(Path(config_path))
    elif DEFAULT_CONFIG_PATH.is_file():
        config = TrackerConfig.from_file(DEFAULT_CONFIG_PATH)
    elif vault:
        config = TrackerConfig(vault_path=Path(vault).expanduser())
    else:
        raise ConfigError(
            f"No config file at {DEFAULT_CONFIG_PATH}; pass --config or --vault"
        )

    return config.with_overrides(
        vault_path=vault,
        notes_folder=folder,
        output_paths=list(outputs) or None,
        pattern=pattern,
        use_fallback=False if no_fallback else None,
    )


def _echo_progress(result: RunResult) -> None:
    for note in result.batch.results:
        if note.ok:
            count = len(note.records)
            click.echo(f"✓ Parsed: {note.path.stem} ({count} date{'s' if count != 1 else ''})")
        else:
            click.echo(f"✗ Skipped: {note.path.name}: {note.error}", err=True)


def _echo_summary(result: RunResult) -> None:
    summary = summarize(result.document)
    date_range = summary["date_range"]

    click.echo("\n" + "=" * 50)
    click.echo("📈 Summary")
    click.echo("=" * 50)
    click.echo(f"Total Projects: {summary['total_projects']}")
    click.echo(f"Active Days: {summary['active_days']}")
    click.echo(f"Date Range: {date_range['start']} to {date_range['end']}")
    click.echo(f"\nVibe Tools Used: {', '.join(summary['tools'])}")
    click.echo(f"Tech Stack: {', '.join(summary['stack'])}")
    click.echo("=" * 50)


@click.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help=f"Config file (default: {DEFAULT_CONFIG_PATH} if present)",
)
@click.option("--vault", type=click.Path(), default=None, help="Notes vault root")
@click.option("--folder", default=None, help="Notes folder inside the vault")
@click.option(
    "-o",
    "--output",
    "outputs",
    type=click.Path(),
    multiple=True,
    help="Output JSON path (repeatable; replaces configured outputs)",
)
@click.option("--pattern", default=None, help="Glob pattern for notes (default: **/*.md)")
@click.option("--no-fallback", is_flag=True, help="Never read from fallback folders")
@click.option("--dry-run", is_flag=True, help="Parse and summarize without writing files")
@click.option("--strict", is_flag=True, help="Fail the run if any note fails to parse")
@click.pass_context
def parse(
    ctx: click.Context,
    config_path: Optional[str],
    vault: Optional[str],
    folder: Optional[str],
    outputs: Tuple[str, ...],
    pattern: Optional[str],
    no_fallback: bool,
    dry_run: bool,
    strict: bool,
) -> None:
    """
    Parse project notes and write the activity document.

    Every note yields one record per dated ``##`` section (or one record
    dated by its modification day). Notes that fail to parse are skipped.
    """
    logger: TrackerLogger = ctx.obj["logger"]

    try:
        config = load_config(config_path, vault, folder, outputs, pattern, no_fallback)

        click.echo("🚀 Parsing project notes...\n")
        result = run(config, logger, dry_run=dry_run, strict=strict)

        if result.stats.used_fallback:
            click.echo(f"💡 Using fallback notes folder: {result.notes_dir}")
        click.echo(f"📁 Found {result.stats.notes_found} notes in {result.notes_dir}\n")
        _echo_progress(result)

        if dry_run:
            click.echo("\n💡 Dry run: no files written")
        for path in result.written:
            click.echo(f"✅ Generated: {path}")

        _echo_summary(result)
        if ctx.obj.get("verbose"):
            click.echo(f"\n{result.stats.summary()}")

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "parse",
            additional_context={"config": config_path, "vault": vault},
        )


@click.command()
@click.argument("note", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def inspect(ctx: click.Context, note: str) -> None:
    """Parse a single NOTE and print its records as JSON."""
    try:
        records = parse_note_file(Path(note))
        click.echo(
            json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)
        )
    except Exception as e:
        handle_cli_error(ctx, e, "inspect", additional_context={"note": note})


__all__ = ["parse", "inspect"]
