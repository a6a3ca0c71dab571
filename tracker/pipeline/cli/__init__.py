#!/usr/bin/env python3
"""
Activity Tracker CLI
--------------------

Command-line interface for building the activity document.

Commands:
    - parse: Parse every note and write the activity document
    - inspect: Show the records a single note produces

Usage:
    # Full run with the default config.yaml
    activity-tracker parse

    # Explicit vault, no fallback folders, preview only
    activity-tracker parse --vault ~/Obsidian --no-fallback --dry-run

    # Debug one note
    activity-tracker inspect "~/Obsidian/Vibing/My Project.md"
"""
from __future__ import annotations

import click
from pathlib import Path

from tracker.core.paths import LOG_DIR
from tracker.core.cli import setup_logger


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Directory for log files",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, log_dir: str, verbose: bool) -> None:
    """Activity Tracker - project notes to contribution graph data"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "tracker")


from .parse import inspect, parse  # noqa: E402

cli.add_command(parse)
cli.add_command(inspect)


if __name__ == "__main__":
    cli(obj={})
