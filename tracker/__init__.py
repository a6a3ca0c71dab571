"""
Activity Tracker
================

Turns project notes (markdown with YAML frontmatter and optional
``## <date>`` sections) into the JSON document behind a calendar-style
contribution graph.

Main Components:
    - pipeline: Note parsing, aggregation and the batch driver
    - core: Configuration, logging, exceptions, paths
    - dataclasses: ActivityRecord and the aggregate/result types
    - utils: Frontmatter, filesystem and slug helpers

Primary Interfaces:
    - tracker.pipeline.cli: Command-line interface (``activity-tracker``)
    - tracker.pipeline.runner.run: Programmatic batch entry point
    - tracker.pipeline.note_parser.parse_note: Single-note parser

Example Usage:
    >>> from pathlib import Path
    >>> from tracker.core.config import TrackerConfig
    >>> from tracker.pipeline.runner import run
    >>> result = run(TrackerConfig(vault_path=Path("~/vault")))
    >>> result.document["metadata"]["totalProjects"]
"""

__version__ = "1.0.0"
__author__ = "Activity Tracker Project"
