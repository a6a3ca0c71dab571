#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the activity tracker.

The project structure:
    ROOT/
    ├── tracker/       # Package code
    ├── data/          # Generated activity document
    ├── site/data/     # Copy of the document served to the graph page
    ├── logs/          # Application logs
    └── config.yaml    # Optional run configuration

These are defaults only. Every pipeline entry point takes an explicit
TrackerConfig, so tests and callers can point at synthetic roots.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root(module_file: Path = Path(__file__)) -> Path:
    """
    Source checkout root, or the working directory for installed copies.

    A checkout is recognised by the pyproject.toml next to the ``tracker``
    package (paths.py -> core/ -> tracker/ -> ROOT/). An installed copy
    lives in site-packages, so the working directory is used instead.
    """
    checkout = Path(module_file).resolve().parent.parent.parent
    if (checkout / "pyproject.toml").is_file():
        return checkout
    return Path.cwd()


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# ---- Output ----
OUTPUT_PATH = DATA_DIR / "activity-data.json"
SITE_DATA_DIR = ROOT / "site" / "data"
SITE_DATA_PATH = SITE_DATA_DIR / "activity-data.json"

# ---- Configuration ----
DEFAULT_CONFIG_PATH = ROOT / "config.yaml"
DEFAULT_NOTES_FOLDER = "Vibing"
DEFAULT_FALLBACK_DIRS = (Path("/workspace/vibing"), Path("/workspace/Vibing"))

# ---- Logs ----
LOG_DIR = ROOT / "logs"
