#!/usr/bin/env python3
"""
config.py
---------
Run configuration for the activity tracker.

A TrackerConfig is built once (from defaults, a YAML/JSON file, or CLI
overrides) and passed explicitly to the pipeline. Nothing in the pipeline
reads configuration from module state.

Config file format (YAML; JSON is accepted as well):

    vault_path: ~/Documents/Obsidian
    notes_folder: Vibing
    output_paths:
      - data/activity-data.json
      - site/data/activity-data.json
    use_fallback: true
    fallback_dirs: [/workspace/vibing, /workspace/Vibing]
    pattern: "**/*.md"

The camelCase keys of the legacy ``config.json`` (``obsidianVaultPath``,
``vibingFolderName``, ``outputPath``, ``siteDataPath``,
``useWorkspaceFallback``) are also understood.

Usage:
    from tracker.core.config import TrackerConfig

    config = TrackerConfig.from_file(Path("config.yaml"))
    config = config.with_overrides(use_fallback=False)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# --- Third party imports ---
import yaml

# --- Local imports ---
from tracker.core.exceptions import ConfigError
from tracker.core.paths import (
    DEFAULT_FALLBACK_DIRS,
    DEFAULT_NOTES_FOLDER,
    OUTPUT_PATH,
    SITE_DATA_PATH,
)


# Legacy camelCase keys -> TrackerConfig fields
LEGACY_KEYS: Dict[str, str] = {
    "obsidianVaultPath": "vault_path",
    "vibingFolderName": "notes_folder",
    "useWorkspaceFallback": "use_fallback",
    "fallbackDirs": "fallback_dirs",
    "pattern": "pattern",
}

# Legacy single-path output keys, in output order
LEGACY_OUTPUT_KEYS: Tuple[str, ...] = ("outputPath", "siteDataPath")

CONFIG_FIELDS = {
    "vault_path",
    "notes_folder",
    "output_paths",
    "use_fallback",
    "fallback_dirs",
    "pattern",
}


@dataclass(frozen=True)
class TrackerConfig:
    """
    Explicit configuration for one tracker run.

    Attributes:
        vault_path: Root of the notes vault
        notes_folder: Folder inside the vault holding project notes
        output_paths: Every location the activity document is written to
        use_fallback: Whether fallback_dirs may be tried when notes_dir is missing
        fallback_dirs: Alternative notes directories, tried in order
        pattern: Glob pattern for note discovery, relative to the notes directory
    """

    vault_path: Path
    notes_folder: str = DEFAULT_NOTES_FOLDER
    output_paths: Tuple[Path, ...] = (OUTPUT_PATH, SITE_DATA_PATH)
    use_fallback: bool = True
    fallback_dirs: Tuple[Path, ...] = field(default=DEFAULT_FALLBACK_DIRS)
    pattern: str = "**/*.md"

    @property
    def notes_dir(self) -> Path:
        """Configured notes directory (vault_path / notes_folder)."""
        return self.vault_path / self.notes_folder

    def with_overrides(self, **overrides: Any) -> TrackerConfig:
        """
        Return a copy with non-None overrides applied.

        Examples:
            >>> config.with_overrides(use_fallback=False, pattern=None)
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - CONFIG_FIELDS
        if unknown:
            raise ConfigError(f"Unknown config fields: {sorted(unknown)}")
        return replace(self, **_coerce(changes, base_dir=None))

    # ---- Loading ----
    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_dir: Optional[Path] = None
    ) -> TrackerConfig:
        """
        Build a configuration from a mapping.

        Args:
            data: Parsed configuration mapping (snake_case or legacy keys)
            base_dir: Directory relative output paths are resolved against

        Raises:
            ConfigError: On unknown keys or a missing vault path
        """
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config must be a mapping, got {type(data).__name__}"
            )

        normalized: Dict[str, Any] = {}
        legacy_outputs: List[Any] = []
        unknown: List[str] = []

        for key, value in data.items():
            if key in CONFIG_FIELDS:
                normalized[key] = value
            elif key in LEGACY_KEYS:
                normalized[LEGACY_KEYS[key]] = value
            elif key in LEGACY_OUTPUT_KEYS:
                continue
            else:
                unknown.append(key)

        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

        for key in LEGACY_OUTPUT_KEYS:
            if data.get(key):
                legacy_outputs.append(data[key])
        if legacy_outputs and "output_paths" not in normalized:
            normalized["output_paths"] = legacy_outputs

        if not normalized.get("vault_path"):
            raise ConfigError("Config must define 'vault_path'")

        return cls(**_coerce(normalized, base_dir))

    @classmethod
    def from_file(cls, path: Path) -> TrackerConfig:
        """
        Load configuration from a YAML or JSON file.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed config file {path}: {e}") from e

        return cls.from_dict(data or {}, base_dir=path.parent)


# ----- Helpers -----
def _as_path(value: Any, base_dir: Optional[Path]) -> Path:
    """Expand ``~`` and anchor relative paths at base_dir when given."""
    path = Path(str(value)).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _coerce(values: Dict[str, Any], base_dir: Optional[Path]) -> Dict[str, Any]:
    """Convert raw config values to the types TrackerConfig expects."""
    out = dict(values)
    if "vault_path" in out:
        out["vault_path"] = Path(str(out["vault_path"])).expanduser()
    if "notes_folder" in out:
        out["notes_folder"] = str(out["notes_folder"])
    if "output_paths" in out:
        out["output_paths"] = tuple(
            _as_path(p, base_dir) for p in _as_list(out["output_paths"])
        )
        if not out["output_paths"]:
            raise ConfigError("Config must define at least one output path")
    if "fallback_dirs" in out:
        out["fallback_dirs"] = tuple(
            Path(str(p)).expanduser() for p in _as_list(out["fallback_dirs"])
        )
    if "use_fallback" in out:
        out["use_fallback"] = bool(out["use_fallback"])
    if "pattern" in out:
        out["pattern"] = str(out["pattern"])
    return out
