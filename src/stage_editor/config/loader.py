"""Load and merge configuration from .stage-editor.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from stage_editor.config.defaults import CONFIG_FILENAME
from stage_editor.config.schema import (
    OUTPUT_FORMATS,
    CommandConfig,
    EditorConfig,
    OutputConfig,
    StageEditorConfig,
)


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def _merge_env_overrides(cfg: StageEditorConfig) -> None:
    """Apply STAGE_EDITOR_* environment variable overrides."""
    if val := os.environ.get("STAGE_EDITOR_PATTERNS"):
        cfg.editor.patterns = [p.strip() for p in val.split(",") if p.strip()]
    if _env_flag("STAGE_EDITOR_NO_WRITE"):
        cfg.editor.write = False
    if _env_flag("STAGE_EDITOR_NO_WORKING_TREE"):
        cfg.editor.update_working_tree = False
    if val := os.environ.get("STAGE_EDITOR_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("STAGE_EDITOR_COMMAND"):
        cfg.command.run = val


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: StageEditorConfig) -> None:
    patterns = cfg.editor.patterns
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigError("editor.patterns must be a list of strings")
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {cfg.output.format}")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> StageEditorConfig:
    """Load, validate, and return a StageEditorConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = StageEditorConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = StageEditorConfig(
            version=raw.get("version", "1.0"),
            editor=_build_section(raw, EditorConfig, "editor"),
            command=_build_section(raw, CommandConfig, "command"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
