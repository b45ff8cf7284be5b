"""Configuration loading, schema, and defaults."""

from stage_editor.config.loader import ConfigError, load_config
from stage_editor.config.schema import StageEditorConfig

__all__ = [
    "ConfigError",
    "StageEditorConfig",
    "load_config",
]
