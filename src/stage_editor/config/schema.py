"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class EditorConfig:
    patterns: List[str] = field(default_factory=list)  # empty = every staged file
    write: bool = True
    update_working_tree: bool = True


@dataclass
class CommandConfig:
    run: Optional[str] = None  # '{}' is replaced by the temp file path


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class StageEditorConfig:
    version: str = "1.0"
    editor: EditorConfig = field(default_factory=EditorConfig)
    command: CommandConfig = field(default_factory=CommandConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
