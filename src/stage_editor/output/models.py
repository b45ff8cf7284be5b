"""Result of one CLI run, shared by the reporters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class EditResult:
    updated_files: List[str] = field(default_factory=list)
    command: str = ""
    patterns: List[str] = field(default_factory=list)
    write: bool = True
    update_working_tree: bool = True
    duration_ms: float = 0.0

    @property
    def dry_run(self) -> bool:
        return not self.write
