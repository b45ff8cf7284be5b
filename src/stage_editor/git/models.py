"""Data models for staged index entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

SYMLINK_MODE = "120000"
GITLINK_MODE = "160000"  # submodule pointer, no blob to edit

# Entries with these modes never reach the callback
UNEDITABLE_MODES = frozenset({SYMLINK_MODE, GITLINK_MODE})


class FileStatus(str, Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNKNOWN = "X"


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """One record of ``git diff-index`` raw output."""

    src_mode: str
    dst_mode: str
    src_hash: str
    dst_hash: str
    status: FileStatus
    score: Optional[int]
    src_path: str
    dst_path: Optional[str] = None  # set on renames/copies

    @property
    def is_editable(self) -> bool:
        return self.dst_mode not in UNEDITABLE_MODES
