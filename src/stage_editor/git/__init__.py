"""Git interface layer — adapter, raw diff parsing, models."""

from stage_editor.git.adapter import (
    GitClient,
    GitCommandError,
    GitError,
    get_hooks_dir,
    get_repo_root,
)
from stage_editor.git.diff_parser import DiffFormatError, parse_diff_header, parse_diff_index
from stage_editor.git.models import (
    GITLINK_MODE,
    SYMLINK_MODE,
    DiffEntry,
    FileStatus,
)

__all__ = [
    "GITLINK_MODE",
    "SYMLINK_MODE",
    "DiffEntry",
    "DiffFormatError",
    "FileStatus",
    "GitClient",
    "GitCommandError",
    "GitError",
    "get_hooks_dir",
    "get_repo_root",
    "parse_diff_header",
    "parse_diff_index",
]
