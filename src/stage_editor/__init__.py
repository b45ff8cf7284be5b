"""stage-editor — edit staged files in the git index without touching the working tree."""

from stage_editor.editor import (
    GitStagedFileEditor,
    RepositoryError,
    StageEditorError,
    TempFileError,
)
from stage_editor.git.models import DiffEntry

__version__ = "0.1.0"

__all__ = [
    "DiffEntry",
    "GitStagedFileEditor",
    "RepositoryError",
    "StageEditorError",
    "TempFileError",
    "__version__",
]
