"""Staged-file editor — run a callback over the indexed content of staged files.

For every added or modified entry in the index the blob is copied into a
temporary file, handed to the callback, re-hashed and, when it changed,
written back into the index. The working tree is then patched with only the
lines that changed, so unstaged edits elsewhere in the file survive.

Index updates that happened before a failure are not rolled back.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Callable, List, Optional, Sequence

from stage_editor.filters import path_matches
from stage_editor.git.adapter import GitClient
from stage_editor.git.diff_parser import parse_diff_index
from stage_editor.git.models import DiffEntry

logger = logging.getLogger(__name__)

EditCallback = Callable[[IO[bytes], str], None]

# bytes trimmed before the emptiness check; NUL counts, form feed does not
_BLANK_BYTES = b" \t\n\r\0\x0b"

_C_ESCAPES = {
    0x07: b"\\a", 0x08: b"\\b", 0x09: b"\\t", 0x0a: b"\\n",
    0x0b: b"\\v", 0x0c: b"\\f", 0x0d: b"\\r", 0x22: b"\\\"", 0x5c: b"\\\\",
}


def quote_patch_path(name: bytes) -> bytes:
    """C-quote a patch path the way git does when it holds quotes, backslashes or control bytes."""
    if not any(b < 0x20 or b == 0x7f or b in (0x22, 0x5c) for b in name):
        return name
    out = bytearray(b"\"")
    for b in name:
        if b in _C_ESCAPES:
            out += _C_ESCAPES[b]
        elif b < 0x20 or b == 0x7f:
            out += b"\\%03o" % b
        else:
            out.append(b)
    out += b"\""
    return bytes(out)


class StageEditorError(Exception):
    """Base class for editor failures."""


class RepositoryError(StageEditorError):
    """Raised when the repository root or a staged path cannot be resolved."""


class TempFileError(StageEditorError):
    """Raised when a temporary file for a staged blob cannot be created."""


class GitStagedFileEditor:
    """Edit staged files in place in the git index.

    Usage::

        editor = GitStagedFileEditor("/path/to/repo")
        updated = editor.execute(fix_file, ["*.py"])
    """

    def __init__(
        self,
        git_root: Optional[Path | str] = None,
        *,
        client: Optional[GitClient] = None,
    ) -> None:
        root = Path(git_root) if git_root else Path.cwd()
        git_dir = root / ".git"
        # .git is a file for worktrees and submodules
        if not (git_dir.is_dir() or git_dir.is_file()):
            raise RepositoryError(f"Invalid git repository: {root}")

        self.root = root.resolve()
        self.client = client or GitClient(self.root)

    def execute(
        self,
        callback: EditCallback,
        file_patterns: Sequence[str] = (),
        write: bool = True,
        update_working_tree: bool = True,
    ) -> List[str]:
        """Run *callback* on each matching staged file.

        Returns the index paths that were rewritten, in diff order. With
        ``write=False`` the callback still runs but nothing is written and
        the result is always empty.
        """
        entries = parse_diff_index(self.client.staged_changes())

        updated: List[str] = []
        for entry in entries:
            if not entry.is_editable:
                logger.debug("Skipping %s (mode %s)", entry.src_path, entry.dst_mode)
                continue

            full_path = self._resolve(entry.src_path)
            if not path_matches(full_path, file_patterns, root=self.root):
                continue

            if self._edit_entry(callback, entry, write, update_working_tree) is not None:
                updated.append(entry.src_path)

        return updated

    def _edit_entry(
        self,
        callback: EditCallback,
        entry: DiffEntry,
        write: bool,
        update_working_tree: bool,
    ) -> Optional[str]:
        """Process one entry. Returns the new object hash if the index was updated."""
        orig_hash = entry.dst_hash
        new_hash = self._run_on_object(callback, orig_hash, entry.src_path)

        if not write or new_hash == orig_hash:
            return None

        if self._object_is_empty(new_hash):
            logger.warning("Not staging %s: callback left it empty", entry.src_path)
            return None

        self.client.update_index(entry.dst_mode, new_hash, entry.src_path)
        logger.info("Updated %s in index (%s -> %s)", entry.src_path, orig_hash[:7], new_hash[:7])

        if update_working_tree:
            self._patch_working_file(entry.src_path, orig_hash, new_hash)

        return new_hash

    def _run_on_object(self, callback: EditCallback, object_hash: str, src_path: str) -> str:
        contents = self.client.read_object(object_hash)

        try:
            handle = tempfile.NamedTemporaryFile(
                mode="w+b",
                prefix="stage-editor-",
                suffix=Path(src_path).suffix,
                delete=False,
            )
        except OSError as exc:
            raise TempFileError(f"Can't create temporary file: {exc}") from exc

        try:
            handle.write(contents)
            handle.flush()
            handle.seek(0)

            callback(handle, handle.name)

            return self.client.write_object(handle.name)
        finally:
            handle.close()
            Path(handle.name).unlink(missing_ok=True)

    def _object_is_empty(self, object_hash: str) -> bool:
        return self.client.read_object(object_hash).strip(_BLANK_BYTES) == b""

    def _patch_working_file(self, path: str, orig_hash: str, new_hash: str) -> None:
        """Apply the blob-to-blob diff to the working copy of *path*."""
        target = os.fsencode(path)
        patch = self.client.diff_objects(orig_hash, new_hash)

        # only the header names the blobs; hunks are left as they are
        header, sep, hunks = patch.partition(b"\n@@")
        header = header.replace(b"a/" + orig_hash.encode("ascii"), quote_patch_path(b"a/" + target))
        header = header.replace(b"b/" + new_hash.encode("ascii"), quote_patch_path(b"b/" + target))
        self.client.apply_patch(header + sep + hunks)

    def _resolve(self, path: str) -> Path:
        try:
            return (self.root / path).resolve(strict=True)
        except (OSError, RuntimeError) as exc:  # RuntimeError: symlink loop
            raise RepositoryError(f"Couldn't get full path of {path}: {exc}") from exc
