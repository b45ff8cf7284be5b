"""Git subprocess wrapper — the handful of plumbing commands the editor needs."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or cannot be run."""


class GitCommandError(GitError):
    """Raised when a git command exits non-zero."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str) -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"git {' '.join(self.args_list)} exited with {returncode}: {stderr or 'no output'}"
        )


def _run_git(args: Sequence[str], cwd: Path, input: Optional[bytes] = None) -> bytes:
    """Run a git command and return raw stdout. Raises GitError on failure."""
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            input=input,
            capture_output=True,
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise GitCommandError(args, result.returncode, stderr)
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.decode("utf-8").strip())


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the hooks directory, following worktrees and core.hooksPath."""
    out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root)
    hooks = Path(out.decode("utf-8").strip())
    return hooks if hooks.is_absolute() else repo_root / hooks


class GitClient:
    """Object store and index access for one repository.

    Every method is a single blocking git invocation; a non-zero exit raises
    GitCommandError and nothing is retried.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _git(self, *args: str, input: Optional[bytes] = None) -> bytes:
        return _run_git(args, cwd=self.root, input=input)

    def staged_changes(self) -> str:
        """Return NUL-separated ``diff-index -z`` records for staged additions and modifications."""
        out = self._git(
            "diff-index", "-z", "--cached", "--diff-filter=AM", "--no-renames", "HEAD",
        )
        return out.decode("utf-8", errors="surrogateescape")

    def read_object(self, object_hash: str) -> bytes:
        return self._git("cat-file", "-p", object_hash)

    def write_object(self, path: Path | str) -> str:
        """Store a file's contents in the object database and return its hash."""
        return self._git("hash-object", "-w", str(path)).decode("ascii").strip()

    def update_index(self, mode: str, object_hash: str, path: str) -> None:
        self._git("update-index", "--cacheinfo", f"{mode},{object_hash},{path}")

    def diff_objects(self, old_hash: str, new_hash: str) -> bytes:
        """Return a unified diff between two blobs, labelled ``a/<old>`` and ``b/<new>``."""
        # prefixes pinned so diff.noprefix / diff.mnemonicPrefix cannot break `apply -p1`
        return self._git(
            "diff", "--no-ext-diff", "--color=never",
            "--src-prefix=a/", "--dst-prefix=b/",
            old_hash, new_hash,
        )

    def apply_patch(self, patch: bytes) -> None:
        """Apply *patch* to the working tree."""
        self._git("apply", "-", input=patch)
