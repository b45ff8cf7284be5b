"""Shared test fixtures — temp git repos, a fake git client, sample diff output."""

from __future__ import annotations

import hashlib
import subprocess
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from stage_editor.git.adapter import GitCommandError


def git(repo: Path, *args: str, input: bytes | None = None) -> bytes:
    """Run git in *repo* and return stdout, failing the test on error."""
    result = subprocess.run(
        ["git", *args], cwd=repo, input=input, capture_output=True, check=True,
    )
    return result.stdout


def index_content(repo: Path, path: str) -> bytes:
    """Return the staged content of *path*."""
    return git(repo, "show", f":{path}")


def stage(repo: Path, path: str, content: str | bytes) -> None:
    target = repo / path
    target.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        content = content.encode("utf-8")
    target.write_bytes(content)
    git(repo, "add", path)


def commit(repo: Path, message: str = "commit") -> None:
    git(repo, "commit", "-q", "-m", message)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit."""
    subprocess.run(["git", "init", "-q", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "core.autocrlf", "false")
    stage(tmp_path, "README.md", "# Test\n")
    commit(tmp_path, "init")
    return tmp_path


@pytest.fixture
def sample_diff_index() -> str:
    """diff-index -z output with one added and one modified file."""
    return (
        ":000000 100644 0000000000000000000000000000000000000000 "
        "ce013625030ba8dba906f756967f9e9ca394464a A\0a.txt\0"
        ":100644 100644 1b4d3a4e9ad1d1d2a6dc2e3ec20d9d2a28a3b6d2 "
        "9daeafb9864cf43055ae93beb0afd6c7d144bfa4 M\0docs/readme.md\0"
    )


class FakeGitClient:
    """In-memory stand-in for GitClient; records every mutating call."""

    def __init__(self, diff_output: str = "", objects: Dict[str, bytes] | None = None) -> None:
        self.diff_output = diff_output
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.calls: List[Tuple] = []
        self.fail_on: str | None = None

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise GitCommandError([name], 128, f"fatal: {name} failed")

    def staged_changes(self) -> str:
        self._maybe_fail("staged_changes")
        return self.diff_output

    def read_object(self, object_hash: str) -> bytes:
        return self.objects[object_hash]

    def write_object(self, path) -> str:
        data = Path(path).read_bytes()
        object_hash = hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()
        self.objects[object_hash] = data
        self.calls.append(("write_object", object_hash))
        return object_hash

    def update_index(self, mode: str, object_hash: str, path: str) -> None:
        self._maybe_fail("update_index")
        self.calls.append(("update_index", mode, object_hash, path))

    def diff_objects(self, old_hash: str, new_hash: str) -> bytes:
        return (
            f"diff --git a/{old_hash} b/{new_hash}\n"
            f"--- a/{old_hash}\n"
            f"+++ b/{new_hash}\n"
            f"@@ -1 +1 @@\n"
            f"-{old_hash}\n"
            f"+{new_hash}\n"
        ).encode("ascii")

    def apply_patch(self, patch: bytes) -> None:
        self._maybe_fail("apply_patch")
        self.calls.append(("apply_patch", patch))

    def mutations(self) -> List[Tuple]:
        return [c for c in self.calls if c[0] in ("update_index", "apply_patch")]


def blob_hash(data: bytes) -> str:
    return hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()


def raw_record(path: str, data: bytes, mode: str = "100644", status: str = "A") -> str:
    src_mode = "000000" if status == "A" else mode
    return f":{src_mode} {mode} {'0' * 40} {blob_hash(data)} {status}\0{path}\0"


@pytest.fixture
def fake_repo(tmp_path: Path) -> Path:
    """A directory that passes the .git check, with no real repository behind it."""
    (tmp_path / ".git").mkdir()
    return tmp_path
