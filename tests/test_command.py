"""Tests for the shell-command callback."""

import os
from pathlib import Path

import pytest

from stage_editor.command import CommandError, command_callback, render_command

pytestmark = pytest.mark.skipif(os.name == "nt", reason="uses POSIX shell commands")


class TestRenderCommand:
    def test_placeholder_replaced(self):
        assert render_command("black -q {}", "/tmp/x.py") == "black -q /tmp/x.py"

    def test_path_appended_without_placeholder(self):
        assert render_command("black -q", "/tmp/x.py") == "black -q /tmp/x.py"

    def test_path_quoted(self):
        assert render_command("cat {}", "/tmp/a b.py") == "cat '/tmp/a b.py'"

    def test_every_placeholder_replaced(self):
        assert render_command("cp {} {}.bak", "/tmp/x") == "cp /tmp/x /tmp/x.bak"


class TestCommandCallback:
    def test_command_edits_file(self, tmp_path: Path):
        target = tmp_path / "f.txt"
        target.write_text("hello\n")
        callback = command_callback("tr a-z A-Z < {} > {}.out && mv {}.out {}")
        with open(target, "r+b") as handle:
            callback(handle, str(target))
        assert target.read_text() == "HELLO\n"

    def test_pending_writes_flushed_first(self, tmp_path: Path):
        target = tmp_path / "f.txt"
        out = tmp_path / "copy.txt"
        callback = command_callback(f"cp {{}} {out}")
        with open(target, "w+b") as handle:
            handle.write(b"buffered")
            callback(handle, str(target))
        assert out.read_bytes() == b"buffered"

    def test_failure_raises(self, tmp_path: Path):
        target = tmp_path / "f.txt"
        target.write_text("x")
        callback = command_callback("test -f {} && echo nope >&2 && exit 3")
        with open(target, "r+b") as handle:
            with pytest.raises(CommandError) as excinfo:
                callback(handle, str(target))
        assert excinfo.value.returncode == 3
        assert excinfo.value.stderr == "nope"

    def test_runs_in_cwd(self, tmp_path: Path):
        target = tmp_path / "f.txt"
        target.write_text("x")
        callback = command_callback("pwd > {}", cwd=tmp_path)
        with open(target, "r+b") as handle:
            callback(handle, str(target))
        assert Path(target.read_text().strip()).resolve() == tmp_path.resolve()
