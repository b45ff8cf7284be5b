"""Build an edit callback from a shell command template."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import IO, Optional

from stage_editor.editor import EditCallback, StageEditorError

logger = logging.getLogger(__name__)

PLACEHOLDER = "{}"


class CommandError(StageEditorError):
    """Raised when the per-file command exits non-zero."""

    def __init__(self, command: str, returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {returncode}: {command}")


def render_command(template: str, path: str) -> str:
    """Substitute the quoted *path* for every ``{}``, or append it if there is none."""
    quoted = shlex.quote(path)
    if PLACEHOLDER in template:
        return template.replace(PLACEHOLDER, quoted)
    return f"{template} {quoted}"


def command_callback(template: str, cwd: Optional[Path] = None) -> EditCallback:
    """Return a callback that runs *template* on the temp file through the shell."""

    def _callback(handle: IO[bytes], path: str) -> None:
        handle.flush()
        command = render_command(template, path)
        logger.debug("Running %s", command)
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr.strip())

    return _callback
