"""Pre-commit hook installer — stage-editor install / uninstall."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from stage_editor.git.adapter import GitError, get_hooks_dir

_HOOK_MARKER = "# stage-editor-hook"
_HOOK_SCRIPT = f"""\
#!/bin/sh
{_HOOK_MARKER}
# Runs the command from .stage-editor.toml on every staged file.
# To uninstall: stage-editor uninstall

exec stage-editor run
"""


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Install stage-editor as a pre-commit hook.

    Returns (success, message).
    """
    try:
        hooks_dir = get_hooks_dir(repo_root)
    except GitError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hooks_dir / "pre-commit"

    if hook_path.exists():
        content = hook_path.read_text(encoding="utf-8", errors="replace")
        if _HOOK_MARKER in content:
            return True, "stage-editor hook is already installed."
        if not force:
            return (
                False,
                f"A pre-commit hook already exists at {hook_path}. "
                "Use --force to overwrite, or add 'stage-editor run' to it yourself.",
            )

    hook_path.write_text(_HOOK_SCRIPT, encoding="utf-8")
    hook_path.chmod(0o755)

    return True, f"Installed stage-editor pre-commit hook at {hook_path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Remove the stage-editor pre-commit hook.

    Returns (success, message).
    """
    try:
        hook_path = get_hooks_dir(repo_root) / "pre-commit"
    except GitError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    if not hook_path.exists():
        return True, "No pre-commit hook found — nothing to remove."

    content = hook_path.read_text(encoding="utf-8", errors="replace")
    if _HOOK_MARKER not in content:
        return False, "Pre-commit hook exists but was not installed by stage-editor."

    hook_path.unlink()
    return True, f"Removed stage-editor pre-commit hook from {hook_path}"
