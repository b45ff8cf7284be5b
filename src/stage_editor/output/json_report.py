"""JSON reporter for scripts and CI."""

from __future__ import annotations

import json
from typing import Any, Dict

from stage_editor.output.models import EditResult


def to_dict(result: EditResult) -> Dict[str, Any]:
    """Convert EditResult to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "command": result.command,
        "patterns": result.patterns,
        "write": result.write,
        "update_working_tree": result.update_working_tree,
        "updated_files": result.updated_files,
        "total_updated": len(result.updated_files),
        "duration_ms": round(result.duration_ms, 1),
    }


def render(result: EditResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
