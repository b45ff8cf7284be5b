"""Raw diff parser for ``git diff-index -z`` output.

Each record is a NUL-terminated header followed by one NUL-terminated path
(two for renames and copies)::

    :<src_mode> <dst_mode> <src_hash> <dst_hash> <status><score>?\\0<src_path>\\0(<dst_path>\\0)?

Paths arrive verbatim, never C-quoted. Anything else is a protocol error;
the caller is expected to abort.
"""

from __future__ import annotations

import re
from typing import List, Optional

from stage_editor.git.models import DiffEntry, FileStatus

_HEADER_RE = re.compile(r"^:(\d+) (\d+) ([a-f0-9]+) ([a-f0-9]+) ([A-Z])(\d+)?$")

# renames and copies carry a destination path as well
_TWO_PATH_STATUSES = frozenset({FileStatus.RENAMED.value, FileStatus.COPIED.value})


class DiffFormatError(Exception):
    """Raised when git output does not match the raw diff grammar."""


def parse_diff_header(header: str, src_path: str, dst_path: Optional[str] = None) -> DiffEntry:
    """Build a DiffEntry from a record header and its path fields."""
    m = _HEADER_RE.match(header)
    if m is None:
        raise DiffFormatError(f"git returned an unexpected diff record: {header!r}")
    if not src_path:
        raise DiffFormatError(f"diff record has an empty path: {header!r}")

    try:
        status = FileStatus(m.group(5))
    except ValueError:
        raise DiffFormatError(f"unknown diff status {m.group(5)!r} in {header!r}") from None

    score = m.group(6)
    return DiffEntry(
        src_mode=m.group(1),
        dst_mode=m.group(2),
        src_hash=m.group(3),
        dst_hash=m.group(4),
        status=status,
        score=int(score) if score is not None else None,
        src_path=src_path,
        dst_path=dst_path,
    )


def parse_diff_index(output: str) -> List[DiffEntry]:
    """Parse full ``diff-index -z`` output, preserving order."""
    fields = output.split("\0")
    # trailing terminator leaves one empty field behind
    if fields and fields[-1] == "":
        fields.pop()

    entries: List[DiffEntry] = []
    idx = 0
    total = len(fields)
    while idx < total:
        header = fields[idx]
        m = _HEADER_RE.match(header)
        if m is None:
            raise DiffFormatError(f"git returned an unexpected diff record: {header!r}")

        path_count = 2 if m.group(5) in _TWO_PATH_STATUSES else 1
        if idx + path_count >= total:
            raise DiffFormatError(f"diff record is missing its path: {header!r}")

        paths = fields[idx + 1:idx + 1 + path_count]
        entries.append(parse_diff_header(header, *paths))
        idx += 1 + path_count

    return entries
