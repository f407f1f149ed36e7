"""Data models for parsed git logs."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

BINARY_SENTINEL = -1  # git prints '-' instead of counts for binary files

_COMPLEX_MOVE_RE = re.compile(r"^(.*)\{(.*)\s=>\s(.*)\}(.*)$")
_BASIC_MOVE_RE = re.compile(r"^(.*)\s=>\s(.*)$")


class LineKind(str, Enum):
    REVISION = "revision"
    FILE_CHANGE = "file_change"
    CHANGE_MODE = "change_mode"
    BOUNDARY = "boundary"


@dataclass(frozen=True, slots=True)
class RenamedPath:
    """Old and new path of a file whose numstat entry uses rename syntax."""

    old: str
    new: str


@dataclass(frozen=True)
class FileChange:
    """Added/deleted line counts for one file touched by a commit."""

    file: str
    added: int
    deleted: int
    mode: str = ""  # reserved, never populated

    @property
    def is_binary(self) -> bool:
        return self.added == BINARY_SENTINEL or self.deleted == BINARY_SENTINEL

    @property
    def rename(self) -> Optional[RenamedPath]:
        return detect_rename(self.file)


@dataclass(frozen=True)
class CocoCommit:
    """A single commit parsed from the log."""

    revision: str
    author: str
    timestamp: int
    message: str
    committer: str = ""  # reserved
    branch: str = ""  # reserved
    changes: Tuple[FileChange, ...] = field(default_factory=tuple)

    @property
    def total_added(self) -> int:
        return sum(c.added for c in self.changes if not c.is_binary)

    @property
    def total_deleted(self) -> int:
        return sum(c.deleted for c in self.changes if not c.is_binary)


@dataclass(frozen=True)
class LineError:
    """Record of a log line the parser skipped."""

    line_no: int
    line: str
    reason: str


def detect_rename(path: str) -> Optional[RenamedPath]:
    """Split git's rename notation into old/new paths, or return None.

    Handles ``a => b`` and the compact ``pre/{old => new}/suf`` form, where
    either side of the braces may be empty.
    """
    m = _COMPLEX_MOVE_RE.match(path)
    if m:
        prefix, old, new, suffix = m.groups()
        return RenamedPath(
            old=_join_path(prefix, old, suffix),
            new=_join_path(prefix, new, suffix),
        )
    m = _BASIC_MOVE_RE.match(path)
    if m:
        return RenamedPath(old=m.group(1), new=m.group(2))
    return None


def _join_path(prefix: str, middle: str, suffix: str) -> str:
    joined = f"{prefix}{middle}{suffix}"
    while "//" in joined:
        joined = joined.replace("//", "/")
    return joined
