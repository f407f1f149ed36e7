"""Git interface layer — adapter, log parsing, models."""

from cocolog.git.adapter import GitError, get_commit_log, get_repo_root
from cocolog.git.log_parser import (
    GitLogParser,
    InvalidChangeCount,
    LogParseError,
    MalformedHeader,
    parse_log,
)
from cocolog.git.models import (
    BINARY_SENTINEL,
    CocoCommit,
    FileChange,
    LineError,
    LineKind,
    RenamedPath,
    detect_rename,
)

__all__ = [
    "BINARY_SENTINEL",
    "CocoCommit",
    "FileChange",
    "GitError",
    "GitLogParser",
    "InvalidChangeCount",
    "LineError",
    "LineKind",
    "LogParseError",
    "MalformedHeader",
    "RenamedPath",
    "detect_rename",
    "get_commit_log",
    "get_repo_root",
    "parse_log",
]
