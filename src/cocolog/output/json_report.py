"""JSON renderer for parsed commits."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from cocolog.git.models import CocoCommit, FileChange


def change_to_dict(change: FileChange) -> Dict[str, Any]:
    return {
        "file": change.file,
        "added": change.added,
        "deleted": change.deleted,
        "mode": change.mode,
    }


def commit_to_dict(commit: CocoCommit) -> Dict[str, Any]:
    return {
        "revision": commit.revision,
        "author": commit.author,
        "committer": commit.committer,
        "branch": commit.branch,
        "timestamp": commit.timestamp,
        "message": commit.message,
        "changes": [change_to_dict(c) for c in commit.changes],
    }


def to_dict(commits: Sequence[CocoCommit]) -> Dict[str, Any]:
    """Convert parsed commits to a JSON-serialisable dict."""
    commit_list: List[Dict[str, Any]] = [commit_to_dict(c) for c in commits]
    return {
        "version": "1.0",
        "total_commits": len(commit_list),
        "commits": commit_list,
    }


def render(commits: Sequence[CocoCommit]) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(commits), indent=2, ensure_ascii=False)
