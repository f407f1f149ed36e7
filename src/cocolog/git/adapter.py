"""Git subprocess wrapper — repo discovery and numstat log retrieval."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from cocolog.config.schema import GitConfig
from cocolog.git.log_parser import classify
from cocolog.git.models import LineKind

logger = logging.getLogger(__name__)

LOG_FORMAT = "format:[%h] %aN %at %s"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: List[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("Running git %s in %s", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        # A repo without commits makes `git log` fail; treat it as empty
        if "does not have any commits" in stderr:
            return ""
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def build_log_args(cfg: GitConfig) -> List[str]:
    """Return the `git log` arguments that produce the parser's input format."""
    args = ["log", f"--pretty={LOG_FORMAT}", "--numstat", "--no-color"]
    if cfg.include_summary:
        args.append("--summary")
    if cfg.all_branches:
        args.append("--all")
    if cfg.reverse:
        args.append("--reverse")
    if cfg.max_count is not None:
        args.append(f"--max-count={cfg.max_count}")
    if cfg.since:
        args.append(f"--since={cfg.since}")
    return args


def separate_records(log_text: str) -> str:
    """Put a blank line before every header that lacks one.

    Merge and empty commits have no numstat lines, so git prints the next
    header right after theirs and the commit would never be closed.
    """
    lines: List[str] = []
    for line in log_text.split("\n"):
        if lines and lines[-1].strip() and classify(line)[0] is LineKind.REVISION:
            lines.append("")
        lines.append(line)
    return "\n".join(lines)


def get_commit_log(repo_root: Path, cfg: Optional[GitConfig] = None) -> str:
    """Return numstat log text for *repo_root*, ready for GitLogParser."""
    cfg = cfg or GitConfig()
    out = separate_records(
        _run_git(build_log_args(cfg), cwd=repo_root, timeout=cfg.timeout)
    )
    # format: uses separator semantics, so the last record has no terminator
    if out and not out.endswith("\n"):
        out += "\n"
    return out
