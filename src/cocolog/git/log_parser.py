"""Git log parser — turns the custom numstat log format into commits.

Expected input, as produced by ``git log --pretty=format:"[%h] %aN %at %s"
--numstat``::

    [828fe39523] Rossen Stoyanchev 1575388800 Consistently use releaseBody
    5       3       spring-webflux/.../ClientResponse.java
    1       1       spring-webflux/.../DefaultWebClient.java

    [d00f0124d] Phodal Huang 1575388800 update files
    0       0       core/domain/bs/BadSmellApp.go

Each line is classified as a revision header, a numstat line, a ``--summary``
change-mode line or a boundary. A commit is only emitted when a boundary
line closes it, so a final block without a trailing newline is dropped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from cocolog.git.models import (
    BINARY_SENTINEL,
    CocoCommit,
    FileChange,
    LineError,
    LineKind,
)

logger = logging.getLogger(__name__)

# --- Regex patterns for log parsing ---

_REV_RE = re.compile(r"^\[(?P<rev>[0-9a-f]{5,12})\]")
_AUTHOR_RE = re.compile(r"(?P<author>.*?)\s\d{10}")
_DATE_RE = re.compile(r"(?P<date>\d{10})")
_CHANGES_RE = re.compile(
    r"^(?P<deleted>[\d-]+)\s+(?P<added>[\d-]+)\s+(?P<filename>.*)$"
)
_CHANGE_MODE_RE = re.compile(
    r"^\s(?P<kind>\w{1,6})\s(?:mode 100(?P<mode>\d{3}))?\s?(?P<path>.*?)"
    r"(?:\s\((?P<similarity>\d{1,3})%\))?$"
)


class LogParseError(Exception):
    """Raised when a single log line cannot be turned into a record."""


class MalformedHeader(LogParseError):
    """A revision line is missing its author or timestamp token."""


class InvalidChangeCount(LogParseError):
    """A numstat count is neither a decimal integer nor '-'."""


def classify(line: str) -> Tuple[LineKind, Optional[re.Match]]:
    """Return the kind of *line* and the match that decided it."""
    m = _REV_RE.match(line)
    if m:
        return LineKind.REVISION, m
    m = _CHANGES_RE.match(line)
    if m:
        return LineKind.FILE_CHANGE, m
    m = _CHANGE_MODE_RE.match(line)
    if m:
        return LineKind.CHANGE_MODE, m
    return LineKind.BOUNDARY, None


def _after(text: str, prefix: str) -> str:
    """Return everything after the first occurrence of *prefix* in *text*."""
    _, sep, rest = text.partition(prefix)
    if not sep:
        raise MalformedHeader(f"expected {prefix!r} in {text!r}")
    return rest


def parse_count(token: str) -> int:
    """Parse a numstat count; '-' (binary file) maps to the sentinel."""
    if token == "-":
        return BINARY_SENTINEL
    if not token.isdecimal():
        raise InvalidChangeCount(f"invalid change count {token!r}")
    return int(token)


def parse_header(line: str, match: re.Match) -> CocoCommit:
    """Build a commit (without changes) from a revision header line."""
    rev = match.group("rev")
    without_rev = _after(line, f"[{rev}] ")

    am = _AUTHOR_RE.search(without_rev)
    if am is None:
        raise MalformedHeader(f"no author/timestamp in header of {rev}")
    author = am.group("author")
    without_author = _after(without_rev, f"{author} ")

    dm = _DATE_RE.search(without_author)
    if dm is None:
        raise MalformedHeader(f"no timestamp in header of {rev}")
    date_str = dm.group("date")
    # a header may end right after the timestamp (empty subject)
    _, _, message = without_author.partition(f"{date_str} ")

    return CocoCommit(
        revision=rev,
        author=author,
        timestamp=int(date_str),
        message=message,
    )


def parse_file_change(match: re.Match) -> FileChange:
    """Build a FileChange from a numstat line match."""
    return FileChange(
        file=match.group("filename"),
        added=parse_count(match.group("added")),
        deleted=parse_count(match.group("deleted")),
    )


class GitLogParser:
    """Parse git log text into CocoCommit records.

    Usage::

        parser = GitLogParser(log_text)
        commits = parser.parse()
        for err in parser.errors:
            ...

    A parser instance is bound to one text. Malformed headers and invalid
    counts are skipped with a warning and recorded in ``errors``.
    """

    def __init__(self, log_text: str) -> None:
        self._lines = log_text.split("\n")
        self._current: Optional[CocoCommit] = None  # None == idle
        self._changes: Dict[str, FileChange] = {}
        self._commits: List[CocoCommit] = []
        self._parsed = False
        self.errors: List[LineError] = []

    def parse(self) -> List[CocoCommit]:
        """Return commits in the order their boundaries were seen."""
        if self._parsed:
            return list(self._commits)
        for line_no, raw_line in enumerate(self._lines, start=1):
            self.feed(raw_line.rstrip("\r"), line_no)
        self._parsed = True

        if self._current is not None:
            logger.debug(
                "Dropping %s: no boundary line after its last entry",
                self._current.revision,
            )
        return list(self._commits)

    def feed(self, line: str, line_no: int = 0) -> LineKind:
        """Route a single line; return how it was classified."""
        kind, match = classify(line)

        if kind is LineKind.REVISION:
            self._changes.clear()
            try:
                self._current = parse_header(line, match)
            except MalformedHeader as exc:
                self._current = None
                self._skip(line_no, line, exc)
        elif kind is LineKind.FILE_CHANGE:
            if self._current is None:
                logger.debug("Line %d: file change outside a commit ignored", line_no)
                return kind
            try:
                change = parse_file_change(match)
            except InvalidChangeCount as exc:
                self._skip(line_no, line, exc)
            else:
                self._changes[change.file] = change
        elif kind is LineKind.CHANGE_MODE:
            # TODO: attach create/delete/rename/mode annotations to FileChange.mode
            logger.debug("Line %d: change-mode line %r", line_no, line.strip())
        elif self._current is not None:
            self._flush()
        return kind

    def _flush(self) -> None:
        self._commits.append(
            replace(self._current, changes=tuple(self._changes.values()))
        )
        self._changes.clear()
        self._current = None

    def _skip(self, line_no: int, line: str, exc: LogParseError) -> None:
        logger.warning("Line %d skipped: %s", line_no, exc)
        self.errors.append(LineError(line_no=line_no, line=line, reason=str(exc)))


def parse_log(log_text: str) -> List[CocoCommit]:
    """Parse *log_text* with a fresh GitLogParser."""
    return GitLogParser(log_text).parse()
