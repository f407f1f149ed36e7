"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

OutputFormat = Literal["terminal", "json", "yaml"]

OUTPUT_FORMATS = ("terminal", "json", "yaml")


@dataclass
class GitConfig:
    max_count: Optional[int] = None  # None = whole history
    since: Optional[str] = None  # passed to `git log --since`
    all_branches: bool = False
    reverse: bool = True  # oldest commit first
    include_summary: bool = True  # emit create/delete/rename lines
    timeout: int = 30


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_changes: bool = True
    show_summary: bool = True


@dataclass
class CocoLogConfig:
    version: str = "1.0"
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
