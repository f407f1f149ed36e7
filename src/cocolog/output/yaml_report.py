"""YAML renderer — same document shape as the JSON report."""

from __future__ import annotations

from typing import Sequence

import yaml

from cocolog.git.models import CocoCommit
from cocolog.output.json_report import to_dict


def render(commits: Sequence[CocoCommit]) -> str:
    return yaml.safe_dump(
        to_dict(commits),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
