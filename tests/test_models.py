"""Tests for record types and rename detection."""

import pytest

from cocolog.git.models import (
    BINARY_SENTINEL,
    CocoCommit,
    FileChange,
    RenamedPath,
    detect_rename,
)


class TestRenameDetection:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("old.py => new.py", RenamedPath("old.py", "new.py")),
            (
                "core/{domain => adapter}/bs/BadSmellApp.go",
                RenamedPath("core/domain/bs/BadSmellApp.go", "core/adapter/bs/BadSmellApp.go"),
            ),
            ("{docs => guide}/index.md", RenamedPath("docs/index.md", "guide/index.md")),
            ("src/{ => pkg}/mod.py", RenamedPath("src/mod.py", "src/pkg/mod.py")),
            ("src/{pkg => }/mod.py", RenamedPath("src/pkg/mod.py", "src/mod.py")),
        ],
    )
    def test_detects_rename(self, path, expected):
        assert detect_rename(path) == expected

    def test_plain_path(self):
        assert detect_rename("src/app.py") is None

    def test_file_change_property(self):
        change = FileChange(file="a/{b => c}/d.txt", added=1, deleted=1)
        assert change.rename == RenamedPath("a/b/d.txt", "a/c/d.txt")
        assert FileChange(file="d.txt", added=1, deleted=1).rename is None


class TestTotals:
    def test_binary_changes_excluded(self):
        commit = CocoCommit(
            revision="abcdef1",
            author="Jane",
            timestamp=1600000000,
            message="m",
            changes=(
                FileChange(file="a.py", added=3, deleted=1),
                FileChange(file="logo.png", added=BINARY_SENTINEL, deleted=BINARY_SENTINEL),
                FileChange(file="b.py", added=2, deleted=0),
            ),
        )
        assert commit.total_added == 5
        assert commit.total_deleted == 1

    def test_no_changes(self):
        commit = CocoCommit(revision="abcdef1", author="Jane", timestamp=0, message="")
        assert commit.changes == ()
        assert commit.total_added == 0
