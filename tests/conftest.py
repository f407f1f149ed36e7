"""Shared test fixtures — sample logs and temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def sample_log_single() -> str:
    """One commit, four numstat lines, ends with a newline."""
    return (
        "[828fe39523] Rossen Stoyanchev 1575388800 Consistently use releaseBody in DefaultWebClient\n"
        "5\t3\tspring-webflux/core/main/java/org/springframework/web/reactive/function/client/ClientResponse.java\n"
        "1\t1\tspring-webflux/core/main/java/org/springframework/web/reactive/function/client/DefaultWebClient.java\n"
        "9\t3\tspring-webflux/core/main/java/org/springframework/web/reactive/function/client/WebClient.java\n"
        "6\t11\tcore/docs/asciidoc/web/webflux-webclient.adoc\n"
    )


@pytest.fixture
def sample_log_multiple() -> str:
    """Four commits separated by blank lines, space-aligned like git output."""
    return textwrap.dedent("""\
        [d00f0124d] Phodal Huang 1575388800 update files
        0       0       core/domain/bs/BadSmellApp.go

        [1d00f0124b] Phodal Huang 1575388800 update files
        1       1       cmd/bs.go
        0       0       core/domain/bs/BadSmellApp.go

        [d00f04111b] Phodal Huang 1575388800 refactor: move bs to adapter
        1       1       cmd/bs.go
        5       5       core/{domain => adapter}/bs/BadSmellApp.go

        [d00f01214b] Phodal Huang 1575388800 update files
        1       1       cmd/bs.go
        0       0       core/adapter/bs/BadSmellApp.go
    """)


@pytest.fixture
def sample_log_summary() -> str:
    """Log produced with --summary: create/rename lines follow the numstat block."""
    return textwrap.dedent("""\
        [a1b2c3d] Jane Doe 1600000000 add logo and docs
        -\t-\tassets/logo.png
        12\t0\tdocs/index.md
         create mode 100644 assets/logo.png
         create mode 100644 docs/index.md

        [a1b2c3e] Jane Doe 1600000100 move docs
        0\t0\t{docs => guide}/index.md
         rename {docs => guide}/index.md (100%)

    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with two commits."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test User"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    (tmp_path / "app.py").write_text("x = 1\ny = 2\n")
    readme.write_text("# Test\n\nMore text.\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "add app"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path


@pytest.fixture
def tmp_git_repo_merge(tmp_git_repo: Path) -> Path:
    """Extend tmp_git_repo with an empty commit and a --no-ff merge."""

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=tmp_git_repo, capture_output=True, check=True)

    git("commit", "--allow-empty", "-m", "empty")
    git("checkout", "-b", "side")
    (tmp_git_repo / "side.py").write_text("side = True\n")
    git("add", ".")
    git("commit", "-m", "side")
    git("checkout", "-")
    (tmp_git_repo / "app.py").write_text("x = 1\ny = 3\n")
    git("add", ".")
    git("commit", "-m", "main2")
    git("merge", "--no-ff", "side", "-m", "merge")
    (tmp_git_repo / "last.txt").write_text("done\n")
    git("add", ".")
    git("commit", "-m", "last")
    return tmp_git_repo
