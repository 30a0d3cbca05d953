"""Shared fixtures: identity records and throwaway git repositories."""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

import pytest
from loguru import logger

from gitwiser.identity import IdentityRecord

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture(autouse=True)
def _reset_loguru():
    # cli.configure_logging binds a sink to whatever sys.stderr was at call time
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def team_records() -> list[IdentityRecord]:
    """Three people spread over seven identities."""
    return [
        IdentityRecord("Jane Doe", "jane@acme.com", 120),
        IdentityRecord("Alice Wong", "alice@acme.com", 60),
        IdentityRecord("CI Bot", "ci@acme.com", 50),
        IdentityRecord("Bob Smith", "bob@acme.com", 40),
        IdentityRecord("jane doe", "jane.doe@gmail.com", 30),
        IdentityRecord("Jane Doe", "12+janedoe@users.noreply.github.com", 8),
        IdentityRecord("Bob Smith", "bob@b.com", 3),
    ]


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


def make_git_repo(path: Path, authors: list[tuple[str, str, int]]) -> Path:
    """Create a repo with `count` empty commits per (name, email, count)."""
    path.mkdir(parents=True, exist_ok=True)
    _git(path, "init", "-q")
    n = 0
    for name, email, count in authors:
        for _ in range(count):
            n += 1
            _git(
                path,
                "-c", f"user.name={name}",
                "-c", f"user.email={email}",
                "-c", "commit.gpgsign=false",
                "commit", "--allow-empty", "-q", "-m", f"commit {n}",
            )
    return path


@pytest.fixture
def team_repo(tmp_path: Path) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    return make_git_repo(
        tmp_path / "repo",
        [
            ("Jane Doe", "jane@acme.com", 4),
            ("jane doe", "jane.doe@gmail.com", 2),
            ("Bob Smith", "bob@acme.com", 3),
            ("Bob Smith", "bob@b.com", 1),
            ("Alice Wong", "alice@acme.com", 2),
        ],
    )


def make_raw_commit(path: Path, author: bytes) -> Path:
    """Point HEAD at a commit whose author line is written byte for byte."""
    def run(*args: str, data: bytes) -> str:
        result = subprocess.run(
            ["git", *args], cwd=path, input=data, capture_output=True, check=True
        )
        return result.stdout.decode().strip()

    path.mkdir(parents=True, exist_ok=True)
    _git(path, "init", "-q")
    tree = run("hash-object", "-t", "tree", "-w", "--stdin", data=b"")
    body = (
        b"tree " + tree.encode() + b"\n"
        b"author " + author + b" 1700000000 +0000\n"
        b"committer " + author + b" 1700000000 +0000\n"
        b"\nlegacy commit\n"
    )
    sha = run("hash-object", "-t", "commit", "-w", "--literally", "--stdin", data=body)
    _git(path, "update-ref", "HEAD", sha)
    return path
