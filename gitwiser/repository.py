"""
gitwiser Repository Access

Thin wrapper over the git CLI. Everything gitwiser needs from a
repository (its root, its author list, a place to drop .mailmap)
goes through here; the identity engine never touches git itself.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from loguru import logger

from gitwiser.identity import IdentityRecord

SHORTLOG_LINE_RE = re.compile(r"^\s*(\d+)\s+(.+)\s+<(.+)>$")

MAILMAP_FILE = ".mailmap"


class GitError(Exception):
    pass


def parse_shortlog(output: str) -> list[IdentityRecord]:
    """
    Parse `git shortlog -sne` output into identity records.

    Lines that don't look like `<count>\\t<name> <<email>>` are skipped.
    Result is ordered by commit count, highest first.
    """
    authors = []
    for line in output.strip().splitlines():
        match = SHORTLOG_LINE_RE.match(line)
        if not match:
            continue
        count = int(match.group(1))
        if count < 1:
            continue
        authors.append(
            IdentityRecord(
                name=match.group(2).strip(),
                email=match.group(3).strip(),
                commit_count=count,
            )
        )
    return sorted(authors, key=lambda a: -a.commit_count)


class GitRepository:
    """
    Read-mostly view of a git working tree.

        repo = GitRepository(Path("."))
        if repo.is_git_repo():
            records = repo.scan_authors()
    """

    def __init__(self, path: Path, timeout: int = 60):
        self.path = path.resolve()
        self.timeout = timeout

    def is_git_repo(self) -> bool:
        if not self.path.is_dir():
            return False
        try:
            out = self._git("rev-parse", "--is-inside-work-tree")
        except GitError:
            return False
        return out.strip() == "true"

    def root(self) -> Path:
        return Path(self._git("rev-parse", "--show-toplevel").strip())

    def has_commits(self) -> bool:
        """False for a freshly initialized repository with an unborn HEAD."""
        try:
            self._git("rev-parse", "--verify", "-q", "HEAD")
        except GitError:
            return False
        return True

    def scan_authors(self) -> list[IdentityRecord]:
        """
        Every distinct author identity reachable from HEAD.

        Author names that are not valid UTF-8 (legacy Latin-1 history) come
        back with U+FFFD in place of the undecodable bytes.
        """
        if not self.has_commits():
            logger.info(f"[GIT] No commits yet in {self.path}")
            return []
        output = self._git("shortlog", "-sne", "HEAD")
        authors = parse_shortlog(output)
        logger.info(f"[GIT] Found {len(authors)} author identities in {self.path}")
        return authors

    def write_mailmap(self, content: str) -> bool:
        """
        Write .mailmap at the repository root.

        Returns True if an existing file was appended to, False if created.
        """
        mailmap_path = self.root() / MAILMAP_FILE
        if mailmap_path.exists():
            existing = mailmap_path.read_text()
            mailmap_path.write_text(existing + "\n" + content)
            logger.info(f"[GIT] Appended to {mailmap_path}")
            return True

        mailmap_path.write_text(content)
        logger.info(f"[GIT] Created {mailmap_path}")
        return False

    def _git(self, *args: str) -> str:
        cmd = ["git", *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise GitError(f"Command failed: {' '.join(cmd)}\n{e}") from e

        if result.returncode != 0:
            raise GitError(
                f"Command failed: {' '.join(cmd)}\n"
                f"stderr: {result.stderr}"
            )
        logger.debug(f"[GIT] OK: {' '.join(cmd)}")
        return result.stdout
