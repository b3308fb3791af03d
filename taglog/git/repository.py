"""Read-only access to a repository's tags and commit graph.

Provides:
- RepositoryReader: the interface the changelog engine consumes
- GitRepository: reader backed by the ``git`` executable
- InMemoryRepository: reader over an explicit arena of commit records
"""

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Protocol

from .models import Commit, RepositoryError, TagRef

logger = logging.getLogger(__name__)

FIELD_SEP = "\x1f"
LOG_FORMAT = "%H%x1f%P%x1f%aI%x1f%B"


class RepositoryReader(Protocol):
    """Operations the changelog engine needs from a repository."""

    def tags(self) -> list[TagRef]:
        """Return every tag with the hash of the object it points at."""
        ...

    def head(self) -> str:
        """Return the commit hash of the current branch tip."""
        ...

    def commit(self, commit_hash: str) -> Commit:
        """Return the commit record for a hash."""
        ...

    def tag_commit(self, tag: TagRef) -> Commit:
        """Return the commit a tag points at, peeling one annotated tag object."""
        ...


def run(
    cmd: list[str],
    cwd: Path | None = None,
    capture_output: bool = True,
    check: bool = True,
    timeout: int | None = None,
) -> subprocess.CompletedProcess:
    """Run a subprocess command with consistent error handling.

    Args:
        cmd: Command and arguments as list
        cwd: Working directory (defaults to current)
        capture_output: Whether to capture stdout/stderr
        check: Whether to raise on non-zero exit
        timeout: Optional timeout in seconds

    Returns:
        CompletedProcess instance

    Raises:
        subprocess.CalledProcessError: If check=True and command fails
        subprocess.TimeoutExpired: If timeout is exceeded

    """
    logger.debug(f"Running command: {' '.join(cmd)}")
    return subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=capture_output,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=check,
        timeout=timeout,
        stdin=subprocess.DEVNULL,
    )


def _parse_header(raw: str) -> tuple[dict[str, list[str]], str]:
    """Split a raw git object into header fields and the message body."""
    head, _, message = raw.partition("\n\n")
    headers: dict[str, list[str]] = {}
    for line in head.splitlines():
        if not line or line.startswith(" "):
            # Continuation lines (e.g. signatures) are not needed
            continue
        key, _, value = line.partition(" ")
        headers.setdefault(key, []).append(value)
    return headers, message


class GitRepository:
    """Repository reader that shells out to ``git``.

    Commit records are loaded in bulk with one ``git log`` per unseen
    history and cached by hash for the lifetime of the reader.
    """

    def __init__(self, path: str | Path) -> None:
        """Open a repository.

        Args:
            path: Path to the working tree or bare repository

        Raises:
            RepositoryError: If the path is not a readable git repository

        """
        self.path = Path(path)
        self._commits: dict[str, Commit] = {}

        if not self.path.is_dir():
            raise RepositoryError(f"Cannot open repository: {self.path} is not a directory")
        try:
            run(["git", "rev-parse", "--git-dir"], cwd=self.path)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise RepositoryError(f"Cannot open repository {self.path}: {_describe(e)}") from e
        logger.debug(f"Opened repository at {self.path}")

    def _git(self, *args: str, what: str) -> str:
        try:
            result = run(["git", *args], cwd=self.path)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise RepositoryError(f"{what}: {_describe(e)}") from e
        return result.stdout

    def tags(self) -> list[TagRef]:
        """Return every tag under ``refs/tags``.

        Raises:
            RepositoryError: If tags cannot be enumerated

        """
        output = self._git(
            "for-each-ref",
            f"--format=%(refname){FIELD_SEP}%(objectname)",
            "refs/tags",
            what="Cannot fetch tags",
        )
        tags = []
        for line in output.splitlines():
            if not line.strip():
                continue
            refname, _, target = line.partition(FIELD_SEP)
            tags.append(TagRef(name=refname.removeprefix("refs/tags/"), target=target.strip()))
        logger.debug(f"Found {len(tags)} tags")
        return tags

    def head(self) -> str:
        """Return the hash of the commit HEAD points at.

        Raises:
            RepositoryError: If HEAD cannot be resolved (e.g. empty repository)

        """
        output = self._git(
            "rev-parse", "--verify", "HEAD^{commit}", what="Cannot resolve HEAD"
        )
        return output.strip()

    def commit(self, commit_hash: str) -> Commit:
        """Return a commit, loading its whole history on a cache miss.

        Raises:
            RepositoryError: If the hash does not name a readable commit

        """
        cached = self._commits.get(commit_hash)
        if cached is not None:
            return cached

        self._load_history(commit_hash)
        try:
            return self._commits[commit_hash]
        except KeyError:
            raise RepositoryError(f"Cannot fetch commit {commit_hash}") from None

    def _load_history(self, commit_hash: str) -> None:
        output = self._git(
            "log",
            "-z",
            "--no-show-signature",
            f"--format={LOG_FORMAT}",
            commit_hash,
            "--",
            what=f"Cannot fetch commit {commit_hash}",
        )
        loaded = 0
        for record in output.split("\0"):
            if not record:
                continue
            fields = record.split(FIELD_SEP, 3)
            if len(fields) != 4:
                raise RepositoryError(f"Unexpected git log record: {record[:80]!r}")
            sha, parents, date, message = fields
            self._commits[sha] = Commit(
                hash=sha,
                message=message,
                author_date=datetime.fromisoformat(date),
                parents=tuple(parents.split()),
            )
            loaded += 1
        logger.debug(f"Loaded {loaded} commits reachable from {commit_hash[:12]}")

    def tag_commit(self, tag: TagRef) -> Commit:
        """Return the commit a tag points at.

        Lightweight tags point at a commit directly. Annotated tags point at a
        tag object whose ``object`` must itself be a commit.

        Raises:
            RepositoryError: If the tag target cannot be resolved to a commit

        """
        object_type = self._git(
            "cat-file", "-t", tag.target, what=f"Cannot retrieve commit from tag {tag.name}"
        ).strip()
        if object_type == "commit":
            return self.commit(tag.target)
        if object_type != "tag":
            raise RepositoryError(
                f"Cannot retrieve commit from tag {tag.name}: points at a {object_type}"
            )

        raw = self._git(
            "cat-file",
            "tag",
            tag.target,
            what=f"Cannot retrieve commit from tag object {tag.name}",
        )
        headers, _ = _parse_header(raw)
        target = headers.get("object", [""])[0]
        target_type = headers.get("type", [""])[0]
        if target_type != "commit" or not target:
            raise RepositoryError(
                f"Cannot retrieve commit from tag object {tag.name}: "
                f"points at a {target_type or 'unknown object'}"
            )
        return self.commit(target)


def _describe(error: Exception) -> str:
    if isinstance(error, subprocess.CalledProcessError):
        stderr = (error.stderr or "").strip()
        return stderr or f"git exited with status {error.returncode}"
    return str(error)


class InMemoryRepository:
    """Repository reader over commit records held in memory.

    Example:
        repo = InMemoryRepository()
        repo.add_commit("a1", "feat: initial")
        repo.add_commit("b2", "fix: typo", parents=["a1"])
        repo.add_tag("v1.0.0", "b2")

    """

    def __init__(self) -> None:
        self.commits: dict[str, Commit] = {}
        self.tag_objects: dict[str, str] = {}
        self._tags: list[TagRef] = []
        self.head_hash: str | None = None

    def add_commit(
        self,
        commit_hash: str,
        message: str,
        parents: list[str] | tuple[str, ...] = (),
        author_date: datetime | None = None,
        move_head: bool = True,
    ) -> Commit:
        """Add a commit and, by default, make it the branch tip."""
        commit = Commit(
            hash=commit_hash,
            message=message,
            author_date=author_date or datetime(2024, 1, 1),
            parents=tuple(parents),
        )
        self.commits[commit_hash] = commit
        if move_head:
            self.head_hash = commit_hash
        return commit

    def add_tag(self, name: str, commit_hash: str, annotated: bool = False) -> TagRef:
        """Tag a commit, optionally through an annotated tag object."""
        target = commit_hash
        if annotated:
            target = f"tag-object-{name}"
            self.tag_objects[target] = commit_hash
        tag = TagRef(name=name, target=target)
        self._tags.append(tag)
        return tag

    def tags(self) -> list[TagRef]:
        return list(self._tags)

    def head(self) -> str:
        if self.head_hash is None:
            raise RepositoryError("Cannot resolve HEAD: repository has no commits")
        return self.head_hash

    def commit(self, commit_hash: str) -> Commit:
        try:
            return self.commits[commit_hash]
        except KeyError:
            raise RepositoryError(f"Cannot fetch commit {commit_hash}") from None

    def tag_commit(self, tag: TagRef) -> Commit:
        if tag.target in self.commits:
            return self.commits[tag.target]
        if tag.target in self.tag_objects:
            return self.commit(self.tag_objects[tag.target])
        raise RepositoryError(f"Cannot retrieve commit from tag {tag.name}")
