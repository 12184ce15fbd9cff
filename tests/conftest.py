"""
Shared fixtures for repostamp tests.

- FakeRepository: in-memory repository accessor for core logic tests
- GitRepo: helper driving a real git repository in a temp directory
"""

import os
import subprocess
from typing import Dict, List, Optional, Tuple

import pytest

from repostamp.domain import TagRef
from repostamp.exit_codes import RepositoryReadError
from repostamp.infra import WorkingTreeStatus


class FakeRepository:
    """
    In-memory stand-in for GitClient.

    Commits are numbered ids ("000...001", "000...002", ...) so tests can
    build histories without touching disk.
    """

    def __init__(self):
        self.path = "/fake/repo"
        self.commits: Dict[str, Tuple[List[str], int]] = {}
        self.head: Optional[str] = None
        self.branch: Optional[str] = "main"
        self.tag_refs: List[TagRef] = []
        self.tag_objects: Dict[str, str] = {}
        self.clean = True
        self.broken_tags = set()
        self.broken_commits = set()
        self.parent_reads: List[str] = []
        self.list_calls = 0
        self._next_id = 1

    def _new_id(self) -> str:
        object_id = f"{self._next_id:040x}"
        self._next_id += 1
        return object_id

    # ----- building histories -------------------------------------------

    def add_commit(self, *parents: str, timestamp: Optional[int] = None) -> str:
        """Add a commit and move HEAD to it."""
        commit = self._new_id()
        if timestamp is None:
            timestamp = 1_700_000_000 + len(self.commits)
        self.commits[commit] = (list(parents), timestamp)
        self.head = commit
        return commit

    def chain(self, length: int) -> List[str]:
        """Add a linear history on top of HEAD; returns ids oldest first."""
        ids = []
        for _ in range(length):
            parents = (self.head,) if self.head else ()
            ids.append(self.add_commit(*parents))
        return ids

    def lightweight_tag(self, name: str, commit: str, updated_at: Optional[int] = None) -> TagRef:
        ref = TagRef(name=f"refs/tags/{name}", target=commit, updated_at=updated_at)
        self.tag_refs.append(ref)
        return ref

    def annotated_tag(self, name: str, commit: str, tagged_at: Optional[int] = None) -> TagRef:
        tag_object = self._new_id()
        self.tag_objects[tag_object] = commit
        ref = TagRef(name=f"refs/tags/{name}", target=tag_object, annotated=True, tagged_at=tagged_at)
        self.tag_refs.append(ref)
        return ref

    # ----- accessor interface -------------------------------------------

    def resolve(self, revision: str) -> Optional[str]:
        if revision == "HEAD":
            return self.head
        if revision in self.commits:
            return revision
        for ref in self.tag_refs:
            if ref.short_name == revision:
                return self.tag_objects.get(ref.target, ref.target)
        return None

    def parents_of(self, commit: str) -> List[str]:
        self.parent_reads.append(commit)
        if commit in self.broken_commits or commit not in self.commits:
            raise RepositoryReadError("read parents of", commit, "object missing")
        return list(self.commits[commit][0])

    def commit_timestamp(self, commit: str) -> int:
        return self.commits[commit][1]

    def current_branch(self) -> str:
        return self.branch if self.branch is not None else self.head

    def list_tag_refs(self) -> List[TagRef]:
        self.list_calls += 1
        return list(self.tag_refs)

    def peel(self, ref: TagRef) -> Optional[str]:
        if ref.short_name in self.broken_tags:
            raise RepositoryReadError("peel tag", ref.name, "corrupt tag object")
        if not ref.annotated:
            return None
        return self.tag_objects[ref.target]

    def status(self) -> WorkingTreeStatus:
        return WorkingTreeStatus(clean=self.clean)

    def toplevel(self) -> Optional[str]:
        return self.path


@pytest.fixture
def repo():
    """Empty in-memory repository."""
    return FakeRepository()


# ----- real git repositories ----------------------------------------------

_GIT_CONFIG = [
    "-c", "commit.gpgsign=false",
    "-c", "tag.gpgsign=false",
    "-c", "tag.forceSignAnnotated=false",
]


class GitRepo:
    """A throwaway git repository with deterministic commit times."""

    BASE_TIME = 1_700_000_000

    def __init__(self, path):
        self.path = str(path)
        self.tick = 0

    def git(self, *args: str) -> str:
        self.tick += 1
        env = os.environ.copy()
        date = f"{self.BASE_TIME + self.tick} +0000"
        env.update({
            "GIT_AUTHOR_NAME": "Test User",
            "GIT_AUTHOR_EMAIL": "test@example.com",
            "GIT_COMMITTER_NAME": "Test User",
            "GIT_COMMITTER_EMAIL": "test@example.com",
            "GIT_AUTHOR_DATE": date,
            "GIT_COMMITTER_DATE": date,
        })
        result = subprocess.run(
            ["git", *_GIT_CONFIG, *args],
            cwd=self.path,
            env=env,
            capture_output=True,
            text=True,
            check=True
        )
        return result.stdout.strip()

    def init(self) -> "GitRepo":
        self.git("init", "-q")
        self.git("symbolic-ref", "HEAD", "refs/heads/main")
        return self

    def commit(self, message: str = "commit") -> str:
        self.git("commit", "-q", "--allow-empty", "-m", message)
        return self.git("rev-parse", "HEAD")

    def tag(self, name: str, rev: str = "HEAD", annotated: bool = False) -> None:
        if annotated:
            self.git("tag", "-a", name, "-m", f"Release {name}", rev)
        else:
            self.git("tag", name, rev)


@pytest.fixture
def git_repo(tmp_path):
    """Freshly initialised git repository without commits."""
    path = tmp_path / "repo"
    path.mkdir()
    return GitRepo(path).init()


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory so no user config is loaded."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("REPOSTAMP_CONFIG", raising=False)
    for key in list(os.environ):
        if key.startswith("REPOSTAMP_"):
            monkeypatch.delenv(key, raising=False)
    return home
