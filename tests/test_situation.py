"""Tests for the situation resolver."""

import os
import shutil
from datetime import datetime, timezone

import pytest

from repostamp.core import build_tag_index, current_branch, resolve_situation, tags_at_revision
from repostamp.domain import NO_COMMIT
from repostamp.exit_codes import RepositoryReadError, RevisionNotFoundError
from repostamp.infra import GitClient

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


class TestResolveSituation:
    """Tests for resolve_situation."""

    def test_empty_repository(self, repo):
        """No commits: sentinel hash, zero time, no tags, branch still named."""
        situation = resolve_situation(repo)
        assert situation.hash == NO_COMMIT
        assert situation.timestamp == 0
        assert situation.tags == ()
        assert situation.branch == "main"
        assert situation.clean is True
        assert not situation.has_commit

    def test_head_on_branch(self, repo):
        c1 = repo.add_commit(timestamp=1_700_000_123)
        repo.lightweight_tag("v1.0", c1)

        situation = resolve_situation(repo)
        assert situation.hash == c1
        assert situation.timestamp == 1_700_000_123
        assert situation.branch == "main"
        assert not situation.detached
        assert situation.tags == ("v1.0",)

    def test_detached_head(self, repo):
        repo.chain(2)
        repo.branch = None

        situation = resolve_situation(repo)
        assert situation.branch is None
        assert situation.detached

    def test_dirty_tree(self, repo):
        repo.chain(1)
        repo.clean = False
        assert resolve_situation(repo).clean is False

    def test_tags_in_tie_break_order(self, repo):
        c1 = repo.add_commit()
        repo.lightweight_tag("b", c1)
        repo.lightweight_tag("a", c1)
        repo.annotated_tag("z", c1, tagged_at=999)

        assert resolve_situation(repo).tags == ("z", "a", "b")

    def test_untagged_commit(self, repo):
        c1, c2 = repo.chain(2)
        repo.lightweight_tag("v1", c1)
        assert resolve_situation(repo).tags == ()

    def test_other_revision_reports_no_branch(self, repo):
        """Only HEAD is on a branch; other revisions read as detached."""
        c1, c2 = repo.chain(2)
        repo.lightweight_tag("v1", c1)

        situation = resolve_situation(repo, "v1")
        assert situation.hash == c1
        assert situation.branch is None
        assert situation.tags == ("v1",)

    def test_unknown_revision(self, repo):
        repo.chain(1)
        with pytest.raises(RevisionNotFoundError):
            resolve_situation(repo, "missing")

    def test_root_directory_recorded(self, repo):
        repo.chain(1)
        situation = resolve_situation(repo, root_directory="/work/project")
        assert situation.root_directory == "/work/project"

    def test_prebuilt_index_used(self, repo):
        c1 = repo.add_commit()
        repo.lightweight_tag("v1", c1)
        index = build_tag_index(repo)

        resolve_situation(repo, tag_index=index)
        assert repo.list_calls == 1

    def test_tag_read_failure_propagates(self, repo):
        c1 = repo.add_commit()
        repo.annotated_tag("broken", c1)
        repo.broken_tags.add("broken")

        with pytest.raises(RepositoryReadError):
            resolve_situation(repo)

    def test_committed_at(self, repo):
        repo.add_commit(timestamp=0)
        situation = resolve_situation(repo)
        assert situation.committed_at == datetime(1970, 1, 1, tzinfo=timezone.utc)


class TestCurrentBranch:
    """Tests for current_branch."""

    def test_named_branch(self, repo):
        repo.branch = "feature/x"
        assert current_branch(repo) == "feature/x"

    def test_detached_reports_none(self, repo):
        repo.chain(1)
        repo.branch = None
        assert current_branch(repo) is None

    def test_detached_sha256_head_reports_none(self, repo):
        repo.branch = "e" * 64
        assert current_branch(repo) is None

    def test_hex_looking_branch_name_is_kept(self, repo):
        """Only a full 40 character id means detached."""
        repo.branch = "deadbeef"
        assert current_branch(repo) == "deadbeef"


class TestTagsAtRevision:
    """Tests for tags_at_revision."""

    def test_empty_repository(self, repo):
        assert tags_at_revision(repo) == []

    def test_head_tags(self, repo):
        c1, c2 = repo.chain(2)
        repo.lightweight_tag("v2", c2)
        repo.lightweight_tag("v1", c1)
        assert tags_at_revision(repo) == ["v2"]
        assert tags_at_revision(repo, c1) == ["v1"]

    def test_unknown_revision(self, repo):
        repo.chain(1)
        with pytest.raises(RevisionNotFoundError):
            tags_at_revision(repo, "nope")


class TestIdempotence:
    """Resolving twice without changes gives equal situations."""

    def test_repeated_resolution_in_memory(self, repo):
        c1, c2 = repo.chain(2)
        repo.lightweight_tag("v1", c2)
        repo.annotated_tag("release", c2, tagged_at=10)

        assert resolve_situation(repo) == resolve_situation(repo)
        assert resolve_situation(repo, c1) == resolve_situation(repo, c1)

    def test_repeated_resolution_empty_repository(self, repo):
        assert resolve_situation(repo) == resolve_situation(repo)

    @requires_git
    def test_repeated_resolution_real_repository(self, git_repo):
        git_repo.commit()
        git_repo.tag("v1.0", annotated=True)
        git_repo.tag("latest")
        client = GitClient(git_repo.path)

        first = resolve_situation(client)
        second = resolve_situation(client)
        assert first == second
        assert set(first.tags) == {"v1.0", "latest"}


class TestCleanForOtherRevisions:
    """Cleanliness always describes the work tree, whatever revision is asked for."""

    @requires_git
    def test_dirty_work_tree_reported_for_old_revision(self, git_repo):
        git_repo.commit()
        git_repo.tag("v1.0")
        git_repo.commit()
        with open(os.path.join(git_repo.path, "scratch.txt"), "w") as f:
            f.write("x")

        situation = resolve_situation(GitClient(git_repo.path), "v1.0")
        assert situation.tags == ("v1.0",)
        assert situation.clean is False
