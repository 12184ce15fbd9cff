"""Tests for the domain layer."""

import json
from dataclasses import FrozenInstanceError

import pytest

from repostamp.domain import (
    NO_COMMIT,
    Description,
    Situation,
    TagRef,
    is_commit_id,
    short_id,
    shorten_ref_name,
)

COMMIT = "1a2b3c4d5e6f7081928374655647382910abcdef"


class TestCommitIds:
    """Tests for commit identity helpers."""

    def test_no_commit_is_forty_zeros(self):
        assert NO_COMMIT == "0" * 40
        assert is_commit_id(NO_COMMIT)

    def test_is_commit_id(self):
        assert is_commit_id(COMMIT)
        assert not is_commit_id("main")
        assert not is_commit_id(COMMIT[:39])
        assert not is_commit_id(COMMIT.upper())
        assert not is_commit_id("")

    def test_is_commit_id_sha256(self):
        assert is_commit_id("ab" * 32)
        assert not is_commit_id("ab" * 24)
        assert not is_commit_id("ab" * 33)

    def test_short_id(self):
        assert short_id(COMMIT) == "1a2b3c4"
        assert short_id(COMMIT, 12) == "1a2b3c4d5e6f"


class TestTagRef:
    """Tests for TagRef domain object."""

    def test_short_name(self):
        ref = TagRef("refs/tags/release/1.0", COMMIT)
        assert ref.short_name == "release/1.0"
        assert str(ref) == "release/1.0"

    def test_shorten_ref_name(self):
        assert shorten_ref_name("refs/tags/v1.0") == "v1.0"
        assert shorten_ref_name("refs/heads/main") == "main"
        assert shorten_ref_name("refs/remotes/origin/main") == "origin/main"
        assert shorten_ref_name("v1.0") == "v1.0"

    def test_version_time_takes_newer(self):
        ref = TagRef("refs/tags/v1", COMMIT, annotated=True, tagged_at=300, updated_at=200)
        assert ref.version_time == 300
        ref = TagRef("refs/tags/v1", COMMIT, annotated=True, tagged_at=100, updated_at=200)
        assert ref.version_time == 200

    def test_version_time_unknown(self):
        assert TagRef("refs/tags/v1", COMMIT).version_time is None

    def test_version_time_zero_is_known(self):
        assert TagRef("refs/tags/v1", COMMIT, updated_at=0).version_time == 0

    def test_immutable(self):
        ref = TagRef("refs/tags/v1", COMMIT)
        with pytest.raises(FrozenInstanceError):
            ref.name = "refs/tags/v2"

    def test_value_equality(self):
        assert TagRef("refs/tags/v1", COMMIT) == TagRef("refs/tags/v1", COMMIT)
        assert len({TagRef("refs/tags/v1", COMMIT), TagRef("refs/tags/v1", COMMIT)}) == 1

    def test_to_dict(self):
        data = TagRef("refs/tags/v1", COMMIT, annotated=True, peeled=NO_COMMIT).to_dict()
        assert data['short_name'] == "v1"
        assert data['annotated'] is True
        assert data['peeled'] == NO_COMMIT


class TestSituation:
    """Tests for Situation domain object."""

    def test_defaults_describe_empty_repository(self):
        situation = Situation()
        assert situation.hash == NO_COMMIT
        assert situation.timestamp == 0
        assert situation.tags == ()
        assert situation.clean
        assert not situation.has_commit

    def test_to_dict(self):
        situation = Situation(COMMIT, 1_700_000_000, "main", ("v1", "latest"), False)
        data = situation.to_dict()
        assert data == {
            'hash': COMMIT,
            'timestamp': 1_700_000_000,
            'committed_at': "2023-11-14T22:13:20+00:00",
            'branch': "main",
            'detached': False,
            'tags': ["v1", "latest"],
            'clean': False,
        }

    def test_to_dict_includes_root_when_known(self):
        data = Situation(COMMIT, root_directory="/src/app").to_dict()
        assert data['root_directory'] == "/src/app"

    def test_to_jsonl_single_line(self):
        line = Situation(COMMIT, 5, None).to_jsonl()
        assert "\n" not in line
        assert json.loads(line)['detached'] is True

    def test_str(self):
        assert str(Situation(COMMIT, branch="main")) == "1a2b3c4 on main"
        assert str(Situation(COMMIT)) == "1a2b3c4 on (detached)"


class TestDescription:
    """Tests for Description domain object."""

    def test_exact_match(self):
        description = Description(COMMIT, "refs/tags/v1.0", 0)
        assert description.exact
        assert description.tag_name == "v1.0"
        assert description.format() == "v1.0"

    def test_exact_match_long(self):
        description = Description(COMMIT, "refs/tags/v1.0", 0)
        assert description.format(long=True) == "v1.0-0-g1a2b3c4"

    def test_distance(self):
        description = Description(COMMIT, "refs/tags/v1.0", 3)
        assert not description.exact
        assert description.format() == "v1.0-3-g1a2b3c4"
        assert description.format(abbrev=10) == "v1.0-3-g1a2b3c4d5e"

    def test_no_tag(self):
        description = Description(COMMIT, None, 12)
        assert description.tag_name is None
        assert not description.exact
        assert description.format() == "1a2b3c4"

    def test_dirty_suffix(self):
        description = Description(COMMIT, "refs/tags/v1.0", 0)
        assert description.format(dirty="-dirty") == "v1.0-dirty"

    def test_to_dict(self):
        assert Description(COMMIT, "refs/tags/v2", 1).to_dict() == {
            'hash': COMMIT,
            'tag': "refs/tags/v2",
            'tag_name': "v2",
            'depth': 1,
        }

    def test_equality(self):
        assert Description(COMMIT, None, 0) == Description(COMMIT, None, 0)
        assert Description(COMMIT, None, 0) != Description(COMMIT, None, 1)
