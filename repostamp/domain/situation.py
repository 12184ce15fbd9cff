"""
Situation and Description domain objects for repostamp.

Situation is a snapshot of where a repository stands at a revision.
Description names the nearest matching ancestor tag and how far away it is.
Both are immutable and serializable for JSONL output.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple, Dict, Any
import json

from .commit import NO_COMMIT, short_id
from .tag import shorten_ref_name


@dataclass(frozen=True)
class Situation:
    """
    Immutable snapshot of a repository position.

    Attributes:
        hash: Commit id of the resolved revision, or NO_COMMIT
        timestamp: Commit time in seconds since the UTC epoch (0 without commits)
        branch: Current branch name, or None when detached
        tags: Short names of tags pointing exactly at the revision, in tie-break order
        clean: True if the working tree and index have no uncommitted changes
            relative to HEAD. This describes the checkout, not the requested
            revision, so an older revision reads as dirty when HEAD is.
        root_directory: Work tree root, when known

    Example:
        situation = resolve_situation(GitClient("/path/to/repo"))
        if situation.clean and situation.tags:
            print(f"release build of {situation.tags[0]}")
    """

    hash: str = NO_COMMIT
    timestamp: int = 0
    branch: Optional[str] = None
    tags: Tuple[str, ...] = ()
    clean: bool = True
    root_directory: Optional[str] = None

    @property
    def detached(self) -> bool:
        """True when the revision is not on a named branch."""
        return self.branch is None

    @property
    def has_commit(self) -> bool:
        return self.hash != NO_COMMIT

    @property
    def committed_at(self) -> datetime:
        """Commit time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'hash': self.hash,
            'timestamp': self.timestamp,
            'committed_at': self.committed_at.isoformat(),
            'branch': self.branch,
            'detached': self.detached,
            'tags': list(self.tags),
            'clean': self.clean,
        }
        if self.root_directory is not None:
            result['root_directory'] = self.root_directory
        return result

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        where = self.branch or "(detached)"
        return f"{short_id(self.hash)} on {where}"


@dataclass(frozen=True)
class Description:
    """
    Nearest matching tag on the first-parent chain of a revision.

    Attributes:
        hash: Commit id of the starting revision, or NO_COMMIT
        tag: Full reference name of the matched tag, or None
        depth: Commits between the start and the tagged commit (0 = tag at start)

    Depth is only meaningful together with a tag; without one it counts
    the commits walked minus one.
    """

    hash: str = NO_COMMIT
    tag: Optional[str] = None
    depth: int = 0

    @property
    def tag_name(self) -> Optional[str]:
        """Short name of the matched tag."""
        return shorten_ref_name(self.tag) if self.tag else None

    @property
    def exact(self) -> bool:
        """True when the matched tag points at the starting revision."""
        return self.tag is not None and self.depth == 0

    def format(self, abbrev: int = 7, long: bool = False, dirty: Optional[str] = None) -> str:
        """
        Render in the style of `git describe`.

        Examples:
            "v1.0"              tag at the revision
            "v1.0-3-g1a2b3c4"   three commits after v1.0
            "1a2b3c4"           no matching tag

        Args:
            abbrev: Length of the abbreviated commit id
            long: Always include depth and commit id, even for an exact match
            dirty: Suffix to append (e.g. "-dirty"), or None
        """
        if self.tag is None:
            text = short_id(self.hash, abbrev)
        elif self.depth == 0 and not long:
            text = self.tag_name
        else:
            text = f"{self.tag_name}-{self.depth}-g{short_id(self.hash, abbrev)}"
        if dirty:
            text += dirty
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'hash': self.hash,
            'tag': self.tag,
            'tag_name': self.tag_name,
            'depth': self.depth,
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        return self.format()
