"""
High-level Python API for repostamp.

Provides one session over a repository, sharing a single tag index
between situation, tags and describe queries.

Example:
    import repostamp

    # Session over the current directory (uses config defaults)
    rs = repostamp.RepoStamp()

    # Or with explicit settings
    rs = repostamp.RepoStamp("/path/to/repo", tag_pattern=r"v\\d+\\.\\d+\\.\\d+")

    # Where are we?
    situation = rs.situation()
    print(situation.hash, situation.branch, situation.tags, situation.clean)

    # How far from the last release?
    description = rs.describe()
    print(description.format())    # e.g. "v1.2.0-3-g1a2b3c4"

    # Everything at once, for stamping build artifacts
    print(rs.stamp())

    # After creating tags or commits
    rs.refresh()
"""

from typing import Any, Dict, List, Optional, Pattern, Union
import logging

from .domain import Description, Situation
from .core import (
    HEAD,
    TagIndex,
    build_tag_index,
    describe,
    resolve_situation,
    tags_at_revision,
)
from .infra import GitClient
from .config import load_config

logger = logging.getLogger(__name__)


class RepoStamp:
    """
    High-level API for repostamp.

    The tag index is built on first use and kept for the life of the
    session; call refresh() after the repository changes.

    Example:
        rs = RepoStamp("/path/to/repo")
        if rs.situation().clean:
            print(rs.describe().format())
    """

    def __init__(
        self,
        path: str = ".",
        tag_pattern: Union[str, Pattern[str], None] = None,
        max_depth: Optional[int] = None,
        git_client: Optional[GitClient] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize RepoStamp.

        Args:
            path: Directory inside the repository
            tag_pattern: Default describe pattern (overrides config)
            max_depth: Default describe walk ceiling (overrides config)
            git_client: Repository accessor (creates a GitClient if None)
            config: Full config dict (loads from file if None)
        """
        self._config = config if config is not None else load_config()

        describe_config = self._config.get('describe', {})
        self.tag_pattern = tag_pattern if tag_pattern is not None else describe_config.get('tag_pattern', '.*')
        self.max_depth = max_depth if max_depth is not None else describe_config.get('max_depth')

        timeout = self._config.get('git', {}).get('timeout', 30)
        self.git = git_client or GitClient(path, timeout=timeout)
        self._tag_index: Optional[TagIndex] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Get the configuration dict."""
        return self._config

    @property
    def tag_index(self) -> TagIndex:
        """Tag index for this session, built on first access."""
        if self._tag_index is None:
            self._tag_index = build_tag_index(self.git)
        return self._tag_index

    def refresh(self) -> None:
        """Discard the tag index so the next query rebuilds it."""
        self._tag_index = None

    def situation(self, revision: str = HEAD) -> Situation:
        """Situation of the repository at a revision."""
        return resolve_situation(
            self.git,
            revision,
            tag_index=self.tag_index,
            root_directory=self.git.toplevel()
        )

    def tags(self, revision: str = HEAD) -> List[str]:
        """Short names of tags pointing at a revision, in tie-break order."""
        return tags_at_revision(self.git, revision, tag_index=self.tag_index)

    def describe(
        self,
        revision: str = HEAD,
        pattern: Union[str, Pattern[str], None] = None,
        max_depth: Optional[int] = None
    ) -> Description:
        """
        Nearest matching first-parent ancestor tag of a revision.

        Args:
            revision: Revision to start from
            pattern: Tag pattern (default: session pattern)
            max_depth: Walk ceiling (default: session ceiling)
        """
        return describe(
            self.git,
            revision,
            pattern if pattern is not None else self.tag_pattern,
            tag_index=self.tag_index,
            max_depth=max_depth if max_depth is not None else self.max_depth
        )

    def stamp(
        self,
        revision: str = HEAD,
        pattern: Union[str, Pattern[str], None] = None
    ) -> Dict[str, Any]:
        """
        Provenance record for stamping build artifacts.

        Combines the situation and the description, plus a
        git-describe style version string.
        """
        situation = self.situation(revision)
        description = self.describe(revision, pattern)
        describe_config = self._config.get('describe', {})

        dirty_suffix = None if situation.clean else describe_config.get('dirty_suffix', '-dirty')
        result = situation.to_dict()
        result['description'] = description.to_dict()
        result['version'] = description.format(
            abbrev=describe_config.get('abbrev', 7),
            dirty=dirty_suffix
        )
        return result

    def __repr__(self) -> str:
        return f"RepoStamp(path={self.git.path!r}, tag_pattern={self.tag_pattern!r})"


def situation(directory: str = ".", config: Optional[Dict[str, Any]] = None) -> Optional[Situation]:
    """
    Situation of HEAD for the repository containing a directory.

    Returns:
        Situation, or None if the directory is not inside a git work tree
    """
    if config is None:
        config = load_config()
    timeout = config.get('git', {}).get('timeout', 30)
    root = GitClient(directory, timeout=timeout).toplevel()
    if root is None:
        return None
    return RepoStamp(root, config=config).situation()
