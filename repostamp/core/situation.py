"""
Situation resolver for repostamp.

Collects commit id, commit time, branch, tags and cleanliness for a
revision into one Situation value.
"""

from typing import List, Optional
import logging

from ..domain import NO_COMMIT, Situation, is_commit_id
from .revision import HEAD, resolve_revision
from .tag_index import TagIndex, build_tag_index

logger = logging.getLogger(__name__)


def current_branch(accessor) -> Optional[str]:
    """Checked out branch name, or None when HEAD is detached."""
    branch = accessor.current_branch()
    return None if is_commit_id(branch) else branch


def tags_at_revision(accessor, revision: str = HEAD, tag_index: Optional[TagIndex] = None) -> List[str]:
    """
    Short names of the tags pointing exactly at a revision.

    Args:
        accessor: Repository accessor
        revision: Revision to look up
        tag_index: Prebuilt index (built on demand if None)

    Returns:
        Tag names in tie-break order; empty for a repository without commits
    """
    commit = resolve_revision(accessor, revision)
    if commit is None:
        return []
    if tag_index is None:
        tag_index = build_tag_index(accessor)
    return [ref.short_name for ref in tag_index.tags_at(commit)]


def resolve_situation(
    accessor,
    revision: str = HEAD,
    tag_index: Optional[TagIndex] = None,
    root_directory: Optional[str] = None
) -> Situation:
    """
    Resolve the situation of a repository at a revision.

    A repository without commits is not an error: the situation then
    carries NO_COMMIT, timestamp 0 and no tags.

    Args:
        accessor: Repository accessor
        revision: Revision to describe (default: HEAD)
        tag_index: Prebuilt index (built on demand if None)
        root_directory: Work tree root to record in the result

    Returns:
        Situation value

    Raises:
        RevisionNotFoundError: a non-HEAD revision does not resolve
        RepositoryReadError: the repository could not be read
    """
    commit = resolve_revision(accessor, revision)

    if commit is None:
        logger.debug("No commits yet, reporting empty situation")
        commit_hash, timestamp, tags = NO_COMMIT, 0, ()
    else:
        if tag_index is None:
            tag_index = build_tag_index(accessor)
        commit_hash = commit
        timestamp = accessor.commit_timestamp(commit)
        tags = tuple(ref.short_name for ref in tag_index.tags_at(commit))

    # Only HEAD sits on a branch; any other revision is reported detached
    branch = current_branch(accessor) if revision == HEAD else None

    return Situation(
        hash=commit_hash,
        timestamp=timestamp,
        branch=branch,
        tags=tags,
        clean=accessor.status().clean,
        root_directory=root_directory
    )
