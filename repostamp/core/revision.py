"""
Revision resolution shared by the situation and describe operations.
"""

from typing import Optional

from ..exit_codes import RevisionNotFoundError

HEAD = "HEAD"


def resolve_revision(accessor, revision: str = HEAD) -> Optional[str]:
    """
    Resolve a revision, tolerating a repository without commits.

    Args:
        accessor: Repository accessor
        revision: Revision to resolve

    Returns:
        Commit id, or None when the repository has no commits yet

    Raises:
        RevisionNotFoundError: the repository has history but the
            revision does not name a commit in it
    """
    commit = accessor.resolve(revision)
    if commit is not None:
        return commit

    if revision == HEAD or accessor.resolve(HEAD) is None:
        return None

    raise RevisionNotFoundError(revision)
