"""
Commit identity helpers for repostamp.

Commits are identified by their full hexadecimal object name (40
characters, or 64 in SHA-256 repositories).
Identities are plain strings; equality is by value.
"""

import re

# Identity reported when a repository has no commits yet.
NO_COMMIT = "0" * 40

# SHA-1 or SHA-256 object names
_COMMIT_ID_RE = re.compile(r'[0-9a-f]{40}|[0-9a-f]{64}')


def is_commit_id(value: str) -> bool:
    """
    Check whether a string is a raw commit identity.

    Used to tell a detached HEAD (reported as a raw id) apart from
    a symbolic branch name.

    Args:
        value: Candidate string

    Returns:
        True if value is a full lowercase hexadecimal object name
        (40 characters for SHA-1, 64 for SHA-256 repositories)
    """
    if not value:
        return False
    return _COMMIT_ID_RE.fullmatch(value) is not None


def short_id(commit: str, length: int = 7) -> str:
    """Abbreviate a commit identity."""
    return commit[:length]
