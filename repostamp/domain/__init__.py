"""
Domain layer for repostamp.

Contains pure value objects with no I/O or side effects:
- Commit identity helpers and the NO_COMMIT sentinel
- TagRef: A tag reference with its dereferenced commit
- Situation: Where a repository currently stands
- Description: Nearest matching ancestor tag plus distance

These objects are immutable and provide serialization
methods for JSONL output.
"""

from .commit import NO_COMMIT, is_commit_id, short_id
from .tag import TagRef, TAG_PREFIX, shorten_ref_name
from .situation import Situation, Description

__all__ = [
    'NO_COMMIT',
    'is_commit_id',
    'short_id',
    'TagRef',
    'TAG_PREFIX',
    'shorten_ref_name',
    'Situation',
    'Description',
]
