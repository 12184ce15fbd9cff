"""
Deterministic ordering of tags for repostamp.

When several tags are candidates (same commit, or same describe step)
the first one in this order wins:
1. Newer version time first, when both tags have one
2. Ascending short name otherwise, and to break equal times

The comparison only looks at tag metadata, never at a repository.
"""

from functools import cmp_to_key
from typing import Iterable, List, Optional, Protocol


class TagMetadata(Protocol):
    """Anything carrying the two ordering keys (TagRef does)."""

    @property
    def version_time(self) -> Optional[int]: ...

    @property
    def short_name(self) -> str: ...


def compare_tags(a: TagMetadata, b: TagMetadata) -> int:
    """
    Compare two tags for sorting.

    Returns:
        Negative if a sorts first, positive if b sorts first, 0 if equal
    """
    a_time, b_time = a.version_time, b.version_time
    if a_time is not None and b_time is not None:
        if a_time != b_time:
            return -1 if a_time > b_time else 1
    elif a_time is not None:
        return -1
    elif b_time is not None:
        return 1

    if a.short_name != b.short_name:
        return -1 if a.short_name < b.short_name else 1
    return 0


def sort_tags(tags: Iterable[TagMetadata]) -> List[TagMetadata]:
    """Return tags sorted by compare_tags."""
    return sorted(tags, key=cmp_to_key(compare_tags))
