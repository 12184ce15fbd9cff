"""
Reverse tag index for repostamp.

Maps each commit to the tag references pointing at it, peeling
annotated tags to the commit they describe.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple
import logging

from ..domain import TagRef
from .ordering import sort_tags

logger = logging.getLogger(__name__)


class TagIndex(Mapping[str, Tuple[TagRef, ...]]):
    """
    Read-only mapping from commit id to the tags pointing at it.

    Built once from a repository snapshot; rebuild to pick up changes.

    Example:
        index = build_tag_index(GitClient("."))
        for ref in index.tags_at(head):
            print(ref.short_name)
    """

    def __init__(self, entries: Mapping[str, Tuple[TagRef, ...]]):
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, commit: str) -> Tuple[TagRef, ...]:
        return self._entries[commit]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def tags_at(self, commit: str) -> List[TagRef]:
        """Tags pointing at a commit, in tie-break order (empty if none)."""
        return sort_tags(self._entries.get(commit, ()))

    def tag_count(self) -> int:
        """Total number of tag references in the index."""
        return sum(len(refs) for refs in self._entries.values())

    def __repr__(self) -> str:
        return f"TagIndex(commits={len(self)}, tags={self.tag_count()})"


def build_tag_index(accessor) -> TagIndex:
    """
    Build the reverse tag index for a repository.

    Args:
        accessor: Repository accessor (GitClient or compatible)

    Returns:
        TagIndex keyed by effective target commit

    Raises:
        RepositoryReadError: a tag could not be listed or peeled;
            no partial index is returned
    """
    grouped: Dict[str, List[TagRef]] = defaultdict(list)

    for ref in accessor.list_tag_refs():
        peeled = accessor.peel(ref)
        grouped[peeled if peeled is not None else ref.target].append(ref)

    index = TagIndex({commit: tuple(refs) for commit, refs in grouped.items()})
    logger.debug(f"Indexed {index.tag_count()} tags on {len(index)} commits")
    return index
