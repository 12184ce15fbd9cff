"""
Describe engine for repostamp.

Finds the nearest tag matching a pattern on the first-parent chain of a
revision, and how many commits lie between the two. Merged side branches
are never followed, so the distance reads as "commits since the last
release tag on this line of history".
"""

from contextlib import closing
from typing import Generator, Iterator, Optional, Pattern, Union
import logging
import re

from ..domain import NO_COMMIT, Description, TagRef
from .revision import HEAD, resolve_revision
from .tag_index import TagIndex, build_tag_index

logger = logging.getLogger(__name__)

DEFAULT_TAG_PATTERN = ".*"


def compile_tag_pattern(pattern: Union[str, Pattern[str], None]) -> Pattern[str]:
    """
    Compile a tag name pattern.

    Raises:
        ValueError: the pattern is not a valid regular expression
    """
    if pattern is None:
        pattern = DEFAULT_TAG_PATTERN
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid tag pattern {pattern!r}: {e}") from e


def first_parent_chain(accessor, start: str) -> Generator[str, None, None]:
    """
    Walk first-parent ancestry, starting commit first.

    Only parentage is read; commit contents are never loaded.
    """
    commit: Optional[str] = start
    while commit is not None:
        yield commit
        parents = accessor.parents_of(commit)
        commit = parents[0] if parents else None


def walk_first_parents(accessor, start: str) -> Iterator[str]:
    """
    First-parent ancestry through the accessor's own streaming walk when it
    has one, otherwise one parents_of() read per commit.
    """
    walk = getattr(accessor, 'first_parent_chain', None)
    if callable(walk):
        return walk(start)
    return first_parent_chain(accessor, start)


def matching_tag(tag_index: TagIndex, commit: str, pattern: Pattern[str]) -> Optional[TagRef]:
    """First tag at a commit, in tie-break order, whose short name fully matches pattern."""
    for ref in tag_index.tags_at(commit):
        if pattern.fullmatch(ref.short_name):
            return ref
    return None


def describe(
    accessor,
    revision: str = HEAD,
    pattern: Union[str, Pattern[str], None] = DEFAULT_TAG_PATTERN,
    tag_index: Optional[TagIndex] = None,
    max_depth: Optional[int] = None
) -> Description:
    """
    Describe a revision by its nearest matching ancestor tag.

    Args:
        accessor: Repository accessor
        revision: Revision to start from (default: HEAD)
        pattern: Regular expression the whole short tag name must match
        tag_index: Prebuilt index (built on demand if None)
        max_depth: Stop looking after the commit at this depth and
            report no match at depth max_depth

    Returns:
        Description of the revision. Without commits: NO_COMMIT, no tag, depth 0.

    Raises:
        ValueError: invalid pattern or negative max_depth
        RevisionNotFoundError: a non-HEAD revision does not resolve
        RepositoryReadError: parentage of a commit could not be read
    """
    tag_pattern = compile_tag_pattern(pattern)
    if max_depth is not None and max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    start = resolve_revision(accessor, revision)
    if start is None:
        return Description(NO_COMMIT, None, 0)

    if tag_index is None:
        tag_index = build_tag_index(accessor)

    depth = -1
    with closing(walk_first_parents(accessor, start)) as chain:
        for commit in chain:
            depth += 1

            match = matching_tag(tag_index, commit, tag_pattern)
            if match is not None:
                logger.debug(f"Matched {match.name} at depth {depth}")
                return Description(start, match.name, depth)

            if max_depth is not None and depth >= max_depth:
                logger.debug(f"No tag matching {tag_pattern.pattern!r} within {max_depth} commits")
                return Description(start, None, max_depth)

    return Description(start, None, depth)
