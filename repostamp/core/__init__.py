"""
Core operations for repostamp.

- build_tag_index: reverse mapping from commit to tags (annotated tags peeled)
- resolve_situation: hash, time, branch, tags and cleanliness of a revision
- describe: nearest matching first-parent ancestor tag and its distance
- compare_tags / sort_tags: the tie-break order shared by all of the above

Every operation takes a repository accessor (see infra.GitClient) and
returns immutable domain values.
"""

from .ordering import compare_tags, sort_tags
from .tag_index import TagIndex, build_tag_index
from .revision import HEAD, resolve_revision
from .situation import resolve_situation, tags_at_revision, current_branch
from .description import (
    describe, first_parent_chain, walk_first_parents, compile_tag_pattern, DEFAULT_TAG_PATTERN
)

__all__ = [
    'compare_tags',
    'sort_tags',
    'TagIndex',
    'build_tag_index',
    'HEAD',
    'resolve_revision',
    'resolve_situation',
    'tags_at_revision',
    'current_branch',
    'describe',
    'first_parent_chain',
    'walk_first_parents',
    'compile_tag_pattern',
    'DEFAULT_TAG_PATTERN',
]
