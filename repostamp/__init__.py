"""
repostamp - Repository provenance for build artifacts.

repostamp derives a stable snapshot of where a git repository stands:
commit id, commit time, branch, tags at the revision, working tree
cleanliness, and a description (nearest matching first-parent ancestor
tag plus distance).

Quick Start:
    import repostamp

    # Session over a repository
    rs = repostamp.RepoStamp("~/projects/app")

    situation = rs.situation()
    print(situation.hash, situation.branch, situation.tags, situation.clean)

    description = rs.describe(pattern=r"v\\d+\\.\\d+\\.\\d+")
    print(description.tag_name, description.depth)

    # One-shot convenience (None outside a git work tree)
    situation = repostamp.situation(".")

    # Low-level operations over any accessor
    from repostamp import GitClient, build_tag_index, describe
    git = GitClient(".")
    index = build_tag_index(git)
    describe(git, "HEAD", r"release-.*", tag_index=index)

Domain Objects:
    Situation - hash, timestamp, branch, tags, clean
    Description - hash, matched tag, depth
    TagRef - tag reference with its peeled commit
    NO_COMMIT - hash reported when there are no commits yet
"""

__version__ = "0.1.0"

# High-level API
from .api import RepoStamp, situation

# Domain objects
from .domain import (
    NO_COMMIT,
    Situation,
    Description,
    TagRef,
    is_commit_id,
)

# Core operations
from .core import (
    TagIndex,
    build_tag_index,
    compare_tags,
    sort_tags,
    resolve_situation,
    tags_at_revision,
    describe,
)

# Repository accessor
from .infra import GitClient, WorkingTreeStatus

# Errors
from .exit_codes import (
    CommandError,
    RepositoryReadError,
    RevisionNotFoundError,
    NotARepositoryError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # High-level API
    "RepoStamp",
    "situation",
    # Domain objects
    "NO_COMMIT",
    "Situation",
    "Description",
    "TagRef",
    "is_commit_id",
    # Core operations
    "TagIndex",
    "build_tag_index",
    "compare_tags",
    "sort_tags",
    "resolve_situation",
    "tags_at_revision",
    "describe",
    # Accessor
    "GitClient",
    "WorkingTreeStatus",
    # Errors
    "CommandError",
    "RepositoryReadError",
    "RevisionNotFoundError",
    "NotARepositoryError",
    # Configuration
    "load_config",
    "save_config",
]
