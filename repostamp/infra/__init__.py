"""
Infrastructure layer for repostamp.

Contains abstractions for external systems:
- GitClient: Git command execution (the repository accessor)

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient, WorkingTreeStatus

__all__ = [
    'GitClient',
    'WorkingTreeStatus',
]
