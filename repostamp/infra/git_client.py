"""
Git client infrastructure for repostamp.

Provides a clean abstraction over git command execution.
All repository reads go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from the describe and situation logic
"""

import os
import subprocess
from dataclasses import dataclass
from typing import Generator, List, Optional
from pathlib import Path
import logging

from ..domain import TagRef, TAG_PREFIX
from ..exit_codes import RepositoryReadError

logger = logging.getLogger(__name__)

# for-each-ref fields, NUL separated
_TAG_FORMAT = "%00".join([
    "%(refname)",
    "%(objectname)",
    "%(objecttype)",
    "%(*objectname)",
    "%(*objecttype)",
    "%(taggerdate:unix)",
])


@dataclass(frozen=True)
class WorkingTreeStatus:
    """Result of git status command."""
    clean: bool = True
    untracked_files: int = 0
    staged_files: int = 0
    modified_files: int = 0


class GitClient:
    """
    Read-only access to one git repository through the git executable.

    Example:
        client = GitClient("/path/to/repo")
        head = client.resolve("HEAD")
        if head is None:
            print("No commits yet")
    """

    def __init__(self, path: str = ".", timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            path: Directory inside the repository
            timeout: Command timeout in seconds (default: 30)
        """
        self.path = str(path)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"GitClient(path={self.path!r})"

    def _run(self, args: List[str], operation: str, target: Optional[str] = None) -> subprocess.CompletedProcess:
        """
        Run a git command.

        Args:
            args: Git arguments (e.g., ['rev-parse', 'HEAD'])
            operation: What the command does, for error messages
            target: Reference or commit the command is about

        Returns:
            The completed process; callers inspect returncode

        Raises:
            RepositoryReadError: git could not be started or timed out
        """
        cmd = ['git'] + args
        logger.debug(f"Running: {' '.join(cmd)} (cwd={self.path})")
        try:
            return subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            raise RepositoryReadError(operation, target, f"timed out after {self.timeout}s")
        except OSError as e:
            raise RepositoryReadError(operation, target, str(e))

    def _read(self, args: List[str], operation: str, target: Optional[str] = None) -> str:
        """Run a git command that must succeed and return its stripped stdout."""
        result = self._run(args, operation, target)
        if result.returncode != 0:
            raise RepositoryReadError(operation, target, result.stderr.strip() or f"exit code {result.returncode}")
        return result.stdout.strip()

    def toplevel(self) -> Optional[str]:
        """
        Get the work tree root.

        Returns:
            Absolute path of the work tree, or None if the path is not
            inside a git work tree (including bare repositories)
        """
        if not os.path.isdir(self.path):
            return None
        result = self._run(['rev-parse', '--show-toplevel'], 'locate work tree', self.path)
        if result.returncode != 0 or not result.stdout.strip():
            return None
        return result.stdout.strip()

    def resolve(self, revision: str) -> Optional[str]:
        """
        Resolve a revision to a commit id.

        Args:
            revision: Any revision git understands (HEAD, branch, tag, id)

        Returns:
            Full commit id, or None if the revision does not resolve
            (including HEAD in a repository without commits)
        """
        if not revision or revision.startswith('-'):
            return None
        result = self._run(['rev-parse', '--verify', '--quiet', f'{revision}^{{commit}}'],
                           'resolve revision', revision)
        if result.returncode == 0:
            return result.stdout.strip() or None
        if result.returncode == 1:
            return None
        raise RepositoryReadError('resolve revision', revision,
                                  result.stderr.strip() or f"exit code {result.returncode}")

    def parents_of(self, commit: str) -> List[str]:
        """
        Get the parents of a commit, first parent first.

        Returns:
            Parent commit ids; empty for a root commit
        """
        output = self._read(['rev-list', '--parents', '-n', '1', commit], 'read parents of', commit)
        ids = output.split()
        if not ids:
            raise RepositoryReadError('read parents of', commit, 'no such commit')
        return ids[1:]

    def first_parent_chain(self, start: str) -> Generator[str, None, None]:
        """
        Stream first-parent ancestry of a commit, start commit first.

        One `git rev-list --first-parent` process serves the whole walk.
        Closing the generator early stops the process.

        Raises:
            RepositoryReadError: git could not be started, timed out,
                or failed to read part of the history
        """
        cmd = ['git', 'rev-list', '--first-parent', start]
        logger.debug(f"Streaming: {' '.join(cmd)} (cwd={self.path})")
        try:
            proc = subprocess.Popen(
                cmd,
                cwd=self.path,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True
            )
        except OSError as e:
            raise RepositoryReadError('walk first parents of', start, str(e))

        try:
            for line in proc.stdout:
                commit = line.strip()
                if commit:
                    yield commit

            stderr = proc.stderr.read()
            try:
                returncode = proc.wait(timeout=self.timeout)
            except subprocess.TimeoutExpired:
                raise RepositoryReadError('walk first parents of', start, f"timed out after {self.timeout}s")
            if returncode != 0:
                raise RepositoryReadError('walk first parents of', start,
                                          stderr.strip() or f"exit code {returncode}")
        finally:
            if proc.poll() is None:
                proc.kill()
            proc.communicate()

    def commit_timestamp(self, commit: str) -> int:
        """Get the committer timestamp of a commit in seconds since the epoch."""
        output = self._read(['show', '-s', '--format=%ct', commit], 'read commit time of', commit)
        try:
            return int(output)
        except ValueError:
            raise RepositoryReadError('read commit time of', commit, f"unexpected output {output!r}")

    def current_branch(self) -> str:
        """
        Get the checked out branch name.

        Returns:
            Short branch name, or the raw HEAD commit id when detached.
            An unborn branch (no commits yet) still reports its name.
        """
        result = self._run(['symbolic-ref', '--quiet', '--short', 'HEAD'], 'read current branch')
        if result.returncode == 0:
            return result.stdout.strip()
        if result.returncode != 1:
            raise RepositoryReadError('read current branch', 'HEAD',
                                      result.stderr.strip() or f"exit code {result.returncode}")
        return self._read(['rev-parse', 'HEAD'], 'read detached HEAD', 'HEAD')

    def _git_common_dir(self) -> Path:
        output = self._read(['rev-parse', '--git-common-dir'], 'locate git directory')
        common_dir = Path(output)
        if not common_dir.is_absolute():
            common_dir = Path(self.path) / common_dir
        return common_dir

    def list_tag_refs(self) -> List[TagRef]:
        """
        List all references under refs/tags/.

        The peeled commit of annotated tags is filled in when git reports
        it directly; tags of tags are left for peel() to resolve.

        Returns:
            TagRef objects in refname order
        """
        output = self._read(['for-each-ref', f'--format={_TAG_FORMAT}', TAG_PREFIX.rstrip('/')],
                            'list tags')
        if not output:
            return []

        common_dir = self._git_common_dir()
        refs = []
        for line in output.split('\n'):
            if not line:
                continue
            parts = line.split('\0')
            if len(parts) != 6:
                raise RepositoryReadError('list tags', None, f"unexpected line {line!r}")

            name, target, obj_type, deref_id, deref_type, tagger_date = parts
            annotated = obj_type == 'tag'
            peeled = deref_id if annotated and deref_type != 'tag' and deref_id else None
            tagged_at = int(tagger_date) if tagger_date.isdigit() else None

            # Packed refs carry no write time
            updated_at = None
            loose_ref = common_dir / name
            if loose_ref.is_file():
                updated_at = int(loose_ref.stat().st_mtime)

            refs.append(TagRef(
                name=name,
                target=target,
                annotated=annotated,
                peeled=peeled,
                tagged_at=tagged_at,
                updated_at=updated_at
            ))

        logger.debug(f"Listed {len(refs)} tag references in {self.path}")
        return refs

    def peel(self, ref: TagRef) -> Optional[str]:
        """
        Dereference an annotated tag to the object it finally describes.

        Returns:
            Peeled object id, or None for a lightweight tag

        Raises:
            RepositoryReadError: the tag object could not be read
        """
        if not ref.annotated:
            return None
        if ref.peeled:
            return ref.peeled
        return self._read(['rev-parse', '--verify', f'{ref.name}^{{}}'], 'peel tag', ref.name)

    def status(self) -> WorkingTreeStatus:
        """
        Get working tree status.

        Untracked files count as uncommitted changes.
        """
        result = self._run(['status', '--porcelain'], 'read working tree status', self.path)
        if result.returncode != 0:
            raise RepositoryReadError('read working tree status', self.path,
                                      result.stderr.strip() or f"exit code {result.returncode}")

        # Leading spaces are significant in porcelain output
        lines = [line for line in result.stdout.split('\n') if line.strip()]
        if not lines:
            return WorkingTreeStatus(clean=True)

        return WorkingTreeStatus(
            clean=False,
            untracked_files=sum(1 for line in lines if line.startswith('??')),
            staged_files=sum(1 for line in lines if line[0] in 'MADRC'),
            modified_files=sum(1 for line in lines if len(line) > 1 and line[1] in 'MADRC')
        )
