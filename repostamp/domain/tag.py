"""
Tag reference domain object for repostamp.

A TagRef is a reference under refs/tags/ together with what it points at:
- Lightweight tags point directly at a commit
- Annotated tags point at a tag object which must be peeled to reach the commit

TagRefs are immutable value objects; several may point at the same commit.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

TAG_PREFIX = "refs/tags/"


def shorten_ref_name(name: str) -> str:
    """
    Strip the well-known namespace prefix from a reference name.

    Examples:
        shorten_ref_name("refs/tags/v1.0")      -> "v1.0"
        shorten_ref_name("refs/heads/main")     -> "main"
        shorten_ref_name("v1.0")                -> "v1.0"
    """
    for prefix in (TAG_PREFIX, "refs/heads/", "refs/remotes/"):
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


@dataclass(frozen=True)
class TagRef:
    """
    A tag reference and the object it resolves to.

    Attributes:
        name: Full reference name (e.g., "refs/tags/v1.0")
        target: Object id the reference points at directly
        annotated: True if target is a tag object rather than a commit
        peeled: Commit id reached by dereferencing an annotated tag, if known
        tagged_at: Tagger timestamp (seconds since epoch) for annotated tags
        updated_at: Time the reference itself was last written, if known
    """

    name: str
    target: str
    annotated: bool = False
    peeled: Optional[str] = None
    tagged_at: Optional[int] = None
    updated_at: Optional[int] = None

    @property
    def short_name(self) -> str:
        """Tag name without the refs/tags/ prefix."""
        return shorten_ref_name(self.name)

    @property
    def version_time(self) -> Optional[int]:
        """
        The newer of the reference update time and the tagger time.

        Returns None when neither is known, in which case ordering
        falls back to the tag name.
        """
        times = [t for t in (self.tagged_at, self.updated_at) if t is not None]
        return max(times) if times else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'short_name': self.short_name,
            'target': self.target,
            'annotated': self.annotated,
            'peeled': self.peeled,
            'tagged_at': self.tagged_at,
            'updated_at': self.updated_at,
        }

    def __str__(self) -> str:
        return self.short_name

    def __repr__(self) -> str:
        if self.annotated:
            return f"TagRef({self.name!r}, target={self.target!r}, peeled={self.peeled!r})"
        return f"TagRef({self.name!r}, target={self.target!r})"
