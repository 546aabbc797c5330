"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

_GITHUB_REPO_RE = re.compile(
    r"^(?:https?://)?(?:www\.)?github\.com/"
    r"(?P<owner>[A-Za-z0-9\-_.]+)/(?P<name>[A-Za-z0-9\-_.]+?)(?:\.git)?"
    r"(?:[/?#].*)?$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Owner / name pair of a GitHub repository.

    Extracted from a catalog entry's free-text repository field, e.g.
    ``https://github.com/psf/requests/tree/main``.  Only GitHub URLs are
    recognised; anything else (other hosts, bare ``owner/name`` strings,
    placeholders such as ``n/a``) has no ref.
    """

    owner: str
    name: str

    @classmethod
    def parse(cls, reference: str | None) -> RepositoryRef | None:
        """Return the ref for *reference*, or ``None`` if it is not a GitHub repo URL."""
        if not reference:
            return None
        match = _GITHUB_REPO_RE.match(reference.strip())
        if not match:
            return None
        return cls(owner=match["owner"], name=match["name"])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
