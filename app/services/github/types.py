"""Data types for GitHub content responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GitRef:
    """Single entry of a git ref advertisement."""

    name: str  # "HEAD", "refs/heads/main", ...
    sha: str
    symref: str | None = None  # Target ref for HEAD, e.g. "refs/heads/main"


@dataclass(frozen=True)
class RawFile:
    """Undecoded file body, passed through to the client as-is."""

    path: str
    content: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)
