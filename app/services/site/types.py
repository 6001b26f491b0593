"""Data types for the site rendering pipeline."""

import posixpath
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from app.services.github.types import GitRef, RawFile


class ContentSource(Protocol):
    """What the pipeline needs from a repository host."""

    async def fetch_references(self, owner: str, repo: str) -> list[GitRef]: ...

    async def fetch_file_content(self, owner: str, repo: str, sha: str, path: str) -> str: ...

    async def fetch_file_response(
        self, owner: str, repo: str, sha: str, path: str
    ) -> RawFile: ...

    async def list_files(self, owner: str, repo: str, sha: str, prefix: str) -> list[str]: ...


@dataclass(frozen=True)
class RepoSource:
    """Repository a page is rendered from."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def profile_picture_url(self) -> str:
        return f"https://github.com/{self.owner}.png"


@dataclass(frozen=True)
class Revision:
    """Commit every fetch of one request is pinned to."""

    sha: str
    ref_name: str  # e.g. "refs/heads/main", or "HEAD" when the target is unknown


@dataclass(frozen=True)
class ContentEntry:
    """One child of a directory listing."""

    path: str  # Repository-relative, without trailing "/"
    is_directory: bool = False

    @classmethod
    def from_listing_path(cls, listed: str) -> "ContentEntry":
        """Build from a listing path, where a trailing "/" marks a directory."""
        if listed.endswith("/"):
            return cls(path=listed.rstrip("/"), is_directory=True)
        return cls(path=listed)

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def slug(self) -> str:
        """URL path for the entry: the file path without its .md suffix."""
        return self.path.removesuffix(".md")


@dataclass
class ArticleMetadata:
    """Title and optional publication date of a Markdown document."""

    title: str
    date: datetime | None = None

    @property
    def sort_key(self) -> int | str:
        """Milliseconds since the epoch when dated, else the title."""
        if self.date is not None:
            return int(self.date.timestamp() * 1000)
        return self.title

    @property
    def date_label(self) -> str | None:
        """Date formatted like "June 03, 2021"."""
        if self.date is None:
            return None
        return self.date.strftime("%B %d, %Y")


@dataclass
class RenderedMarkdown:
    """HTML body plus whatever front matter preceded it."""

    html: str
    front_matter: dict = field(default_factory=dict)


# ─────────────────────────────────────────────────────────────
# Located content: what a request path resolves to
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Asset:
    """Image served byte-for-byte."""

    path: str
    file: RawFile


@dataclass(frozen=True)
class Document:
    """A single Markdown document."""

    path: str
    markdown: str
    is_root: bool = False


@dataclass(frozen=True)
class Directory:
    """A directory rendered as a list of articles."""

    path: str
    entries: list[ContentEntry]

    @property
    def files(self) -> list[ContentEntry]:
        return [entry for entry in self.entries if not entry.is_directory]

    @property
    def subdirectories(self) -> list[ContentEntry]:
        return [entry for entry in self.entries if entry.is_directory]


@dataclass(frozen=True)
class NotFound:
    """Nothing at the path: no README, no sibling .md, no listing."""

    path: str


Located = Asset | Document | Directory | NotFound


@dataclass(frozen=True)
class RenderedPage:
    """Page regions plus the composed document."""

    header: str
    main: str
    footer: str
    title: str
    document: str
