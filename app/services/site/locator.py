"""
Decide what a request path denotes and fetch it.

Resolution order for a non-root path:
1. Image extension -> Asset (raw bytes, errors propagate)
2. <path>/README.md -> Document
3. <path>.md -> Document
4. Listing of <path>/ -> Directory
5. Otherwise -> NotFound

The root only ever looks for README.md.
"""

import logging

from app.services.github.constants import is_image_path
from app.services.github.exceptions import GitHubAPIError
from app.services.site.types import (
    Asset,
    ContentEntry,
    ContentSource,
    Directory,
    Document,
    Located,
    NotFound,
    RepoSource,
    Revision,
)

logger = logging.getLogger(__name__)

ROOT_README_PLACEHOLDER = "Add a `README.md` file to your repo to create a home page."

DEFAULT_LISTING_LIMIT = 500


def normalize_path(path: str) -> str:
    """Strip surrounding slashes so "" and "/" both mean the root."""
    return path.strip("/")


async def fetch_text_or_none(
    source: ContentSource,
    repo_source: RepoSource,
    revision: Revision,
    path: str,
) -> str | None:
    """Fetch a text file, returning None when it can't be had."""
    try:
        return await source.fetch_file_content(
            repo_source.owner, repo_source.repo, revision.sha, path
        )
    except GitHubAPIError as e:
        if not e.is_not_found:
            logger.warning(f"Failed to fetch {repo_source.full_name}/{path}: {e.message}")
        return None


async def fetch_asset(
    source: ContentSource,
    repo_source: RepoSource,
    revision: Revision,
    path: str,
) -> Asset:
    """
    Fetch an image for pass-through serving.

    Raises:
        GitHubAPIError: Unchanged from the source, e.g. 404 for a missing file
    """
    raw = await source.fetch_file_response(repo_source.owner, repo_source.repo, revision.sha, path)
    return Asset(path=path, file=raw)


async def list_entries(
    source: ContentSource,
    repo_source: RepoSource,
    revision: Revision,
    prefix: str,
    limit: int = DEFAULT_LISTING_LIMIT,
) -> list[ContentEntry]:
    """
    List one level of a directory, capped at `limit` entries.

    Raises:
        GitHubAPIError: If the listing fails
    """
    listed = await source.list_files(repo_source.owner, repo_source.repo, revision.sha, prefix)
    if len(listed) > limit:
        logger.info(
            f"{repo_source.full_name}/{prefix} has {len(listed)} entries, keeping first {limit}"
        )
    return [ContentEntry.from_listing_path(item) for item in listed[:limit]]


async def locate(
    source: ContentSource,
    repo_source: RepoSource,
    revision: Revision,
    path: str,
    *,
    listing_limit: int = DEFAULT_LISTING_LIMIT,
) -> Located:
    """
    Resolve a request path to the content that should be rendered for it.

    Args:
        source: Repository host to fetch from
        repo_source: Repository being served
        revision: Commit pinned for this request
        path: Request path within the site ("" for the home page)
        listing_limit: Max directory entries to keep

    Returns:
        Asset, Document, Directory or NotFound

    Raises:
        GitHubAPIError: Only when fetching an image fails
    """
    path = normalize_path(path)

    if path == "":
        markdown = await fetch_text_or_none(source, repo_source, revision, "README.md")
        if markdown is None:
            markdown = ROOT_README_PLACEHOLDER
        return Document(path="", markdown=markdown, is_root=True)

    if is_image_path(path):
        return await fetch_asset(source, repo_source, revision, path)

    for candidate in (f"{path}/README.md", f"{path}.md"):
        markdown = await fetch_text_or_none(source, repo_source, revision, candidate)
        if markdown is not None:
            logger.debug(f"Resolved {path!r} to {candidate}")
            return Document(path=path, markdown=markdown)

    try:
        entries = await list_entries(
            source, repo_source, revision, f"{path}/", limit=listing_limit
        )
    except GitHubAPIError as e:
        logger.info(f"No content at {repo_source.full_name}/{path}: {e.message}")
        return NotFound(path=path)

    return Directory(path=path, entries=entries)
