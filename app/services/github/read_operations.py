"""
GitHub read operations for serving repository content.

Provides the four lookups the site renderer needs:
- Ref advertisement (to find the HEAD commit)
- File contents as text
- File contents as raw bytes (binary pass-through)
- One-level directory listings

Everything except the ref advertisement is addressed by commit sha.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.services.github.cache import cached_github_call, file_cache, listing_cache
from app.services.github.constants import (
    API_BASE_URL,
    API_VERSION,
    GIT_BASE_URL,
    GIT_USER_AGENT,
    RAW_BASE_URL,
)
from app.services.github.exceptions import GitHubAPIError
from app.services.github.helpers import (
    guess_media_type,
    handle_error_response,
    parse_advertised_refs,
)
from app.services.github.http_client import get_github_client
from app.services.github.types import GitRef, RawFile

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only access to public GitHub repository content.

    Uses the shared HTTP client singleton for connection pooling. The token is
    optional; when present it only raises the REST API rate limit.
    """

    BASE_URL = API_BASE_URL
    API_VERSION = API_VERSION

    def __init__(self, token: str = ""):
        self.token = token
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def _raw_url(self, owner: str, repo: str, sha: str, path: str) -> str:
        return f"{RAW_BASE_URL}/{owner}/{repo}/{sha}/{quote(path.lstrip('/'))}"

    async def _get(self, url: str, resource: str, **kwargs: Any) -> httpx.Response:
        """
        GET through the shared client and check the status.

        Transport failures (timeouts, refused connections) surface as a 502
        GitHubAPIError, like any other upstream failure.
        """
        client = get_github_client()
        try:
            response = await client.get(url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"GitHub request for {resource} failed: {e!r}")
            raise GitHubAPIError(f"GitHub request failed: {resource}", 502) from e

        handle_error_response(response, resource)
        return response

    async def fetch_references(self, owner: str, repo: str) -> list[GitRef]:
        """
        Fetch every ref the repository advertises over git smart HTTP.

        Args:
            owner: Repository owner (username or org)
            repo: Repository name

        Returns:
            List of GitRef, HEAD first when the repository has one

        Raises:
            GitHubAPIError: If the repository does not exist or GitHub fails
        """
        response = await self._get(
            f"{GIT_BASE_URL}/{owner}/{repo}.git/info/refs",
            f"{owner}/{repo}",
            params={"service": "git-upload-pack"},
            headers={"User-Agent": GIT_USER_AGENT},
        )

        return parse_advertised_refs(response.content)

    @cached_github_call(file_cache)
    async def fetch_file_content(self, owner: str, repo: str, sha: str, path: str) -> str:
        """
        Fetch a text file at a specific commit.

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Commit sha the whole request is pinned to
            path: File path within the repository

        Returns:
            File contents decoded as UTF-8 (undecodable bytes replaced)

        Raises:
            GitHubAPIError: 404 when the file does not exist
        """
        response = await self._get(
            self._raw_url(owner, repo, sha, path), f"{owner}/{repo}@{sha}/{path}"
        )

        return response.content.decode("utf-8", errors="replace")

    async def fetch_file_response(self, owner: str, repo: str, sha: str, path: str) -> RawFile:
        """
        Fetch a file's bytes at a specific commit, for pass-through serving.

        Not cached: images can be large and are cached downstream by HTTP.
        """
        response = await self._get(
            self._raw_url(owner, repo, sha, path), f"{owner}/{repo}@{sha}/{path}"
        )

        return RawFile(
            path=path,
            content=response.content,
            media_type=guess_media_type(path, response.headers.get("Content-Type")),
        )

    @cached_github_call(listing_cache)
    async def list_files(self, owner: str, repo: str, sha: str, prefix: str) -> list[str]:
        """
        List the immediate children of a directory.

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Commit sha
            prefix: Directory path, "" for the repository root ("2020/" or "2020")

        Returns:
            Repository-relative paths in GitHub's order. Directories end in "/".
            A prefix naming a file returns an empty list.

        Raises:
            GitHubAPIError: 404 when the directory does not exist
        """
        directory = prefix.strip("/")
        url = f"{self.BASE_URL}/repos/{owner}/{repo}/contents"
        if directory:
            url = f"{url}/{quote(directory)}"

        resource = f"{owner}/{repo}@{sha}/{directory}"
        response = await self._get(
            url,
            resource,
            headers=self._headers,
            params={"ref": sha},
        )

        try:
            data: Any = response.json()
        except ValueError as e:
            raise GitHubAPIError(f"Malformed listing for {resource}", 502) from e
        if not isinstance(data, list):
            logger.debug(f"{owner}/{repo}/{directory} is not a directory")
            return []

        paths: list[str] = []
        for item in data:
            item_path = item.get("path")
            if not item_path:
                continue
            if item.get("type") == "dir":
                paths.append(f"{item_path}/")
            else:
                paths.append(item_path)
        return paths
