"""
GitHub API helper utilities.

Provides rate limit handling, error response processing and parsing of the
git smart HTTP ref advertisement.
"""

import logging
import mimetypes
import posixpath

import httpx

from app.services.github.constants import IMAGE_MEDIA_TYPES
from app.services.github.exceptions import GitHubAPIError
from app.services.github.types import GitRef

logger = logging.getLogger(__name__)

# All-zero id that empty repositories advertise alongside their capabilities
_NULL_SHA = "0" * 40


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Handle common error responses from GitHub.

    Args:
        response: The HTTP response from GitHub
        resource: What was requested, for error context (e.g. "owner/repo/README.md")

    Raises:
        GitHubAPIError: For authentication, authorization, missing or other errors
    """
    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or resource not found: {resource}", 404)
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)
    elif response.status_code != 200:
        raise GitHubAPIError(
            f"GitHub API error: {response.status_code}", response.status_code
        )


def iter_pkt_lines(body: bytes):
    """
    Yield the payloads of a git pkt-line stream, skipping flush packets.

    Each packet starts with four hex digits giving its length, including the
    four length bytes themselves. "0000" is a flush packet.

    Raises:
        GitHubAPIError: If the stream is truncated or the length is not hex
    """
    pos = 0
    while pos < len(body):
        try:
            length = int(body[pos : pos + 4], 16)
        except ValueError:
            raise GitHubAPIError("Malformed ref advertisement from GitHub", 502) from None
        if length == 0:
            pos += 4
            continue
        if length < 4 or pos + length > len(body):
            raise GitHubAPIError("Truncated ref advertisement from GitHub", 502)
        yield body[pos + 4 : pos + length]
        pos += length


def parse_advertised_refs(body: bytes) -> list[GitRef]:
    """
    Parse the response of `info/refs?service=git-upload-pack`.

    The first ref line carries the capability list after a NUL byte; the
    `symref=HEAD:<ref>` capability tells us which branch HEAD points at.

    Args:
        body: Raw response body

    Returns:
        Refs in advertised order (HEAD first when the repository has one)
    """
    refs: list[GitRef] = []
    head_target: str | None = None

    for packet in iter_pkt_lines(body):
        line = packet.decode("utf-8", errors="replace").rstrip("\n")
        if line.startswith("#"):
            # "# service=git-upload-pack" header
            continue

        ref_part, _, capabilities = line.partition("\0")
        for capability in capabilities.split():
            if capability.startswith("symref=HEAD:"):
                head_target = capability.removeprefix("symref=HEAD:")

        sha, _, name = ref_part.partition(" ")
        if not name or sha == _NULL_SHA or name.endswith("^{}"):
            continue
        refs.append(GitRef(name=name, sha=sha))

    if head_target is not None:
        refs = [
            GitRef(name=ref.name, sha=ref.sha, symref=head_target) if ref.name == "HEAD" else ref
            for ref in refs
        ]
    logger.debug(f"Parsed {len(refs)} advertised refs (HEAD → {head_target})")
    return refs


def find_head(refs: list[GitRef]) -> GitRef | None:
    """Return the HEAD entry of a ref advertisement, if any."""
    for ref in refs:
        if ref.name == "HEAD":
            return ref
    return None


def guess_media_type(path: str, upstream: str | None = None) -> str:
    """
    Pick a Content-Type for a raw file.

    raw.githubusercontent.com answers most files as text/plain, so the
    extension is trusted first.
    """
    ext = posixpath.splitext(path)[1].lower()
    if ext in IMAGE_MEDIA_TYPES:
        return IMAGE_MEDIA_TYPES[ext]
    guessed, _ = mimetypes.guess_type(path)
    if guessed:
        return guessed
    if upstream:
        return upstream.split(";")[0].strip()
    return "application/octet-stream"
