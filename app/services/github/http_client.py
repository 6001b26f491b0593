"""
Shared HTTP client for GitHub requests.

Provides a singleton AsyncClient with connection pooling for github.com,
raw.githubusercontent.com and the REST API. Rendering one directory page
fans out into dozens of file fetches, so reusing connections matters.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

# Module-level singleton client
_client: httpx.AsyncClient | None = None


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub calls.

    Auth headers are passed per-request, not stored on the client, since only
    api.github.com should ever see the token.

    Returns:
        Shared httpx.AsyncClient
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(30.0, connect=5.0),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            http2=True,
            # Renamed repositories answer with a redirect to the new location
            follow_redirects=True,
        )
        logger.debug("Created new GitHub HTTP client with connection pooling")
    return _client


async def close_github_client() -> None:
    """
    Close the shared HTTP client.

    Call on app shutdown for graceful termination.
    """
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
