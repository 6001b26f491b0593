"""
GitHub service package.

Re-exports all public types and classes.
Usage: `from app.services.github import GitHubReadOperations, GitRef`

Module structure:
- read_operations.py: Ref, file and listing lookups
- helpers.py: Rate limit handling, error utilities, ref advertisement parsing
- types.py: Data types
- exceptions.py: Custom exceptions
- constants.py: Endpoints and path classification
- cache.py: TTL caches for sha-addressed content
- http_client.py: Shared AsyncClient
"""

from app.services.github.cache import clear_all_caches as clear_github_caches
from app.services.github.cache import get_cache_stats as get_github_cache_stats
from app.services.github.constants import IMAGE_EXTENSIONS, is_image_path
from app.services.github.exceptions import GitHubAPIError
from app.services.github.helpers import (
    RateLimitInfo,
    find_head,
    handle_error_response,
    parse_advertised_refs,
)
from app.services.github.http_client import close_github_client
from app.services.github.read_operations import GitHubReadOperations
from app.services.github.types import GitRef, RawFile

__all__ = [
    # Operations (main entry point)
    "GitHubReadOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Cache management
    "clear_github_caches",
    "get_github_cache_stats",
    # Utilities
    "find_head",
    "handle_error_response",
    "parse_advertised_refs",
    "is_image_path",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    # Types
    "GitRef",
    "RawFile",
    # Constants
    "IMAGE_EXTENSIONS",
]
