"""
TTL caching for GitHub content responses.

File contents and directory listings are requested at a fixed commit sha, so
a cached entry can never go stale; the TTL only bounds memory. References
are deliberately not cached: every request resolves HEAD afresh.

Cache sizes:
- Files: 500 entries (Markdown documents are small)
- Listings: 200 entries
"""

import hashlib
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from cachetools import TTLCache  # type: ignore[import-untyped]

from app.config import settings

logger = logging.getLogger(__name__)

# Type vars for decorator typing
P = ParamSpec("P")
T = TypeVar("T")

_file_cache: TTLCache[str, Any] = TTLCache(maxsize=500, ttl=settings.github_cache_ttl)
_listing_cache: TTLCache[str, Any] = TTLCache(maxsize=200, ttl=settings.github_cache_ttl)


def _make_cache_key(func_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """
    Generate a cache key from function name and arguments.

    Skips 'self' (first positional arg) since we're caching by content identity, not instance.
    """
    cache_args = args[1:] if args else ()
    key_data = f"{func_name}:{cache_args}:{sorted(kwargs.items())}"
    return hashlib.md5(key_data.encode()).hexdigest()


def cached_github_call(
    cache: TTLCache[str, Any],
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for caching async GitHub calls.

    Usage:
        @cached_github_call(file_cache)
        async def fetch_file_content(self, owner, repo, sha, path) -> str:
            ...

    Only successful results are stored; raised errors are never cached, so a
    file that is missing now is looked up again on the next request.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            key = _make_cache_key(func.__name__, args, kwargs)

            if key in cache:
                logger.debug(f"Cache HIT: {func.__name__}")
                cached_result: T = cache[key]
                return cached_result

            logger.debug(f"Cache MISS: {func.__name__}")
            result = await func(*args, **kwargs)
            cache[key] = result
            return result

        return wrapper

    return decorator


def clear_all_caches() -> None:
    """Clear all GitHub caches. Useful for testing."""
    _file_cache.clear()
    _listing_cache.clear()
    logger.debug("Cleared all GitHub caches")


def get_cache_stats() -> dict[str, dict[str, int]]:
    """Get current cache statistics for monitoring."""
    return {
        "files": {"size": len(_file_cache), "maxsize": _file_cache.maxsize},
        "listings": {"size": len(_listing_cache), "maxsize": _listing_cache.maxsize},
    }


# Export cache instances for decorator use
file_cache = _file_cache
listing_cache = _listing_cache
