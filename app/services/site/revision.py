"""Resolve the commit a request renders from."""

import logging

from app.services.github.exceptions import GitHubAPIError
from app.services.github.helpers import find_head
from app.services.site.exceptions import RevisionNotFound
from app.services.site.types import ContentSource, Revision

logger = logging.getLogger(__name__)


async def resolve_head(source: ContentSource, owner: str, repo: str) -> Revision:
    """
    Find the commit HEAD currently points at.

    Resolved once per request; every later fetch uses the returned sha so a
    push mid-request can't mix two versions of the site into one page.

    Raises:
        RevisionNotFound: No HEAD ref, or the repository does not exist
        GitHubAPIError: Any other failure talking to GitHub
    """
    try:
        refs = await source.fetch_references(owner, repo)
    except GitHubAPIError as e:
        if e.is_not_found:
            raise RevisionNotFound(owner, repo) from e
        raise

    head = find_head(refs)
    if head is None:
        logger.info(f"{owner}/{repo} advertises no HEAD ({len(refs)} refs)")
        raise RevisionNotFound(owner, repo)

    return Revision(sha=head.sha, ref_name=head.symref or "HEAD")
