"""Map pipeline exceptions to plain-text HTTP responses."""

import logging

from fastapi import FastAPI, Request, Response, status

from app.core.responses import plain_text_response
from app.services.github.exceptions import GitHubAPIError
from app.services.site.exceptions import RevisionNotFound

logger = logging.getLogger(__name__)


async def revision_not_found_handler(request: Request, exc: RevisionNotFound) -> Response:
    """No HEAD to render from: the only error that replaces the whole page."""
    logger.info(f"{request.url.path}: {exc}")
    return plain_text_response(exc.message, exc.status_code)


async def github_error_handler(request: Request, exc: GitHubAPIError) -> Response:
    """Upstream failure that could not be degraded (image fetch, HEAD lookup)."""
    status_code = exc.status_code
    if status_code is None or not 400 <= status_code < 600:
        status_code = status.HTTP_502_BAD_GATEWAY
    logger.warning(f"{request.url.path}: GitHub error {exc.status_code}: {exc.message}")
    return plain_text_response(exc.message, status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RevisionNotFound, revision_not_found_handler)
    app.add_exception_handler(GitHubAPIError, github_error_handler)
