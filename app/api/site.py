"""
Page endpoints.

- /github-site/<owner>/<repo>[/<path>]: any repository, links keep the prefix
- /[<path>]: the repository configured as SITE_OWNER/SITE_REPO
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Request, Response, status

from app.api.deps import AppSettings, Renderer
from app.config import Settings
from app.core.responses import html_response, plain_text_response, raw_file_response
from app.services.github.constants import OWNER_NAME_PATTERN, REPO_NAME_PATTERN
from app.services.site import Asset, RepoSource, SiteRenderer, SiteURLBuilder

router = APIRouter(tags=["site"])
logger = logging.getLogger(__name__)

OwnerName = Annotated[str, Path(pattern=OWNER_NAME_PATTERN)]
RepoName = Annotated[str, Path(pattern=REPO_NAME_PATTERN)]


async def serve_page(
    renderer: SiteRenderer,
    repo_source: RepoSource,
    path: str,
    urls: SiteURLBuilder,
) -> Response:
    """Render a path and wrap the result in a response."""
    result = await renderer.render(repo_source, path, urls)
    if isinstance(result, Asset):
        return raw_file_response(result.file.content, result.file.media_type)
    return html_response(result.document)


def namespaced_url_builder(
    request: Request, owner: str, repo: str, app_settings: Settings
) -> SiteURLBuilder:
    """
    Links for a /github-site/ request.

    A host in `proxied_hosts` mounts the namespaced site at its own root, so
    its links must not carry the /github-site/<owner>/<repo> prefix.
    """
    host = request.headers.get("host", "")
    if host in app_settings.proxied_hosts or host.split(":")[0] in app_settings.proxied_hosts:
        return SiteURLBuilder.proxied()
    return SiteURLBuilder.direct(owner, repo)


# --- Namespaced sites ---


@router.get("/github-site/{owner}/{repo}")
async def github_site_home(
    request: Request,
    owner: OwnerName,
    repo: RepoName,
    renderer: Renderer,
    app_settings: AppSettings,
) -> Response:
    """Home page of any GitHub repository."""
    urls = namespaced_url_builder(request, owner, repo, app_settings)
    return await serve_page(renderer, RepoSource(owner, repo), "", urls)


@router.get("/github-site/{owner}/{repo}/{path:path}")
async def github_site_page(
    request: Request,
    owner: OwnerName,
    repo: RepoName,
    path: str,
    renderer: Renderer,
    app_settings: AppSettings,
) -> Response:
    """Any page of any GitHub repository."""
    urls = namespaced_url_builder(request, owner, repo, app_settings)
    return await serve_page(renderer, RepoSource(owner, repo), path, urls)


# --- Configured site at the root ---


def _site_not_configured() -> Response:
    logger.info("Root site requested but SITE_OWNER/SITE_REPO are not set")
    return plain_text_response("No site repository configured.", status.HTTP_404_NOT_FOUND)


@router.get("/")
async def site_home(renderer: Renderer, app_settings: AppSettings) -> Response:
    """Home page of the configured site."""
    if not app_settings.site_configured:
        return _site_not_configured()
    repo_source = RepoSource(app_settings.site_owner, app_settings.site_repo)
    return await serve_page(renderer, repo_source, "", SiteURLBuilder.proxied())


@router.get("/{path:path}")
async def site_page(path: str, renderer: Renderer, app_settings: AppSettings) -> Response:
    """Any page of the configured site."""
    if not app_settings.site_configured:
        return _site_not_configured()
    repo_source = RepoSource(app_settings.site_owner, app_settings.site_repo)
    return await serve_page(renderer, repo_source, path, SiteURLBuilder.proxied())
