"""API dependencies for the page routes."""

from typing import Annotated

from fastapi import Depends

from app.config import Settings, settings
from app.services.github import GitHubReadOperations
from app.services.site import ContentSource, SiteRenderer


def get_settings() -> Settings:
    """Application settings (overridden in tests)."""
    return settings


def get_content_source(
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> ContentSource:
    """Repository host the site renderer fetches from."""
    return GitHubReadOperations(app_settings.github_token)


def get_site_renderer(
    source: Annotated[ContentSource, Depends(get_content_source)],
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> SiteRenderer:
    return SiteRenderer(source, app_settings)


AppSettings = Annotated[Settings, Depends(get_settings)]
Renderer = Annotated[SiteRenderer, Depends(get_site_renderer)]
