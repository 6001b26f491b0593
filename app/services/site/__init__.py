"""
Site rendering package.

Turns a (repository, path) pair into a full HTML page.
Usage: `from app.services.site import SiteRenderer, RepoSource, SiteURLBuilder`

Module structure:
- renderer.py: SiteRenderer, the request pipeline
- revision.py: HEAD resolution
- locator.py: Path -> Asset | Document | Directory | NotFound
- markdown_renderer.py: Markdown, front matter, article metadata
- rewriter.py: Streaming HTML element rewriter
- postprocess.py: Heading anchors, bylines, link safety
- listing.py: Directory article lists
- composer.py: Navigation and page document
- urls.py: Link building for root and namespaced sites
"""

from app.services.site.exceptions import RevisionNotFound
from app.services.site.renderer import SiteRenderer
from app.services.site.types import (
    ArticleMetadata,
    Asset,
    ContentEntry,
    ContentSource,
    Directory,
    Document,
    NotFound,
    RenderedPage,
    RepoSource,
    Revision,
)
from app.services.site.urls import SiteURLBuilder

__all__ = [
    "SiteRenderer",
    "SiteURLBuilder",
    "RevisionNotFound",
    "ArticleMetadata",
    "Asset",
    "ContentEntry",
    "ContentSource",
    "Directory",
    "Document",
    "NotFound",
    "RenderedPage",
    "RepoSource",
    "Revision",
]
