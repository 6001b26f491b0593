"""
Request-to-page pipeline.

Given a repository and a path: resolve HEAD, locate the content, render it
and compose the page. Only a missing HEAD aborts the request; every other
failure degrades into a still-valid page.
"""

import asyncio
import html
import logging

from app.config.settings import Settings
from app.services.assets import load_assets, stylesheet_urls
from app.services.github.constants import is_image_path
from app.services.github.exceptions import GitHubAPIError
from app.services.site.composer import build_navigation, compose_page
from app.services.site.listing import LISTING_HEADING, assemble_listing
from app.services.site.locator import (
    fetch_asset,
    fetch_text_or_none,
    list_entries,
    locate,
    normalize_path,
)
from app.services.site.markdown_renderer import metadata_from_rendered, render_markdown
from app.services.site.postprocess import (
    add_noopener,
    byline_html,
    render_primary_article,
    render_standalone_article,
)
from app.services.site.revision import resolve_head
from app.services.site.types import (
    Asset,
    ContentEntry,
    ContentSource,
    Directory,
    Document,
    Located,
    RenderedPage,
    RepoSource,
    Revision,
)
from app.services.site.urls import SiteURLBuilder

logger = logging.getLogger(__name__)

# Optional site-wide partials, looked up at the repository root
HEADER_FILE = "_header.md"
FOOTER_FILE = "_footer.md"


class SiteRenderer:
    """Renders pages of a GitHub-hosted site."""

    def __init__(self, source: ContentSource, settings: Settings):
        self.source = source
        self.settings = settings

    async def render(
        self,
        repo_source: RepoSource,
        path: str,
        urls: SiteURLBuilder,
    ) -> RenderedPage | Asset:
        """
        Render the page for `path`.

        Returns:
            RenderedPage, or Asset for image paths (served unmodified)

        Raises:
            RevisionNotFound: Repository has no HEAD
            GitHubAPIError: Image fetch failed, or GitHub failed while resolving HEAD
        """
        load_assets()

        revision = await resolve_head(self.source, repo_source.owner, repo_source.repo)
        path = normalize_path(path)
        logger.debug(f"Rendering {repo_source.full_name}@{revision.sha[:7]}/{path}")

        if is_image_path(path):
            return await fetch_asset(self.source, repo_source, revision, path)

        (main_html, title), header, footer, nav_entries = await asyncio.gather(
            self._render_main(repo_source, revision, path, urls),
            self._render_partial(repo_source, revision, HEADER_FILE),
            self._render_partial(repo_source, revision, FOOTER_FILE),
            self._navigation_entries(repo_source, revision, path),
        )

        header_html = header if header is not None else build_navigation(nav_entries, urls)
        footer_html = footer or ""

        return RenderedPage(
            header=header_html,
            main=main_html,
            footer=footer_html,
            title=title,
            document=compose_page(
                header_html,
                main_html,
                footer_html,
                title=title,
                stylesheets=stylesheet_urls(),
            ),
        )

    async def _render_main(
        self,
        repo_source: RepoSource,
        revision: Revision,
        path: str,
        urls: SiteURLBuilder,
    ) -> tuple[str, str]:
        """Main region HTML and the page title."""
        located: Located = await locate(
            self.source,
            repo_source,
            revision,
            path,
            listing_limit=self.settings.listing_limit,
        )

        if isinstance(located, Document):
            rendered = render_markdown(located.markdown)
            title = metadata_from_rendered(rendered).title or repo_source.full_name
            if located.is_root:
                return render_standalone_article(rendered), title
            return (
                render_primary_article(
                    rendered,
                    urls.article(located.path),
                    byline=self._byline(repo_source),
                ),
                title,
            )

        if isinstance(located, Directory):
            listing = await assemble_listing(
                self.source,
                repo_source,
                revision,
                located,
                urls,
                concurrency=self.settings.listing_concurrency,
                style=self.settings.listing_style,
            )
            if self.settings.listing_style == "index":
                title = LISTING_HEADING
            else:
                title = repo_source.full_name
            return listing, title

        placeholder = f"Not found. path: {path} repo: {repo_source.full_name}@{revision.sha}"
        return html.escape(placeholder), repo_source.full_name

    async def _render_partial(
        self, repo_source: RepoSource, revision: Revision, name: str
    ) -> str | None:
        """Rendered `_header.md`/`_footer.md`, or None when the repository has none."""
        markdown = await fetch_text_or_none(self.source, repo_source, revision, name)
        if markdown is None:
            return None
        return add_noopener(render_markdown(markdown).html)

    async def _navigation_entries(
        self, repo_source: RepoSource, revision: Revision, path: str
    ) -> list[ContentEntry]:
        prefix = f"{path}/" if path else ""
        try:
            return await list_entries(
                self.source, repo_source, revision, prefix, limit=self.settings.listing_limit
            )
        except GitHubAPIError as e:
            logger.debug(f"No navigation for {repo_source.full_name}/{prefix}: {e.message}")
            return []

    def _byline(self, repo_source: RepoSource) -> str | None:
        author = self.settings.bylines.get(repo_source.owner)
        if author is None:
            return None
        return byline_html(repo_source, author)
