"""
HTML transforms applied to rendered Markdown.

- Primary article: the first <h1> becomes a link to the document's own URL
- Secondary article: same, but the heading is demoted to <h2> for listings
- Link safety: every a[href] gets rel="noopener"

Each transform is a single streaming pass; handler state lives only for the
duration of one call.
"""

import html
from typing import Any

from app.services.site.markdown_renderer import first_heading_text
from app.services.site.rewriter import HTMLRewriter
from app.services.site.types import RenderedMarkdown, RepoSource


class _PrimaryHeading:
    """Turns the first <h1> into <hN><a href=...>...</a></hN>."""

    def __init__(self, href: str, level: int, byline: str | None):
        self.href = href
        self.level = level
        self.byline = byline
        self.done = False

    def element(self, element: Any) -> None:
        if self.done:
            return
        self.done = True

        # Keep the heading's own attributes (e.g. id) on the anchor
        element.tag_name = "a"
        element.set_attribute("href", self.href)
        element.before(f"<h{self.level}>", html=True)
        element.after(f"</h{self.level}>", html=True)
        if self.byline:
            element.after(self.byline, html=True)


class _NoOpener:
    def element(self, element: Any) -> None:
        rel = element.get_attribute("rel") or ""
        if "noopener" in rel.split():
            return
        element.set_attribute("rel", f"{rel} noopener".strip())


def rewrite_primary_heading(
    html_text: str,
    href: str,
    *,
    level: int = 1,
    byline: str | None = None,
) -> str:
    """
    Link the document's first top-level heading to `href`.

    Args:
        html_text: Rendered document
        href: Canonical URL of the document
        level: Heading level to wrap the link in (2 demotes it for listings)
        byline: Optional HTML inserted right after the heading
    """
    return HTMLRewriter().on("h1", _PrimaryHeading(href, level, byline)).transform(html_text)


def add_noopener(html_text: str) -> str:
    """Append `noopener` to the rel of every link. Safe to apply repeatedly."""
    return HTMLRewriter().on("a[href]", _NoOpener()).transform(html_text)


def byline_html(repo_source: RepoSource, author: str) -> str:
    """Attribution shown under an article title: avatar plus author name."""
    return (
        '<div class="byline" style="margin-bottom: 3rem">'
        f'<img src="{html.escape(repo_source.profile_picture_url)}" alt="" '
        'style="border-radius: 9999px; width: 36px; height: 36px; margin-right: 0.5em">'
        f"{html.escape(author)}</div>"
    )


def _body_with_title(rendered: RenderedMarkdown) -> str:
    body = rendered.html
    title = rendered.front_matter.get("title")
    if isinstance(title, str) and title.strip() and first_heading_text(body) is None:
        body = f"<h1>{html.escape(title.strip())}</h1>\n{body}"
    return body


def render_primary_article(
    rendered: RenderedMarkdown, href: str, *, byline: str | None = None
) -> str:
    """Render a document as the sole article of a page."""
    body = rewrite_primary_heading(_body_with_title(rendered), href, byline=byline)
    return f"<article>{add_noopener(body)}</article>"


def render_secondary_article(rendered: RenderedMarkdown, href: str) -> str:
    """Render a document as one of many on a listing page."""
    body = rewrite_primary_heading(_body_with_title(rendered), href, level=2)
    return f"<article>{add_noopener(body)}</article>"


def render_standalone_article(rendered: RenderedMarkdown) -> str:
    """Render a document with its headings left as authored (the home page)."""
    return f"<article>{add_noopener(rendered.html)}</article>"
