"""
Render a directory as a list of articles.

Every file in the directory is fetched and its metadata extracted
concurrently; the results are sorted only once all have arrived, so output
order never depends on which fetch finished first.

Known limitation: subdirectories are not listed or recursed into here. They
only show up in the page navigation.
"""

import asyncio
import html
import logging
from dataclasses import dataclass
from functools import cmp_to_key

from app.services.github.constants import is_image_path
from app.services.github.exceptions import GitHubAPIError
from app.services.site.markdown_renderer import metadata_from_rendered, render_markdown
from app.services.site.postprocess import render_secondary_article
from app.services.site.types import (
    ContentEntry,
    ContentSource,
    Directory,
    RepoSource,
    Revision,
)
from app.services.site.urls import SiteURLBuilder

logger = logging.getLogger(__name__)

LISTING_HEADING = "Articles"


@dataclass
class ListingItem:
    """One rendered entry, with the key it sorts by."""

    sort_key: int | str
    html: str


def compare_sort_keys(a: int | str, b: int | str) -> int:
    """
    Order two sort keys, newest/greatest first.

    Two dates (ints) compare numerically. Anything else compares as strings,
    so undated entries still get a place in the list instead of being dropped.
    """
    if isinstance(a, int) and isinstance(b, int):
        return b - a
    a_text, b_text = str(a), str(b)
    return (b_text > a_text) - (b_text < a_text)


def sort_items(items: list[ListingItem]) -> list[ListingItem]:
    """Stable sort by `compare_sort_keys`."""
    return sorted(items, key=cmp_to_key(lambda x, y: compare_sort_keys(x.sort_key, y.sort_key)))


def render_index_item(title: str, href: str, date_label: str | None) -> str:
    """`<li>` with an optional date label and a link to the article."""
    date_html = f"<span data-date>{html.escape(date_label)}</span>" if date_label else ""
    return f'<li>{date_html}<a href="{html.escape(href)}">{html.escape(title)}</a></li>'


async def _render_entry(
    source: ContentSource,
    repo_source: RepoSource,
    revision: Revision,
    entry: ContentEntry,
    urls: SiteURLBuilder,
    style: str,
) -> ListingItem:
    markdown = await source.fetch_file_content(
        repo_source.owner, repo_source.repo, revision.sha, entry.path
    )
    rendered = render_markdown(markdown)
    metadata = metadata_from_rendered(rendered)
    href = urls.article(entry.slug)

    if style == "articles":
        item_html = render_secondary_article(rendered, href)
    else:
        item_html = render_index_item(metadata.title, href, metadata.date_label)
    return ListingItem(sort_key=metadata.sort_key, html=item_html)


async def assemble_listing(
    source: ContentSource,
    repo_source: RepoSource,
    revision: Revision,
    directory: Directory,
    urls: SiteURLBuilder,
    *,
    concurrency: int = 10,
    style: str = "index",
) -> str:
    """
    Render the files of a directory as a sorted article list.

    Args:
        source: Repository host to fetch from
        repo_source: Repository being served
        revision: Commit pinned for this request
        directory: Located directory (entries already capped)
        urls: Link builder for the site
        concurrency: Max simultaneous fetches
        style: "index" for a dated link list, "articles" for full posts

    Returns:
        HTML for the main region
    """
    # Walked backwards: entries with equal sort keys come out in reverse listing order
    entries = [entry for entry in reversed(directory.files) if not is_image_path(entry.path)]
    semaphore = asyncio.Semaphore(max(concurrency, 1))

    async def render_with_limit(entry: ContentEntry) -> ListingItem:
        async with semaphore:
            return await _render_entry(source, repo_source, revision, entry, urls, style)

    results = await asyncio.gather(
        *(render_with_limit(entry) for entry in entries), return_exceptions=True
    )

    items: list[ListingItem] = []
    for entry, result in zip(entries, results, strict=True):
        if isinstance(result, GitHubAPIError):
            logger.warning(f"Skipping {entry.path} in listing: {result.message}")
        elif isinstance(result, BaseException):
            raise result
        else:
            items.append(result)

    ordered = "\n".join(item.html for item in sort_items(items))
    if style == "articles":
        return ordered
    return f"<h1>{LISTING_HEADING}</h1>\n<nav><ul>{ordered}</ul></nav>"
