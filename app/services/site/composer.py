"""Assemble the final HTML document."""

import html
from collections.abc import Sequence

from app.services.site.types import ContentEntry
from app.services.site.urls import SiteURLBuilder


def build_navigation(entries: Sequence[ContentEntry], urls: SiteURLBuilder) -> str:
    """One link per immediate subdirectory, or "" when there are none."""
    links = [
        f'<li><a href="{html.escape(urls.article(entry.path))}">{html.escape(entry.name)}</a></li>'
        for entry in entries
        if entry.is_directory
    ]
    if not links:
        return ""
    return "<ul>\n" + "\n".join(links) + "\n</ul>"


def compose_page(
    header: str,
    main: str,
    footer: str = "",
    *,
    title: str = "",
    stylesheets: Sequence[str] = (),
) -> str:
    """
    Wrap the three page regions in a complete HTML document.

    Args:
        header: Navigation HTML, placed in the banner landmark
        main: Main content HTML
        footer: Footer HTML; omitted entirely when empty
        title: Document title
        stylesheets: URLs linked from <head>, in order
    """
    head = [
        "<!doctype html>",
        '<html lang="en">',
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{html.escape(title)}</title>",
    ]
    head.extend(f'<link rel="stylesheet" href="{html.escape(url)}">' for url in stylesheets)

    body = [
        "<body>",
        f"<header role=banner><nav>{header}</nav></header>",
        f"<main>{main}</main>",
    ]
    if footer:
        body.append(f"<footer>{footer}</footer>")
    body.append("</body>")
    body.append("</html>")

    return "\n".join(head + body) + "\n"
