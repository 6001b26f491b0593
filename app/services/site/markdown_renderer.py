"""
Markdown to HTML, with YAML front matter and article metadata.

A document may open with a front matter block:

    ---
    title: My Post
    date: 2021-06-03
    ---
    Body text...

Broken front matter never stops a page from rendering: it degrades to an
empty mapping and the body is rendered as usual.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any

import markdown
import yaml
from dateutil.parser import isoparse

from app.services.site.rewriter import HTMLRewriter
from app.services.site.types import ArticleMetadata, RenderedMarkdown

logger = logging.getLogger(__name__)

MD_EXTENSIONS = [
    "fenced_code",
    "tables",
    "sane_lists",
]

_FRONT_MATTER_OPEN = "---"
_FRONT_MATTER_CLOSE = ("---", "...")


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """
    Separate a leading YAML block from the Markdown body.

    Returns:
        (front_matter, body). Without a block, front_matter is {} and body is the
        whole text. An unparseable or non-mapping block gives {} and the body
        after the block.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != _FRONT_MATTER_OPEN:
        return {}, text

    for index in range(1, len(lines)):
        if lines[index].strip() in _FRONT_MATTER_CLOSE:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            try:
                data = yaml.safe_load(block)
            except yaml.YAMLError as e:
                logger.info(f"Ignoring unparseable front matter: {e}")
                return {}, body
            if not isinstance(data, dict):
                return {}, body
            return data, body

    # Never closed: treat the dashes as a horizontal rule like any renderer would
    return {}, text


def render_markdown(text: str) -> RenderedMarkdown:
    """Render a Markdown document, returning its HTML and front matter."""
    front_matter, body = split_front_matter(text)
    html = markdown.markdown(body, extensions=MD_EXTENSIONS, output_format="html")
    return RenderedMarkdown(html=html, front_matter=front_matter)


def parse_date(value: Any) -> datetime | None:
    """
    Interpret a front matter date.

    YAML already turns unquoted dates into date/datetime objects; quoted ones
    arrive as ISO-8601 strings. Anything else counts as no date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None

    # Dates without an offset are UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class _FirstHeadingText:
    def __init__(self) -> None:
        self.seen = 0
        self.parts: list[str] = []

    def element(self, element: Any) -> None:
        self.seen += 1

    def text(self, chunk: Any) -> None:
        if self.seen == 1:
            self.parts.append(chunk.text)


def first_heading_text(html: str) -> str | None:
    """Text of the first <h1>, or None when there is none."""
    capture = _FirstHeadingText()
    HTMLRewriter().on("h1", capture).transform(html)
    if capture.seen == 0:
        return None
    return "".join(capture.parts).strip()


def metadata_from_rendered(rendered: RenderedMarkdown) -> ArticleMetadata:
    """Title and date for an already rendered document."""
    title = rendered.front_matter.get("title")
    if not isinstance(title, str) or not title.strip():
        title = first_heading_text(rendered.html) or ""

    return ArticleMetadata(
        title=title.strip(),
        date=parse_date(rendered.front_matter.get("date")),
    )


def extract_metadata(text: str) -> ArticleMetadata:
    """
    Title and publication date of a Markdown document.

    Front matter `title` wins over the first heading; a missing or bad
    `date` simply leaves the article undated.
    """
    return metadata_from_rendered(render_markdown(text))
