"""Unit tests for Markdown rendering, front matter and article metadata."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from app.services.site.markdown_renderer import (
    extract_metadata,
    first_heading_text,
    parse_date,
    render_markdown,
    split_front_matter,
)


# ═══════════════════════════════════════════════════════════════════════════
# split_front_matter
# ═══════════════════════════════════════════════════════════════════════════


class TestSplitFrontMatter:
    def test_no_front_matter(self):
        assert split_front_matter("# Hi\n") == ({}, "# Hi\n")

    def test_parses_mapping(self):
        data, body = split_front_matter("---\ntitle: My Post\ntags: [a, b]\n---\nBody\n")

        assert data == {"title": "My Post", "tags": ["a", "b"]}
        assert body == "Body\n"

    def test_dots_close_the_block(self):
        data, body = split_front_matter("---\ntitle: X\n...\nBody\n")

        assert data == {"title": "X"}
        assert body == "Body\n"

    def test_bom_is_ignored(self):
        data, _ = split_front_matter("\ufeff---\ntitle: X\n---\n")
        assert data == {"title": "X"}

    def test_invalid_yaml_degrades_to_empty(self):
        data, body = split_front_matter("---\ntitle: [unclosed\n---\nStill rendered\n")

        assert data == {}
        assert body == "Still rendered\n"

    def test_non_mapping_degrades_to_empty(self):
        data, body = split_front_matter("---\n- just\n- a list\n---\nBody\n")

        assert data == {}
        assert body == "Body\n"

    def test_unclosed_block_is_body(self):
        text = "---\nnot front matter\n"
        assert split_front_matter(text) == ({}, text)


# ═══════════════════════════════════════════════════════════════════════════
# render_markdown
# ═══════════════════════════════════════════════════════════════════════════


class TestRenderMarkdown:
    def test_renders_body_without_front_matter(self):
        rendered = render_markdown("---\ntitle: T\n---\n# Heading\n\nSome *text*.\n")

        assert rendered.front_matter == {"title": "T"}
        assert "<h1>Heading</h1>" in rendered.html
        assert "<em>text</em>" in rendered.html
        assert "title: T" not in rendered.html

    def test_fenced_code_and_tables(self):
        rendered = render_markdown(
            "```\ncode <here>\n```\n\n| a | b |\n|---|---|\n| 1 | 2 |\n"
        )

        assert "<code>code &lt;here&gt;" in rendered.html
        assert "<table>" in rendered.html

    def test_raw_html_passes_through(self):
        rendered = render_markdown('<div class="note">hi</div>\n')
        assert '<div class="note">hi</div>' in rendered.html


# ═══════════════════════════════════════════════════════════════════════════
# parse_date
# ═══════════════════════════════════════════════════════════════════════════


class TestParseDate:
    def test_yaml_date(self):
        assert parse_date(date(2021, 6, 3)) == datetime(2021, 6, 3, tzinfo=timezone.utc)

    def test_iso_string(self):
        assert parse_date("2021-06-03") == datetime(2021, 6, 3, tzinfo=timezone.utc)

    def test_iso_string_with_offset(self):
        parsed = parse_date("2021-06-03T10:00:00Z")
        assert parsed == datetime(2021, 6, 3, 10, tzinfo=timezone.utc)

    def test_naive_values_are_utc(self):
        # Local TZ must not shift the ordering timestamp
        assert parse_date("2021-06-03T10:00:00").utcoffset() == timedelta(0)
        assert parse_date(datetime(2021, 6, 3, 10)).tzinfo is timezone.utc

    def test_garbage(self):
        assert parse_date("next tuesday") is None
        assert parse_date(42) is None
        assert parse_date(None) is None


# ═══════════════════════════════════════════════════════════════════════════
# Metadata
# ═══════════════════════════════════════════════════════════════════════════


class TestFirstHeadingText:
    def test_first_of_many(self):
        assert first_heading_text("<h1>One</h1><h1>Two</h1>") == "One"

    def test_none_without_h1(self):
        assert first_heading_text("<h2>Sub</h2>") is None


class TestExtractMetadata:
    def test_front_matter_title_and_date(self):
        metadata = extract_metadata("---\ntitle: My Post\ndate: 2021-06-03\n---\n# Other\n")

        assert metadata.title == "My Post"
        assert metadata.date == datetime(2021, 6, 3, tzinfo=timezone.utc)
        assert metadata.date_label == "June 03, 2021"

    def test_heading_title(self):
        metadata = extract_metadata("# Fish &amp; Chips\n\nText\n")

        assert metadata.title == "Fish & Chips"
        assert metadata.date is None
        assert metadata.date_label is None
        assert metadata.sort_key == "Fish & Chips"

    def test_blank_front_matter_title_falls_back(self):
        metadata = extract_metadata("---\ntitle: '  '\n---\n# Heading\n")
        assert metadata.title == "Heading"

    def test_invalid_date_is_undated(self):
        metadata = extract_metadata("---\ntitle: T\ndate: soon\n---\n")

        assert metadata.date is None
        assert metadata.sort_key == "T"

    def test_dated_sort_key_is_milliseconds(self):
        metadata = extract_metadata('---\ndate: "2021-06-03T00:00:00Z"\n---\n# T\n')
        assert metadata.sort_key == 1622678400000

    def test_date_only_sort_key_is_utc_midnight(self):
        metadata = extract_metadata("---\ndate: 2021-06-03\n---\n# T\n")
        assert metadata.sort_key == 1622678400000

    def test_no_title_anywhere(self):
        assert extract_metadata("just text\n").title == ""
