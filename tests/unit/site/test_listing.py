"""Unit tests for directory article listings."""

from __future__ import annotations

import re

import pytest

from app.services.github.exceptions import GitHubAPIError
from app.services.site.listing import (
    ListingItem,
    assemble_listing,
    compare_sort_keys,
    render_index_item,
    sort_items,
)
from app.services.site.locator import locate
from app.services.site.types import Directory, RepoSource, Revision
from app.services.site.urls import SiteURLBuilder
from tests.helpers.fake_github import DEFAULT_SHA, FakeGitHub

REPO = RepoSource("octo", "blog")
REVISION = Revision(sha=DEFAULT_SHA, ref_name="refs/heads/main")


def _post(title: str, date: str | None = None) -> str:
    front = f"---\ntitle: {title}\n" + (f"date: {date}\n" if date else "") + "---\n"
    return front + "Body of the post.\n"


async def _listing(fake_github: FakeGitHub, path: str, **kwargs) -> str:
    directory = await locate(fake_github, REPO, REVISION, path)
    assert isinstance(directory, Directory)
    return await assemble_listing(
        fake_github, REPO, REVISION, directory, SiteURLBuilder.proxied(), **kwargs
    )


# ═══════════════════════════════════════════════════════════════════════════
# Ordering
# ═══════════════════════════════════════════════════════════════════════════


class TestCompareSortKeys:
    def test_dates_newest_first(self):
        assert compare_sort_keys(1, 2) > 0
        assert compare_sort_keys(2, 1) < 0
        assert compare_sort_keys(5, 5) == 0

    def test_strings_descending(self):
        assert compare_sort_keys("apple", "banana") > 0
        assert compare_sort_keys("same", "same") == 0

    def test_mixed_compares_as_strings(self):
        # "Zebra" > "1622678400000" as strings
        assert compare_sort_keys(1622678400000, "Zebra") > 0


class TestSortItems:
    def test_stable_for_equal_keys(self):
        items = [ListingItem(1, "first"), ListingItem(1, "second"), ListingItem(2, "newest")]

        ordered = [item.html for item in sort_items(items)]

        assert ordered == ["newest", "first", "second"]


class TestRenderIndexItem:
    def test_with_date(self):
        out = render_index_item("A & B", "/2020/a", "June 03, 2021")
        assert out == (
            '<li><span data-date>June 03, 2021</span><a href="/2020/a">A &amp; B</a></li>'
        )

    def test_without_date(self):
        assert render_index_item("T", "/t", None) == '<li><a href="/t">T</a></li>'


# ═══════════════════════════════════════════════════════════════════════════
# assemble_listing
# ═══════════════════════════════════════════════════════════════════════════


class TestAssembleListing:
    @pytest.mark.anyio
    async def test_index_newest_first(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {
                "2020/a.md": _post("Oldest", "2020-01-01"),
                "2020/b.md": _post("Newest", "2021-06-03"),
                "2020/c.md": _post("Middle", "2020-07-15"),
            },
        )

        out = await _listing(fake_github, "2020")

        assert out.startswith("<h1>Articles</h1>\n<nav><ul>")
        titles = re.findall(r'<a href="[^"]+">([^<]+)</a>', out)
        assert titles == ["Newest", "Middle", "Oldest"]
        assert '<span data-date>June 03, 2021</span><a href="/2020/b">Newest</a>' in out

    @pytest.mark.anyio
    async def test_undated_entries_still_listed(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {
                "notes/a.md": _post("Dated", "2021-01-01"),
                "notes/b.md": "# Undated\n",
            },
        )

        out = await _listing(fake_github, "notes")

        titles = re.findall(r'<a href="[^"]+">([^<]+)</a>', out)
        assert sorted(titles) == ["Dated", "Undated"]

    @pytest.mark.anyio
    async def test_mixed_keys_order(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {
                "notes/a.md": "# Alpha\n",
                "notes/b.md": _post("Dated", "2021-01-01"),
                "notes/c.md": "# Beta\n",
            },
        )

        out = await _listing(fake_github, "notes")

        # Titles compare with the date's digits as strings, descending
        titles = re.findall(r'<a href="[^"]+">([^<]+)</a>', out)
        assert titles == ["Beta", "Alpha", "Dated"]

    @pytest.mark.anyio
    async def test_same_date_in_reverse_listing_order(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {
                "2020/a.md": _post("Morning", "2021-06-03"),
                "2020/b.md": _post("Evening", "2021-06-03"),
            },
        )

        out = await _listing(fake_github, "2020")

        titles = re.findall(r'<a href="[^"]+">([^<]+)</a>', out)
        assert titles == ["Evening", "Morning"]

    @pytest.mark.anyio
    async def test_skips_images_and_subdirectories(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {
                "2020/a.md": _post("Post", "2020-01-01"),
                "2020/photo.png": b"\x89PNG",
                "2020/drafts/x.md": _post("Draft"),
            },
        )

        out = await _listing(fake_github, "2020")

        assert "Post" in out
        assert "photo" not in out
        assert "Draft" not in out

    @pytest.mark.anyio
    async def test_failed_fetch_is_skipped(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {"2020/a.md": _post("Kept", "2020-01-01"), "2020/b.md": _post("Broken")},
        )
        fake_github.fail("2020/b.md", GitHubAPIError("GitHub API error: 500", 500))

        out = await _listing(fake_github, "2020")

        assert "Kept" in out
        assert "Broken" not in out

    @pytest.mark.anyio
    async def test_timed_out_fetch_is_skipped(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {"2020/a.md": _post("Kept", "2020-01-01"), "2020/b.md": _post("Slow")},
        )
        fake_github.fail("2020/b.md", GitHubAPIError("GitHub request failed: 2020/b.md", 502))

        out = await _listing(fake_github, "2020")

        assert "Kept" in out
        assert "Slow" not in out

    @pytest.mark.anyio
    async def test_articles_style_renders_posts(self, fake_github: FakeGitHub):
        fake_github.add_repo(
            "octo",
            "blog",
            {
                "2020/a.md": _post("First", "2020-01-01"),
                "2020/b.md": _post("Second", "2020-02-01"),
            },
        )

        out = await _listing(fake_github, "2020", style="articles")

        assert "<h1>" not in out
        assert out.index("Second") < out.index("First")
        assert '<h2><a href="/2020/b" rel="noopener">Second</a></h2>' in out
        assert out.count("<article>") == 2

    @pytest.mark.anyio
    async def test_namespaced_links(self, fake_github: FakeGitHub):
        fake_github.add_repo("octo", "blog", {"2020/a.md": _post("Post", "2020-01-01")})
        directory = await locate(fake_github, REPO, REVISION, "2020")

        out = await assemble_listing(
            fake_github, REPO, REVISION, directory, SiteURLBuilder.direct("octo", "blog")
        )

        assert 'href="/github-site/octo/blog/2020/a"' in out

    @pytest.mark.anyio
    async def test_empty_directory(self):
        out = await assemble_listing(
            FakeGitHub(), REPO, REVISION, Directory("2020", []), SiteURLBuilder.proxied()
        )
        assert out == "<h1>Articles</h1>\n<nav><ul></ul></nav>"
