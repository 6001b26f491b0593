"""Unit tests for the streaming HTML rewriter."""

from __future__ import annotations

import pytest

from app.services.site.rewriter import HTMLRewriter, Selector


class _Recorder:
    def __init__(self) -> None:
        self.tags: list[str] = []
        self.texts: list[str] = []

    def element(self, element):
        self.tags.append(element.tag_name)

    def text(self, chunk):
        self.texts.append(chunk.text)


class TestSelector:
    def test_tag(self):
        selector = Selector("h1")
        assert selector.matches("h1", [])
        assert not selector.matches("h2", [])

    def test_tag_with_attribute(self):
        selector = Selector("a[href]")
        assert selector.matches("a", [("href", "/x")])
        assert not selector.matches("a", [("name", "top")])

    def test_universal(self):
        assert Selector("*[id]").matches("section", [("id", "x")])

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported selector"):
            Selector("div > p")


class TestPassThrough:
    def test_untouched_markup_round_trips(self):
        markup = (
            '<!doctype html><p class="x">a &amp; b &#169; <br>'
            "<!-- note --><img src='a.png'/></p>"
        )
        assert HTMLRewriter().transform(markup) == markup

    def test_unmatched_handler_leaves_markup(self):
        markup = "<p>Hello <em>there</em></p>"
        assert HTMLRewriter().on("h1", _Recorder()).transform(markup) == markup


class TestElementHandlers:
    def test_set_attribute(self):
        class AddClass:
            def element(self, element):
                element.set_attribute("class", "link")

        out = HTMLRewriter().on("a", AddClass()).transform('<a href="/x">x</a>')

        assert out == '<a href="/x" class="link">x</a>'

    def test_rename_changes_end_tag(self):
        class ToSpan:
            def element(self, element):
                element.tag_name = "span"

        out = HTMLRewriter().on("b", ToSpan()).transform("<p><b>bold</b></p>")

        assert out == "<p><span>bold</span></p>"

    def test_before_and_after_in_call_order(self):
        class Wrap:
            def element(self, element):
                element.before("<div>", html=True)
                element.after("</div>", html=True)
                element.after("<hr>", html=True)

        out = HTMLRewriter().on("p", Wrap()).transform("<p>x</p>")

        assert out == "<div><p>x</p></div><hr>"

    def test_inserted_text_is_escaped(self):
        class Note:
            def element(self, element):
                element.after("<b>")

        out = HTMLRewriter().on("p", Note()).transform("<p>x</p>")

        assert out == "<p>x</p>&lt;b&gt;"

    def test_remove_attribute(self):
        class Strip:
            def element(self, element):
                element.remove_attribute("onclick")

        out = HTMLRewriter().on("a", Strip()).transform('<a href="/" onclick="x()">y</a>')

        assert out == '<a href="/">y</a>'

    def test_void_element_after(self):
        class Caption:
            def element(self, element):
                element.after("<em>cap</em>", html=True)

        out = HTMLRewriter().on("img", Caption()).transform('<p><img src="a.png">t</p>')

        assert out == '<p><img src="a.png"><em>cap</em>t</p>'

    def test_unclosed_matched_element_is_finished(self):
        class ToSpan:
            def element(self, element):
                element.tag_name = "span"
                element.after("!", html=True)

        out = HTMLRewriter().on("b", ToSpan()).transform("<b>open")

        assert out == "<span>open</span>!"


class TestTextHandlers:
    def test_text_of_descendants_is_decoded(self):
        recorder = _Recorder()

        HTMLRewriter().on("h1", recorder).transform("<h1>Fish &amp; <em>Chips</em></h1><p>no</p>")

        assert "".join(recorder.texts) == "Fish & Chips"
        assert recorder.tags == ["h1"]
