"""
Streaming HTML element rewriter.

Handlers are registered against simple selectors (`tag` or `tag[attr]`) and
called as the parser reaches matching elements:

    rewriter = HTMLRewriter().on("a[href]", handler)
    html = rewriter.transform(html)

A handler is any object with an `element(el)` method, a `text(chunk)`
method, or both. `text` receives decoded text of the matched element and
its descendants.

Markup that no handler touches is copied through unchanged, so one
transform costs one pass over the document and nothing is re-serialized
except the start tags that were actually modified.
"""

import html
import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

_SELECTOR_RE = re.compile(r"^\s*([a-zA-Z][a-zA-Z0-9-]*|\*)\s*(?:\[\s*([^\]\s=]+)\s*\])?\s*$")


class Selector:
    """`tag`, `*`, `tag[attr]` or `*[attr]`."""

    def __init__(self, source: str):
        match = _SELECTOR_RE.match(source)
        if match is None:
            raise ValueError(f"Unsupported selector: {source!r}")
        self.source = source
        self.tag = match.group(1).lower()
        self.attribute = match.group(2).lower() if match.group(2) else None

    def matches(self, tag: str, attrs: list[tuple[str, str | None]]) -> bool:
        if self.tag != "*" and self.tag != tag:
            return False
        if self.attribute is None:
            return True
        return any(name == self.attribute for name, _ in attrs)

    def __repr__(self) -> str:
        return f"Selector({self.source!r})"


@dataclass
class TextChunk:
    """A run of text inside a matched element."""

    text: str


class Element:
    """A matched start tag that handlers may modify."""

    def __init__(self, tag_name: str, attributes: list[tuple[str, str | None]]):
        self._tag_name = tag_name
        self._attributes = list(attributes)
        self._modified = False
        self._before: list[str] = []
        self._after: list[str] = []

    @property
    def tag_name(self) -> str:
        return self._tag_name

    @tag_name.setter
    def tag_name(self, value: str) -> None:
        self._tag_name = value.lower()
        self._modified = True

    @property
    def attributes(self) -> list[tuple[str, str | None]]:
        return list(self._attributes)

    def get_attribute(self, name: str) -> str | None:
        for attr_name, value in self._attributes:
            if attr_name == name:
                return value if value is not None else ""
        return None

    def has_attribute(self, name: str) -> bool:
        return any(attr_name == name for attr_name, _ in self._attributes)

    def set_attribute(self, name: str, value: str) -> None:
        for index, (attr_name, _) in enumerate(self._attributes):
            if attr_name == name:
                self._attributes[index] = (name, value)
                break
        else:
            self._attributes.append((name, value))
        self._modified = True

    def remove_attribute(self, name: str) -> None:
        remaining = [(n, v) for n, v in self._attributes if n != name]
        if len(remaining) != len(self._attributes):
            self._attributes = remaining
            self._modified = True

    def before(self, content: str, *, html: bool = False) -> None:
        """Insert content before the start tag. Escaped unless html=True."""
        self._before.append(content if html else _escape_text(content))

    def after(self, content: str, *, html: bool = False) -> None:
        """
        Insert content after the end tag. Escaped unless html=True.

        Multiple calls are emitted in call order.
        """
        self._after.append(content if html else _escape_text(content))

    def start_tag(self, self_closing: bool = False) -> str:
        parts = [f"<{self._tag_name}"]
        for name, value in self._attributes:
            if value is None:
                parts.append(f" {name}")
            else:
                parts.append(f' {name}="{html.escape(value, quote=True)}"')
        parts.append(" />" if self_closing else ">")
        return "".join(parts)


def _escape_text(content: str) -> str:
    return html.escape(content, quote=False)


@dataclass
class _OpenElement:
    tag: str
    element: Element | None
    text_handlers: list[Any] = field(default_factory=list)


class _RewritingParser(HTMLParser):
    def __init__(self, handlers: list[tuple[Selector, Any]]):
        # Keep entity references verbatim so untouched text round-trips
        super().__init__(convert_charrefs=False)
        self._handlers = handlers
        self._out: list[str] = []
        self._stack: list[_OpenElement] = []

    def output(self) -> str:
        return "".join(self._out)

    # Tags

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start(tag, attrs, self_closing=False)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start(tag, attrs, self_closing=True)

    def _start(self, tag: str, attrs: list[tuple[str, str | None]], self_closing: bool) -> None:
        raw = self.get_starttag_text() or ""
        handlers = [handler for selector, handler in self._handlers if selector.matches(tag, attrs)]

        element: Element | None = None
        if handlers:
            element = Element(tag, attrs)
            for handler in handlers:
                on_element = getattr(handler, "element", None)
                if on_element is not None:
                    on_element(element)
            self._out.extend(element._before)
            self._out.append(element.start_tag(self_closing) if element._modified else raw)
        else:
            self._out.append(raw)

        if self_closing or tag in VOID_ELEMENTS:
            if element is not None:
                self._out.extend(element._after)
            return

        text_handlers = [h.text for h in handlers if getattr(h, "text", None) is not None]
        self._stack.append(_OpenElement(tag, element, text_handlers))

    def handle_endtag(self, tag: str) -> None:
        index = len(self._stack) - 1
        while index >= 0 and self._stack[index].tag != tag:
            index -= 1
        if index < 0:
            # Stray end tag
            self._out.append(f"</{tag}>")
            return

        closed = self._stack[index:]
        del self._stack[index:]

        # Descendants left open in the source are closed implicitly
        for open_element in reversed(closed[1:]):
            self._finish(open_element, explicit=False)
        self._finish(closed[0], explicit=True)

    def _finish(self, open_element: _OpenElement, explicit: bool) -> None:
        element = open_element.element
        if element is None:
            if explicit:
                self._out.append(f"</{open_element.tag}>")
            return
        if explicit or element.tag_name != open_element.tag:
            self._out.append(f"</{element.tag_name}>")
        self._out.extend(element._after)

    # Text

    def handle_data(self, data: str) -> None:
        self._out.append(data)
        self._emit_text(data)

    def handle_entityref(self, name: str) -> None:
        raw = f"&{name};"
        self._out.append(raw)
        self._emit_text(html.unescape(raw))

    def handle_charref(self, name: str) -> None:
        raw = f"&#{name};"
        self._out.append(raw)
        self._emit_text(html.unescape(raw))

    def _emit_text(self, text: str) -> None:
        if not text:
            return
        for open_element in self._stack:
            for on_text in open_element.text_handlers:
                on_text(TextChunk(text))

    # Everything else passes through

    def handle_comment(self, data: str) -> None:
        self._out.append(f"<!--{data}-->")

    def handle_decl(self, decl: str) -> None:
        self._out.append(f"<!{decl}>")

    def handle_pi(self, data: str) -> None:
        self._out.append(f"<?{data}>")

    def unknown_decl(self, data: str) -> None:
        self._out.append(f"<![{data}]>")

    def close(self) -> None:
        super().close()
        while self._stack:
            open_element = self._stack.pop()
            if open_element.element is not None:
                self._finish(open_element, explicit=True)


class HTMLRewriter:
    """Collects selector handlers and applies them in one streaming pass."""

    def __init__(self) -> None:
        self._handlers: list[tuple[Selector, Any]] = []

    def on(self, selector: str, handler: Any) -> "HTMLRewriter":
        self._handlers.append((Selector(selector), handler))
        return self

    def transform(self, markup: str) -> str:
        parser = _RewritingParser(self._handlers)
        parser.feed(markup)
        parser.close()
        return parser.output()
