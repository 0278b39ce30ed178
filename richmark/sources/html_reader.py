"""HTML fragments (e.g. pasted formatted text) as styled buffers, via BeautifulSoup."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from richmark.config.models import HtmlSourceConfig
from richmark.converter.models import BufferRun, StyledBuffer, TextList
from richmark.sources.models import SourceError

logger = logging.getLogger(__name__)

_SKIPPED_TAGS = {"script", "style", "head", "title", "noscript", "template", "iframe"}
_BLOCK_TAGS = {
    "p", "div", "pre", "blockquote", "section", "article", "header", "footer",
    "main", "aside", "figure", "figcaption", "address", "table", "tr", "dl",
    "dt", "dd", "hr", "h1", "h2", "h3", "h4", "h5", "h6",
}
_BOLD_TAGS = {"b", "strong"}
_ITALIC_TAGS = {"i", "em", "cite", "var", "dfn"}
_MONOSPACE_TAGS = {"code", "kbd", "samp", "tt", "pre"}
_OL_MARKER_FORMATS = {"1": "decimal", "a": "lower-alpha", "A": "upper-alpha", "i": "lower-roman", "I": "upper-roman"}
_MONO_FAMILIES = ("mono", "courier", "consolas", "menlo", "monaco")

_WS_RE = re.compile(r"\s+")
_STYLE_DECL_RE = re.compile(r"([\w-]+)\s*:\s*([^;]+)")
_FONT_SIZE_RE = re.compile(r"([0-9]*\.?[0-9]+)\s*(px|pt|em|rem|%)?", re.IGNORECASE)


@dataclass(frozen=True)
class _InlineStyle:
    bold: bool = False
    italic: bool = False
    monospace: bool = False
    link: str | None = None
    font_size: float | None = None


def read_html(path: Path, base_font_size: float, config: HtmlSourceConfig) -> StyledBuffer:
    """Read an HTML file into a ``StyledBuffer``."""
    try:
        markup = path.read_bytes()
    except OSError as e:
        raise SourceError(path, "cannot read file", e) from e
    return parse_html(markup, base_font_size, config)


def parse_html(
    markup: str | bytes, base_font_size: float, config: HtmlSourceConfig | None = None
) -> StyledBuffer:
    """Parse an HTML document or fragment into a ``StyledBuffer``.

    Headings get ``base_font_size * heading_scale[tag]`` so that the size
    heuristic downstream recovers their level.
    """
    config = config or HtmlSourceConfig()
    soup = BeautifulSoup(markup, "html.parser")
    walker = _HtmlWalker(base_font_size, config)
    walker.walk(soup, _InlineStyle(), preformatted=False)
    walker.end_block()
    logger.debug("parsed %d runs from html", len(walker.runs))
    return StyledBuffer(runs=walker.runs, base_font_size=base_font_size)


class _HtmlWalker:
    def __init__(self, base_font_size: float, config: HtmlSourceConfig) -> None:
        self.runs: list[BufferRun] = []
        self._base = base_font_size
        self._scale = config.heading_scale
        self._lists: list[TextList] = []
        self._list_count = 0
        self._item_list: TextList | None = None
        self._open = False

    def walk(self, node: Tag, style: _InlineStyle, preformatted: bool) -> None:
        for child in node.children:
            if isinstance(child, PreformattedString):
                continue  # comments, doctypes, CDATA
            if isinstance(child, NavigableString):
                self._text(str(child), style, preformatted)
            elif isinstance(child, Tag):
                self._tag(child, style, preformatted)

    def end_block(self) -> None:
        if self._open:
            self.runs.append(BufferRun(text="\n", text_list=self._item_list))
            self._open = False

    def _tag(self, tag: Tag, style: _InlineStyle, preformatted: bool) -> None:
        name = tag.name.lower()
        if name in _SKIPPED_TAGS:
            return
        if name == "br":
            self._emit("\n", style)
            return
        if name in ("ul", "ol"):
            self._list(tag, name, style, preformatted)
            return
        if name == "li":
            self._item(tag, style, preformatted)
            return

        style = self._inline_style(tag, name, style)
        preformatted = preformatted or name == "pre"
        if name in _BLOCK_TAGS:
            self.end_block()
            self.walk(tag, style, preformatted)
            self.end_block()
        else:
            self.walk(tag, style, preformatted)

    def _list(self, tag: Tag, name: str, style: _InlineStyle, preformatted: bool) -> None:
        self.end_block()
        self._list_count += 1
        if name == "ol":
            marker_format = _OL_MARKER_FORMATS.get(str(tag.get("type", "1")), "decimal")
        else:
            marker_format = "disc"
        self._lists.append(TextList(marker_format=marker_format, list_id=f"html-list-{self._list_count}"))
        self.walk(tag, style, preformatted)
        self._lists.pop()
        self.end_block()

    def _item(self, tag: Tag, style: _InlineStyle, preformatted: bool) -> None:
        self.end_block()
        outer = self._item_list
        # Nested lists flatten: the innermost open list owns the item.
        self._item_list = self._lists[-1] if self._lists else None
        self.walk(tag, style, preformatted)
        self.end_block()
        self._item_list = outer

    def _inline_style(self, tag: Tag, name: str, style: _InlineStyle) -> _InlineStyle:
        if name in _BOLD_TAGS:
            style = replace(style, bold=True)
        if name in _ITALIC_TAGS:
            style = replace(style, italic=True)
        if name in _MONOSPACE_TAGS:
            style = replace(style, monospace=True)
        if name == "a" and tag.get("href"):
            style = replace(style, link=str(tag["href"]))
        if name in self._scale:
            style = replace(style, font_size=self._base * self._scale[name])
        css = tag.get("style")
        if css:
            style = self._css_style(str(css), style)
        return style

    def _css_style(self, css: str, style: _InlineStyle) -> _InlineStyle:
        for prop, value in _STYLE_DECL_RE.findall(css):
            prop = prop.lower()
            value = value.strip().lower()
            if prop == "font-weight":
                style = replace(style, bold=_is_bold_weight(value))
            elif prop == "font-style":
                style = replace(style, italic=value in ("italic", "oblique"))
            elif prop == "font-family":
                style = replace(style, monospace=any(f in value for f in _MONO_FAMILIES))
            elif prop == "font-size":
                size = self._font_size(value, style.font_size)
                if size is not None:
                    style = replace(style, font_size=size)
        return style

    def _font_size(self, value: str, current: float | None) -> float | None:
        """CSS font-size in px-equivalent points."""
        match = _FONT_SIZE_RE.fullmatch(value)
        if match is None:
            return None
        number = float(match.group(1))
        unit = (match.group(2) or "px").lower()
        if unit == "pt":
            number = number * 4 / 3
        elif unit == "em":
            number = number * (current or self._base)
        elif unit == "rem":
            number = number * self._base
        elif unit == "%":
            number = number / 100 * (current or self._base)
        return number if number > 0 else None

    def _text(self, text: str, style: _InlineStyle, preformatted: bool) -> None:
        if not preformatted:
            text = _WS_RE.sub(" ", text)
            if not self._open:
                text = text.lstrip()
        if text:
            self._emit(text, style)

    def _emit(self, text: str, style: _InlineStyle) -> None:
        self.runs.append(
            BufferRun(
                text=text,
                bold=style.bold,
                italic=style.italic,
                monospace=style.monospace,
                link=style.link,
                font_size=style.font_size,
                text_list=self._item_list,
            )
        )
        self._open = not text.endswith("\n")


def _is_bold_weight(value: str) -> bool:
    if value in ("bold", "bolder"):
        return True
    return value.isdigit() and int(value) >= 600
