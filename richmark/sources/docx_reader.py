"""Word (.docx) documents as styled buffers, via python-docx.

Each body paragraph becomes one buffer paragraph. Run formatting is
resolved the way Word renders it: direct formatting first, then the run's
character style, then the paragraph style, each following its base styles.
List membership comes from ``w:numPr`` on the paragraph or its style,
looked up in the numbering part; documents built from the stock
"List Number" / "List Bullet" styles without numbering definitions fall
back to the style name.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import docx
from docx.opc.exceptions import PackageNotFoundError
from docx.text.hyperlink import Hyperlink

from richmark.config.models import DocxSourceConfig
from richmark.converter.models import BufferRun, StyledBuffer, TextList
from richmark.sources.models import SourceError

logger = logging.getLogger(__name__)

_MONO_HINTS = ("mono", "code")


def read_docx(path: Path, config: DocxSourceConfig) -> StyledBuffer:
    """Read a .docx file into a ``StyledBuffer``."""
    try:
        document = docx.Document(str(path))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise SourceError(path, "not a readable .docx file", e) from e

    numbering = _NumberingFormats(document)
    monospace_fonts = {name.lower() for name in config.monospace_fonts}
    runs: list[BufferRun] = []

    for paragraph in document.paragraphs:
        text_list = numbering.text_list(paragraph)
        for item in paragraph.iter_inner_content():
            if isinstance(item, Hyperlink):
                link = item.url or None
                for run in item.runs:
                    runs.append(_buffer_run(run, paragraph, link, text_list, monospace_fonts))
            else:
                runs.append(_buffer_run(item, paragraph, None, text_list, monospace_fonts))
        runs.append(BufferRun(text="\n", text_list=text_list))

    base_size = _body_font_size(document)
    logger.debug("read %d paragraphs from %s (body size %s)", len(document.paragraphs), path, base_size)
    return StyledBuffer(runs=runs, base_font_size=base_size)


def _buffer_run(
    run: Any,
    paragraph: Any,
    link: str | None,
    text_list: TextList | None,
    monospace_fonts: set[str],
) -> BufferRun:
    size = _font_attr(run, paragraph, "size")
    return BufferRun(
        text=run.text,
        bold=bool(_font_attr(run, paragraph, "bold")),
        italic=bool(_font_attr(run, paragraph, "italic")),
        monospace=_is_monospace(_font_attr(run, paragraph, "name"), monospace_fonts),
        link=link,
        font_size=size.pt if size else None,
        text_list=text_list,
    )


def _style_chain(style: Any) -> Iterator[Any]:
    while style is not None:
        yield style
        style = style.base_style


def _font_attr(run: Any, paragraph: Any, attr: str) -> Any:
    """First non-None font attribute along run -> character style -> paragraph style."""
    value = getattr(run.font, attr)
    if value is not None:
        return value
    for style in (*_style_chain(run.style), *_style_chain(paragraph.style)):
        value = getattr(style.font, attr)
        if value is not None:
            return value
    return None


def _is_monospace(font_name: str | None, monospace_fonts: set[str]) -> bool:
    if not font_name:
        return False
    lowered = font_name.lower()
    return lowered in monospace_fonts or any(hint in lowered for hint in _MONO_HINTS)


def _body_font_size(document: Any) -> float | None:
    """Point size of body text: the Normal style, else the document defaults."""
    try:
        size = document.styles["Normal"].font.size
    except KeyError:
        size = None
    if size is not None:
        return size.pt

    half_points = document.styles.element.xpath(
        "./w:docDefaults/w:rPrDefault/w:rPr/w:sz/@w:val"
    )
    if half_points and half_points[0].isdigit():
        return int(half_points[0]) / 2
    return None


class _NumberingFormats:
    """Resolves paragraph numbering to ``TextList`` metadata."""

    def __init__(self, document: Any) -> None:
        try:
            self._numbering = document.part.numbering_part.element
        except (KeyError, NotImplementedError):
            # python-docx cannot create a numbering part for documents without one
            self._numbering = None
        self._formats: dict[tuple[str, str], str | None] = {}

    def text_list(self, paragraph: Any) -> TextList | None:
        num_id, ilvl = _num_pr(paragraph)
        style_name = paragraph.style.name if paragraph.style is not None else ""
        style_format = _style_marker_format(style_name)

        # numId 0 explicitly removes numbering inherited from the style
        if num_id is not None and num_id != "0":
            marker_format = self._marker_format(num_id, ilvl) or style_format or "bullet"
            return TextList(marker_format=marker_format, list_id=f"num:{num_id}")
        if num_id is None and style_format is not None:
            return TextList(marker_format=style_format, list_id=f"style:{style_name}")
        return None

    def _marker_format(self, num_id: str, ilvl: str) -> str | None:
        key = (num_id, ilvl)
        if key not in self._formats:
            self._formats[key] = self._lookup(num_id, ilvl)
        return self._formats[key]

    def _lookup(self, num_id: str, ilvl: str) -> str | None:
        if self._numbering is None or not (num_id.isdigit() and ilvl.isdigit()):
            return None
        abstract_ids = self._numbering.xpath(
            f'./w:num[@w:numId="{num_id}"]/w:abstractNumId/@w:val'
        )
        if not abstract_ids:
            logger.debug("numbering %s has no abstract definition", num_id)
            return None
        formats = self._numbering.xpath(
            f'./w:abstractNum[@w:abstractNumId="{abstract_ids[0]}"]'
            f'/w:lvl[@w:ilvl="{ilvl}"]/w:numFmt/@w:val'
        )
        return str(formats[0]) if formats else None


def _style_marker_format(style_name: str) -> str | None:
    if style_name.startswith("List Number"):
        return "decimal"
    if style_name.startswith("List Bullet"):
        return "bullet"
    return None


def _num_pr(paragraph: Any) -> tuple[str | None, str]:
    """``(numId, ilvl)`` from the paragraph, else from its style chain."""
    elements = [paragraph._p]
    if paragraph.style is not None:
        elements.extend(style.element for style in _style_chain(paragraph.style))

    for element in elements:
        num_ids = element.xpath("./w:pPr/w:numPr/w:numId/@w:val")
        if num_ids:
            levels = element.xpath("./w:pPr/w:numPr/w:ilvl/@w:val")
            return str(num_ids[0]), str(levels[0]) if levels else "0"
    return None, "0"
