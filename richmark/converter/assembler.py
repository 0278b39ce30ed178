"""Document assembly: styled paragraphs to a markdown string."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from richmark.converter.headings import classify_heading, heading_prefix, leading_run
from richmark.converter.inline import encode_runs
from richmark.converter.lists import resolve_list
from richmark.converter.markers import strip_marker
from richmark.converter.models import ConversionState, Document, ListKind, Paragraph, StyledBuffer
from richmark.converter.segmenter import to_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedParagraph:
    """How one paragraph was classified and the markdown line it produced."""

    line: str
    list_kind: ListKind = ListKind.none
    ordinal: int | None = None
    heading_level: int | None = None

    @property
    def blank(self) -> bool:
        return not self.line


def convert(document: Document, base_font_size: float) -> str:
    """Serialize *document* to markdown.

    Heading thresholds are measured against *base_font_size*. Ordinal
    counters live for this call only.
    """
    if base_font_size <= 0:
        raise ValueError(f"base_font_size must be positive, got {base_font_size}")

    state = ConversionState()
    lines = [render_paragraph(p, base_font_size, state) for p in document.paragraphs]
    logger.debug(
        "converted %d paragraphs (%d ordered lists)",
        len(lines),
        len(state.ordered_list_counters),
    )

    # Blank paragraphs keep paragraphs apart but never add blank lines of their own.
    return "\n\n".join(line for line in lines if line).strip()


def convert_buffer(buffer: StyledBuffer, base_font_size: float) -> str:
    """Segment a flat styled buffer and convert it."""
    return convert(to_document(buffer), base_font_size)


def render_paragraph(
    paragraph: Paragraph, base_font_size: float, state: ConversionState
) -> str:
    """Render one paragraph as a single markdown line ("" for blank paragraphs)."""
    return analyze_paragraph(paragraph, base_font_size, state).line


def analyze_paragraph(
    paragraph: Paragraph, base_font_size: float, state: ConversionState
) -> RenderedParagraph:
    if not paragraph.text.strip():
        return RenderedParagraph(line="")

    context = resolve_list(paragraph, state)
    runs = strip_marker(paragraph.runs, context.kind)
    level = classify_heading(leading_run(runs), base_font_size)
    text = encode_runs(runs)

    # A heading wins over list rendering, but the item still took its ordinal.
    if level is not None:
        line = f"{heading_prefix(level)} {text}"
    elif context.kind is ListKind.ordered:
        line = f"{context.ordinal}. {text}"
    elif context.kind is ListKind.unordered:
        line = f"- {text}"
    else:
        line = text
    return RenderedParagraph(line, context.kind, context.ordinal, level)
