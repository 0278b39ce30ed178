"""Paragraph segmentation of a flat styled-text buffer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from richmark.converter.lists import classify_list
from richmark.converter.models import BufferRun, Document, Paragraph, StyledBuffer, StyledRun, TextList

# CRLF must be tried before its single-character halves.
_TERMINATOR_RE = re.compile("\r\n|[\n\r\u0085\u2028\u2029]")


@dataclass
class ParagraphSlice:
    """Runs between two paragraph terminators."""

    runs: list[StyledRun] = field(default_factory=list)
    text_list: TextList | None = None
    terminator: str = ""

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


def segment(buffer: StyledBuffer) -> list[ParagraphSlice]:
    """Split *buffer* into paragraph slices.

    Terminators are recorded on the slice they close and never appear in its
    runs. Empty paragraphs produce empty slices; a terminator at the very end
    of the buffer does not open a new one.
    """
    slices: list[ParagraphSlice] = []
    current = ParagraphSlice()
    opened = False

    for run in buffer.runs:
        text = run.text
        pos = 0
        # A CRLF pair split across two runs is still one terminator.
        if not opened and slices and slices[-1].terminator == "\r" and text.startswith("\n"):
            slices[-1].terminator = "\r\n"
            pos = 1

        for match in _TERMINATOR_RE.finditer(text, pos):
            if not opened:
                current.text_list = run.text_list
            _append_text(current, run, text[pos:match.start()])
            current.terminator = match.group()
            slices.append(current)
            current = ParagraphSlice()
            opened = False
            pos = match.end()

        if pos < len(text):
            if not opened:
                current.text_list = run.text_list
                opened = True
            _append_text(current, run, text[pos:])

    if opened:
        slices.append(current)
    return slices


def to_document(buffer: StyledBuffer) -> Document:
    """Segment *buffer* and classify the list membership of every paragraph."""
    paragraphs = []
    for piece in segment(buffer):
        kind, instance_id = classify_list(piece.text_list)
        paragraphs.append(
            Paragraph(runs=piece.runs, list_kind=kind, list_instance_id=instance_id)
        )
    return Document(paragraphs=paragraphs)


def _append_text(current: ParagraphSlice, run: BufferRun, text: str) -> None:
    if not text:
        return
    current.runs.append(
        StyledRun(
            text=text,
            bold=run.bold,
            italic=run.italic,
            monospace=run.monospace,
            link=run.link,
            font_size=run.font_size,
        )
    )
