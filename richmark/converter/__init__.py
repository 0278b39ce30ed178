"""Rich-text to markdown conversion subsystem."""

from richmark.converter.assembler import convert, convert_buffer, render_paragraph
from richmark.converter.models import (
    BufferRun,
    ConversionResult,
    ConversionState,
    Document,
    ListKind,
    Paragraph,
    StyledBuffer,
    StyledRun,
    TextList,
)
from richmark.converter.segmenter import segment, to_document
from richmark.converter.title import derive_title
from richmark.converter.converter import DocumentConverter

__all__ = [
    "BufferRun",
    "ConversionResult",
    "ConversionState",
    "Document",
    "DocumentConverter",
    "ListKind",
    "Paragraph",
    "StyledBuffer",
    "StyledRun",
    "TextList",
    "convert",
    "convert_buffer",
    "derive_title",
    "render_paragraph",
    "segment",
    "to_document",
]
