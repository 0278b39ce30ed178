"""Pydantic models for the rich-text conversion subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field, model_validator


# Opaque list instance token: equal ids share one ordinal counter.
ListInstanceId = str | int


class ListKind(str, Enum):
    """List membership of a paragraph."""

    none = "none"
    unordered = "unordered"
    ordered = "ordered"


class StyledRun(BaseModel):
    """A span of text sharing one combination of style attributes."""

    text: str
    bold: bool = False
    italic: bool = False
    monospace: bool = False
    link: str | None = None
    font_size: float | None = Field(
        default=None,
        gt=0,
        description="Point size; None means the caller-supplied base size",
    )


class Paragraph(BaseModel):
    """An ordered sequence of styled runs with resolved list membership."""

    runs: list[StyledRun] = Field(default_factory=list)
    list_kind: ListKind = ListKind.none
    list_instance_id: ListInstanceId | None = None

    @model_validator(mode="after")
    def _drop_instance_without_list(self) -> Paragraph:
        if self.list_kind is ListKind.none:
            self.list_instance_id = None
        return self

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


class Document(BaseModel):
    """Ordered paragraphs handed to the assembler."""

    paragraphs: list[Paragraph] = Field(default_factory=list)


class TextList(BaseModel):
    """Native list metadata attached to a paragraph."""

    marker_format: str = Field(min_length=1)
    list_id: ListInstanceId


class BufferRun(StyledRun):
    """A run of a flat styled-text buffer, carrying its paragraph's list attribute."""

    text_list: TextList | None = None


class StyledBuffer(BaseModel):
    """Document-wide styled text, as produced by a source reader."""

    runs: list[BufferRun] = Field(default_factory=list)
    base_font_size: float | None = Field(
        default=None, gt=0, description="Body text size detected by the source"
    )

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class ConversionState:
    """Per-call ordinal counters, keyed by list instance."""

    ordered_list_counters: dict[ListInstanceId | None, int] = field(default_factory=dict)


class ConversionResult(BaseModel):
    """Result of converting a source to markdown."""

    source_path: str
    markdown: str
    format: str  # docx, html, yaml, buffer, ...
    title: str
    paragraph_count: int = 0
