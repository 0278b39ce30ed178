"""Builders for documents used across the test suite."""

from richmark.converter.models import Document, ListKind, Paragraph, StyledRun


def para(*runs, kind=ListKind.none, list_id=None):
    """Paragraph from runs; plain strings become unstyled runs."""
    return Paragraph(
        runs=[StyledRun(text=r) if isinstance(r, str) else r for r in runs],
        list_kind=kind,
        list_instance_id=list_id,
    )


def doc(*paragraphs):
    return Document(paragraphs=list(paragraphs))
