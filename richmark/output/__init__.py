"""Output subsystem: writes converted markdown to disk."""

from richmark.output.writer import MarkdownWriter

__all__ = ["MarkdownWriter"]
