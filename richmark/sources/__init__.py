"""Source readers: turn files into styled buffers for the converter."""

from __future__ import annotations

from pathlib import Path

from richmark.config.models import SourcesConfig
from richmark.converter.models import StyledBuffer
from richmark.sources.docx_reader import read_docx
from richmark.sources.html_reader import parse_html, read_html
from richmark.sources.models import SourceError
from richmark.sources.styled import read_styled

SOURCE_EXTENSIONS: dict[str, str] = {
    ".docx": "docx",
    ".html": "html",
    ".htm": "html",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


def source_format(file_path: str | Path) -> str | None:
    return SOURCE_EXTENSIONS.get(Path(file_path).suffix.lower())


def can_read(file_path: str | Path) -> bool:
    """Check whether a file has a supported source extension."""
    return source_format(file_path) is not None


def read_source(
    file_path: str | Path, config: SourcesConfig, base_font_size: float
) -> StyledBuffer:
    """Read *file_path* into a ``StyledBuffer``.

    *base_font_size* sizes HTML headings. Raises ``SourceError`` for missing,
    oversized, unsupported or malformed files.
    """
    path = Path(file_path)
    fmt = source_format(path)
    if fmt is None:
        raise SourceError(path, f"unsupported format '{path.suffix or path.name}'")
    if not path.is_file():
        raise SourceError(path, "file not found")

    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > config.max_file_size_mb:
        raise SourceError(path, f"file too large ({size_mb:.1f} MB)")

    if fmt == "docx":
        return read_docx(path, config.docx)
    if fmt == "html":
        return read_html(path, base_font_size, config.html)
    return read_styled(path)


__all__ = [
    "SOURCE_EXTENSIONS",
    "SourceError",
    "can_read",
    "parse_html",
    "read_source",
    "source_format",
]
