"""Source-file-to-markdown converter service."""

from __future__ import annotations

import logging
from pathlib import Path

from richmark import sources
from richmark.config.models import RichmarkConfig
from richmark.converter.assembler import convert
from richmark.converter.models import ConversionResult, StyledBuffer
from richmark.converter.segmenter import to_document
from richmark.converter.title import derive_title

logger = logging.getLogger(__name__)


class DocumentConverter:
    """Reads source files and converts them with the configured base size."""

    def __init__(self, config: RichmarkConfig) -> None:
        self._config = config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def convert(self, file_path: str | Path) -> ConversionResult | None:
        """Convert a source file to markdown. Returns None on any error."""
        path = Path(file_path).resolve()
        base = self._config.conversion.base_font_size

        try:
            buffer = sources.read_source(path, self._config.sources, base)
        except sources.SourceError:
            logger.warning("Cannot read source %s", path, exc_info=True)
            return None

        return self.convert_buffer(
            buffer, source_path=str(path), fmt=sources.source_format(path) or "unknown"
        )

    def convert_buffer(
        self,
        buffer: StyledBuffer,
        source_path: str = "<buffer>",
        fmt: str = "buffer",
    ) -> ConversionResult:
        """Convert an in-memory styled buffer."""
        base = self.base_font_size(buffer)
        document = to_document(buffer)
        markdown = convert(document, base)
        title = derive_title(markdown) or self._config.output.default_title
        logger.info(
            "converted %s: %d paragraphs, base size %g", source_path, len(document.paragraphs), base
        )
        return ConversionResult(
            source_path=source_path,
            markdown=markdown,
            format=fmt,
            title=title,
            paragraph_count=len(document.paragraphs),
        )

    def base_font_size(self, buffer: StyledBuffer) -> float:
        """Body size used for heading thresholds."""
        conversion = self._config.conversion
        if conversion.detect_base_font_size and buffer.base_font_size is not None:
            return buffer.base_font_size
        return conversion.base_font_size
