"""MarkdownWriter: writes conversion results to .md files on disk."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from richmark.config.models import OutputConfig
from richmark.converter.models import ConversionResult

logger = logging.getLogger(__name__)


def _sanitize_title(title: str) -> str:
    """Make a document title safe for use as a filename.

    Replaces path separators and whitespace with `-`, strips `..` segments,
    and removes characters that are problematic on common filesystems.
    """
    name = re.sub(r"[/\\\s]+", "-", title.strip())
    # Remove path traversal attempts
    name = name.replace("..", "")
    # Strip anything that isn't alphanumeric, dash, underscore, or dot
    name = re.sub(r"[^\w\-\.]", "", name)
    # Collapse repeated dashes left over from substitutions
    name = re.sub(r"-{2,}", "-", name).strip("-")
    # Don't allow empty or dot-only names
    if not name or name.strip(".") == "":
        name = "_unnamed"
    return name


class MarkdownWriter:
    """Writes ConversionResult instances to disk as .md files.

    Handles filename sanitization, directory creation, collision
    avoidance, and dry-run mode.
    """

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.base_dir)

    def write(self, result: ConversionResult, *, dry_run: bool = False) -> Path:
        """Write a single ConversionResult to disk.

        Returns the Path of the written (or would-be) file.
        """
        if not result.markdown.strip():
            raise ValueError(f"Nothing to write: {result.source_path} converted to empty markdown")

        dest = self._destination(_sanitize_title(result.title))

        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(result.markdown + "\n", encoding="utf-8")
        logger.info("wrote %s (%d bytes)", dest, len(result.markdown))
        return dest

    def write_batch(self, results: list[ConversionResult], *, dry_run: bool = False) -> list[Path]:
        """Write multiple results. Returns list of paths in input order."""
        return [self.write(result, dry_run=dry_run) for result in results]

    def _destination(self, safe_name: str) -> Path:
        dest = self.base_dir / f"{safe_name}.md"
        if self.config.overwrite:
            return dest
        suffix = 1
        while dest.exists():
            dest = self.base_dir / f"{safe_name}-{suffix}.md"
            suffix += 1
        return dest
