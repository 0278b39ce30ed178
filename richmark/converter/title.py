"""Title derivation for converted markdown."""

from __future__ import annotations


def derive_title(markdown: str) -> str | None:
    """Text of the first ``#`` heading in *markdown*, or None."""
    for line in markdown.splitlines():
        stripped = line.strip(" \t")
        if stripped.startswith("#"):
            title = stripped.strip("# ")
            return title or None
    return None
