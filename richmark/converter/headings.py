"""Heading level inference from font size."""

from __future__ import annotations

from richmark.converter.models import StyledRun

# (minimum points above the base size, heading level), largest first.
HEADING_THRESHOLDS: tuple[tuple[float, int], ...] = ((10, 1), (6, 2), (3, 3))


def classify_heading(run: StyledRun | None, base_font_size: float) -> int | None:
    """Heading level for a paragraph starting with *run*, or None.

    Only the leading run's size counts. This is a size heuristic: large
    body text at these sizes reads as a heading too.
    """
    if run is None:
        return None
    size = run.font_size if run.font_size is not None else base_font_size
    for offset, level in HEADING_THRESHOLDS:
        if size >= base_font_size + offset:
            return level
    return None


def leading_run(runs: list[StyledRun]) -> StyledRun | None:
    return next((run for run in runs if run.text), None)


def heading_prefix(level: int) -> str:
    return "#" * level
