"""Removal of native list markers rendered as literal paragraph text."""

from __future__ import annotations

import re

from richmark.converter.models import ListKind, StyledRun

_LEADING_WS_RE = re.compile(r"\s*")
_ORDERED_MARKER_RE = re.compile(r"\d+[.):]?\s*")
# "-" and "*" count only when followed by whitespace; "•" always counts.
_BULLET_MARKER_RE = re.compile(r"[-*]\s+|•\s*")


def marker_length(text: str, list_kind: ListKind) -> int:
    """Number of leading characters of *text* to drop before re-encoding.

    Leading whitespace always goes. Ordered items then lose ``12.``, ``3)``
    or ``4:`` style numbers; items without a number, and unordered items,
    lose one ``-`` or ``*`` bullet followed by whitespace, or one ``•``.
    """
    end = _LEADING_WS_RE.match(text).end()
    if list_kind is ListKind.none or end == len(text):
        return end

    if list_kind is ListKind.ordered:
        match = _ORDERED_MARKER_RE.match(text, end)
        if match:
            return match.end()

    match = _BULLET_MARKER_RE.match(text, end)
    if match:
        return match.end()
    return end


def strip_marker(runs: list[StyledRun], list_kind: ListKind) -> list[StyledRun]:
    """Return *runs* without leading whitespace and native list marker."""
    text = "".join(run.text for run in runs)
    return drop_prefix(runs, marker_length(text, list_kind))


def drop_prefix(runs: list[StyledRun], count: int) -> list[StyledRun]:
    """Remove the first *count* characters, spanning runs as needed."""
    if count <= 0:
        return list(runs)

    result: list[StyledRun] = []
    remaining = count
    for run in runs:
        if remaining >= len(run.text):
            remaining -= len(run.text)
            continue
        if remaining:
            run = run.model_copy(update={"text": run.text[remaining:]})
            remaining = 0
        result.append(run)
    return result
