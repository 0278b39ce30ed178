"""Inline markdown encoding of styled runs."""

from __future__ import annotations

from richmark.converter.models import StyledRun

# Applied in this order so that inserted backslashes are not escaped again.
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ("`", "\\`"),
    ("[", "\\["),
    ("]", "\\]"),
)


def escape_markdown(text: str) -> str:
    for char, replacement in _ESCAPES:
        text = text.replace(char, replacement)
    return text


def split_whitespace(text: str) -> tuple[str, str, str]:
    """Split *text* into ``(leading, core, trailing)`` whitespace parts."""
    core = text.strip()
    if not core:
        return text, "", ""
    start = len(text) - len(text.lstrip())
    end = start + len(core)
    return text[:start], core, text[end:]


def decorate(core: str, run: StyledRun) -> str:
    """Wrap *core* in emphasis, code and link markup for *run*'s style."""
    if run.bold and run.italic:
        core = f"***{core}***"
    elif run.bold:
        core = f"**{core}**"
    elif run.italic:
        core = f"*{core}*"

    if run.monospace:
        core = f"`{core}`"

    if run.link:
        core = f"[{core}]({run.link})"
    return core


def encode_run(run: StyledRun) -> str:
    """Encode one run, keeping its surrounding whitespace outside the markers."""
    cleaned = escape_markdown(run.text)
    leading, core, trailing = split_whitespace(cleaned)
    if not core:
        return cleaned
    return leading + decorate(core, run) + trailing


def encode_runs(runs: list[StyledRun]) -> str:
    return "".join(encode_run(run) for run in runs)
