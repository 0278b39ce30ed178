"""Serialized styled buffers (YAML or JSON)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from richmark.converter.models import StyledBuffer
from richmark.sources.models import SourceError

logger = logging.getLogger(__name__)


def read_styled(path: Path) -> StyledBuffer:
    """Load a ``StyledBuffer`` written as YAML or JSON.

    The top level is either a mapping with ``runs`` (and optionally
    ``base_font_size``) or a bare list of runs.
    """
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(path, "cannot read file", e) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SourceError(path, "malformed styled document", e) from e

    if raw is None:
        raw = {"runs": []}
    elif isinstance(raw, list):
        raw = {"runs": raw}

    try:
        buffer = StyledBuffer.model_validate(raw)
    except ValidationError as e:
        raise SourceError(path, "invalid styled document", e) from e

    logger.debug("loaded %d runs from %s", len(buffer.runs), path)
    return buffer
