"""List context resolution: list kind and per-instance ordinals."""

from __future__ import annotations

from dataclasses import dataclass

from richmark.converter.models import ConversionState, ListInstanceId, ListKind, Paragraph, TextList

# Marker formats that number their items.
ORDERED_MARKER_FORMATS: frozenset[str] = frozenset(
    {"decimal", "decimal-zero", "decimalzero", "numeric", "1"}
)


@dataclass(frozen=True)
class ListContext:
    """Resolved list membership of one paragraph."""

    kind: ListKind
    instance_id: ListInstanceId | None = None
    ordinal: int | None = None


def classify_list(text_list: TextList | None) -> tuple[ListKind, ListInstanceId | None]:
    """Map native list metadata to ``(list_kind, list_instance_id)``."""
    if text_list is None:
        return ListKind.none, None
    if text_list.marker_format.strip().lower() in ORDERED_MARKER_FORMATS:
        return ListKind.ordered, text_list.list_id
    return ListKind.unordered, text_list.list_id


def next_ordinal(state: ConversionState, instance_id: ListInstanceId | None) -> int:
    """Advance and return the counter of one ordered list instance."""
    value = state.ordered_list_counters.get(instance_id, 0) + 1
    state.ordered_list_counters[instance_id] = value
    return value


def resolve_list(paragraph: Paragraph, state: ConversionState) -> ListContext:
    """Resolve *paragraph*'s list context, consuming an ordinal for ordered items."""
    if paragraph.list_kind is ListKind.ordered:
        ordinal = next_ordinal(state, paragraph.list_instance_id)
        return ListContext(ListKind.ordered, paragraph.list_instance_id, ordinal)
    if paragraph.list_kind is ListKind.unordered:
        return ListContext(ListKind.unordered, paragraph.list_instance_id)
    return ListContext(ListKind.none)
