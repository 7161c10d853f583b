"""Detail lookup for the selected chunk."""

from __future__ import annotations

from typing import Sequence

import config
from types_models import Chunk, Selection, SelectionInfo


def describe_selection(
    store: Sequence[Chunk], selection: Selection | None
) -> SelectionInfo:
    """Locate the selection within its source over the unfiltered store.

    Position is the 1-based index of the first chunk with the same text in
    the same source. Missing selections and lookup misses yield absent values.
    """
    if selection is None:
        return SelectionInfo()

    in_source = [c for c in store if c.source == selection.source]
    if not in_source:
        return SelectionInfo()

    position = next(
        (i + 1 for i, c in enumerate(in_source) if c.chunk == selection.text), None
    )
    return SelectionInfo(position=position, total=len(in_source))


def selection_heading(selection: Selection, info: SelectionInfo) -> str:
    """Popup title, falling back to the source name when the lookup misses."""
    if info.position and info.total:
        return f"Chunk {info.position} of {info.total} in {selection.source}"
    return f"Source: {selection.source}"


def detail_preview(
    text: str, expanded: bool = False, limit: int = config.DETAIL_PREVIEW_CHARS
) -> str:
    """Popup body: long text is cut at `limit` characters until expanded."""
    if expanded or len(text) <= limit:
        return text
    return text[:limit] + "..."


__all__ = ["describe_selection", "detail_preview", "selection_heading"]
