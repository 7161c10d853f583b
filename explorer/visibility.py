"""Derive the visible chunk set from the store and the current filters.

Precedence, first match wins:

1. a neighbour lock, even an empty one, is shown verbatim;
2. a non-blank search term keeps matching chunks from active sources;
3. otherwise every chunk from an active source is visible.
"""

from __future__ import annotations

from typing import Sequence

import config
from types_models import Chunk, FilterState


def _contains(text: str, term: str) -> bool:
    return term.lower() in text.lower()


def search_matches(store: Sequence[Chunk], state: FilterState) -> list[Chunk]:
    """Chunks matching the search term within active sources, ignoring any lock."""
    if not state.search_active:
        return []
    term = state.search_term
    return [
        c
        for c in store
        if _contains(c.chunk, term) and c.source in state.active_sources
    ]


def resolve_visible(store: Sequence[Chunk], state: FilterState) -> list[Chunk]:
    """Return the chunks eligible for display and export."""
    if state.neighbor_lock is not None:
        return list(state.neighbor_lock)

    if state.search_active:
        return search_matches(store, state)

    return [c for c in store if c.source in state.active_sources]


def search_preview(text: str, limit: int = config.SEARCH_PREVIEW_CHARS) -> str:
    """Shorten a chunk for the quick-access result list."""
    if len(text) > limit:
        return text[:limit] + "…"
    return text


__all__ = ["resolve_visible", "search_matches", "search_preview"]
