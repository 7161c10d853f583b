"""Explorer session: applies UI events to immutable filter snapshots."""

from __future__ import annotations

import logging

from explorer.export import to_delimited_text
from explorer.neighbors import nearest_neighbors
from explorer.selection import describe_selection, detail_preview, selection_heading
from explorer.series import chapter_markers, group_by_source
from explorer.store import ChunkStore
from explorer.visibility import resolve_visible, search_matches
from types_models import (
    ChapterMarker,
    Chunk,
    FilterState,
    PlotSeries,
    Selection,
    SelectionInfo,
)

logger = logging.getLogger(__name__)

ALL_SOURCES = "All"


def parse_neighbor_count(raw: str) -> int:
    """Parse the neighbour-count input; blank means 0 and negatives clamp to 0."""
    value = raw.strip() or "0"
    try:
        return max(0, int(value))
    except ValueError as exc:
        raise ValueError(f"Neighbour count must be a whole number, got: {raw!r}") from exc


class ExplorerSession:
    """State owned by one interactive user.

    The store never changes after construction; `state` is replaced, never
    edited, on every event.
    """

    def __init__(self, store: ChunkStore, neighbor_count: int = 0) -> None:
        super().__init__()
        self.store = store
        self.state = FilterState.initial(store.sources(), neighbor_count)
        self.selection: Selection | None = None
        self.show_full_chunk = False

    # Events

    def search(self, term: str) -> None:
        self.state = self.state.with_search(term)

    def pick_source(self, name: str) -> None:
        """Show a single source, or every source for "All"."""
        sources = self.store.sources()
        if name.strip().lower() == ALL_SOURCES.lower():
            self.state = self.state.with_sources(sources)
            return
        if name not in sources:
            raise ValueError(f"Unknown source: {name}")
        self.state = self.state.with_sources([name])

    def set_neighbor_count(self, raw: str | int) -> None:
        count = raw if isinstance(raw, int) else parse_neighbor_count(raw)
        self.state = self.state.with_neighbor_count(count)

    def click(self, text: str, source: str) -> None:
        """Select a plotted point and pin its neighbours when neighbour mode is on."""
        clicked = Selection(text=text, source=source)
        self._select(clicked)
        if self.state.neighbor_count > 0:
            result = nearest_neighbors(
                self.store, self.state, clicked, self.state.neighbor_count
            )
            self.state = self.state.with_neighbor_lock(_as_chunks(result))
            logger.debug("Pinned %s chunks around %r", len(result), text[:40])

    def select_first_search_result(self) -> bool:
        matches = search_matches(self.store, self.state)
        if not matches:
            return False
        self._select(Selection.of(matches[0]))
        return True

    def close_selection(self) -> None:
        self.selection = None

    def expand_selection(self) -> None:
        self.show_full_chunk = True

    def clear_neighbors(self) -> None:
        self.state = self.state.without_neighbor_lock()

    def reset(self) -> None:
        self.state = self.state.reset(self.store.sources())

    def _select(self, selection: Selection) -> None:
        self.selection = selection
        self.show_full_chunk = False

    # Derived views

    def visible(self) -> list[Chunk]:
        return resolve_visible(self.store, self.state)

    def series(self) -> list[PlotSeries]:
        return group_by_source(self.visible())

    def markers(self) -> list[ChapterMarker]:
        return chapter_markers(self.visible())

    def search_results(self, limit: int = 6) -> list[Chunk]:
        return search_matches(self.store, self.state)[:limit]

    def selection_info(self) -> SelectionInfo:
        return describe_selection(self.store, self.selection)

    def selection_detail(self) -> tuple[str, str] | None:
        """Heading and body of the detail popup, or None when nothing is selected."""
        if self.selection is None:
            return None
        heading = selection_heading(self.selection, self.selection_info())
        return heading, detail_preview(self.selection.text, self.show_full_chunk)

    def export_csv(self) -> str:
        return to_delimited_text(self.visible())


def _as_chunks(result: list[Chunk | Selection | None]) -> list[Chunk]:
    """Neighbour results pinned for display; an unmatched click is kept without coordinates."""
    chunks: list[Chunk] = []
    for item in result:
        if isinstance(item, Chunk):
            chunks.append(item)
        elif isinstance(item, Selection):
            chunks.append(Chunk(source=item.source, chunk=item.text))
    return chunks


__all__ = ["ALL_SOURCES", "ExplorerSession", "parse_neighbor_count"]
