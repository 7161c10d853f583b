"""Group visible chunks into per-source plot series."""

from __future__ import annotations

from typing import Sequence

from types_models import ChapterMarker, Chunk, PlotSeries

# Colours are assigned by position in the grouping, so a source can change
# colour when the set of visible sources changes.
PALETTE: tuple[str, ...] = (
    "#85d8ce",
    "#a7c7e7",
    "#e6aace",
    "#b1e693",
    "#ffe7a3",
    "#f7b267",
    "#c1b2e6",
    "#f4b5c2",
)

CHAPTER_PREFIXES: tuple[str, ...] = ("CHAPTER", "Chapter")


def group_by_source(
    visible: Sequence[Chunk], palette: Sequence[str] = PALETTE
) -> list[PlotSeries]:
    """Partition chunks by source, keeping first-occurrence order."""
    if not palette:
        raise ValueError("palette must contain at least one colour")

    grouped: dict[str, list[Chunk]] = {}
    for chunk in visible:
        grouped.setdefault(chunk.source, []).append(chunk)

    return [
        PlotSeries(
            name=source,
            color=palette[i % len(palette)],
            points=[(c.x, c.y, c.z, c.chunk) for c in chunks],
        )
        for i, (source, chunks) in enumerate(grouped.items())
    ]


def chapter_markers(visible: Sequence[Chunk]) -> list[ChapterMarker]:
    """Visible chunks that open a chapter and can be placed in space."""
    markers: list[ChapterMarker] = []
    for c in visible:
        if not c.chunk.startswith(CHAPTER_PREFIXES):
            continue
        if c.x is None or c.y is None or c.z is None:
            continue
        markers.append(ChapterMarker(x=c.x, y=c.y, z=c.z, text=c.chunk, source=c.source))
    return markers


__all__ = ["PALETTE", "chapter_markers", "group_by_source"]
