from __future__ import annotations

import pytest

from conftest import make_chunk
from explorer.series import PALETTE, chapter_markers, group_by_source
from explorer.store import ChunkStore


def test_groups_in_first_occurrence_order(two_source_store: ChunkStore) -> None:
    series = group_by_source(list(two_source_store))

    assert [s.name for s in series] == ["Book A", "Book B"]
    assert [p[3] for p in series[0].points] == [
        "CHAPTER I. The Beginning",
        "It was a dark night",
        "Morning came slowly",
    ]
    assert series[1].points[2] == (None, 1.0, 1.0, "Broken record")


def test_colors_follow_grouping_position() -> None:
    visible = [make_chunk("t", source=f"S{i}") for i in range(len(PALETTE) + 1)]

    series = group_by_source(visible)

    assert [s.color for s in series[: len(PALETTE)]] == list(PALETTE)
    assert series[-1].color == PALETTE[0]


def test_color_depends_on_visible_sources(two_source_store: ChunkStore) -> None:
    only_b = [c for c in two_source_store if c.source == "Book B"]

    assert group_by_source(list(two_source_store))[1].color == PALETTE[1]
    assert group_by_source(only_b)[0].color == PALETTE[0]


def test_empty_visible_set() -> None:
    assert group_by_source([]) == []


def test_custom_palette_must_not_be_empty() -> None:
    with pytest.raises(ValueError):
        group_by_source([make_chunk("t")], palette=())


def test_chapter_markers_skip_malformed_and_lowercase() -> None:
    visible = [
        make_chunk("CHAPTER ONE", x=1, y=2, z=3),
        make_chunk("Chapter Two", x=None),
        make_chunk("chapter three"),
        make_chunk("Chapter Four", source="B", x=4, y=5, z=6),
        make_chunk("Not a Chapter"),
    ]

    markers = chapter_markers(visible)

    assert [(m.text, m.source) for m in markers] == [
        ("CHAPTER ONE", "A"),
        ("Chapter Four", "B"),
    ]
    assert (markers[0].x, markers[0].y, markers[0].z) == (1.0, 2.0, 3.0)
