from __future__ import annotations

from conftest import make_chunk, state_for
from explorer.store import ChunkStore
from explorer.visibility import resolve_visible, search_matches, search_preview


def test_source_filter_keeps_store_order(two_source_store: ChunkStore) -> None:
    state = state_for(two_source_store, active_sources=frozenset({"Book A"}))

    visible = resolve_visible(two_source_store, state)

    assert visible == [c for c in two_source_store if c.source == "Book A"]


def test_all_sources_visible_by_default(two_source_store: ChunkStore) -> None:
    state = state_for(two_source_store)

    assert resolve_visible(two_source_store, state) == list(two_source_store)


def test_no_active_sources_shows_nothing(two_source_store: ChunkStore) -> None:
    state = state_for(two_source_store, active_sources=frozenset())

    assert resolve_visible(two_source_store, state) == []


def test_search_selects_matching_chunk(abc_store: ChunkStore) -> None:
    state = state_for(abc_store, search_term="gam")

    assert [c.chunk for c in resolve_visible(abc_store, state)] == ["gamma"]


def test_search_is_case_insensitive_and_respects_sources(
    two_source_store: ChunkStore,
) -> None:
    state = state_for(
        two_source_store,
        search_term="NIGHT",
        active_sources=frozenset({"Book B"}),
    )

    visible = resolve_visible(two_source_store, state)

    assert [c.chunk for c in visible] == ["The night train was late"]


def test_search_returns_every_match_and_only_matches(
    two_source_store: ChunkStore,
) -> None:
    state = state_for(two_source_store, search_term="the")

    visible = resolve_visible(two_source_store, state)
    expected = [c for c in two_source_store if "the" in c.chunk.lower()]

    assert visible == expected
    assert all("the" in c.chunk.lower() for c in visible)


def test_search_includes_malformed_records(two_source_store: ChunkStore) -> None:
    state = state_for(two_source_store, search_term="broken")

    assert [c.chunk for c in resolve_visible(two_source_store, state)] == [
        "Broken record"
    ]


def test_blank_search_is_ignored(abc_store: ChunkStore) -> None:
    state = state_for(abc_store, search_term="   ")

    assert resolve_visible(abc_store, state) == list(abc_store)
    assert search_matches(abc_store, state) == []


def test_neighbor_lock_overrides_search_and_sources(abc_store: ChunkStore) -> None:
    pinned = (make_chunk("gamma", x=5), make_chunk("alpha"))
    state = state_for(
        abc_store,
        search_term="beta",
        active_sources=frozenset(),
        neighbor_lock=pinned,
    )

    assert resolve_visible(abc_store, state) == list(pinned)


def test_empty_neighbor_lock_still_wins(abc_store: ChunkStore) -> None:
    state = state_for(abc_store, neighbor_lock=())

    assert resolve_visible(abc_store, state) == []


def test_search_matches_ignore_lock(abc_store: ChunkStore) -> None:
    state = state_for(abc_store, search_term="a", neighbor_lock=())

    assert [c.chunk for c in search_matches(abc_store, state)] == [
        "alpha",
        "beta",
        "gamma",
    ]


def test_search_preview_truncates_long_text() -> None:
    assert search_preview("short") == "short"
    assert search_preview("x" * 60) == "x" * 50 + "…"
