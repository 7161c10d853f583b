from __future__ import annotations

from pathlib import Path

import pytest

from explore import handle_command, render_visible
from explorer.session import ExplorerSession
from explorer.store import ChunkStore


@pytest.fixture
def session(two_source_store: ChunkStore) -> ExplorerSession:
    return ExplorerSession(two_source_store)


def test_show_lists_series_with_numbers(session: ExplorerSession) -> None:
    output = handle_command(session, "show")

    assert output.splitlines()[0] == "■ Book A (3 chunks, #85d8ce)"
    assert "   1. (0.000, 0.000, 0.000) CHAPTER I. The Beginning" in output
    assert "   6. (—, 1.000, 1.000) Broken record" in output


def test_click_uses_show_numbering(session: ExplorerSession) -> None:
    _ = handle_command(session, "neighbors 1")

    output = handle_command(session, "click 3")

    assert output.startswith("Chunk 3 of 3 in Book A")
    assert [c.chunk for c in session.visible()] == [
        "Morning came slowly",
        "CHAPTER I. The Beginning",
    ]
    assert "neighbour filter active" in render_visible(session)


def test_click_rejects_bad_numbers(session: ExplorerSession) -> None:
    with pytest.raises(ValueError):
        _ = handle_command(session, "click 99")
    with pytest.raises(ValueError):
        _ = handle_command(session, "click first")


def test_search_and_enter(session: ExplorerSession) -> None:
    output = handle_command(session, "search night")

    assert output.splitlines() == [
        "  1. [Book A] It was a dark night",
        "  2. [Book B] The night train was late",
    ]
    assert handle_command(session, "enter").startswith("Chunk 2 of 3 in Book A")
    assert handle_command(session, "search") == "Search cleared."
    assert handle_command(session, "enter") == "No search results."


def test_result_selects_search_hit_and_pins_neighbours(session: ExplorerSession) -> None:
    _ = handle_command(session, "neighbors 1")
    _ = handle_command(session, "click 1")
    _ = handle_command(session, "search night")

    output = handle_command(session, "result 2")

    assert output.startswith("Chunk 2 of 3 in Book B")
    assert [c.chunk for c in session.visible()] == [
        "The night train was late",
        "Chapter 1: Arrival",
    ]


def test_result_rejects_bad_numbers(session: ExplorerSession) -> None:
    _ = handle_command(session, "search night")

    with pytest.raises(ValueError):
        _ = handle_command(session, "result 3")
    with pytest.raises(ValueError):
        _ = handle_command(session, "result second")


def test_search_keeps_surrounding_spaces(session: ExplorerSession) -> None:
    _ = handle_command(session, "search  night ")

    assert session.state.search_term == " night "
    assert handle_command(session, "search  dark") == "  1. [Book A] It was a dark night"
    assert handle_command(session, "search    ") == "Search cleared."


def test_source_clear_and_reset(session: ExplorerSession) -> None:
    assert handle_command(session, "source Book B") == "Showing 3 chunks."
    assert handle_command(session, "source All") == "Showing 6 chunks."

    _ = handle_command(session, "neighbors 2")
    _ = handle_command(session, "click 1")
    assert len(session.visible()) == 3
    assert handle_command(session, "clear") == "Neighbour filter cleared."
    assert len(session.visible()) == 6

    assert handle_command(session, "reset") == "Filters reset."
    assert session.state.neighbor_count == 0


def test_markers(session: ExplorerSession) -> None:
    output = handle_command(session, "markers")

    assert "[Book A] (0.000, 0.000, 0.000) CHAPTER I. The Beginning" in output
    assert "[Book B] (2.000, 0.000, 0.000) Chapter 1: Arrival" in output


def test_export_writes_visible_chunks(session: ExplorerSession, tmp_path: Path) -> None:
    _ = handle_command(session, "source Book A")
    target = tmp_path / "out.csv"

    output = handle_command(session, f"export {target}")

    assert output == f"Wrote 3 chunks to {target}"
    assert target.read_text(encoding="utf-8").startswith("source,x,y,z,chunk\n")


def test_more_and_close(session: ExplorerSession) -> None:
    _ = handle_command(session, "click 2")

    assert session.show_full_chunk is False
    _ = handle_command(session, "more")
    assert session.show_full_chunk is True
    assert handle_command(session, "close") == "Selection closed."
    assert handle_command(session, "more") == "Nothing selected."


def test_unknown_command(session: ExplorerSession) -> None:
    with pytest.raises(ValueError):
        _ = handle_command(session, "fly")
