from __future__ import annotations

from pathlib import Path

import pytest

from ingestion.text_processing import chunk_text, clean_text, extract_text


def test_clean_text_collapses_whitespace() -> None:
    assert clean_text("  CHAPTER  I\n\n\tThe   start ") == "CHAPTER I The start"


def test_chunk_text_overlapping_windows() -> None:
    assert chunk_text("abcdefghij", size=4, overlap=1) == ["abcd", "defg", "ghij"]


def test_chunk_text_short_and_empty() -> None:
    assert chunk_text("hello", size=100, overlap=10) == ["hello"]
    assert chunk_text("   ", size=10, overlap=0) == []


def test_chunk_text_overlap_at_least_size_still_advances() -> None:
    assert chunk_text("abc", size=2, overlap=5) == ["ab", "bc"]


def test_chunk_text_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        _ = chunk_text("abc", size=0, overlap=0)


def test_extract_text_from_html(tmp_path: Path) -> None:
    page = tmp_path / "page.html"
    page.write_text(
        "<html><head><style>p {color: red}</style><script>var x = 1;</script></head>"
        "<body><h1>Chapter 1</h1><p>Hello world</p></body></html>",
        encoding="utf-8",
    )

    text = clean_text(extract_text(page))

    assert text == "Chapter 1 Hello world"


def test_extract_text_from_plain_text(tmp_path: Path) -> None:
    note = tmp_path / "note.md"
    note.write_text("# Title\nbody", encoding="utf-8")

    assert extract_text(note) == "# Title\nbody"


def test_extract_text_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        _ = extract_text(tmp_path / "scan.pdf")
