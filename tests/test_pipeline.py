from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pytest

from ingestion import pipeline
from ingestion.corpus_store import load_chunk_records


@pytest.fixture
def fake_projection(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    seen: list[str] = []

    def fake_embed(texts: Sequence[str]) -> np.ndarray:
        seen.extend(texts)
        return np.ones((len(texts), 8), dtype=np.float32)

    def fake_reduce(embeddings: np.ndarray, method: str) -> np.ndarray:
        return np.arange(len(embeddings) * 3, dtype=np.float64).reshape(-1, 3)

    monkeypatch.setattr(pipeline, "embed_chunks", fake_embed)
    monkeypatch.setattr(pipeline, "reduce_to_3d", fake_reduce)
    return seen


def _write_docs(folder: Path) -> None:
    (folder / "b_book.txt").write_text("CHAPTER I\nIt began.", encoding="utf-8")
    (folder / "a_page.html").write_text("<p>Hello <b>there</b></p>", encoding="utf-8")
    (folder / "ignored.pdf").write_bytes(b"%PDF")
    nested = folder / "more"
    nested.mkdir()
    (nested / "c_notes.md").write_text("   ", encoding="utf-8")


def test_discover_documents(tmp_path: Path) -> None:
    _write_docs(tmp_path)

    names = [p.name for p in pipeline.discover_documents(tmp_path)]
    flat = [p.name for p in pipeline.discover_documents(tmp_path, recurse=False)]

    assert names == ["a_page.html", "b_book.txt", "c_notes.md"]
    assert flat == ["a_page.html", "b_book.txt"]


def test_build_corpus_writes_records(tmp_path: Path, fake_projection: list[str]) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    _write_docs(docs)
    db_path = tmp_path / "corpus.db"

    stats = pipeline.build_corpus(docs, db_path)

    assert fake_projection == ["Hello there", "CHAPTER I It began."]
    assert stats.files_seen == 3
    assert stats.files_chunked == 2
    assert stats.chunk_count == 2
    assert load_chunk_records(db_path) == [
        {"source": "a_page", "x": 0.0, "y": 1.0, "z": 2.0, "chunk": "Hello there"},
        {"source": "b_book", "x": 3.0, "y": 4.0, "z": 5.0, "chunk": "CHAPTER I It began."},
    ]


def test_rebuild_replaces_previous_corpus(
    tmp_path: Path, fake_projection: list[str]
) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    _write_docs(docs)
    db_path = tmp_path / "corpus.db"

    _ = pipeline.build_corpus(docs, db_path)
    _ = pipeline.build_corpus(docs, db_path)
    assert len(load_chunk_records(db_path)) == 2

    _ = pipeline.build_corpus(docs, db_path, fresh=False)
    assert len(load_chunk_records(db_path)) == 4


def test_build_corpus_without_text_leaves_db_untouched(
    tmp_path: Path, fake_projection: list[str]
) -> None:
    db_path = tmp_path / "corpus.db"

    stats = pipeline.build_corpus(tmp_path, db_path)

    assert stats.chunk_count == 0
    assert not db_path.exists()
    assert fake_projection == []
