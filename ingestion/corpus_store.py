"""SQLite-backed chunk corpus shared by the corpus builder, the chunk source
server and the explorer's offline mode.

Rows are read back in insertion order; the explorer relies on that order for
stable filtering, tie-breaking and chunk numbering within a source.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Sequence, TypedDict, cast

import sqlite_utils

logger = logging.getLogger(__name__)

CHUNKS_TABLE = "chunks"


class ChunkRecord(TypedDict):
    """Raw record layout persisted to SQLite for each chunk entry."""

    source: str
    chunk_index: int
    x: float | None
    y: float | None
    z: float | None
    chunk: str


def load_chunk_records(db_path: Path) -> list[dict[str, Any]]:
    """Load all chunk rows as `{source, x, y, z, chunk}` dicts."""
    if not db_path.exists():
        return []

    try:
        db = sqlite_utils.Database(str(db_path))
        table_names = db.table_names()
    except Exception as exc:
        raise RuntimeError(f"Could not open corpus database: {exc}") from exc

    if CHUNKS_TABLE not in table_names:
        return []

    rows_iter = cast(
        Iterable[Mapping[str, Any]], db[CHUNKS_TABLE].rows_where(order_by="id")
    )
    records: list[dict[str, Any]] = []
    for row in rows_iter:
        try:
            records.append(
                {
                    "source": row["source"],
                    "x": row["x"],
                    "y": row["y"],
                    "z": row["z"],
                    "chunk": row["chunk"],
                }
            )
        except KeyError as exc:
            raise RuntimeError(
                f"Corpus database schema is outdated. Missing required field: {exc}. "
                + "Rebuild it with: python build_corpus.py ./docs"
            ) from exc
    return records


def insert_chunk_records(db_path: Path, chunk_records: Sequence[ChunkRecord]) -> None:
    """Ensure the chunks table exists and append the provided records."""
    if not chunk_records:
        return

    db = sqlite_utils.Database(str(db_path))
    chunks_table = db[CHUNKS_TABLE]

    if CHUNKS_TABLE not in db.table_names():
        chunks_table.create(
            {
                "id": int,
                "source": str,
                "chunk_index": int,
                "x": float,
                "y": float,
                "z": float,
                "chunk": str,
            },
            pk="id",
        )
        chunks_table.create_index(["source"])

    chunks_table.insert_all(cast(Sequence[dict[str, Any]], chunk_records))
    logger.info("Stored %s chunks in %s", len(chunk_records), db_path)


def drop_chunks(db_path: Path) -> None:
    """Remove the chunks table so a rebuild starts from scratch."""
    if not db_path.exists():
        return
    db = sqlite_utils.Database(str(db_path))
    if CHUNKS_TABLE in db.table_names():
        db[CHUNKS_TABLE].drop()
        logger.info("Dropped existing chunks table in %s", db_path)


__all__ = ["ChunkRecord", "drop_chunks", "insert_chunk_records", "load_chunk_records"]
