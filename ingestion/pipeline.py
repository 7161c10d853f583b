"""Top-level orchestration for building a chunk corpus.

Sequence: scan the folder, extract and chunk every document, embed all chunks
in one pass, reduce the embeddings to 3D, then persist the records to SQLite.
Reduction has to see the whole corpus at once, so a rebuild always replaces
the previous chunks table rather than appending to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import config
from config import ReductionMethod
from ingestion.corpus_store import ChunkRecord, drop_chunks, insert_chunk_records
from ingestion.projection import embed_chunks, reduce_to_3d
from ingestion.text_processing import SUPPORTED_SUFFIXES, chunk_text, clean_text, extract_text

logger = logging.getLogger(__name__)


@dataclass
class BuildStats:
    """Counters reported at the end of a corpus build."""

    files_seen: int = 0
    files_chunked: int = 0
    files_failed: int = 0
    chunk_count: int = 0


def discover_documents(folder: Path, recurse: bool = True) -> list[Path]:
    """Supported documents under `folder`, sorted for a reproducible corpus order."""
    pattern = "**/*" if recurse else "*"
    return sorted(
        p for p in folder.glob(pattern) if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
    )


def chunk_documents(
    paths: list[Path], stats: BuildStats
) -> list[tuple[str, int, str]]:
    """Return `(source, chunk_index, text)` triples for every readable document."""
    chunks: list[tuple[str, int, str]] = []
    for path in paths:
        stats.files_seen += 1
        try:
            text = clean_text(extract_text(path))
        except (OSError, ValueError) as exc:
            stats.files_failed += 1
            logger.error("⚠️ Could not read %s: %s", path, exc)
            continue

        pieces = chunk_text(text)
        if not pieces:
            logger.info("Skipping empty document %s", path.name)
            continue

        stats.files_chunked += 1
        chunks.extend((path.stem, i, piece) for i, piece in enumerate(pieces))
    return chunks


def build_corpus(
    folder: Path,
    db_path: Path = Path(config.CORPUS_DB_PATH),
    *,
    method: ReductionMethod = config.REDUCTION_METHOD,
    recurse: bool = True,
    fresh: bool = True,
) -> BuildStats:
    """Build the 3D chunk corpus for every supported document in `folder`."""
    stats = BuildStats()
    paths = discover_documents(folder, recurse=recurse)
    print(f"📂 Found {len(paths)} documents in {folder}")

    chunks = chunk_documents(paths, stats)
    if not chunks:
        print("⚠️ No text found, corpus left unchanged.")
        return stats

    print(f"🧮 Embedding {len(chunks)} chunks with {config.EMBED_MODEL}...")
    embeddings = embed_chunks([text for _, _, text in chunks])

    print(f"📉 Reducing embeddings to 3D with {method.upper()}...")
    coords = reduce_to_3d(embeddings, method=method)

    records: list[ChunkRecord] = [
        {
            "source": source,
            "chunk_index": index,
            "x": float(coords[row][0]),
            "y": float(coords[row][1]),
            "z": float(coords[row][2]),
            "chunk": text,
        }
        for row, (source, index, text) in enumerate(chunks)
    ]

    if fresh:
        drop_chunks(db_path)
    insert_chunk_records(db_path, records)

    stats.chunk_count = len(records)
    print(
        f"✅ Stored {stats.chunk_count} chunks from {stats.files_chunked} documents in {db_path}"
    )
    if stats.files_failed:
        print(f"⚠️ {stats.files_failed} documents could not be read (see {config.LOG_FILE})")
    return stats


__all__ = ["BuildStats", "build_corpus", "chunk_documents", "discover_documents"]
