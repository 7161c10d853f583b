"""Immutable snapshot of the chunk corpus."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Sequence

from pydantic import ValidationError

from types_models import Chunk

logger = logging.getLogger(__name__)


class ChunkStore(Sequence[Chunk]):
    """Ordered, read-only collection of chunks loaded once per session."""

    def __init__(self, chunks: Iterable[Chunk] = ()) -> None:
        super().__init__()
        self._chunks: tuple[Chunk, ...] = tuple(chunks)

    @classmethod
    def empty(cls) -> "ChunkStore":
        return cls()

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "ChunkStore":
        """Build a store from raw `{source, x, y, z, chunk}` records.

        Records with bad coordinates are kept with those coordinates set to
        None. Records that are not mappings or lack text/source are skipped.
        """
        chunks: list[Chunk] = []
        skipped = 0
        for record in records:
            chunk = _record_to_chunk(record)
            if chunk is None:
                skipped += 1
                continue
            chunks.append(chunk)

        if skipped:
            logger.warning("⚠️ Skipped %s unreadable chunk records", skipped)

        malformed = sum(1 for c in chunks if not c.has_coordinates)
        if malformed:
            logger.info("%s chunks have missing or non-numeric coordinates", malformed)

        return cls(chunks)

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        return self._chunks

    def sources(self) -> list[str]:
        """Distinct sources in first-occurrence order."""
        return list(dict.fromkeys(c.source for c in self._chunks))

    def in_source(self, source: str) -> list[Chunk]:
        return [c for c in self._chunks if c.source == source]

    def __getitem__(self, index: Any) -> Any:
        return self._chunks[index]

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks)

    def __repr__(self) -> str:
        return f"ChunkStore({len(self._chunks)} chunks, {len(self.sources())} sources)"


def _record_to_chunk(record: Any) -> Chunk | None:
    if isinstance(record, Chunk):
        return record
    if not isinstance(record, Mapping):
        return None
    if record.get("source") is None or record.get("chunk") is None:
        return None
    try:
        return Chunk(
            source=str(record["source"]),
            x=record.get("x"),
            y=record.get("y"),
            z=record.get("z"),
            chunk=str(record["chunk"]),
        )
    except ValidationError as exc:
        logger.debug("Unreadable chunk record %r: %s", record, exc)
        return None


__all__ = ["ChunkStore"]
