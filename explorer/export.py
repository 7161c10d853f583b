"""CSV export of the visible chunk set."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Sequence

import config
from types_models import Chunk

EXPORT_FIELDS: tuple[str, ...] = ("source", "x", "y", "z", "chunk")
EXPORT_FILENAME: str = config.EXPORT_FILENAME
EXPORT_MIME_TYPE: str = "text/csv"

logger = logging.getLogger(__name__)


def _cell(value: str | float | None) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        # repr keeps every digit so the value parses back unchanged
        return repr(value)
    return value


def to_delimited_text(visible: Sequence[Chunk]) -> str:
    """Serialize chunks as CSV with a fixed `source,x,y,z,chunk` header."""
    buffer = io.StringIO()
    # \r\n rows: minimal quoting then quotes any text holding \r or \n
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerow(EXPORT_FIELDS)
    for c in visible:
        writer.writerow([_cell(getattr(c, field)) for field in EXPORT_FIELDS])
    return buffer.getvalue()


def write_export(visible: Sequence[Chunk], path: Path | str = EXPORT_FILENAME) -> Path:
    """Write the CSV payload to `path` and return it."""
    target = Path(path)
    # newline="" keeps line endings inside quoted chunk text untouched
    with open(target, "w", encoding="utf-8", newline="") as handle:
        _ = handle.write(to_delimited_text(visible))
    logger.info("Exported %s chunks to %s", len(visible), target)
    return target


__all__ = [
    "EXPORT_FIELDS",
    "EXPORT_FILENAME",
    "EXPORT_MIME_TYPE",
    "to_delimited_text",
    "write_export",
]
