"""Utilities for extracting and chunking document text ahead of embedding.

The corpus builder accepts plain text, Markdown and HTML. Chunks are fixed-size
character windows so a chapter heading at the start of a document stays at the
start of a chunk, which is what the explorer's chapter markers look for.
"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup

import config

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".md"}
HTML_SUFFIXES = {".html", ".htm"}
SUPPORTED_SUFFIXES = TEXT_SUFFIXES | HTML_SUFFIXES


def clean_text(value: str) -> str:
    """Normalize whitespace to keep downstream chunkers predictable."""
    return " ".join(value.split())


def chunk_text(
    text: str,
    *,
    size: int | None = None,
    overlap: int | None = None,
) -> list[str]:
    """Split text into overlapping fixed-size windows."""
    if size is None:
        size = config.CHUNK_SIZE
    if overlap is None:
        overlap = config.CHUNK_OVERLAP
    if size <= 0:
        raise ValueError(f"size must be positive, got: {size}")

    text = text.strip()
    if not text:
        return []

    chunks: list[str] = []
    step = max(1, size - overlap)
    for start in range(0, len(text), step):
        chunks.append(text[start : start + size])
        if start + size >= len(text):
            break
    return chunks


def extract_text(path: Path) -> str:
    """Extract text from a plain text or HTML source."""
    ext = path.suffix.lower()
    if ext in HTML_SUFFIXES:
        return _html_to_text(path)
    if ext in TEXT_SUFFIXES:
        return path.read_text(encoding="utf-8", errors="ignore")
    raise ValueError(f"Unsupported file type: {path.suffix}")


def _html_to_text(path: Path) -> str:
    """Convert an HTML file to text, stripping scripts/styles for clean chunks."""
    with open(path, "r", encoding="utf-8", errors="ignore") as resource:
        soup = BeautifulSoup(resource, "html.parser")

    for tag in soup(["script", "style", "noscript"]):
        _ = tag.extract()
    return soup.get_text(separator="\n")


__all__ = ["SUPPORTED_SUFFIXES", "chunk_text", "clean_text", "extract_text"]
