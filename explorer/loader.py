"""Load the chunk corpus once at session start.

The corpus normally comes from the chunk source endpoint; a local SQLite
corpus written by the corpus builder can be used instead. Any failure leaves
the session with an empty store so the explorer still starts.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

import config
from explorer.store import ChunkStore
from ingestion.corpus_store import load_chunk_records
from types_models import ExplorerConfig

logger = logging.getLogger(__name__)

_RETRY_WAIT = wait_exponential(multiplier=1, min=1, max=5)


class ChunkSourceError(RuntimeError):
    """Raised when the chunk source cannot deliver a usable corpus."""


class _RetryableChunkSourceError(ChunkSourceError):
    """Exception raised when the chunk source responds with a retryable status code."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


@retry(
    retry=retry_if_exception_type(
        (
            requests.exceptions.ConnectionError,
            requests.exceptions.Timeout,
            _RetryableChunkSourceError,
        )
    ),
    stop=stop_after_attempt(config.FETCH_RETRY_ATTEMPTS),
    wait=_RETRY_WAIT,
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def _get_with_retry(url: str, timeout: int) -> requests.Response:
    """Issue a GET request to the chunk source, retrying on transient failures."""
    response = requests.get(url, timeout=timeout)

    if response.status_code in {429, 500, 502, 503, 504}:
        raise _RetryableChunkSourceError(
            response.status_code,
            f"Chunk source responded with HTTP {response.status_code}.",
        )

    return response


def fetch_chunk_records(
    url: str,
    timeout: int = config.REQUEST_TIMEOUT,
    attempts: int = config.FETCH_RETRY_ATTEMPTS,
) -> list[Any]:
    """Fetch raw chunk records from `url`.

    Accepts either `{"chunks": [...]}` or a bare JSON list.
    """
    fetch = _get_with_retry.retry_with(
        stop=stop_after_attempt(attempts), wait=_RETRY_WAIT
    )
    response = fetch(url, timeout)

    if response.status_code != 200:
        raise ChunkSourceError(
            f"Chunk source at {url} responded with HTTP {response.status_code}."
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise ChunkSourceError("Failed to parse chunk source response as JSON.") from exc

    if isinstance(payload, dict):
        payload = payload.get("chunks")
    if not isinstance(payload, list):
        raise ChunkSourceError("Chunk source response does not contain a chunk list.")

    return payload


def load_remote_chunk_store(config_obj: ExplorerConfig) -> ChunkStore:
    """Fetch the corpus over HTTP, degrading to an empty store on failure."""
    try:
        records = fetch_chunk_records(
            config_obj.chunks_url,
            timeout=config_obj.request_timeout,
            attempts=config_obj.fetch_retry_attempts,
        )
    except (requests.exceptions.RequestException, ChunkSourceError) as exc:
        logger.error("❌ Failed to load chunks from %s: %s", config_obj.chunks_url, exc)
        return ChunkStore.empty()

    store = ChunkStore.from_records(records)
    logger.info(
        "Loaded %s chunks from %s sources (%s)",
        len(store),
        len(store.sources()),
        config_obj.chunks_url,
    )
    return store


def load_local_chunk_store(db_path: Path) -> ChunkStore:
    """Read the corpus from a SQLite database written by the corpus builder."""
    if not db_path.exists():
        logger.error("❌ Corpus database not found: %s", db_path)
        return ChunkStore.empty()

    try:
        records = load_chunk_records(db_path)
    except RuntimeError as exc:
        logger.error("❌ Failed to read corpus database %s: %s", db_path, exc)
        return ChunkStore.empty()

    store = ChunkStore.from_records(records)
    logger.info(
        "Loaded %s chunks from %s sources (%s)", len(store), len(store.sources()), db_path
    )
    return store


__all__ = [
    "ChunkSourceError",
    "fetch_chunk_records",
    "load_local_chunk_store",
    "load_remote_chunk_store",
]
