"""Configuration helpers for the explorer session."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

import config
from types_models import ExplorerConfig


# Seed runtime defaults from the shared config module.
DEFAULT_CONFIG = ExplorerConfig(
    chunks_url=config.CHUNKS_URL,
    corpus_db_path=Path(config.CORPUS_DB_PATH),
    request_timeout=config.REQUEST_TIMEOUT,
    fetch_retry_attempts=config.FETCH_RETRY_ATTEMPTS,
    default_neighbor_count=config.DEFAULT_NEIGHBOR_COUNT,
    search_result_limit=config.SEARCH_RESULT_LIMIT,
    export_filename=config.EXPORT_FILENAME,
)


def validate_config(config_obj: ExplorerConfig) -> None:
    """Perform runtime validation on top of Pydantic checks."""
    parsed = urlparse(config_obj.chunks_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(
            f"chunks_url must be an http(s) URL, got: {config_obj.chunks_url}"
        )

    if not config_obj.export_filename.strip():
        raise ValueError("export_filename cannot be empty")

    if Path(config_obj.export_filename).suffix.lower() != ".csv":
        raise ValueError(
            f"export_filename must end in .csv, got: {config_obj.export_filename}"
        )


__all__ = ["DEFAULT_CONFIG", "validate_config"]
