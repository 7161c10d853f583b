# ======================================
# Config for the TextScape explorer
# Default: small corpora explored from a laptop
# ======================================

from typing import Literal

# Type definitions
ReductionMethod = Literal["umap", "tsne"]

# Chunk source
CHUNKS_URL: str = "http://localhost:8000/chunks"
REQUEST_TIMEOUT: int = 30
FETCH_RETRY_ATTEMPTS: int = 3

# Local corpus (written by build_corpus.py, served by web_server.py)
CORPUS_DB_PATH: str = "textscape.db"

# Explorer defaults
DEFAULT_NEIGHBOR_COUNT: int = 0
SEARCH_RESULT_LIMIT: int = 6
SEARCH_PREVIEW_CHARS: int = 50
DETAIL_PREVIEW_CHARS: int = 300
EXPORT_FILENAME: str = "textscape_visible_chunks.csv"

# Corpus building
EMBED_MODEL: str = "sentence-transformers/all-MiniLM-L6-v2"
BATCH_SIZE: int = 16
REDUCTION_METHOD: ReductionMethod = "umap"
RANDOM_STATE: int = 42
CHUNK_SIZE: int = 1200
CHUNK_OVERLAP: int = 100

# Web server
SERVER_HOST: str = "0.0.0.0"
SERVER_PORT: int = 8000

# Logging
LOG_FILE: str = "textscape.log"


def validate_config() -> None:
    """Validate configuration values at startup."""
    positive_int_configs = [
        ("REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        ("FETCH_RETRY_ATTEMPTS", FETCH_RETRY_ATTEMPTS),
        ("SEARCH_RESULT_LIMIT", SEARCH_RESULT_LIMIT),
        ("SEARCH_PREVIEW_CHARS", SEARCH_PREVIEW_CHARS),
        ("DETAIL_PREVIEW_CHARS", DETAIL_PREVIEW_CHARS),
        ("BATCH_SIZE", BATCH_SIZE),
        ("CHUNK_SIZE", CHUNK_SIZE),
        ("SERVER_PORT", SERVER_PORT),
    ]

    for config_name, config_val in positive_int_configs:
        if not isinstance(config_val, int) or config_val <= 0:
            raise ValueError(
                f"{config_name} must be a positive integer, got: {config_val}"
            )

    if not isinstance(DEFAULT_NEIGHBOR_COUNT, int) or DEFAULT_NEIGHBOR_COUNT < 0:
        raise ValueError(
            f"DEFAULT_NEIGHBOR_COUNT must be a non-negative integer, got: {DEFAULT_NEIGHBOR_COUNT}"
        )

    if not isinstance(CHUNK_OVERLAP, int) or not (0 <= CHUNK_OVERLAP < CHUNK_SIZE):
        raise ValueError(
            f"CHUNK_OVERLAP must be between 0 and CHUNK_SIZE - 1, got: {CHUNK_OVERLAP}"
        )

    string_configs = [
        ("CHUNKS_URL", CHUNKS_URL),
        ("CORPUS_DB_PATH", CORPUS_DB_PATH),
        ("EXPORT_FILENAME", EXPORT_FILENAME),
        ("EMBED_MODEL", EMBED_MODEL),
        ("SERVER_HOST", SERVER_HOST),
        ("LOG_FILE", LOG_FILE),
    ]

    for config_name, config_val in string_configs:
        if not isinstance(config_val, str) or not config_val.strip():
            raise ValueError(
                f"{config_name} must be a non-empty string, got: {config_val}"
            )

    valid_methods = {"umap", "tsne"}
    if REDUCTION_METHOD not in valid_methods:
        raise ValueError(
            f"REDUCTION_METHOD must be one of {valid_methods}, got: {REDUCTION_METHOD}"
        )


# Validate on import
validate_config()
