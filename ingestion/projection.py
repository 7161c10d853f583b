# ======================================
# Embedding Projection
# - Sentence-transformer embeddings for chunk text
# - Dimensionality reduction to the explorer's 3D space
# ======================================

# ===============================
# Standard Library
# ===============================
from __future__ import annotations

import gc
import logging
from contextlib import contextmanager
from typing import Any, Generator, Sequence

# ===============================
# Third-party Libraries
# ===============================
import numpy as np
import numpy.typing as npt

import config
from config import ReductionMethod

FloatArray = npt.NDArray[np.float32]
EmbeddingArray = npt.NDArray[np.floating[Any]]

# UMAP and t-SNE both need a handful of samples to build a neighbourhood graph.
MIN_POINTS_FOR_REDUCTION = 4

logger = logging.getLogger(__name__)


@contextmanager
def memory_cleanup() -> Generator[None, None, None]:
    """Ensure large intermediate tensors are promptly released."""
    try:
        yield
    finally:
        _ = gc.collect()


def l2_normalize(mat: np.ndarray) -> np.ndarray:
    """Normalize embeddings row-wise using the L2 norm."""
    norms = np.linalg.norm(mat, axis=1, keepdims=True) + 1e-12
    return mat / norms


# ===============================
# Embedding
# ===============================
def embed_chunks(
    texts: Sequence[str],
    model_name: str = config.EMBED_MODEL,
    batch_size: int = config.BATCH_SIZE,
) -> FloatArray:
    """Encode chunk texts into L2-normalised float32 vectors."""
    from sentence_transformers import SentenceTransformer

    embedder = SentenceTransformer(model_name)
    with memory_cleanup():
        raw = embedder.encode(
            list(texts),
            batch_size=batch_size,
            convert_to_numpy=True,
            normalize_embeddings=False,
            show_progress_bar=False,
        )
        embeddings = np.asarray(raw, dtype=np.float32)
    return l2_normalize(embeddings).astype(np.float32)


# ===============================
# Dimensionality Reduction
# ===============================
def reduce_to_3d(
    embeddings: EmbeddingArray,
    method: ReductionMethod = config.REDUCTION_METHOD,
    random_state: int = config.RANDOM_STATE,
) -> EmbeddingArray:
    """Apply UMAP or t-SNE to place every embedding in 3D."""
    count = len(embeddings)
    if count < MIN_POINTS_FOR_REDUCTION:
        # Too few points to reduce; keep the leading components instead.
        logger.warning(
            "⚠️ Only %s chunks, skipping %s and using leading components", count, method
        )
        out = np.zeros((count, 3), dtype=np.float64)
        width = min(3, embeddings.shape[1]) if count else 0
        out[:, :width] = embeddings[:, :width]
        return out

    if method.lower() == "umap":
        import umap

        reducer = umap.UMAP(
            n_components=3,
            random_state=random_state,
            n_neighbors=min(15, count - 1),
            min_dist=0.1,
            metric="cosine",
        )
    elif method.lower() == "tsne":
        from sklearn.manifold import TSNE

        reducer = TSNE(
            n_components=3,
            random_state=random_state,
            perplexity=min(30, count - 1),
            max_iter=1000,
        )
    else:
        raise ValueError(f"Unsupported method: {method}")

    try:
        with memory_cleanup():
            return reducer.fit_transform(embeddings)
    except Exception as exc:
        logger.error("❌ Error in %s: %s", method, exc)
        raise


__all__ = ["embed_chunks", "l2_normalize", "memory_cleanup", "reduce_to_3d"]
