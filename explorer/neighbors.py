"""Brute-force nearest-neighbour queries in the 3D embedding space."""

from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np
import numpy.typing as npt

from types_models import Chunk, FilterState, Selection

FloatArray = npt.NDArray[np.float64]
Clicked = Union[Chunk, Selection]

logger = logging.getLogger(__name__)


def _identity(clicked: Clicked) -> tuple[str, str]:
    if isinstance(clicked, Chunk):
        return clicked.chunk, clicked.source
    return clicked.text, clicked.source


def _as_array(chunks: Sequence[Chunk]) -> FloatArray:
    return np.array([[c.x, c.y, c.z] for c in chunks], dtype=np.float64).reshape(-1, 3)


def _distances(origin: FloatArray, coords: FloatArray) -> FloatArray:
    return np.sqrt(((coords - origin) ** 2).sum(axis=1))


def euclidean_distance(a: Chunk, b: Chunk) -> float:
    """Distance between two chunks that both have coordinates."""
    return float(_distances(_as_array([a])[0], _as_array([b]))[0])


def nearest_neighbors(
    store: Sequence[Chunk],
    state: FilterState,
    clicked: Clicked | None,
    n: int,
) -> list[Chunk | Selection | None]:
    """Return the clicked chunk followed by its `n` closest chunks.

    Candidates come from the active sources of `state` (a pinned neighbour
    lock is ignored) and must have numeric coordinates. When the clicked
    chunk cannot be found among them, `[clicked]` is returned as given.
    Ties keep store order.
    """
    if clicked is None or n < 1:
        return [clicked]

    text, source = _identity(clicked)
    pool = [
        c for c in store if c.source in state.active_sources and c.has_coordinates
    ]

    anchor_pos = next(
        (i for i, c in enumerate(pool) if c.matches(text, source)), None
    )
    if anchor_pos is None:
        logger.debug("Clicked chunk not in candidate pool (source=%s)", source)
        return [clicked]

    anchor = pool[anchor_pos]
    others = pool[:anchor_pos] + pool[anchor_pos + 1 :]
    if not others:
        return [anchor]

    distances = _distances(_as_array([anchor])[0], _as_array(others))
    order = np.argsort(distances, kind="stable")[:n]
    return [anchor, *(others[int(i)] for i in order)]


__all__ = ["euclidean_distance", "nearest_neighbors"]
