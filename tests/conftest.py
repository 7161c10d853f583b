from __future__ import annotations

import pytest

from explorer.store import ChunkStore
from types_models import Chunk, FilterState


def make_chunk(text: str, source: str = "A", x=0.0, y=0.0, z=0.0) -> Chunk:
    return Chunk(source=source, x=x, y=y, z=z, chunk=text)


@pytest.fixture
def abc_store() -> ChunkStore:
    """alpha/beta/gamma on the x axis at 0, 1 and 5."""
    return ChunkStore(
        [
            make_chunk("alpha", x=0),
            make_chunk("beta", x=1),
            make_chunk("gamma", x=5),
        ]
    )


@pytest.fixture
def two_source_store() -> ChunkStore:
    return ChunkStore(
        [
            make_chunk("CHAPTER I. The Beginning", "Book A", 0, 0, 0),
            make_chunk("It was a dark night", "Book A", 1, 1, 0),
            make_chunk("Chapter 1: Arrival", "Book B", 2, 0, 0),
            make_chunk("The night train was late", "Book B", 3, 1, 1),
            make_chunk("Broken record", "Book B", None, 1, 1),
            make_chunk("Morning came slowly", "Book A", 0.5, 0, 0),
        ]
    )


def state_for(store: ChunkStore, **updates) -> FilterState:
    return FilterState.initial(store.sources()).model_copy(update=updates)
