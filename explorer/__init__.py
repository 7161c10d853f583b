"""Core data-selection and neighbour-query pipeline for TextScape.

The pure pipeline modules are cheap to import, but the loader pulls in
`requests`, `tenacity` and `sqlite_utils`. Re-exported names are therefore
resolved lazily on first access.
"""

from __future__ import annotations

import importlib
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .configuration import DEFAULT_CONFIG, validate_config
    from .export import to_delimited_text, write_export
    from .loader import load_local_chunk_store, load_remote_chunk_store
    from .neighbors import euclidean_distance, nearest_neighbors
    from .selection import describe_selection
    from .series import PALETTE, chapter_markers, group_by_source
    from .session import ExplorerSession
    from .store import ChunkStore
    from .visibility import resolve_visible, search_matches

__all__ = [
    "DEFAULT_CONFIG",
    "PALETTE",
    "ChunkStore",
    "ExplorerSession",
    "chapter_markers",
    "describe_selection",
    "euclidean_distance",
    "group_by_source",
    "load_local_chunk_store",
    "load_remote_chunk_store",
    "nearest_neighbors",
    "resolve_visible",
    "search_matches",
    "to_delimited_text",
    "validate_config",
    "write_export",
]

_IMPORT_MAP = {
    "DEFAULT_CONFIG": ("explorer.configuration", "DEFAULT_CONFIG"),
    "validate_config": ("explorer.configuration", "validate_config"),
    "to_delimited_text": ("explorer.export", "to_delimited_text"),
    "write_export": ("explorer.export", "write_export"),
    "load_local_chunk_store": ("explorer.loader", "load_local_chunk_store"),
    "load_remote_chunk_store": ("explorer.loader", "load_remote_chunk_store"),
    "euclidean_distance": ("explorer.neighbors", "euclidean_distance"),
    "nearest_neighbors": ("explorer.neighbors", "nearest_neighbors"),
    "describe_selection": ("explorer.selection", "describe_selection"),
    "PALETTE": ("explorer.series", "PALETTE"),
    "chapter_markers": ("explorer.series", "chapter_markers"),
    "group_by_source": ("explorer.series", "group_by_source"),
    "ExplorerSession": ("explorer.session", "ExplorerSession"),
    "ChunkStore": ("explorer.store", "ChunkStore"),
    "resolve_visible": ("explorer.visibility", "resolve_visible"),
    "search_matches": ("explorer.visibility", "search_matches"),
}


def __getattr__(name: str) -> Any:
    """Lazily resolve re-exported names."""
    try:
        module_name, attr_name = _IMPORT_MAP[name]
    except KeyError as exc:
        raise AttributeError(f"module 'explorer' has no attribute '{name}'") from exc

    module = importlib.import_module(module_name)
    attr = getattr(module, attr_name)
    globals()[name] = attr
    return attr


def __dir__() -> list[str]:
    return sorted(__all__)
