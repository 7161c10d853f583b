"""
Type definitions and Pydantic models for TextScape.

This module provides validated type definitions for the data structures shared
by the explorer pipeline, the chunk source server and the corpus builder.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

PlotPoint = tuple[Union[float, None], Union[float, None], Union[float, None], str]


class Chunk(BaseModel):
    """A unit of source text placed at a point in the 3D embedding space."""

    source: str = Field(description="Collection the chunk belongs to")
    x: float | None = Field(default=None, description="X coordinate")
    y: float | None = Field(default=None, description="Y coordinate")
    z: float | None = Field(default=None, description="Z coordinate")
    chunk: str = Field(description="Text content of the chunk")

    model_config = ConfigDict(frozen=True)

    @field_validator("x", "y", "z", mode="before")
    @classmethod
    def _coerce_coordinate(cls, v: Any) -> float | None:
        """Keep real numbers, normalise anything else to None."""
        # bool is an int subclass but never a coordinate
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        try:
            value = float(v)
        except OverflowError:
            # ints beyond float range
            return None
        if not math.isfinite(value):
            return None
        return value

    @property
    def has_coordinates(self) -> bool:
        """True when all three coordinates are numeric."""
        return self.x is not None and self.y is not None and self.z is not None

    def matches(self, text: str, source: str) -> bool:
        return self.chunk == text and self.source == source


class Selection(BaseModel):
    """The clicked/selected chunk reference."""

    text: str = Field(description="Text of the selected chunk")
    source: str = Field(description="Source of the selected chunk")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, chunk: Chunk) -> "Selection":
        return cls(text=chunk.chunk, source=chunk.source)


class FilterState(BaseModel):
    """Immutable snapshot of the display filters.

    Every transition returns a new snapshot; earlier snapshots stay valid so
    derived views can be recomputed from any of them.
    """

    active_sources: frozenset[str] = Field(
        default_factory=frozenset, description="Sources currently visible"
    )
    search_term: str = Field(default="", description="Case-insensitive text filter")
    neighbor_count: int = Field(default=0, ge=0, description="Neighbours to pin on click")
    neighbor_lock: tuple[Chunk, ...] | None = Field(
        default=None, description="Pinned nearest-neighbour result"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def initial(cls, sources: Iterable[str], neighbor_count: int = 0) -> "FilterState":
        return cls(active_sources=frozenset(sources), neighbor_count=max(0, neighbor_count))

    @property
    def search_active(self) -> bool:
        return bool(self.search_term.strip())

    def with_sources(self, sources: Iterable[str]) -> "FilterState":
        return self.model_copy(update={"active_sources": frozenset(sources)})

    def with_search(self, term: str) -> "FilterState":
        return self.model_copy(update={"search_term": term})

    def with_neighbor_count(self, count: int) -> "FilterState":
        return self.model_copy(update={"neighbor_count": max(0, count)})

    def with_neighbor_lock(self, chunks: Iterable[Chunk]) -> "FilterState":
        return self.model_copy(update={"neighbor_lock": tuple(chunks)})

    def without_neighbor_lock(self) -> "FilterState":
        return self.model_copy(update={"neighbor_lock": None})

    def reset(self, sources: Iterable[str]) -> "FilterState":
        """Back to every source visible, no search, neighbour mode off."""
        return FilterState.initial(sources)


class SelectionInfo(BaseModel):
    """Ordinal position of a selected chunk within its source."""

    position: int | None = Field(default=None, ge=1, description="1-based position")
    total: int | None = Field(default=None, ge=0, description="Chunks in the source")

    model_config = ConfigDict(frozen=True)


class ChapterMarker(BaseModel):
    """Visible chunk that opens a chapter."""

    x: float
    y: float
    z: float
    text: str
    source: str

    model_config = ConfigDict(frozen=True)


class PlotSeries(BaseModel):
    """Points of one source, ready for a 3D scatter renderer."""

    name: str = Field(description="Source name")
    color: str = Field(description="Marker colour")
    points: list[PlotPoint] = Field(default_factory=list)

    def to_trace(self) -> dict[str, Any]:
        """Plotly-style scatter3d trace."""
        return {
            "x": [p[0] for p in self.points],
            "y": [p[1] for p in self.points],
            "z": [p[2] for p in self.points],
            "text": [p[3] for p in self.points],
            "type": "scatter3d",
            "mode": "markers",
            "name": self.name,
            "marker": {
                "color": self.color,
                "size": 3,
                "opacity": 0.75,
                "line": {"width": 0},
            },
            "hovertemplate": "%{text}<extra></extra>",
        }


class ExplorerConfig(BaseModel):
    """Configuration for the explorer session with full validation."""

    chunks_url: str = Field(description="Endpoint returning the chunk corpus")
    corpus_db_path: Path = Field(description="Path to the SQLite chunk corpus")
    request_timeout: int = Field(ge=1, description="Request timeout in seconds")
    fetch_retry_attempts: int = Field(ge=1, description="Attempts for the corpus fetch")
    default_neighbor_count: int = Field(ge=0, description="Initial neighbour count")
    search_result_limit: int = Field(ge=1, description="Search results listed")
    export_filename: str = Field(description="File name for CSV export")

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
    )

    @field_validator("corpus_db_path", mode="before")
    @classmethod
    def _convert_to_path(cls, v: Any) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v
