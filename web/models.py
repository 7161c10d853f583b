# ======================================
# Chunk Source Models
# - Pydantic v2 models for the chunk source API
# - Shared by web_server.py and its tests
# ======================================

from pydantic import BaseModel, Field

from types_models import Chunk


class ChunksResponse(BaseModel):
    """Full chunk corpus as served to explorer sessions."""

    chunks: list[Chunk] = Field(description="Every chunk in corpus order")
    total: int = Field(ge=0, description="Number of chunks")
    sources: list[str] = Field(description="Distinct sources in first-occurrence order")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(description="'healthy' or 'empty'")
    version: str
    corpus_loaded: bool
    total_chunks: int = Field(ge=0)
    total_sources: int = Field(ge=0)
