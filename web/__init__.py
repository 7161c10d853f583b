"""Chunk source API models."""
