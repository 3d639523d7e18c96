"""Common constants shared across the toolkit."""

from __future__ import annotations

from .thresholds import (
    ChromaKeyThresholds,
    GridThresholds,
    CHROMA_KEY_THRESHOLDS,
    GRID_THRESHOLDS,
)

__all__ = [
    "ChromaKeyThresholds",
    "GridThresholds",
    "CHROMA_KEY_THRESHOLDS",
    "GRID_THRESHOLDS",
]
