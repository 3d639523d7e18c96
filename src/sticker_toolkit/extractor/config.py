"""
Module: extractor.config

Purpose:
    Configuration dataclasses for the extraction pipeline. Provides
    immutable settings for the chroma key metric and the sheet pipeline.

Key Classes:
    - ChromaKeyConfig: Key colour, metric weights and tolerance band
    - ExtractionConfig: Settings for process_sheet / process_batch

Dependencies:
    - dataclasses: For frozen dataclass support
    - common.thresholds: Default values

Used By:
    - extractor.chroma_key: Uses ChromaKeyConfig for classification
    - extractor.pipeline: Uses ExtractionConfig for pipeline settings
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from sticker_toolkit.common.thresholds import CHROMA_KEY_THRESHOLDS, GRID_THRESHOLDS


@dataclass(frozen=True)
class ChromaKeyConfig:
    """
    Configuration for chroma key extraction.

    Pixels closer than inner_threshold to the key colour become fully
    transparent, pixels at or beyond outer_threshold stay opaque, and
    the band in between gets a linear alpha ramp.

    Attributes:
        key_color: RGB background colour to remove.
        channel_weights: Weights applied to squared channel differences.
        inner_threshold: Distance below which alpha is 0.
        outer_threshold: Distance at or above which alpha is 255.
        suppress_spill: Clamp the key channel on non-opaque pixels.
    """
    key_color: Tuple[int, int, int] = CHROMA_KEY_THRESHOLDS.key_color
    channel_weights: Tuple[float, float, float] = CHROMA_KEY_THRESHOLDS.channel_weights
    inner_threshold: float = CHROMA_KEY_THRESHOLDS.aggressive_inner
    outer_threshold: float = CHROMA_KEY_THRESHOLDS.aggressive_outer
    suppress_spill: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if len(self.key_color) != 3 or any(not 0 <= c <= 255 for c in self.key_color):
            raise ValueError(f"key_color must be three values in 0-255: {self.key_color}")
        if len(self.channel_weights) != 3 or any(w < 0 for w in self.channel_weights):
            raise ValueError(f"channel_weights must be three non-negative values: {self.channel_weights}")
        if not any(self.channel_weights):
            raise ValueError("At least one channel weight must be non-zero")
        if self.inner_threshold < 0:
            raise ValueError(f"inner_threshold must be >= 0: {self.inner_threshold}")
        if self.outer_threshold <= self.inner_threshold:
            raise ValueError(
                f"outer_threshold must be > inner_threshold: "
                f"{self.outer_threshold} <= {self.inner_threshold}"
            )

    @property
    def key_channel(self) -> int:
        """Index of the dominant channel of the key colour (1 for green)."""
        return max(range(3), key=lambda i: self.key_color[i])

    @classmethod
    def for_mode(cls, aggressive: bool) -> ChromaKeyConfig:
        """Return the preset for the final (aggressive) or preview pass."""
        return AGGRESSIVE_KEY if aggressive else CONSERVATIVE_KEY


CONSERVATIVE_KEY = ChromaKeyConfig(
    inner_threshold=CHROMA_KEY_THRESHOLDS.conservative_inner,
    outer_threshold=CHROMA_KEY_THRESHOLDS.conservative_outer,
)
AGGRESSIVE_KEY = ChromaKeyConfig(
    inner_threshold=CHROMA_KEY_THRESHOLDS.aggressive_inner,
    outer_threshold=CHROMA_KEY_THRESHOLDS.aggressive_outer,
)


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for the sheet pipeline.

    Attributes:
        aggressive: Use the wide tolerance band (default True, the final pass)
        chroma: Explicit ChromaKeyConfig; overrides `aggressive` when set
        max_workers: Threads used by process_batch (default 4)
    """
    aggressive: bool = True
    chroma: Optional[ChromaKeyConfig] = None
    max_workers: int = GRID_THRESHOLDS.batch_workers

    def __post_init__(self) -> None:
        if self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive: {self.max_workers}")

    @property
    def chroma_config(self) -> ChromaKeyConfig:
        """Effective chroma key settings."""
        return self.chroma or ChromaKeyConfig.for_mode(self.aggressive)
