"""Centralized threshold and magic number configuration.

This module contains the tunable numbers used by chroma keying and grid
handling. Having these in one place makes tuning against reference sheets
easier and documents what each value controls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ChromaKeyThresholds:
    """Thresholds for background keying and spill suppression."""

    # Key colour requested from the generator (#00FF00)
    key_color: Tuple[int, int, int] = (0, 255, 0)

    # Per-channel weights of the distance metric (green counts half so that
    # anti-aliased halos key out without eating green-ish skin and hair)
    channel_weights: Tuple[float, float, float] = (1.0, 0.5, 1.0)

    # Conservative pass (previews)
    conservative_inner: float = 40.0  # Below this distance: fully transparent
    conservative_outer: float = 90.0  # At or above: fully opaque

    # Aggressive pass (final output, removes stronger spill on hair/fabric)
    aggressive_inner: float = 60.0
    aggressive_outer: float = 140.0


@dataclass
class GridThresholds:
    """Defaults for sheet grids and batch processing."""

    default_columns: int = 4
    default_rows: int = 4
    batch_workers: int = 4  # Threads used when processing several sheets


# Global instances for easy import
CHROMA_KEY_THRESHOLDS = ChromaKeyThresholds()
GRID_THRESHOLDS = GridThresholds()
