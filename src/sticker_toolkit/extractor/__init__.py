"""
Module: extractor

Purpose:
    Turns a generated sticker sheet into individual transparent stickers.

Key Functions:
    - extract(): Chroma key background removal
    - slice_sheet(): Grid slicing
    - process_sheet(): Both, plus completeness check

Key Classes:
    - ChromaKeyConfig: Key colour and tolerance band
    - ExtractionConfig: Pipeline settings
    - SheetResult: Pipeline output

Dependencies:
    - numpy: Per-pixel classification
    - PIL: Cropping

Used By:
    - sticker_toolkit.cli
"""

from .config import ChromaKeyConfig, ExtractionConfig, AGGRESSIVE_KEY, CONSERVATIVE_KEY
from .chroma_key import extract, color_distance, background_fraction
from .slicer import slice_sheet, require_complete
from .pipeline import SheetResult, process_sheet, process_encoded_sheet, process_batch

__all__ = [
    # Config
    "ChromaKeyConfig",
    "ExtractionConfig",
    "AGGRESSIVE_KEY",
    "CONSERVATIVE_KEY",
    # Keying
    "extract",
    "color_distance",
    "background_fraction",
    # Slicing
    "slice_sheet",
    "require_complete",
    # Pipeline
    "SheetResult",
    "process_sheet",
    "process_encoded_sheet",
    "process_batch",
]
