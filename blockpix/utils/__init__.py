"""Utility functions for blockpix.

Modules:
- loader: Load/save Pillow <-> NumPy conversion utilities.
- pixelate: Block-average pixelation.
- reconcile: Divisibility checks and cropping ahead of pixelation.
"""
from .loader import load_image, save_image
from .pixelate import OutputMode, average_blocks, expand_blocks, pixelate
from .reconcile import (
    CropRect,
    compute_crop_rect,
    needs_crop,
    reconcile,
    reconcile_with_rect,
)

__all__ = [
    "load_image",
    "save_image",
    "OutputMode",
    "average_blocks",
    "expand_blocks",
    "pixelate",
    "CropRect",
    "compute_crop_rect",
    "needs_crop",
    "reconcile",
    "reconcile_with_rect",
]
