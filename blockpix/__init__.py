"""blockpix: pixelate images by averaging square blocks of pixels.

Modules:
- utils.reconcile: make image dimensions divisible by the scale factor.
- utils.pixelate: block-average pixelation in shrink or keep-dimensions mode.
- utils.loader: Pillow <-> NumPy RGBA conversion for IO.
- batch: single-file and directory pipelines with per-call error policy.
"""
from .batch import ErrorPolicy, ProcessOptions, process_directory, process_image
from .errors import (
    BlockpixError,
    DimensionError,
    ImageTooSmall,
    InvalidScaleFactor,
    NotDivisible,
)
from .utils import OutputMode, pixelate, reconcile

__version__ = "0.1.0"

__all__ = [
    "BlockpixError",
    "DimensionError",
    "ErrorPolicy",
    "ImageTooSmall",
    "InvalidScaleFactor",
    "NotDivisible",
    "OutputMode",
    "ProcessOptions",
    "pixelate",
    "process_directory",
    "process_image",
    "reconcile",
]
