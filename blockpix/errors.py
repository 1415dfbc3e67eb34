"""Exception types raised by blockpix.

The pixelation core never logs or exits; it raises one of these and lets the
caller decide whether a failure stops the run or only skips one image.
"""
from __future__ import annotations


class BlockpixError(Exception):
    """Base class for all blockpix errors."""


class InvalidScaleFactor(BlockpixError, ValueError):
    """Scale factor outside the supported range."""

    def __init__(self, scale_factor: int, minimum: int, maximum: int) -> None:
        super().__init__(
            f"scale factor must be between {minimum} and {maximum}, got {scale_factor}"
        )
        self.scale_factor = scale_factor


class DimensionError(BlockpixError, ValueError):
    """Image dimensions cannot be pixelated with the given scale factor."""

    def __init__(self, message: str, width: int, height: int, scale_factor: int) -> None:
        super().__init__(message)
        self.width = width
        self.height = height
        self.scale_factor = scale_factor


class NotDivisible(DimensionError):
    def __init__(self, width: int, height: int, scale_factor: int) -> None:
        super().__init__(
            f"image dimensions {width}x{height} are not divisible by the scale "
            f"factor {scale_factor}. you can force crop the image using the -f flag",
            width,
            height,
            scale_factor,
        )


class ImageTooSmall(DimensionError):
    def __init__(self, width: int, height: int, scale_factor: int) -> None:
        super().__init__(
            f"image of {width}x{height} is smaller than one {scale_factor}x{scale_factor} block",
            width,
            height,
            scale_factor,
        )


class ImageLoadError(BlockpixError, OSError):
    """File exists but could not be decoded as an image."""


class ImageSaveError(BlockpixError, OSError):
    """Image could not be encoded or written."""
