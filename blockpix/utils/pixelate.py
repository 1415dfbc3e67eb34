"""Pixelation utilities operating on NumPy arrays.

Pixelation averages each ``factor x factor`` block of the image into one
pixel. The result is either the grid of block averages (shrink) or that grid
upscaled back with nearest-neighbor so every block becomes a uniform square
(keep dimensions).
"""
from __future__ import annotations

from enum import Enum

import numpy as np

Array = np.ndarray


class OutputMode(Enum):
    SHRINK = "shrink"
    KEEP_DIMENSIONS = "keep-dimensions"


def _check_divisible(arr: Array, factor: int) -> None:
    if not isinstance(arr, np.ndarray) or arr.ndim != 3:
        raise ValueError("arr must be an image with shape (H, W, C)")
    if factor < 1:
        raise ValueError("factor must be >= 1")
    H, W = arr.shape[:2]
    if H % factor != 0 or W % factor != 0:
        raise ValueError(f"image dimensions {W}x{H} must be multiples of {factor}")


def average_blocks(arr: Array, factor: int) -> Array:
    """Average every ``factor x factor`` block of an image into one pixel.

    Channels are averaged independently with truncating integer division,
    so ``(255 + 255 + 1 + 0) // 4 == 127``.

    Parameters
    ----------
    arr : np.ndarray
        Input array of shape (H, W, C), dtype=uint8, with H and W multiples
        of ``factor``.
    factor : int
        Block edge length.

    Returns
    -------
    np.ndarray
        Array of shape (H/factor, W/factor, C), dtype=uint8.
    """
    _check_divisible(arr, factor)
    H, W, C = arr.shape
    blocks = arr.reshape(H // factor, factor, W // factor, factor, C)
    sums = blocks.sum(axis=(1, 3), dtype=np.uint32)
    return (sums // (factor * factor)).astype(np.uint8)


def expand_blocks(arr: Array, factor: int) -> Array:
    """Upscale by an integer factor using nearest-neighbor."""
    if factor < 1:
        raise ValueError("factor must be >= 1")
    up = np.repeat(np.repeat(arr, factor, axis=0), factor, axis=1)
    return up.astype(np.uint8)


def pixelate(arr: Array, factor: int, mode: OutputMode = OutputMode.SHRINK) -> Array:
    """Pixelate an RGBA image array by a given integer factor.

    Parameters
    ----------
    arr : np.ndarray
        Input array of shape (H, W, 4), dtype=uint8. H and W must be
        multiples of ``factor``; see :func:`blockpix.utils.reconcile.reconcile`.
    factor : int
        Block edge length.
    mode : OutputMode
        ``SHRINK`` returns one pixel per block. ``KEEP_DIMENSIONS`` returns
        an image of the input size with each block filled uniformly.

    Returns
    -------
    np.ndarray
        New pixelated array; the input is never modified.
    """
    small = average_blocks(arr, factor)
    if mode is OutputMode.KEEP_DIMENSIONS:
        return expand_blocks(small, factor)
    return small
