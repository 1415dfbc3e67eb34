"""Dimension reconciliation before pixelation.

An image can only be split into whole ``factor x factor`` blocks when both
of its dimensions are multiples of ``factor``. When they are not, the image
is either rejected or cropped down to the largest multiples that fit,
anchored at the top-left corner or centred.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..errors import ImageTooSmall, NotDivisible

Array = np.ndarray


@dataclass(frozen=True)
class CropRect:
    """Region of the source image kept by a crop."""

    x: int
    y: int
    width: int
    height: int


def needs_crop(width: int, height: int, factor: int) -> bool:
    """Return True if either dimension is not a multiple of ``factor``."""
    return width % factor != 0 or height % factor != 0


def compute_crop_rect(width: int, height: int, factor: int, centre: bool = False) -> CropRect:
    """Compute the largest ``factor``-divisible region of a width x height image.

    Parameters
    ----------
    width, height : int
        Source image dimensions.
    factor : int
        Scale factor (block edge length).
    centre : bool
        Centre the region instead of anchoring it at (0, 0). Odd leftovers
        are floored, so the extra pixel is trimmed from the right/bottom.

    Returns
    -------
    CropRect
        The crop region.

    Raises
    ------
    ImageTooSmall
        If the region would be empty in either dimension.
    """
    new_w = width - (width % factor)
    new_h = height - (height % factor)
    if new_w == 0 or new_h == 0:
        raise ImageTooSmall(width, height, factor)

    if centre:
        x, y = (width - new_w) // 2, (height - new_h) // 2
    else:
        x, y = 0, 0
    return CropRect(x=x, y=y, width=new_w, height=new_h)


def crop(arr: Array, rect: CropRect) -> Array:
    """Return a copy of the ``rect`` region of ``arr``."""
    return arr[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width].copy()


def reconcile_with_rect(
    arr: Array, factor: int, allow_crop: bool = False, centre: bool = False
) -> Tuple[Array, Optional[CropRect]]:
    """Like :func:`reconcile`, also returning the crop region applied.

    The region is None when the image was already divisible and ``arr`` is
    returned as is.
    """
    if arr.ndim != 3:
        raise ValueError("arr must have shape (H, W, C)")
    H, W = arr.shape[:2]
    if not needs_crop(W, H, factor):
        return arr, None
    if not allow_crop:
        raise NotDivisible(W, H, factor)
    rect = compute_crop_rect(W, H, factor, centre)
    return crop(arr, rect), rect


def reconcile(arr: Array, factor: int, allow_crop: bool = False, centre: bool = False) -> Array:
    """Make an image's dimensions divisible by ``factor``.

    Parameters
    ----------
    arr : np.ndarray
        Image array of shape (H, W, C).
    factor : int
        Scale factor, already validated.
    allow_crop : bool
        Crop non-divisible images instead of rejecting them.
    centre : bool
        Centre the crop region.

    Returns
    -------
    np.ndarray
        ``arr`` itself when no crop is needed, otherwise a cropped copy.

    Raises
    ------
    NotDivisible
        If a crop is needed but ``allow_crop`` is False.
    ImageTooSmall
        If cropping would leave nothing of the image.
    """
    return reconcile_with_rect(arr, factor, allow_crop, centre)[0]
