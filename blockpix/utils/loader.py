"""Image loading and saving utilities using Pillow, with NumPy arrays.

All pixel processing in this project happens on NumPy arrays. These helpers
only convert between Pillow images and NumPy `uint8` RGBA arrays for IO.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..config import ALPHALESS_FORMATS
from ..errors import ImageLoadError, ImageSaveError

Array = np.ndarray


def load_image(path: Union[str, Path]) -> Array:
    """Load an image file into an RGBA NumPy array (uint8).

    Parameters
    ----------
    path : str | Path
        Path to an image supported by Pillow.

    Returns
    -------
    np.ndarray
        Array of shape (H, W, 4), dtype=uint8, in RGBA order.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ImageLoadError
        If the file cannot be decoded, or exceeds Pillow's
        ``MAX_IMAGE_PIXELS`` decompression-bomb limit.
    """
    p = Path(path)
    try:
        with Image.open(p) as im:
            im = im.convert("RGBA")
            arr = np.array(im, dtype=np.uint8)
    except FileNotFoundError:
        raise
    except Image.DecompressionBombError as ex:
        raise ImageLoadError(f"image at '{p}' is too large: {ex}") from ex
    except UnidentifiedImageError as ex:
        raise ImageLoadError(f"could not decode image at '{p}'") from ex
    except OSError as ex:
        raise ImageLoadError(f"could not decode image at '{p}': {ex}") from ex
    return arr


def save_image(arr: Array, path: Union[str, Path]) -> None:
    """Save an RGBA NumPy array (uint8) to an image file via Pillow.

    The format is inferred from the extension. Formats that cannot store
    alpha are written as RGB.

    Parameters
    ----------
    arr : np.ndarray
        Array of shape (H, W, 4), dtype=uint8.
    path : str | Path
        Output file path.
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError("arr must be a NumPy array")
    if arr.dtype != np.uint8:
        raise TypeError("arr must have dtype=uint8")
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError("arr must have shape (H, W, 4)")

    p = Path(path)
    im = Image.fromarray(arr)
    if Image.registered_extensions().get(p.suffix.lower()) in ALPHALESS_FORMATS:
        im = im.convert("RGB")
    try:
        im.save(p)
    except (OSError, ValueError, KeyError) as ex:
        raise ImageSaveError(f"could not save image at '{p}': {ex}") from ex
