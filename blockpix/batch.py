"""Load, pixelate and save images, one file or a whole directory at a time."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .config import MAX_SCALE_FACTOR, MIN_SCALE_FACTOR, OUTPUT_PREFIX
from .errors import BlockpixError, InvalidScaleFactor
from .utils.loader import load_image, save_image
from .utils.pixelate import OutputMode, pixelate
from .utils.reconcile import reconcile_with_rect

logger = logging.getLogger(__name__)


class ErrorPolicy(Enum):
    """What to do when one image fails."""

    FAIL_FAST = "fail-fast"
    SKIP = "skip"


def validate_scale_factor(scale_factor: int) -> int:
    if not MIN_SCALE_FACTOR <= scale_factor <= MAX_SCALE_FACTOR:
        raise InvalidScaleFactor(scale_factor, MIN_SCALE_FACTOR, MAX_SCALE_FACTOR)
    return scale_factor


@dataclass
class ProcessOptions:
    """Per-run pixelation settings."""

    scale_factor: int
    mode: OutputMode = OutputMode.SHRINK
    allow_crop: bool = False
    centre: bool = False
    overwrite: bool = False

    def __post_init__(self):
        validate_scale_factor(self.scale_factor)


@dataclass
class BatchResult:
    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)


def output_path_for(path: Path, overwrite: bool) -> Path:
    """Where the pixelated version of ``path`` is written."""
    if overwrite:
        return path
    return path.with_name(OUTPUT_PREFIX + path.name)


def process_image(
    path: Union[str, Path],
    options: ProcessOptions,
    policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
) -> Optional[Path]:
    """Pixelate a single image file and save the result.

    Returns the written path. Under ``ErrorPolicy.SKIP`` a failure is logged
    and None is returned; under ``FAIL_FAST`` the exception propagates.
    """
    path = Path(path)
    try:
        img = load_image(path)
        H, W = img.shape[:2]
        img, rect = reconcile_with_rect(
            img, options.scale_factor, options.allow_crop, options.centre
        )
        if rect is not None:
            logger.warning(
                f"Cropped '{path}' from {W}x{H} to {rect.width}x{rect.height} "
                f"at ({rect.x}, {rect.y})"
            )
        out = pixelate(img, options.scale_factor, options.mode)
        out_path = output_path_for(path, options.overwrite)
        save_image(out, out_path)
    except (OSError, BlockpixError) as ex:
        if policy is ErrorPolicy.FAIL_FAST:
            raise
        logger.error(f"{ex}; skipping '{path}'")
        return None

    logger.info(f"Saved '{out_path}' with shape {out.shape[1]}x{out.shape[0]}")
    return out_path


def list_image_files(directory: Union[str, Path]) -> List[Path]:
    """Return the regular files directly inside ``directory``, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"The directory '{directory}' does not exist")
    return sorted(p for p in directory.iterdir() if p.is_file())


def process_directory(
    directory: Union[str, Path],
    options: ProcessOptions,
    jobs: int = 1,
) -> BatchResult:
    """Pixelate every image in ``directory``, skipping the ones that fail.

    The listing is taken before any output is written, so results saved
    next to their sources are not picked up again. With ``jobs > 1`` the
    images are processed on a thread pool.
    """
    if jobs < 1:
        raise ValueError("jobs must be >= 1")
    paths = list_image_files(directory)
    logger.info(f"Found {len(paths)} files in '{Path(directory).absolute()}'")

    if jobs == 1:
        outputs = [process_image(p, options, ErrorPolicy.SKIP) for p in paths]
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outputs = list(pool.map(lambda p: process_image(p, options, ErrorPolicy.SKIP), paths))

    result = BatchResult()
    for path, out_path in zip(paths, outputs):
        if out_path is None:
            result.skipped.append(path)
        else:
            result.written.append(out_path)
    return result
