"""Command-line entry point for blockpix.

This tool loads an image (or every image in a directory), makes its
dimensions divisible by the scale factor, averages each scale x scale block
into one pixel and saves the result next to the source.

All processing occurs on NumPy arrays; Pillow is used only for
loading and saving.

Usage example:
    blockpix photo.png 4 --keep-dimensions --force-crop --centre
    python -m blockpix ./sprites 2 -a -j 4
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import coloredlogs

from .batch import (
    ErrorPolicy,
    ProcessOptions,
    process_directory,
    process_image,
    validate_scale_factor,
)
from .config import LOG_FORMAT, LOGGING_MODE, MAX_SCALE_FACTOR, MIN_SCALE_FACTOR
from .errors import BlockpixError
from .utils.pixelate import OutputMode

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments. The ``--all`` flag is already folded into the
        individual flags.
    """
    parser = argparse.ArgumentParser(
        prog="blockpix",
        description="Pixelate images by averaging square blocks of pixels.",
    )

    parser.add_argument("path", help="The image, or directory of images, to process")
    parser.add_argument(
        "scale_factor",
        type=int,
        help=(
            f"The factor by which the image is scaled down "
            f"({MIN_SCALE_FACTOR}..{MAX_SCALE_FACTOR})"
        ),
    )
    parser.add_argument(
        "-k",
        "--keep-dimensions",
        action="store_true",
        help="Keep the dimensions of the output image the same as the input",
    )
    parser.add_argument(
        "-f",
        "--force-crop",
        action="store_true",
        help="Crop the image so that it is divisible by the scale factor",
    )
    parser.add_argument(
        "-c",
        "--centre",
        action="store_true",
        help="Centre the image if cropping is required",
    )
    parser.add_argument("-o", "--overwrite", action="store_true", help="Overwrite the input image")
    parser.add_argument("-a", "--all", action="store_true", help="Use all optional flags")
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Number of images processed in parallel in directory mode",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=LOGGING_MODE,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )

    ns = parser.parse_args(argv)
    if ns.all:
        ns.keep_dimensions = ns.force_crop = ns.centre = ns.overwrite = True
    return ns


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs."""
    validate_scale_factor(ns.scale_factor)
    if ns.jobs < 1:
        raise ValueError("--jobs must be an integer >= 1")
    if not Path(ns.path).exists():
        raise ValueError(f"could not open file: {ns.path}")


def configure_logging(level: str) -> None:
    coloredlogs.install(level=level, fmt=LOG_FORMAT, logger=logging.getLogger("blockpix"))


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing.

    Returns
    -------
    int
        Exit status code: 0 on success, 1 if a single image failed,
        2 for invalid arguments.
    """
    args = parse_args(argv)
    configure_logging(args.log_level)
    try:
        validate_args(args)
    except ValueError as e:
        logger.error(f"Argument error: {e}")
        return 2

    options = ProcessOptions(
        scale_factor=args.scale_factor,
        mode=OutputMode.KEEP_DIMENSIONS if args.keep_dimensions else OutputMode.SHRINK,
        allow_crop=args.force_crop,
        centre=args.centre,
        overwrite=args.overwrite,
    )

    path = Path(args.path)
    if path.is_dir():
        result = process_directory(path, options, jobs=args.jobs)
        logger.info(f"Pixelated {len(result.written)} images, skipped {len(result.skipped)}")
        return 0

    try:
        process_image(path, options, ErrorPolicy.FAIL_FAST)
    except (OSError, BlockpixError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
