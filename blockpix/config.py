# Valid scale factor range (block edge length in pixels)
MIN_SCALE_FACTOR = 2
MAX_SCALE_FACTOR = 8

# Prepended to the file name of written images unless overwriting
OUTPUT_PREFIX = "pixelated_"

# Pillow format names without an alpha channel; images are flattened to RGB on save
ALPHALESS_FORMATS = {
    "JPEG",
}

LOGGING_MODE = "INFO"
LOG_FORMAT = "%(levelname)s: %(message)s"
