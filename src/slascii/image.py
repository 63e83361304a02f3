from pathlib import Path

import numpy as np
from PIL import Image

from slascii.errors import ImageDecodeError

# Upper bound on rendered rows, so very tall images can't blow up the resize
MAX_HEIGHT = 10000

# Grayscale modes holding up to 16 significant bits per pixel
INTEGER_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I")


def open_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image, raising ImageDecodeError on any failure."""
    try:
        image = Image.open(path)
        image.load()
    except (OSError, Image.DecompressionBombError) as ex:
        raise ImageDecodeError(f"Unable to open {path}: {ex}") from ex
    return image


def to_grayscale(image: Image.Image) -> Image.Image:
    """Single-channel 8-bit version of the image.

    Pillow's own conversion clips 16-bit and 32-bit data at 255, so those
    modes are scaled down here instead.
    """
    if image.mode == "L":
        return image
    if image.mode in INTEGER_MODES:
        pixels = np.clip(np.asarray(image, dtype=np.int64), 0, 0xFFFF) >> 8
        return Image.fromarray(pixels.astype(np.uint8))
    if image.mode == "F":
        pixels = np.nan_to_num(np.asarray(image, dtype=np.float64))
        low, high = pixels.min(), pixels.max()
        if high > low:
            pixels = (pixels - low) * (255 / (high - low))
        else:
            pixels = np.zeros_like(pixels)
        return Image.fromarray(np.rint(pixels).astype(np.uint8))
    return image.convert("L")


def scaled_height(image: Image.Image, width: int, max_height: int = MAX_HEIGHT) -> int:
    """Row count that keeps the image's aspect ratio at the given width."""
    height = round(image.height * width / image.width)
    return max(1, min(max_height, height))


def resize_to_width(image: Image.Image, width: int, max_height: int = MAX_HEIGHT) -> np.ndarray:
    """Grayscale the image and resize it to exactly `width` columns.

    Returns a (rows, width) uint8 array of luminance values.
    """
    if width < 1:
        raise ValueError(f"Width must be at least 1, got {width}")
    gray = to_grayscale(image)
    size = (width, scaled_height(gray, width, max_height))
    if gray.size != size:
        gray = gray.resize(size, Image.LANCZOS)
    return np.asarray(gray, dtype=np.uint8)
