import warnings
from collections.abc import Sequence
from pathlib import Path

import numpy as np
from PIL import Image

from slascii.engine import Rendering
from slascii.errors import DegenerateImageError
from slascii.image import MAX_HEIGHT, open_image, resize_to_width
from slascii.palettes import validate_palette


def luminance_range(pixels: np.ndarray) -> tuple[int, int]:
    """Return (darkest, lightest) over the whole grid."""
    return int(pixels.min()), int(pixels.max())


def quantize(pixels: np.ndarray, levels: int) -> np.ndarray:
    """Map each luminance value to a bucket index in [0, levels).

    Only the luminance range actually used by the grid is spread over the
    buckets, which is usually much narrower than 0-255. A flat grid maps
    entirely to bucket 0.
    """
    darkest, lightest = luminance_range(pixels)
    if lightest == darkest:
        return np.zeros(pixels.shape, dtype=np.intp)
    step = (lightest - darkest) / (levels - 1)
    scaled = (pixels.astype(np.float64) - darkest) / step
    # Round half away from zero (scaled is never negative), then clamp float error
    return np.clip(np.floor(scaled + 0.5), 0, levels - 1).astype(np.intp)


class PaletteRenderer:
    """Rendering engine that maps each pixel's luminance to one palette glyph."""

    def __init__(self, palette: Sequence[str], max_height: int = MAX_HEIGHT):
        self.palette = validate_palette(palette)
        self.max_height = max_height
        self._glyphs = np.array(self.palette, dtype=object)

    def render(self, image: Image.Image, width: int) -> Rendering:
        pixels = resize_to_width(image, width, self.max_height)
        darkest, lightest = luminance_range(pixels)
        degenerate = darkest == lightest
        if degenerate:
            warnings.warn(
                f"Rendering at width {width} has no luminance variance; every cell uses the darkest glyph",
                DegenerateImageError,
                stacklevel=2,
            )
        cells = self._glyphs[quantize(pixels, len(self.palette))]
        text = "\n".join("".join(row) for row in cells)
        return Rendering(text=text, width=width, rows=pixels.shape[0], degenerate=degenerate)


def render(image: Image.Image | str | Path, palette: Sequence[str], width: int) -> str:
    renderer = PaletteRenderer(palette)
    if not isinstance(image, Image.Image):
        image = open_image(image)
    return renderer.render(image, width).text
