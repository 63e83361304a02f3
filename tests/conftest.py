import numpy as np
import pytest
from PIL import Image


def make_gradient(width: int, height: int) -> Image.Image:
    """Grayscale image fading from black on the left to white on the right."""
    row = np.linspace(0, 255, width).astype(np.uint8)
    return Image.fromarray(np.tile(row, (height, 1)))


def make_flat(width: int, height: int, value: int = 128) -> Image.Image:
    return Image.new("L", (width, height), value)


def ascii_length(width: int, rows: int, glyph_len: int = 2) -> int:
    """Text length of a render where every glyph has the same length."""
    return rows * width * glyph_len + rows - 1


@pytest.fixture
def square_path(tmp_path):
    path = tmp_path / "square.png"
    make_gradient(100, 100).save(path)
    return path
