import warnings

import numpy as np
import pytest
from PIL import Image

from slascii.errors import DegenerateImageError, ImageDecodeError, InvalidPaletteError
from slascii.palettes import ASCII, UNICODE
from slascii.renderer import PaletteRenderer, luminance_range, quantize, render
from tests.conftest import ascii_length, make_flat, make_gradient


def cells(text: str, glyph_len: int = 2) -> list[list[str]]:
    return [[row[i : i + glyph_len] for i in range(0, len(row), glyph_len)] for row in text.split("\n")]


def test_two_by_two_scenario():
    image = Image.fromarray(np.array([[10, 10], [250, 250]], dtype=np.uint8))
    assert render(image, ["##", "  "], 2) == "####\n    "


def test_luminance_range():
    assert luminance_range(np.array([[3, 200], [17, 90]], dtype=np.uint8)) == (3, 200)


def test_quantize_maps_extremes_to_end_buckets():
    pixels = np.array([[20, 220]], dtype=np.uint8)
    np.testing.assert_array_equal(quantize(pixels, 6), [[0, 5]])


def test_quantize_uses_only_observed_range():
    # 100..200 spread over three buckets, even though 0..255 is available
    pixels = np.array([[100, 150, 200]], dtype=np.uint8)
    np.testing.assert_array_equal(quantize(pixels, 3), [[0, 1, 2]])


def test_quantize_rounds_half_up():
    # step is 2, so 1 sits exactly halfway between buckets 0 and 1
    pixels = np.array([[0, 1, 4]], dtype=np.uint8)
    np.testing.assert_array_equal(quantize(pixels, 3), [[0, 1, 2]])


def test_quantize_flat_grid_is_bucket_zero():
    pixels = np.full((3, 4), 77, dtype=np.uint8)
    np.testing.assert_array_equal(quantize(pixels, 4), np.zeros((3, 4)))


def test_quantize_stays_in_range():
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(30, 30), dtype=np.uint8)
    for levels in (2, 3, 6, 7, 255):
        indices = quantize(pixels, levels)
        assert indices.min() == 0
        assert indices.max() == levels - 1


def test_flat_image_uses_darkest_glyph():
    renderer = PaletteRenderer(ASCII)
    with pytest.warns(DegenerateImageError):
        rendering = renderer.render(make_flat(5, 3), 5)
    assert rendering.degenerate
    assert rendering.text == "\n".join(["00" * 5] * 3)


def test_flat_image_with_inverted_palette_uses_first_glyph():
    with pytest.warns(DegenerateImageError):
        text = render(make_flat(4, 4, value=255), ASCII[::-1], 4)
    assert set(text.replace("\n", "")) == {" "}


def test_gradient_is_not_degenerate():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DegenerateImageError)
        rendering = PaletteRenderer(ASCII).render(make_gradient(60, 30), 30)
    assert not rendering.degenerate


def test_gradient_runs_dark_to_light():
    rows = cells(render(make_gradient(60, 6), ASCII, 60))
    for row in rows:
        assert row[0] == ASCII[0]
        assert row[-1] == ASCII[-1]
        indices = [ASCII.index(glyph) for glyph in row]
        assert indices == sorted(indices)


def test_rendering_dimensions():
    rendering = PaletteRenderer(ASCII).render(make_gradient(200, 100), 20)
    assert rendering.width == 20
    assert rendering.rows == 10
    lines = rendering.text.split("\n")
    assert len(lines) == 10
    assert all(len(line) == 40 for line in lines)
    assert len(rendering) == ascii_length(20, 10)


def test_max_height_caps_rows():
    rendering = PaletteRenderer(ASCII, max_height=3).render(make_gradient(10, 100), 10)
    assert rendering.rows == 3


def test_mixed_length_glyphs():
    image = Image.fromarray(np.array([[0, 255]], dtype=np.uint8))
    assert render(image, [":troll:", "  "], 2) == ":troll:  "


def test_inverted_palette_is_photographic_negative():
    image = make_gradient(80, 40)
    normal = cells(render(image, ASCII, 24))
    inverted = cells(render(image, ASCII[::-1], 24))
    negative = {glyph: ASCII[len(ASCII) - 1 - i] for i, glyph in enumerate(ASCII)}
    assert inverted == [[negative[glyph] for glyph in row] for row in normal]


def test_render_is_idempotent():
    image = make_gradient(123, 77)
    assert render(image, UNICODE, 31) == render(image, UNICODE, 31)


def test_accepts_rgb_image():
    image = Image.new("RGB", (4, 2))
    image.putpixel((3, 1), (255, 255, 255))
    text = render(image, ["#", "."], 4)
    assert text == "####\n###."


def test_accepts_file_path(tmp_path):
    path = tmp_path / "gradient.png"
    make_gradient(40, 20).save(path)
    assert render(path, ASCII, 40) == render(make_gradient(40, 20), ASCII, 40)


def test_missing_file_raises_decode_error(tmp_path):
    with pytest.raises(ImageDecodeError):
        render(tmp_path / "missing.png", ASCII, 10)


def test_palette_checked_before_image_is_opened(tmp_path):
    with pytest.raises(InvalidPaletteError):
        render(tmp_path / "missing.png", ["#"], 10)


def test_single_column_of_gradient_warns_with_width():
    # A 1-wide render of a wide gradient squeezes to one pixel
    with pytest.warns(DegenerateImageError, match="Rendering at width 1 has no luminance variance"):
        rendering = PaletteRenderer(ASCII).render(make_gradient(100, 100), 1)
    assert rendering.degenerate
    assert rendering.text == ASCII[0]
