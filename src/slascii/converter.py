from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from slascii.engine import Rendering
from slascii.image import open_image
from slascii.renderer import PaletteRenderer
from slascii.search import DEFAULT_MAX_WIDTH, find_width_for_budget

# Slack's message length limit
DEFAULT_CHARS = 4000


@dataclass(frozen=True)
class FixedWidth:
    width: int

    def __post_init__(self):
        if self.width < 1:
            raise ValueError(f"Width must be at least 1, got {self.width}")


@dataclass(frozen=True)
class CharacterBudget:
    max_chars: int = DEFAULT_CHARS
    max_width: int = DEFAULT_MAX_WIDTH

    def __post_init__(self):
        if self.max_chars < 1:
            raise ValueError(f"Character budget must be at least 1, got {self.max_chars}")
        if self.max_width < 1:
            raise ValueError(f"Maximum width must be at least 1, got {self.max_width}")


SizingMode = FixedWidth | CharacterBudget


def make_art(
    image: Image.Image | str | Path,
    palette: Sequence[str],
    sizing: SizingMode = CharacterBudget(),
) -> Rendering:
    # Palette problems surface before the image is even opened
    renderer = PaletteRenderer(palette)
    if not isinstance(image, Image.Image):
        image = open_image(image)

    if isinstance(sizing, FixedWidth):
        return renderer.render(image, sizing.width)
    if isinstance(sizing, CharacterBudget):
        return find_width_for_budget(image, renderer, sizing.max_chars, max_width=sizing.max_width)
    raise TypeError(f"Unknown sizing mode: {sizing!r}")


def produce_art(
    filename: str | Path,
    palette: Sequence[str],
    sizing: SizingMode = CharacterBudget(),
) -> str:
    return make_art(filename, palette, sizing).text
