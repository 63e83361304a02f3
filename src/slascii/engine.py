from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from PIL import Image


@dataclass(frozen=True)
class Rendering:
    text: str
    width: int
    rows: int
    degenerate: bool = False  # flat image, every cell is the darkest glyph
    over_budget: bool = False  # longer than the requested character budget

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text


class Renderer(Protocol):
    def render(self, image: Image.Image, width: int) -> Rendering:
        """Render a decoded image at exactly `width` columns."""
        ...
