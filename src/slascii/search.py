"""Find the widest rendering that fits in a character budget.

Text length has no closed form in terms of width: it depends on glyph
lengths, on the row count the aspect ratio gives at that width, and on the
newlines between rows. So widths are probed, each one rendered at most once.

The search assumes text length is non-decreasing in width for a fixed image
and palette. Wider renders hold proportionally more glyphs so this holds in
practice, but mixed-length glyphs can make it wobble by a few characters.
"""

import logging
import warnings
from collections.abc import Callable, Sequence
from dataclasses import replace

from PIL import Image

from slascii.engine import Renderer, Rendering
from slascii.errors import BudgetUnsatisfiable
from slascii.renderer import PaletteRenderer

logger = logging.getLogger(__name__)

# Phase 1 probes downwards from here looking for any width that fits
START_WIDTH = 40

# Phase 2 never probes past this width
DEFAULT_MAX_WIDTH = 4000


class RenderCache:
    """Memoizes renders by width for the lifetime of one search."""

    def __init__(self, compute: Callable[[int], Rendering]):
        self._compute = compute
        self._renders: dict[int, Rendering] = {}

    def get_or_compute(self, width: int) -> Rendering:
        if width not in self:
            rendering = self._compute(width)
            logger.debug("Trying %d: %d characters", width, len(rendering))
            self._renders[width] = rendering
        return self._renders[width]

    def __contains__(self, width: int) -> bool:
        return width in self._renders

    def __len__(self) -> int:
        return len(self._renders)

    def widths(self) -> list[int]:
        return sorted(self._renders)


def search_ceiling(max_chars: int, max_width: int = DEFAULT_MAX_WIDTH) -> int:
    # Every row is at least `width` characters long, so wider can never fit
    return max(1, min(max_width, max_chars))


def search_width(cache: RenderCache, max_chars: int, ceiling: int) -> Rendering:
    """Return the widest cached-or-computed render of at most `max_chars` characters."""

    def fits(width: int) -> bool:
        return len(cache.get_or_compute(width)) <= max_chars

    lower = next((w for w in range(min(START_WIDTH, ceiling), 0, -1) if fits(w)), None)
    if lower is None:
        narrowest = cache.get_or_compute(1)
        warnings.warn(
            f"Even a 1-column rendering is {len(narrowest)} characters, over the budget of {max_chars}",
            BudgetUnsatisfiable,
            stacklevel=3,
        )
        return replace(narrowest, over_budget=True)

    for width in range(lower, ceiling):
        if not fits(width + 1):
            return cache.get_or_compute(width)
    logger.info("Reached maximum width %d without exceeding %d characters", ceiling, max_chars)
    return cache.get_or_compute(ceiling)


def find_width_for_budget(
    image: Image.Image,
    palette: Sequence[str] | Renderer,
    max_chars: int,
    max_width: int = DEFAULT_MAX_WIDTH,
) -> Rendering:
    """Render `image` at the largest width whose text is at most `max_chars` long.

    If no width fits, a BudgetUnsatisfiable warning is issued and the 1-column
    render comes back flagged `over_budget`.
    """
    if max_chars < 1:
        raise ValueError(f"Character budget must be at least 1, got {max_chars}")
    if max_width < 1:
        raise ValueError(f"Maximum width must be at least 1, got {max_width}")
    renderer = palette if hasattr(palette, "render") else PaletteRenderer(palette)

    logger.info("Generating output to %d character limit", max_chars)
    cache = RenderCache(lambda width: renderer.render(image, width))
    rendering = search_width(cache, max_chars, search_ceiling(max_chars, max_width))
    logger.debug("Chose width %d after rendering widths %s", rendering.width, cache.widths())
    return rendering
