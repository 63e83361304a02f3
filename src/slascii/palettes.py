from collections.abc import Sequence

from slascii.errors import InvalidPaletteError

# Darker to lighter. Glyphs are two columns wide (or a Slack emoji) so that
# cells come out roughly square.
ASCII = ("00", "33", "oo", "++", "--", "  ")

UNICODE = ("██", "▓▓", "▒▒", "  ")

SHOPIFY = (":s33:", ":s13:", ":s12:", ":s11:", ":s02:", ":s00:")

PING_PONG = (":pong:", ":s00:")

TROLL = (":troll:", "  ")

MADMATT = (":madmatt:", ":s00:")

PALETTES = {
    "ascii": ASCII,
    "unicode": UNICODE,
    "shopify": SHOPIFY,
    "ping_pong": PING_PONG,
    "troll": TROLL,
    "madmatt": MADMATT,
}

DEFAULT_PALETTE = "ascii"


def validate_palette(palette: Sequence[str]) -> tuple[str, ...]:
    """Return the palette as a tuple, raising InvalidPaletteError if it cannot be quantized into."""
    if isinstance(palette, str):
        raise InvalidPaletteError("Palette must be a sequence of glyphs, not a single string")
    glyphs = tuple(palette)
    if len(glyphs) < 2:
        raise InvalidPaletteError(f"Palette needs at least 2 glyphs, got {len(glyphs)}")
    for glyph in glyphs:
        if not isinstance(glyph, str) or not glyph:
            raise InvalidPaletteError(f"Palette glyphs must be non-empty strings, got {glyph!r}")
    return glyphs


def get_palette(name: str, invert: bool = False) -> tuple[str, ...]:
    try:
        palette = PALETTES[name]
    except KeyError:
        raise InvalidPaletteError(f"Unknown palette: {name} (available: {', '.join(PALETTES)})") from None
    return palette[::-1] if invert else palette
