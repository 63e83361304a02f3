class SlasciiError(Exception):
    """Base class for failures that stop a rendering."""


class ImageDecodeError(SlasciiError):
    pass


class InvalidPaletteError(SlasciiError, ValueError):
    pass


class SlasciiWarning(UserWarning):
    """Base class for conditions that are recovered from with a best-effort result."""


class DegenerateImageError(SlasciiWarning):
    """The image has no luminance variance; every cell gets the darkest glyph."""


class BudgetUnsatisfiable(SlasciiWarning):
    """Even the narrowest rendering is longer than the character budget."""
