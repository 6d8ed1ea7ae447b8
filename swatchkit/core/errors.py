"""Exception types raised by swatchkit.core."""


class SwatchKitError(Exception):
    """Base class for swatchkit errors."""


class SelectionTooSmall(SwatchKitError):
    """Display-space selection is below the minimum drag size.

    Callers should treat the selection as still in progress.
    """

    def __init__(self, w: float, h: float, minimum: float):
        self.w = w
        self.h = h
        self.minimum = minimum
        super().__init__(f'Selection {w:g}x{h:g} is smaller than {minimum:g}x{minimum:g}')


class AseFormatError(SwatchKitError):
    """Malformed Adobe Swatch Exchange data."""
