"""Selection handling and region extraction.

A selection is drawn over the image as displayed on screen (DisplayRect).
to_source() scales it to the image's native resolution (SourceRect) using
the ratio of native to displayed size, truncating each component. crop()
copies that source rectangle out of the buffer, clamped to the image.

Selections under MIN_SELECTION display units on either side are accidental
clicks and raise SelectionTooSmall.
"""

import math

import numpy as np

from swatchkit.core.errors import SelectionTooSmall
from swatchkit.core.types import DisplayRect, DisplaySize, PixelBuffer, SourceRect

MIN_SELECTION = 10


def selection_from_drag(
    start: tuple[float, float],
    current: tuple[float, float],
    display_size: DisplaySize,
) -> DisplayRect:
    """Build a selection from a pointer drag.

    The current pointer position is constrained to the displayed image; the
    drag may go in any direction.
    """
    sx, sy = start
    cx = min(max(0.0, current[0]), display_size.w)
    cy = min(max(0.0, current[1]), display_size.h)
    dx = cx - sx
    dy = cy - sy
    return DisplayRect(
        x=sx if dx > 0 else cx,
        y=sy if dy > 0 else cy,
        w=abs(dx),
        h=abs(dy),
    )


def validate_selection(selection: DisplayRect, minimum: float = MIN_SELECTION) -> None:
    if not all(math.isfinite(v) for v in (selection.x, selection.y, selection.w, selection.h)):
        raise ValueError(f'Selection has non-finite coordinates: {selection}')
    if selection.w < minimum or selection.h < minimum:
        raise SelectionTooSmall(selection.w, selection.h, minimum)


def to_source(selection: DisplayRect, display_size: DisplaySize, buffer: PixelBuffer) -> SourceRect:
    """Map a display-space selection onto the buffer's native pixels."""
    if display_size.w <= 0 or display_size.h <= 0:
        raise ValueError(f'Display size must be positive, got {display_size.w}x{display_size.h}')
    scale_x = buffer.width / display_size.w
    scale_y = buffer.height / display_size.h
    return SourceRect(
        x=math.floor(selection.x * scale_x),
        y=math.floor(selection.y * scale_y),
        w=math.floor(selection.w * scale_x),
        h=math.floor(selection.h * scale_y),
    )


def clamp(rect: SourceRect, buffer: PixelBuffer) -> SourceRect:
    """Intersect a source rectangle with the buffer bounds."""
    x1 = min(max(rect.x, 0), buffer.width)
    y1 = min(max(rect.y, 0), buffer.height)
    x2 = min(max(rect.x + rect.w, x1), buffer.width)
    y2 = min(max(rect.y + rect.h, y1), buffer.height)
    return SourceRect(x1, y1, x2 - x1, y2 - y1)


def crop(buffer: PixelBuffer, rect: SourceRect) -> PixelBuffer:
    """Copy a source-space rectangle into a new buffer, pixel for pixel."""
    r = clamp(rect, buffer)
    arr = np.frombuffer(buffer.pixels, dtype=np.uint8).reshape(buffer.height, buffer.width, 4)
    region = arr[r.y : r.y + r.h, r.x : r.x + r.w]
    return PixelBuffer(width=r.w, height=r.h, pixels=region.tobytes())


def extract(buffer: PixelBuffer, selection: DisplayRect, display_size: DisplaySize) -> PixelBuffer:
    """Crop the pixels under a display-space selection at native resolution."""
    validate_selection(selection)
    return crop(buffer, to_source(selection, display_size, buffer))
