"""Cut a selected region out of the image at native resolution, save as PNG.

The selection is given in display units: the coordinates of the image as it
was shown on screen. --display is that on-screen size (defaults to the
image's own size, i.e. no scaling). Each coordinate is scaled by
native/display and truncated, then the region is clamped to the image.

Give the selection either as a rectangle or as a pointer drag:

    --select X,Y,W,H     top-left corner plus width and height
    --drag X1,Y1,X2,Y2   press point and release point, any direction

Selections under 10×10 display units are treated as a stray click: the
result is reported as pending and nothing is written.

Output: <out_dir>/<label>.png (label from --label, SWATCHKIT_LABEL, or 'crop').

Example:
    uv run swatchkit crop ./out thumbnail.png --display 640x360 --select 100,50,50,50
    uv run swatchkit crop ./out thumbnail.png --drag 300,200,120,40 --label title
"""

import math
import os
import re

from swatchkit.core.errors import SelectionTooSmall
from swatchkit.core.imaging import save_png
from swatchkit.core.region import extract, selection_from_drag, to_source
from swatchkit.core.types import Command, DisplayRect, DisplaySize, PixelBuffer, Report

command = Command(
    name='crop',
    help='Extract a display-space selection at native resolution and save it as PNG.',
)


def _floats(value: str, n: int, flag: str) -> list[float]:
    parts = [p.strip() for p in value.split(',')]
    if len(parts) != n:
        raise ValueError(f'{flag} expects {n} comma-separated numbers, got {value!r}')
    try:
        numbers = [float(p) for p in parts]
    except ValueError:
        raise ValueError(f'{flag} expects numbers, got {value!r}') from None
    if not all(math.isfinite(v) for v in numbers):
        raise ValueError(f'{flag} expects finite numbers, got {value!r}')
    return numbers


def parse_display(value: str | None, image: PixelBuffer) -> DisplaySize:
    """Parse 'WxH'; None means the image is displayed at native size."""
    if not value:
        return DisplaySize(image.width, image.height)
    m = re.fullmatch(r'\s*(\d+(?:\.\d+)?)\s*[xX×]\s*(\d+(?:\.\d+)?)\s*', value)
    if not m:
        raise ValueError(f'--display expects WxH, got {value!r}')
    size = DisplaySize(float(m.group(1)), float(m.group(2)))
    if size.w <= 0 or size.h <= 0:
        raise ValueError(f'--display must be positive, got {value!r}')
    return size


def parse_selection(args, display: DisplaySize) -> DisplayRect:
    if getattr(args, 'select', None):
        x, y, w, h = _floats(args.select, 4, '--select')
        return DisplayRect(x, y, w, h)
    if getattr(args, 'drag', None):
        x1, y1, x2, y2 = _floats(args.drag, 4, '--drag')
        return selection_from_drag((x1, y1), (x2, y2), display)
    raise ValueError('--select X,Y,W,H or --drag X1,Y1,X2,Y2 required')


def _safe_label(label: str) -> str:
    # Path separators would place the file outside out_dir
    return re.sub(r'[\s/\\]+', '_', label.strip()) or 'crop'


@command.run
def run(image: PixelBuffer, report: Report, args) -> None:
    try:
        display = parse_display(getattr(args, 'display', None), image)
        selection = parse_selection(args, display)
    except ValueError as e:
        report.add('crop', {'error': str(e)})
        return

    try:
        cropped = extract(image, selection, display)
    except SelectionTooSmall as e:
        report.add('crop', {'status': 'pending', 'reason': str(e)})
        return

    source = to_source(selection, display, image)
    data = {
        'selection': [selection.x, selection.y, selection.w, selection.h],
        'display': [display.w, display.h],
        'source': [source.x, source.y, source.w, source.h],
        'width': cropped.width,
        'height': cropped.height,
    }
    if cropped.width == 0 or cropped.height == 0:
        report.add('crop', {**data, 'status': 'empty', 'reason': 'selection lies outside the image'})
        return

    os.makedirs(args.out_dir, exist_ok=True)
    path = os.path.join(args.out_dir, f'{_safe_label(args.label)}.png')
    save_png(cropped, path)
    report.add_file(path)
    report.add('crop', {**data, 'status': 'saved', 'file': path})
