"""Report builder — text and JSON output for swatchkit results."""

import json
import os
from collections.abc import Sequence
from typing import Any

from swatchkit.core.types import Colour, Report


def colour_dict(colour: Colour) -> dict[str, Any]:
    return {'hex': colour.hex, 'r': colour.r, 'g': colour.g, 'b': colour.b}


def format_palette(palette: Sequence[Colour]) -> str:
    """Plain-text palette listing, one colour per line."""
    return '\n'.join(f'HEX: {c.hex} | RGB: {c.r}, {c.g}, {c.b}' for c in palette)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    dim = f'{report.image_width}×{report.image_height}'
    lines.append(f'swatchkit: {os.path.basename(report.image_path)} ({dim})')
    lines.append('')

    for name, data in report.sections.items():
        lines.append(f'── {name}')
        if name == 'palette' and 'colours' in data:
            colours = data['colours']
            if not colours:
                lines.append('  (no opaque pixels sampled)')
            for c in colours:
                lines.append(f'  {c["hex"]}  rgb({c["r"]}, {c["g"]}, {c["b"]})')
        elif name == 'crop' and data.get('status') == 'saved':
            s = data['source']
            lines.append(f'  [{s[0]},{s[1]} {s[2]}×{s[3]}] → {data["file"]}')
        elif name == 'crop' and data.get('status') == 'pending':
            lines.append(f'  pending: {data["reason"]}')
        else:
            # Generic fallback
            for k, v in data.items():
                lines.append(f'  {name}.{k}: {v}')
        lines.append('')

    if report.files:
        lines.append(f'wrote {len(report.files)} file(s)')
    return '\n'.join(lines).rstrip('\n')


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
        'results': report.sections,
        'files': report.files,
    }
    return json.dumps(obj, indent=2)
