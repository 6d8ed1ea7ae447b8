"""Write the palette as palette.ase (Adobe Swatch Exchange) and palette.txt.

The .ase file holds one RGB colour entry per palette colour, named by its
uppercase hex digits (e.g. FF00AA), with no groups. It opens in Photoshop,
Illustrator, Affinity and other tools that read ASE 1.0.

palette.txt lists the same colours as `HEX: #rrggbb | RGB: r, g, b`.

Nothing is written when the palette is empty.

Example:
    uv run swatchkit export ./out thumbnail.png
    uv run swatchkit inspect ./out/palette.ase
"""

import os

from swatchkit.core.ase import encode
from swatchkit.core.palette import extract_palette
from swatchkit.core.report import format_palette
from swatchkit.core.types import Command, PixelBuffer, Report

command = Command(
    name='export',
    help='Write palette.ase and palette.txt to the output directory.',
)


@command.run
def run(image: PixelBuffer, report: Report, args) -> None:
    palette = extract_palette(image, args.count)
    if not palette:
        report.add('export', {'skipped': 'empty palette'})
        return

    os.makedirs(args.out_dir, exist_ok=True)

    data = encode(palette)
    ase_path = os.path.join(args.out_dir, 'palette.ase')
    with open(ase_path, 'wb') as f:
        f.write(data)

    txt_path = os.path.join(args.out_dir, 'palette.txt')
    with open(txt_path, 'w', encoding='utf-8') as f:
        f.write(format_palette(palette))

    report.add_file(ase_path)
    report.add_file(txt_path)
    report.add(
        'export',
        {
            'ase': ase_path,
            'ase_bytes': len(data),
            'swatches': len(palette),
            'txt': txt_path,
        },
    )
