"""Extract a brightness-ordered colour palette from the image.

Samples at most ~2000 pixels at a fixed stride, ignores pixels with
alpha <= 128, sorts the samples by r+g+b and averages N equal buckets
(default 10, or SWATCHKIT_COUNT). Colours are listed darkest first.

A fully transparent image gives an empty palette; that is not an error.

Example:
    uv run swatchkit palette ./out thumbnail.png
    uv run swatchkit palette ./out thumbnail.png -n 5 --json
"""

from swatchkit.core.palette import quantize, sample, sample_step
from swatchkit.core.report import colour_dict
from swatchkit.core.types import Command, PixelBuffer, Report

command = Command(
    name='palette',
    help='Extract a brightness-ordered palette (stride sampling, bucket averages).',
)


@command.run
def run(image: PixelBuffer, report: Report, args) -> None:
    candidates = sample(image)
    palette = quantize(candidates, args.count)
    report.add(
        'palette',
        {
            'requested': args.count,
            'step': sample_step(image.pixel_count),
            'samples': len(candidates),
            'colours': [colour_dict(c) for c in palette],
        },
    )
