"""Palette extraction: stride sampling plus brightness-bucket quantization.

sample() inspects at most ~SAMPLE_BUDGET pixels regardless of image size,
keeping only pixels with alpha > ALPHA_THRESHOLD. quantize() sorts the
candidates by r+g+b and averages `count` equal-sized contiguous buckets.

This is not k-means. One deterministic pass, O(n log n) in the sort, and
the output is always brightness-ascending.

Trailing candidates beyond count * bucket_size are left out of every
bucket; changing that changes the numbers of every existing palette.
With fewer candidates than buckets each candidate is its own bucket.
"""

from collections.abc import Sequence

import numpy as np

from swatchkit.core.types import Colour, PixelBuffer

SAMPLE_BUDGET = 2000
ALPHA_THRESHOLD = 128
DEFAULT_COUNT = 10


def sample_step(pixel_count: int) -> int:
    """Stride between sampled pixel indices."""
    return max(1, pixel_count // SAMPLE_BUDGET)


def sample(buffer: PixelBuffer) -> list[Colour]:
    """Subsample a buffer into candidate colours, in row-major order."""
    if buffer.pixel_count == 0:
        return []
    arr = np.frombuffer(buffer.pixels, dtype=np.uint8).reshape(-1, 4)
    picked = arr[:: sample_step(buffer.pixel_count)]
    opaque = picked[picked[:, 3] > ALPHA_THRESHOLD]
    return [Colour(int(px[0]), int(px[1]), int(px[2])) for px in opaque]


def quantize(colours: Sequence[Colour], count: int = DEFAULT_COUNT) -> list[Colour]:
    """Reduce candidates to at most `count` averaged colours, darkest first."""
    if count < 1:
        raise ValueError(f'count must be >= 1, got {count}')

    # sorted() is stable, so equal-brightness colours keep sampling order
    ordered = sorted(colours, key=lambda c: c.brightness)
    # Fewer candidates than buckets: one candidate per bucket, the rest stay empty
    bucket_size = max(1, len(ordered) // count)

    palette = []
    for i in range(count):
        bucket = ordered[i * bucket_size : (i + 1) * bucket_size]
        if not bucket:
            continue
        n = len(bucket)
        palette.append(
            Colour(
                sum(c.r for c in bucket) // n,
                sum(c.g for c in bucket) // n,
                sum(c.b for c in bucket) // n,
            )
        )
    return palette


def extract_palette(buffer: PixelBuffer, count: int = DEFAULT_COUNT) -> list[Colour]:
    """sample() then quantize(). Empty for fully transparent images."""
    return quantize(sample(buffer), count)
