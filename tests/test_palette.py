"""Tests for swatchkit.core.palette — stride sampling and brightness buckets."""

import math
import random

import numpy as np
import pytest
from swatchkit.core.palette import SAMPLE_BUDGET, extract_palette, quantize, sample, sample_step
from swatchkit.core.types import Colour, PixelBuffer


def _buffer(width: int, height: int, rgba: tuple[int, int, int, int]) -> PixelBuffer:
    return PixelBuffer(width, height, bytes(rgba) * (width * height))


def _random_buffer(width: int, height: int, seed: int = 7) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    arr = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return PixelBuffer(width, height, arr.tobytes())


def _greys(levels: list[int]) -> list[Colour]:
    return [Colour(v, v, v) for v in levels]


class TestSampleStep:
    def test_small_image_samples_every_pixel(self):
        assert sample_step(100) == 1
        assert sample_step(3999) == 1

    def test_stride_is_floor_of_budget_ratio(self):
        assert sample_step(4000) == 2
        assert sample_step(10_000) == 5
        assert sample_step(10_001) == 5

    def test_ten_million_pixels(self):
        step = sample_step(10_000_000)
        assert step == 5000
        assert math.ceil(10_000_000 / step) == SAMPLE_BUDGET

    def test_empty(self):
        assert sample_step(0) == 1


class TestSample:
    def test_solid_opaque_image(self):
        colours = sample(_buffer(10, 10, (255, 0, 0, 255)))
        assert len(colours) == 100
        assert set(colours) == {Colour(255, 0, 0)}

    def test_transparent_image_is_empty(self):
        assert sample(_buffer(10, 10, (255, 255, 255, 0))) == []

    def test_alpha_threshold_is_exclusive(self):
        pixels = bytes([10, 10, 10, 128, 20, 20, 20, 129])
        assert sample(PixelBuffer(2, 1, pixels)) == [Colour(20, 20, 20)]

    def test_row_major_order_preserved(self):
        pixels = b''.join(bytes([i, 0, 0, 255]) for i in range(6))
        colours = sample(PixelBuffer(3, 2, pixels))
        assert [c.r for c in colours] == [0, 1, 2, 3, 4, 5]

    def test_stride_picks_every_nth_pixel(self):
        # 4000 pixels -> step 2 -> indices 0, 2, 4, ...
        pixels = b''.join(bytes([i % 256, 0, 0, 255]) for i in range(4000))
        colours = sample(PixelBuffer(4000, 1, pixels))
        assert len(colours) == 2000
        assert [c.r for c in colours[:4]] == [0, 2, 4, 6]

    def test_large_image_stays_within_budget(self):
        buf = _buffer(4000, 2500, (1, 2, 3, 255))
        colours = sample(buf)
        assert len(colours) <= SAMPLE_BUDGET

    def test_zero_size_buffer(self):
        assert sample(PixelBuffer(0, 0, b'')) == []


class TestQuantize:
    def test_empty_input_gives_empty_palette(self):
        assert quantize([], 10) == []

    def test_count_must_be_positive(self):
        with pytest.raises(ValueError):
            quantize(_greys([1, 2, 3]), 0)

    def test_bucket_averages(self):
        levels = [i * 10 for i in range(20)]
        random.Random(3).shuffle(levels)
        palette = quantize(_greys(levels), 10)
        assert palette == _greys([5, 25, 45, 65, 85, 105, 125, 145, 165, 185])

    def test_trailing_remainder_is_dropped(self):
        # 23 candidates, 10 buckets of 2: the three brightest never contribute
        palette = quantize(_greys(list(range(23))), 10)
        assert len(palette) == 10
        assert palette[-1] == Colour(18, 18, 18)

    def test_mean_truncates(self):
        assert quantize(_greys([0, 1]), 1) == [Colour(0, 0, 0)]

    def test_channels_averaged_independently(self):
        colours = [Colour(10, 0, 0), Colour(0, 10, 0)]
        assert quantize(colours, 1) == [Colour(5, 5, 0)]

    def test_fewer_candidates_than_buckets(self):
        palette = quantize(_greys([90, 10, 50]), 10)
        assert palette == _greys([10, 50, 90])

    def test_equal_brightness_keeps_input_order(self):
        red, green = Colour(255, 0, 0), Colour(0, 255, 0)
        assert quantize([red, green], 2) == [red, green]
        assert quantize([green, red], 2) == [green, red]

    def test_default_count_is_ten(self):
        assert len(quantize(_greys(list(range(100))))) == 10

    def test_does_not_mutate_input(self):
        colours = _greys([30, 10, 20])
        quantize(colours, 2)
        assert colours == _greys([30, 10, 20])


class TestPaletteProperties:
    @pytest.mark.parametrize('count', [1, 3, 10, 64])
    def test_bound_and_ordering(self, count: int):
        palette = extract_palette(_random_buffer(80, 60), count)
        assert 0 < len(palette) <= count
        sums = [c.brightness for c in palette]
        assert sums == sorted(sums)

    def test_deterministic(self):
        buf = _random_buffer(120, 90)
        assert extract_palette(buf, 10) == extract_palette(buf, 10)

    def test_transparent_image_gives_empty_palette(self):
        assert extract_palette(_buffer(50, 50, (200, 100, 50, 10))) == []
