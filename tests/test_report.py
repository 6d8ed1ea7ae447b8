"""Tests for swatchkit.core.report — palette listing, text and JSON output."""

import json

import pytest

from swatchkit.core.report import colour_dict, format_json, format_palette, format_text
from swatchkit.core.types import Colour, Report


def _report() -> Report:
    report = Report(image_path='/tmp/shots/thumb.png', image_width=1280, image_height=720)
    report.add('palette', {'requested': 2, 'colours': [colour_dict(Colour(0, 0, 0)), colour_dict(Colour(255, 0, 170))]})
    return report


class TestColour:
    def test_hex_is_lowercase_with_hash(self):
        assert Colour(255, 0, 170).hex == '#ff00aa'

    def test_ase_name_is_uppercase_digits(self):
        assert Colour(255, 0, 170).ase_name == 'FF00AA'

    def test_pads_single_digit_channels(self):
        assert Colour(1, 2, 3).hex == '#010203'

    def test_brightness(self):
        assert Colour(10, 20, 30).brightness == 60

    @pytest.mark.parametrize('rgb', [(256, 0, 0), (0, -1, 0), (0, 0, 382)])
    def test_channels_must_fit_a_byte(self, rgb: tuple[int, int, int]):
        with pytest.raises(ValueError, match='0-255'):
            Colour(*rgb)


class TestFormatPalette:
    def test_lines(self):
        text = format_palette([Colour(0, 0, 0), Colour(255, 0, 170)])
        assert text == 'HEX: #000000 | RGB: 0, 0, 0\nHEX: #ff00aa | RGB: 255, 0, 170'

    def test_empty(self):
        assert format_palette([]) == ''


class TestFormatText:
    def test_header_uses_basename(self):
        assert format_text(_report()).splitlines()[0] == 'swatchkit: thumb.png (1280×720)'

    def test_lists_colours(self):
        text = format_text(_report())
        assert '#ff00aa  rgb(255, 0, 170)' in text

    def test_empty_palette_message(self):
        report = Report(image_path='a.png')
        report.add('palette', {'colours': []})
        assert 'no opaque pixels' in format_text(report)

    def test_pending_crop(self):
        report = Report(image_path='a.png')
        report.add('crop', {'status': 'pending', 'reason': 'Selection 4x4 is smaller than 10x10'})
        assert 'pending: Selection 4x4' in format_text(report)

    def test_generic_fallback(self):
        report = Report(image_path='a.png')
        report.add('export', {'skipped': 'empty palette'})
        assert 'export.skipped: empty palette' in format_text(report)

    def test_file_count(self):
        report = _report()
        report.add_file('out/palette.ase')
        report.add_file('out/palette.ase')
        assert format_text(report).endswith('wrote 1 file(s)')


class TestFormatJson:
    def test_structure(self):
        obj = json.loads(format_json(_report()))
        assert obj['image'] == '/tmp/shots/thumb.png'
        assert obj['dimensions'] == {'width': 1280, 'height': 720}
        assert [c['hex'] for c in obj['results']['palette']['colours']] == ['#000000', '#ff00aa']
        assert obj['files'] == []

    def test_add_merges(self):
        report = Report()
        report.add('crop', {'a': 1})
        report.add('crop', {'b': 2})
        assert report.sections['crop'] == {'a': 1, 'b': 2}
