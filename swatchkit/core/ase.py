"""Adobe Swatch Exchange (.ase) encoding and decoding.

Layout, all integers big-endian:

    header   'ASEF' | u16 major (1) | u16 minor (0) | u32 block count
    block    u16 type | i32 body length | body

A colour entry body (type 0x0001):

    u16 name length in UTF-16 units, including the null terminator
    name as UTF-16BE, then 0x0000
    4-byte colour model ('RGB ')
    one f32 per channel, 0.0 - 1.0
    u16 colour type (0 global, 1 spot, 2 normal)

encode() writes only RGB colour entries named after the colour's hex digits,
all of type normal. The output buffer is sized up front and filled at
explicit offsets.

decode() also accepts group start/end blocks and the CMYK, LAB and Gray
models so that files written by other tools can be inspected.
"""

import math
import struct
from collections.abc import Sequence

from swatchkit.core.errors import AseFormatError
from swatchkit.core.types import Colour, Swatch

SIGNATURE = b'ASEF'
VERSION = (1, 0)

BLOCK_COLOUR = 0x0001
BLOCK_GROUP_START = 0xC001
BLOCK_GROUP_END = 0xC002

COLOUR_TYPE_GLOBAL = 0
COLOUR_TYPE_SPOT = 1
COLOUR_TYPE_NORMAL = 2

MODEL_RGB = b'RGB '

# Number of f32 values stored for each colour model
_MODEL_CHANNELS = {
    b'RGB ': 3,
    b'CMYK': 4,
    b'LAB ': 3,
    b'Gray': 1,
}

HEADER = struct.Struct('>4sHHI')
BLOCK_HEADER = struct.Struct('>Hi')


def _name_units(name: str) -> bytes:
    return name.encode('utf-16-be')


def colour_body_length(name: str) -> int:
    """Byte length of a colour entry body for `name` with an RGB model."""
    return 2 + len(_name_units(name)) + 2 + 4 + 3 * 4 + 2


def encoded_length(palette: Sequence[Colour]) -> int:
    return HEADER.size + sum(BLOCK_HEADER.size + colour_body_length(c.ase_name) for c in palette)


def encode(palette: Sequence[Colour]) -> bytes:
    """Serialize a palette as an ASE 1.0 file of RGB colour entries."""
    buf = bytearray(encoded_length(palette))
    HEADER.pack_into(buf, 0, SIGNATURE, VERSION[0], VERSION[1], len(palette))
    offset = HEADER.size

    for colour in palette:
        name = _name_units(colour.ase_name)
        BLOCK_HEADER.pack_into(buf, offset, BLOCK_COLOUR, colour_body_length(colour.ase_name))
        offset += BLOCK_HEADER.size

        # +1 for the null terminator
        struct.pack_into('>H', buf, offset, len(name) // 2 + 1)
        offset += 2
        buf[offset : offset + len(name)] = name
        offset += len(name) + 2  # terminator bytes are already zero

        struct.pack_into(
            '>4sfffH',
            buf,
            offset,
            MODEL_RGB,
            colour.r / 255.0,
            colour.g / 255.0,
            colour.b / 255.0,
            COLOUR_TYPE_NORMAL,
        )
        offset += 4 + 12 + 2

    return bytes(buf)


def _read(fmt: str, data: bytes, offset: int, what: str) -> tuple:
    size = struct.calcsize(fmt)
    if offset + size > len(data):
        raise AseFormatError(f'Truncated {what} at offset {offset}')
    return struct.unpack_from(fmt, data, offset)


def _decode_colour(body: bytes, offset: int) -> Swatch:
    (name_len,) = _read('>H', body, 0, 'name length')
    if name_len < 1:
        raise AseFormatError(f'Colour block at offset {offset} has no name terminator')
    name_end = 2 + name_len * 2
    if name_end > len(body):
        raise AseFormatError(f'Colour name overruns block at offset {offset}')
    raw_name = body[2:name_end]
    if raw_name[-2:] != b'\x00\x00':
        raise AseFormatError(f'Colour name at offset {offset} is not null-terminated')
    try:
        name = raw_name[:-2].decode('utf-16-be')
    except UnicodeDecodeError as e:
        raise AseFormatError(f'Colour name at offset {offset} is not valid UTF-16') from e

    (model,) = _read('>4s', body, name_end, 'colour model')
    channels = _MODEL_CHANNELS.get(model)
    if channels is None:
        raise AseFormatError(f'Unknown colour model {model!r} at offset {offset}')
    values = _read(f'>{channels}f', body, name_end + 4, 'colour values')
    (colour_type,) = _read('>H', body, name_end + 4 + channels * 4, 'colour type')

    return Swatch(
        name=name,
        model=model.decode('ascii'),
        values=tuple(values),
        colour_type=colour_type,
    )


def decode(data: bytes) -> list[Swatch]:
    """Parse an ASE file into its colour entries, in file order."""
    signature, major, minor, count = _read(HEADER.format, data, 0, 'header')
    if signature != SIGNATURE:
        raise AseFormatError(f'Bad signature {signature!r}, expected {SIGNATURE!r}')
    if major != VERSION[0]:
        raise AseFormatError(f'Unsupported ASE version {major}.{minor}')

    swatches = []
    offset = HEADER.size
    for _ in range(count):
        block_type, length = _read(BLOCK_HEADER.format, data, offset, 'block header')
        body_start = offset + BLOCK_HEADER.size
        if length < 0 or body_start + length > len(data):
            raise AseFormatError(f'Block at offset {offset} declares length {length} past end of data')
        body = data[body_start : body_start + length]
        if block_type == BLOCK_COLOUR:
            swatches.append(_decode_colour(body, offset))
        elif block_type not in (BLOCK_GROUP_START, BLOCK_GROUP_END):
            raise AseFormatError(f'Unknown block type 0x{block_type:04X} at offset {offset}')
        offset = body_start + length

    if offset != len(data):
        raise AseFormatError(f'{len(data) - offset} trailing bytes after {count} blocks')
    return swatches


def swatch_to_colour(swatch: Swatch) -> Colour:
    """Convert an RGB swatch back to 8-bit channels (rounded, clamped to 0-255)."""
    if swatch.model != MODEL_RGB.decode('ascii'):
        raise AseFormatError(f'Swatch {swatch.name!r} uses {swatch.model!r}, not RGB')
    if not all(math.isfinite(v) for v in swatch.values):
        raise AseFormatError(f'Swatch {swatch.name!r} has non-finite channel values')
    r, g, b = (min(max(round(v * 255), 0), 255) for v in swatch.values)
    return Colour(r, g, b)
