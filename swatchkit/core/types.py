"""Shared types for swatchkit: Colour, PixelBuffer, rectangles, Command, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Colour:
    """An 8-bit RGB colour. The hex forms are derived, never stored."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f'Colour channels must be 0-255, got {self.as_tuple()}')

    @property
    def hex(self) -> str:
        return f'#{self.r:02x}{self.g:02x}{self.b:02x}'

    @property
    def ase_name(self) -> str:
        """Swatch name used in .ase files: uppercase hex digits, no '#'."""
        return f'{self.r:02X}{self.g:02X}{self.b:02X}'

    @property
    def brightness(self) -> int:
        return self.r + self.g + self.b

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA image, row-major, 4 bytes per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f'Negative buffer size: {self.width}x{self.height}')
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(f'Expected {expected} RGBA bytes for {self.width}x{self.height}, got {len(self.pixels)}')

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class DisplaySize:
    """On-screen rendered size of an image."""

    w: float
    h: float


@dataclass(frozen=True)
class DisplayRect:
    """Selection rectangle in display space (on-screen coordinates)."""

    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class SourceRect:
    """Rectangle in source space (native pixel coordinates)."""

    x: int
    y: int
    w: int
    h: int

    def as_box(self) -> tuple[int, int, int, int]:
        """(x1, y1, x2, y2) form, as used by PIL."""
        return (self.x, self.y, self.x + self.w, self.y + self.h)


@dataclass(frozen=True)
class Swatch:
    """A named colour entry read back from an .ase file."""

    name: str
    model: str  # 'RGB ', 'CMYK', 'LAB ' or 'Gray'
    values: tuple[float, ...]
    colour_type: int  # 0 = global, 1 = spot, 2 = normal


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='palette', help='Extract a palette')

        @command.run
        def run(image, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, image: PixelBuffer, report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(image, report, args)


@dataclass
class Report:
    """Accumulates results from commands for text/JSON output."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    sections: dict[str, dict[str, Any]] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)

    def add(self, command_name: str, data: dict[str, Any]) -> None:
        """Add (or merge) results for a command."""
        self.sections.setdefault(command_name, {}).update(data)

    def add_file(self, path: str) -> None:
        """Record an artefact written to disk."""
        if path not in self.files:
            self.files.append(path)
