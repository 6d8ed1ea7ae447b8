"""Conversion between PIL images and PixelBuffer."""

from PIL import Image

from swatchkit.core.types import PixelBuffer


def from_image(image: Image.Image) -> PixelBuffer:
    rgba = image.convert('RGBA')
    return PixelBuffer(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())


def load_image(path: str) -> PixelBuffer:
    """Decode an image file into an RGBA buffer."""
    with Image.open(path) as img:
        return from_image(img)


def to_image(buffer: PixelBuffer) -> Image.Image:
    return Image.frombytes('RGBA', (buffer.width, buffer.height), buffer.pixels)


def save_png(buffer: PixelBuffer, path: str) -> None:
    to_image(buffer).save(path, format='PNG')
