import io
import logging
from typing import Optional, Tuple

from PIL import Image

from layer_composer.api.raster import RasterHandle

logging.basicConfig(level=logging.DEBUG)

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
GRAY = (128, 128, 128, 255)


def new_image(
    size: Tuple[int, int], color: Tuple[int, ...] = RED, mode: str = "RGBA"
) -> Image.Image:
    return Image.new(mode, size, color)


def new_raster(size: Tuple[int, int], color: Tuple[int, ...] = RED) -> RasterHandle:
    return RasterHandle.frompil(new_image(size, color))


def encode(image: Image.Image, format: str = "PNG") -> bytes:
    with io.BytesIO() as f:
        image.save(f, format=format)
        return f.getvalue()


def png_bytes(size: Tuple[int, int], color: Tuple[int, ...] = RED, mode: Optional[str] = None) -> bytes:
    return encode(new_image(size, color, mode or "RGBA"))


def pixel(image: Image.Image, x: int, y: int) -> Tuple[int, ...]:
    return image.convert("RGBA").getpixel((x, y))
