import io
import logging

import numpy as np
import pytest
from PIL import Image

from layer_composer.api.raster import RasterHandle, decode_raster
from layer_composer.errors import DecodeError

from ..utils import GRAY, RED, encode, new_image, png_bytes

logger = logging.getLogger(__name__)


@pytest.mark.parametrize("format", ["PNG", "BMP", "GIF", "JPEG"])
def test_open_bytes(format: str) -> None:
    data = encode(new_image((8, 6), RED, "RGB"), format)
    raster = RasterHandle.open(data)
    assert raster.size == (8, 6)
    assert raster.image.mode == "RGBA"


def test_open_file_and_path(tmp_path) -> None:
    path = tmp_path / "base.png"
    new_image((5, 4), GRAY).save(path)
    assert RasterHandle.open(str(path)).size == (5, 4)
    assert RasterHandle.open(path).size == (5, 4)
    with open(path, "rb") as f:
        assert RasterHandle.open(f).size == (5, 4)


def test_open_grayscale_is_converted() -> None:
    raster = RasterHandle.open(png_bytes((3, 3), 128, "L"))
    assert raster.image.mode == "RGBA"
    assert raster.image.getpixel((1, 1)) == (128, 128, 128, 255)


@pytest.mark.parametrize(
    "data", [b"", b"not an image", b"\x89PNG\r\n\x1a\n" + b"\x00" * 16]
)
def test_open_malformed(data: bytes) -> None:
    with pytest.raises(DecodeError):
        RasterHandle.open(data)


def test_open_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        RasterHandle.open(str(tmp_path / "missing.png"))


def test_frompil_copies() -> None:
    image = new_image((2, 2), RED)
    raster = RasterHandle.frompil(image)
    image.putpixel((0, 0), (0, 0, 0, 0))
    assert raster.image.getpixel((0, 0)) == RED


def test_immutable() -> None:
    raster = RasterHandle.frompil(new_image((2, 2)))
    with pytest.raises(AttributeError):
        raster.width = 10  # type: ignore[misc]


def test_numpy() -> None:
    array = RasterHandle.frompil(new_image((3, 2), RED)).numpy()
    assert array.shape == (2, 3, 4)
    assert array.dtype == np.float32
    np.testing.assert_allclose(array[0, 0], (1.0, 0.0, 0.0, 1.0))


def test_decode_raster_accepts_handles_and_images() -> None:
    raster = RasterHandle.frompil(new_image((2, 2)))
    assert decode_raster(raster) is raster
    assert decode_raster(new_image((4, 1))).size == (4, 1)
    assert decode_raster(io.BytesIO(png_bytes((7, 7)))).size == (7, 7)


def test_topil_is_copy() -> None:
    raster = RasterHandle.frompil(new_image((2, 2), RED))
    image = raster.topil()
    assert isinstance(image, Image.Image)
    image.putpixel((0, 0), (0, 0, 0, 0))
    assert raster.image.getpixel((0, 0)) == RED
