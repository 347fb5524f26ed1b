"""
Raster handle module.

A :py:class:`RasterHandle` wraps a decoded RGBA :py:class:`PIL.Image.Image`
together with its intrinsic size. Handles are immutable; loading a new image
creates a new handle.

Example usage::

    from layer_composer.api.raster import RasterHandle, decode_raster

    base = RasterHandle.open('background.jpg')
    with open('sticker.png', 'rb') as f:
        component = decode_raster(f.read())
"""

import io
import logging
import os
from typing import Any, BinaryIO, Union

import numpy as np
from attrs import define, field
from PIL import Image, UnidentifiedImageError

from layer_composer.errors import DecodeError

logger = logging.getLogger(__name__)


@define(frozen=True, eq=False)
class RasterHandle:
    """
    Loaded image reference.

    .. py:attribute:: width
    .. py:attribute:: height

        Intrinsic size in pixels.

    .. py:attribute:: image

        RGBA :py:class:`PIL.Image.Image` pixel source. Treat as read-only.
    """

    width: int = field()
    height: int = field()
    image: Image.Image = field(repr=False)

    @classmethod
    def frompil(cls, image: Image.Image) -> "RasterHandle":
        """
        Create a handle from a PIL Image. The image is converted to RGBA.

        :raise DecodeError: If the image has no pixels.
        """
        width, height = image.size
        if width <= 0 or height <= 0:
            raise DecodeError("Image has no pixels: %dx%d" % (width, height))
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        else:
            image = image.copy()
        return cls(width=width, height=height, image=image)

    @classmethod
    def open(cls, fp: Union[BinaryIO, str, bytes, os.PathLike]) -> "RasterHandle":
        """
        Open and decode an image.

        :param fp: filename, raw image bytes or file-like object.
        :raise DecodeError: If the data is not a readable image.
        """
        if isinstance(fp, bytes):
            fp = io.BytesIO(fp)
        try:
            with Image.open(fp) as image:
                image.load()
                handle = cls.frompil(image)
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            if isinstance(e, FileNotFoundError):
                raise
            raise DecodeError("Failed to decode image: %s" % e) from e
        logger.debug("Decoded raster %dx%d", handle.width, handle.height)
        return handle

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def topil(self) -> Image.Image:
        """Get a copy of the pixels as an RGBA PIL Image."""
        return self.image.copy()

    def numpy(self) -> np.ndarray:
        """Get float32 RGBA pixels in [0, 1] of shape (height, width, 4)."""
        return np.asarray(self.image, dtype=np.float32) / 255.0


def decode_raster(data: Any) -> RasterHandle:
    """
    Default raster loader: decode bytes, a path or a file object.

    :raise DecodeError: If the data is not a readable image.
    """
    if isinstance(data, RasterHandle):
        return data
    if isinstance(data, Image.Image):
        return RasterHandle.frompil(data)
    return RasterHandle.open(data)
