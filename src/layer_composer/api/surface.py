"""
Surface module.

A :py:class:`Surface` is the pixel buffer of the current composite. Pixels are
kept as float32 arrays in [0, 1], split into ``color`` of shape (H, W, 3) and
``alpha`` of shape (H, W, 1) with straight (non-premultiplied) color, the
layout the blend functions in :py:mod:`layer_composer.composite` work on.
"""

import io
import logging
import os
from typing import BinaryIO, Optional, Union

import numpy as np
from attrs import define, field
from PIL import Image

from layer_composer.errors import ValidationError

logger = logging.getLogger(__name__)


class Surface(object):
    """
    Composite pixel buffer.

    Example::

        surface = Surface(600, 400)
        surface.clear()
        data = surface.encode()   # PNG bytes
        image = surface.topil()   # RGBA PIL Image
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValidationError("Surface size must be positive: %rx%r" % (width, height))
        self._width = int(width)
        self._height = int(height)
        self.color = np.zeros((self._height, self._width, 3), dtype=np.float32)
        self.alpha = np.zeros((self._height, self._width, 1), dtype=np.float32)

    def __repr__(self) -> str:
        return "%s(width=%d, height=%d)" % (
            self.__class__.__name__,
            self.width,
            self.height,
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def clear(self) -> None:
        """Reset every pixel to transparent black."""
        self.color.fill(0.0)
        self.alpha.fill(0.0)

    def copy(self) -> "Surface":
        """Return an independent surface with the same pixels."""
        other = Surface(self._width, self._height)
        other.color[...] = self.color
        other.alpha[...] = self.alpha
        return other

    def paste(self, other: "Surface") -> None:
        """Overwrite the pixels in place with those of a same-sized surface."""
        if other.size != self.size:
            raise ValidationError(
                "Surface size mismatch: %r vs %r" % (other.size, self.size)
            )
        self.color[...] = other.color
        self.alpha[...] = other.alpha

    def numpy(self) -> np.ndarray:
        """Get a float32 RGBA copy of shape (height, width, 4)."""
        return np.concatenate((self.color, self.alpha), axis=2)

    def topil(self) -> Image.Image:
        """Get an RGBA PIL Image of the current pixels."""
        values = np.clip(self.numpy() * 255.0 + 0.5, 0, 255).astype(np.uint8)
        return Image.fromarray(values)

    def encode(self, format: str = "PNG") -> bytes:
        """Encode the current pixels, PNG by default."""
        with io.BytesIO() as f:
            self.topil().save(f, format=format)
            return f.getvalue()

    def save(self, fp: Union[BinaryIO, str, os.PathLike], format: Optional[str] = "PNG") -> None:
        """
        Save the current pixels.

        :param fp: filename or file-like object.
        """
        self.topil().save(fp, format=format)
        logger.info("Saved surface %dx%d", self.width, self.height)


@define(frozen=True)
class Preview:
    """
    Encoded snapshot of a surface.

    The bytes are independent of the surface they were taken from.
    """

    data: bytes = field(repr=False)
    width: int = field()
    height: int = field()
    format: str = field(default="PNG")

    @classmethod
    def capture(cls, surface: Surface, format: str = "PNG") -> "Preview":
        return cls(surface.encode(format), surface.width, surface.height, format)

    def topil(self) -> Image.Image:
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image
