"""Utility functions for composite operations."""

from typing import Union

import numpy as np
from numpy.typing import NDArray


def divide(a: NDArray[np.floating], b: NDArray[np.floating]) -> NDArray[np.floating]:
    """Safe division for color ops."""
    with np.errstate(divide="ignore", invalid="ignore"):
        c = np.true_divide(a, b)
        c[~np.isfinite(c)] = 1.0
    return c


def union(
    backdrop: Union[float, NDArray[np.floating]],
    source: Union[float, NDArray[np.floating]],
) -> Union[float, NDArray[np.floating]]:
    """Generalized union of coverage, i.e. source-over alpha."""
    return backdrop + source - (backdrop * source)


def clip(x: NDArray[np.floating]) -> NDArray[np.floating]:
    """Clip between [0, 1]."""
    return np.clip(x, 0.0, 1.0)


def to_color_alpha(values: NDArray) -> tuple[NDArray[np.float32], NDArray[np.float32]]:
    """Split uint8 or float RGBA pixels into float32 color and alpha in [0, 1]."""
    values = np.asarray(values)
    if values.dtype == np.uint8:
        values = values.astype(np.float32) / 255.0
    else:
        values = values.astype(np.float32)
    return values[:, :, :3], values[:, :, 3:4]
