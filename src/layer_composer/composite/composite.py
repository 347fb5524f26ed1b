"""Composite implementation for rendering the base and component rasters."""

import logging
from typing import Optional, Sequence, Union

import numpy as np
from PIL import Image

from layer_composer.api.raster import RasterHandle
from layer_composer.api.surface import Surface
from layer_composer.api.transform import TransformModel
from layer_composer.composite import utils
from layer_composer.composite.blend import get_blend_func
from layer_composer.constants import BlendMode, Resample

logger = logging.getLogger(__name__)

PIL_RESAMPLE = {
    Resample.NEAREST: Image.Resampling.NEAREST,
    Resample.BILINEAR: Image.Resampling.BILINEAR,
    Resample.BICUBIC: Image.Resampling.BICUBIC,
}


def render(
    surface: Surface,
    base: RasterHandle,
    component: Optional[RasterHandle],
    transform: TransformModel,
    resample: Resample = Resample.BILINEAR,
) -> Surface:
    """
    Render the base and the transformed component into ``surface`` in place.

    Steps:

    1. Clear the surface.
    2. Draw ``base`` stretched to the full surface.
    3. Draw ``component`` through the render transform with the opacity and
       blend mode of ``transform``.

    Blending parameters only apply to step 3; the surface carries no drawing
    state between calls.

    Example::

        surface = Surface(600, 400)
        render(surface, base, component, transform)
        surface.save('composite.png')
    """
    surface.clear()
    draw_base(surface, stretch(base, surface.size, resample))
    if component is not None:
        draw_component(surface, component, transform, resample)
    return surface


def stretch(
    base: RasterHandle, size: tuple[int, int], resample: Resample = Resample.BILINEAR
) -> tuple[np.ndarray, np.ndarray]:
    """Resize the base to exactly ``size``, ignoring aspect ratio."""
    image = base.image
    if image.size != tuple(size):
        image = image.resize(tuple(size), PIL_RESAMPLE[Resample(resample)])
    return utils.to_color_alpha(np.asarray(image))


def draw_base(surface: Surface, pixels: tuple[np.ndarray, np.ndarray]) -> None:
    # Source-over onto a cleared surface is a plain copy.
    color, alpha = pixels
    surface.color[...] = color
    surface.alpha[...] = alpha


def draw_component(
    surface: Surface,
    component: RasterHandle,
    transform: TransformModel,
    resample: Resample = Resample.BILINEAR,
) -> None:
    """Resample the component into surface space and blend it."""
    coefficients = transform.inverse_coefficients(component.width, component.height)
    warped = component.image.transform(
        surface.size,
        Image.Transform.AFFINE,
        coefficients,
        resample=PIL_RESAMPLE[Resample(resample)],
    )
    color, alpha = utils.to_color_alpha(np.asarray(warped))
    logger.debug("Drawing component with %r", transform)
    blend_source(surface, color, alpha * transform.opacity, transform.blend_mode)


def fill(
    surface: Surface,
    color: Union[float, Sequence[float]],
    opacity: float = 1.0,
    blend_mode: Union[str, BlendMode] = BlendMode.NORMAL,
) -> None:
    """
    Composite a constant color over the whole surface.

    :param color: RGB in [0, 1], or a scalar gray level.
    """
    color_s = np.empty_like(surface.color)
    color_s[...] = color
    alpha_s = np.full_like(surface.alpha, opacity)
    blend_source(surface, color_s, alpha_s, blend_mode)


def blend_source(
    surface: Surface,
    color: np.ndarray,
    alpha: np.ndarray,
    blend_mode: Union[str, BlendMode] = BlendMode.NORMAL,
) -> None:
    """
    Source-over composite of ``color``/``alpha`` onto the surface in place.

    Uses the general W3C formula where the blend function only affects the
    area where backdrop and source overlap::

        Cs' = (1 - ab) * Cs + ab * B(Cb, Cs)
        ao  = as + ab * (1 - as)
        Co  = (as * Cs' + (1 - as) * ab * Cb) / ao
    """
    blend_fn = get_blend_func(blend_mode)
    color_b, alpha_b = surface.color, surface.alpha

    color_t = (1.0 - alpha_b) * color + alpha_b * blend_fn(color_b, color)
    alpha_o = utils.union(alpha_b, alpha)
    color_o = utils.divide(alpha * color_t + (1.0 - alpha) * alpha_b * color_b, alpha_o)

    surface.color[...] = utils.clip(color_o)
    surface.alpha[...] = utils.clip(alpha_o)


class Compositor(object):
    """
    Owner of the surface.

    The surface is recreated by :py:meth:`resize` and redrawn in place by
    :py:meth:`render`.

    Example::

        compositor = Compositor()
        compositor.resize((600, 400))
        compositor.render(base, component, transform)
        compositor.surface.save('composite.png')
    """

    def __init__(self, resample: Resample = Resample.BILINEAR):
        self._resample = Resample(resample)
        self._surface: Optional[Surface] = None
        self._cache: Optional[tuple] = None

    @property
    def surface(self) -> Optional[Surface]:
        return self._surface

    @property
    def size(self) -> Optional[tuple[int, int]]:
        return None if self._surface is None else self._surface.size

    def resize(self, size: tuple[int, int]) -> Surface:
        """Create a new surface of ``size``, dropping the old one."""
        width, height = size
        self._surface = Surface(int(width), int(height))
        self._cache = None
        logger.debug("Created %r", self._surface)
        return self._surface

    def render(
        self,
        base: Optional[RasterHandle],
        component: Optional[RasterHandle],
        transform: TransformModel,
    ) -> Optional[Surface]:
        """
        Redraw the owned surface. Nothing happens until a base is loaded.
        """
        surface = self._surface
        if base is None or surface is None:
            logger.debug("Nothing to render")
            return None
        surface.clear()
        draw_base(surface, self._stretched(base, surface.size))
        if component is not None:
            draw_component(surface, component, transform, self._resample)
        return surface

    def _stretched(
        self, base: RasterHandle, size: tuple[int, int]
    ) -> tuple[np.ndarray, np.ndarray]:
        if self._cache is not None:
            cached_base, cached_size, pixels = self._cache
            if cached_base is base and cached_size == size:
                return pixels
        pixels = stretch(base, size, self._resample)
        self._cache = (base, size, pixels)
        return pixels
