"""
Composite module for rendering and blending.

This subpackage draws the base raster and the transformed component raster
onto a :py:class:`~layer_composer.api.surface.Surface`. Pixels are handled as
NumPy float arrays; resampling through the render transform is done by
Pillow.

Key modules:

- :py:mod:`layer_composer.composite.composite`: rendering and source-over
  compositing
- :py:mod:`layer_composer.composite.blend`: blend mode implementations

Example usage::

    from layer_composer.composite import Compositor

    compositor = Compositor()
    compositor.resize((600, 400))
    surface = compositor.render(base, component, transform)
"""

from layer_composer.composite.blend import BLEND_FUNC, get_blend_func
from layer_composer.composite.composite import (
    Compositor,
    blend_source,
    fill,
    render,
)

__all__ = [
    "BLEND_FUNC",
    "Compositor",
    "blend_source",
    "fill",
    "get_blend_func",
    "render",
]
