"""
layer-composer: interactive two-layer image compositor.

A base raster is displayed on a bounded surface and a component raster is
moved, scaled, rotated and blended over it. The composite can be refined by
an asynchronous post-effect and exported as PNG.

Basic usage::

    from layer_composer import ImageComposer

    composer = ImageComposer()
    composer.load_base('background.jpg')
    composer.load_component('sticker.png')
    composer.set_blend_mode('screen')
    composer.save('output.png')

Architecture:

- :py:mod:`layer_composer.api`: rasters, transform model, interaction and the
  :py:class:`ImageComposer` facade (primary interface)
- :py:mod:`layer_composer.composite`: rendering and blending engine
"""

from layer_composer.api.composer import ImageComposer
from layer_composer.config import ComposerConfig
from layer_composer.constants import BlendMode
from layer_composer.version import __version__

__all__ = ["BlendMode", "ComposerConfig", "ImageComposer", "__version__"]
