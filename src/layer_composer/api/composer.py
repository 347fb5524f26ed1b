"""
Image composer module.

:py:class:`ImageComposer` is the main entry point. It wires the raster
loader, the :py:class:`~layer_composer.composite.Compositor`, the
:py:class:`~layer_composer.api.transform.TransformModel`, the
:py:class:`~layer_composer.api.interaction.InteractionController` and a
post-effect together, and exposes the logical controls of the editor.

Example usage::

    import asyncio
    from layer_composer import ImageComposer

    composer = ImageComposer()
    composer.load_base('background.jpg')
    composer.load_component('sticker.png')

    composer.set_scale(50)            # percent
    composer.set_rotation(-15)        # degrees
    composer.set_opacity(80)          # percent
    composer.set_blend_mode('multiply')

    # Drag the component by 20 pixels to the right.
    composer.handle_pointer(('down', 300, 200))
    composer.handle_pointer(('move', 320, 200))
    composer.handle_pointer(('up', 320, 200))

    preview = asyncio.run(composer.generate('warm evening light'))
    composer.save('composite.png')
"""

import asyncio
import logging
import numbers
import os
from typing import Any, BinaryIO, Callable, Optional, Union

from layer_composer.api.effects import PostEffect, Sleep, check_prompt, create_effect, run_effect
from layer_composer.api.geometry import Rect
from layer_composer.api.interaction import InteractionController, PointerEvent
from layer_composer.api.raster import RasterHandle, decode_raster
from layer_composer.api.resizer import bounded_size
from layer_composer.api.surface import Preview, Surface
from layer_composer.api.transform import TransformModel
from layer_composer.composite import Compositor
from layer_composer.config import ComposerConfig
from layer_composer.constants import BlendMode
from layer_composer.errors import ProcessingError, StateError, ValidationError

logger = logging.getLogger(__name__)


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError("%s must be a number, got %r" % (name, value))
    return float(value)


class ImageComposer(object):
    """
    Two-layer compositor with pointer interaction.

    :param config: :py:class:`~layer_composer.config.ComposerConfig`.
    :param loader: callable decoding bytes, paths or file objects into a
        :py:class:`~layer_composer.api.raster.RasterHandle`.
    :param compositor: :py:class:`~layer_composer.composite.Compositor` that
        owns the surface.
    :param effect: post-effect run by :py:meth:`generate`. Default is built
        from ``config.effect``.
    :param sleep: awaitable clock used by the default effect.
    """

    def __init__(
        self,
        config: Optional[ComposerConfig] = None,
        loader: Callable[[Any], RasterHandle] = decode_raster,
        compositor: Optional[Compositor] = None,
        effect: Optional[PostEffect] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.config = config or ComposerConfig()
        self._loader = loader
        self._compositor = compositor or Compositor(self.config.resample)
        self._effect = effect or create_effect(self.config, sleep)
        self._base: Optional[RasterHandle] = None
        self._component: Optional[RasterHandle] = None
        self._generate_enabled = True
        self.transform = TransformModel()
        self.controller = InteractionController(
            self.transform, self._component_size, self.render
        )

    def __repr__(self) -> str:
        return "%s(base=%r, component=%r, surface=%r)" % (
            self.__class__.__name__,
            self._base,
            self._component,
            self.surface,
        )

    @property
    def base(self) -> Optional[RasterHandle]:
        return self._base

    @property
    def component(self) -> Optional[RasterHandle]:
        return self._component

    @property
    def surface(self) -> Optional[Surface]:
        return self._compositor.surface

    @property
    def surface_size(self) -> tuple[int, int]:
        """Current surface size, or the configured default before any base."""
        return self._compositor.size or self.config.default_size

    @property
    def generate_enabled(self) -> bool:
        """Whether :py:meth:`generate` may be triggered."""
        return self._generate_enabled

    def load_base(self, data: Any) -> RasterHandle:
        """
        Load the base raster and recreate the surface at its bounded size.

        :param data: bytes, filename, file object or
            :py:class:`~layer_composer.api.raster.RasterHandle`.
        :raise DecodeError: If decoding fails. State is left unchanged.
        """
        base = self._loader(data)
        size = bounded_size(base.width, base.height, *self.config.max_size)
        self._base = base
        self._compositor.resize((size.width, size.height))
        logger.info(
            "Loaded base %dx%d, surface %dx%d",
            base.width,
            base.height,
            size.width,
            size.height,
        )
        self.render()
        return base

    def load_component(self, data: Any) -> RasterHandle:
        """
        Load the component raster and center it, keeping the current scale.

        :raise DecodeError: If decoding fails. State is left unchanged.
        """
        component = self._loader(data)
        self.controller.cancel()
        self._component = component
        self.transform.center_on(self.surface_size, component.size)
        logger.info("Loaded component %dx%d", component.width, component.height)
        self.render()
        return component

    def render(self) -> Optional[Surface]:
        """Redraw the surface. Does nothing until a base is loaded."""
        return self._compositor.render(self._base, self._component, self.transform)

    def set_opacity(self, percent: float) -> None:
        """
        Set the component opacity from a percentage.

        :raise ValidationError: If ``percent`` is not a number in [0, 100].
        """
        value = _number("opacity", percent)
        if not 0 <= value <= 100:
            raise ValidationError("opacity must be in range [0, 100], got %r" % percent)
        self.transform.opacity = value / 100.0
        self.render()

    def set_scale(self, percent: float) -> None:
        """
        Set the component scale from a percentage. Non-positive values are
        ignored.

        :raise ValidationError: If ``percent`` is not a number.
        """
        self.transform.scale = _number("scale", percent) / 100.0
        self.render()

    def set_rotation(self, degrees: int) -> None:
        """
        Set the component rotation in whole degrees.

        :raise ValidationError: If ``degrees`` is not an integer.
        """
        if isinstance(degrees, bool) or not isinstance(degrees, numbers.Integral):
            raise ValidationError("rotation must be an integer, got %r" % (degrees,))
        self.transform.rotation = int(degrees)
        self.render()

    def set_blend_mode(self, blend_mode: Union[str, BlendMode]) -> None:
        """
        Set the blend mode by name.

        :raise ConfigurationError: If the mode is not supported.
        """
        self.transform.blend_mode = blend_mode
        self.render()

    def set_bounds(self, bounds: Union[Rect, tuple]) -> None:
        """Set the on-screen rectangle of the surface for pointer conversion."""
        if not isinstance(bounds, Rect):
            bounds = Rect(*bounds)
        self.controller.bounds = bounds

    def handle_pointer(self, event: Union[PointerEvent, tuple]) -> bool:
        """Feed a pointer event to the interaction controller."""
        return self.controller.handle(event)

    def reset(self) -> None:
        """Restore transform defaults and re-center the component."""
        component_size = self._component.size if self._component else None
        self.transform.reset(self.surface_size, component_size)
        self.render()

    async def generate(self, prompt: str) -> Optional[Preview]:
        """
        Run the post-effect and return a preview of the result.

        The effect works on a copy of the surface taken when the call starts.
        On success the copy is written back to the live surface, replacing
        anything rendered in the meantime. On failure the live surface is
        untouched. The trigger is re-enabled in both cases.

        Calls made while another one is pending, or before a base is loaded,
        do nothing and return `None`.

        :raise ValidationError: If the prompt is empty, before any waiting.
        :raise ProcessingError: If the effect fails.
        """
        prompt = check_prompt(prompt)
        if not self._generate_enabled:
            logger.info("Post-effect already running; ignored")
            return None
        surface = self.surface
        if self._base is None or surface is None:
            logger.info("No base loaded; nothing to generate")
            return None

        self._generate_enabled = False
        try:
            result = await run_effect(self._effect, surface.copy(), prompt)
            if self.surface is not surface:
                logger.warning("Surface was replaced while the post-effect ran")
                raise ProcessingError("Surface was replaced during the post-effect")
            surface.paste(result)
            logger.info("Post-effect finished")
            return Preview.capture(surface)
        finally:
            self._generate_enabled = True

    def export(self, format: str = "PNG") -> bytes:
        """
        Encode the current surface, PNG by default.

        :raise StateError: If no base raster is loaded.
        """
        surface = self._require_surface()
        data = surface.encode(format)
        logger.info("Exported %d bytes", len(data))
        return data

    def save(self, fp: Union[BinaryIO, str, os.PathLike], format: str = "PNG") -> None:
        """
        Save the current surface.

        :param fp: filename or file-like object.
        :raise StateError: If no base raster is loaded.
        """
        self._require_surface().save(fp, format)

    def preview(self) -> Preview:
        """
        Encoded snapshot of the surface.

        :raise StateError: If no base raster is loaded.
        """
        return Preview.capture(self._require_surface())

    def _require_surface(self) -> Surface:
        surface = self.surface
        if self._base is None or surface is None:
            raise StateError("No base image is loaded")
        return surface

    def _component_size(self) -> Optional[tuple[int, int]]:
        return None if self._component is None else self._component.size
