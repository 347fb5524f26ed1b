"""
Transform model of the component raster.

The model holds where and how the component is drawn over the surface and
derives the geometry used by hit-testing and rendering. All coordinates are in
surface space.

Example::

    from layer_composer.api.transform import TransformModel

    transform = TransformModel()
    transform.scale = 0.5
    transform.rotation = -30       # stored as 330
    transform.blend_mode = "multiply"

    rect = transform.footprint(200, 100)
    matrix = transform.matrix(200, 100)
"""

import logging
import math
import numbers
from typing import Optional, Union

import numpy as np

from layer_composer.api.geometry import Rect
from layer_composer.constants import BlendMode
from layer_composer.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 1.0
DEFAULT_ROTATION = 0.0
DEFAULT_OPACITY = 1.0


def _to_float(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError("%s must be a number, got %r" % (name, value))
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError("%s must be finite, got %r" % (name, value))
    return value


class TransformModel(object):
    """
    Position, scale, rotation, opacity and blend mode of the component.

    .. py:attribute:: x
    .. py:attribute:: y

        Top-left corner of the unrotated footprint.
    """

    def __init__(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self._scale = DEFAULT_SCALE
        self._rotation = DEFAULT_ROTATION
        self._opacity = DEFAULT_OPACITY
        self._blend_mode = BlendMode.NORMAL

    def __repr__(self) -> str:
        return (
            "%s(x=%g, y=%g, scale=%g, rotation=%g, opacity=%g, blend_mode=%s)"
            % (
                self.__class__.__name__,
                self.x,
                self.y,
                self.scale,
                self.rotation,
                self.opacity,
                self.blend_mode.value,
            )
        )

    @property
    def position(self) -> tuple[float, float]:
        """Top-left corner of the footprint. Writable."""
        return (self.x, self.y)

    @position.setter
    def position(self, value: tuple[float, float]) -> None:
        x, y = value
        self.x = _to_float("x", x)
        self.y = _to_float("y", y)

    @property
    def scale(self) -> float:
        """
        Uniform scale factor, always positive. Writable.

        Assigning zero or a negative value is ignored.
        """
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        value = _to_float("scale", value)
        if value <= 0:
            logger.debug("Ignore non-positive scale %g", value)
            return
        self._scale = value

    @property
    def rotation(self) -> float:
        """
        Clockwise rotation in degrees, in [0, 360). Writable.

        Any value is accepted, including negative ones, and stored modulo 360.
        """
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        rotation = _to_float("rotation", value) % 360.0
        # Tiny negative values round up to 360.0.
        self._rotation = 0.0 if rotation >= 360.0 else rotation

    @property
    def opacity(self) -> float:
        """Opacity in [0, 1]. Writable; out-of-range values are clamped."""
        return self._opacity

    @opacity.setter
    def opacity(self, value: float) -> None:
        self._opacity = min(1.0, max(0.0, _to_float("opacity", value)))

    @property
    def blend_mode(self) -> BlendMode:
        """
        Blend mode of the component. Writable.

        Example::

            transform.blend_mode = "soft-light"
            assert transform.blend_mode == BlendMode.SOFT_LIGHT

        :raise ConfigurationError: On assignment of an unsupported mode.
        """
        return self._blend_mode

    @blend_mode.setter
    def blend_mode(self, value: Union[str, BlendMode]) -> None:
        self._blend_mode = BlendMode.parse(value)

    def footprint(self, width: float, height: float) -> Rect:
        """
        Axis-aligned rectangle covered by the scaled, unrotated component.

        :param width: intrinsic width of the component raster.
        :param height: intrinsic height of the component raster.
        """
        return Rect(self.x, self.y, width * self.scale, height * self.scale)

    def center(self, width: float, height: float) -> tuple[float, float]:
        """Visual center of the component, the pivot of rotation and scale."""
        return self.footprint(width, height).center

    def matrix(self, width: float, height: float) -> np.ndarray:
        """
        Forward 3x3 affine matrix from component pixels to surface space.

        The product is ``T(center) @ R(rotation) @ S(scale) @ T(-w/2, -h/2)``,
        so rotation and scale pivot around the visual center. Rotation is
        clockwise on screen because the y axis points down.
        """
        cx, cy = self.center(width, height)
        theta = math.radians(self.rotation)
        cos, sin = math.cos(theta), math.sin(theta)
        translate = np.array([[1, 0, cx], [0, 1, cy], [0, 0, 1]], dtype=np.float64)
        rotate = np.array([[cos, -sin, 0], [sin, cos, 0], [0, 0, 1]], dtype=np.float64)
        scale = np.diag([self.scale, self.scale, 1.0])
        origin = np.array(
            [[1, 0, -width / 2.0], [0, 1, -height / 2.0], [0, 0, 1]], dtype=np.float64
        )
        return translate @ rotate @ scale @ origin

    def inverse_coefficients(
        self, width: float, height: float
    ) -> tuple[float, float, float, float, float, float]:
        """
        Coefficients ``(a, b, c, d, e, f)`` of the inverse matrix.

        This is the form :py:meth:`PIL.Image.Image.transform` expects for
        :py:attr:`PIL.Image.Transform.AFFINE`: a surface point ``(x, y)`` is
        sampled from component pixel ``(a*x + b*y + c, d*x + e*y + f)``.
        """
        cx, cy = self.center(width, height)
        theta = math.radians(self.rotation)
        cos, sin = math.cos(theta), math.sin(theta)
        s = self.scale
        a, b = cos / s, sin / s
        d, e = -sin / s, cos / s
        c = -(a * cx + b * cy) + width / 2.0
        f = -(d * cx + e * cy) + height / 2.0
        return (a, b, c, d, e, f)

    def center_on(
        self, surface_size: tuple[float, float], component_size: tuple[float, float]
    ) -> None:
        """Move the component so that it is centered over the surface."""
        sw, sh = surface_size
        cw, ch = component_size
        self.x = (sw - cw * self.scale) / 2.0
        self.y = (sh - ch * self.scale) / 2.0
        logger.debug("Centered component at (%g, %g)", self.x, self.y)

    def reset(
        self,
        surface_size: tuple[float, float],
        component_size: Optional[tuple[float, float]] = None,
    ) -> None:
        """
        Restore defaults; re-center when a component is given, else go to the
        origin.
        """
        self.x, self.y = 0.0, 0.0
        self._scale = DEFAULT_SCALE
        self._rotation = DEFAULT_ROTATION
        self._opacity = DEFAULT_OPACITY
        self._blend_mode = BlendMode.NORMAL
        if component_size is not None:
            self.center_on(surface_size, component_size)
