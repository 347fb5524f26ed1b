"""
Various constants for layer_composer
"""
from enum import Enum

from layer_composer.errors import ConfigurationError


class BlendMode(str, Enum):
    """
    Blend modes.

    Values follow the CSS ``mix-blend-mode`` keywords.
    """

    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    COLOR_DODGE = "color-dodge"
    COLOR_BURN = "color-burn"
    HARD_LIGHT = "hard-light"
    SOFT_LIGHT = "soft-light"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"
    HUE = "hue"
    SATURATION = "saturation"
    COLOR = "color"
    LUMINOSITY = "luminosity"

    @classmethod
    def parse(cls, value):
        """
        Convert a keyword or member name to :py:class:`BlendMode`.

        Example::

            BlendMode.parse("soft-light")  # BlendMode.SOFT_LIGHT
            BlendMode.parse("SOFT_LIGHT")  # BlendMode.SOFT_LIGHT

        :raise ConfigurationError: If the name is not a supported blend mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for mode in cls:
                if mode.value == key:
                    return mode
        raise ConfigurationError("Unsupported blend mode: %r" % (value,))


class PointerEventKind(str, Enum):
    """Normalized pointer event kinds."""

    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"


class DragState(str, Enum):
    """States of the interaction controller."""

    IDLE = "idle"
    DRAGGING = "dragging"


class Cursor(str, Enum):
    """Pointer affordance over the surface."""

    MOVE = "move"
    GRABBING = "grabbing"


class Resample(str, Enum):
    """Resampling filters for drawing rasters onto the surface."""

    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
