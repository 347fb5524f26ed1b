"""
Surface resizer.

Computes the display size of a base raster bounded by the configured maximum,
preserving aspect ratio. Smaller rasters are never upscaled.
"""
import logging

from layer_composer.api.geometry import Size
from layer_composer.errors import ValidationError

logger = logging.getLogger(__name__)


def bounded_size(width: float, height: float, max_width: float, max_height: float) -> Size:
    """
    Fit ``(width, height)`` into ``(max_width, max_height)``.

    Example::

        bounded_size(1200, 800, 600, 400)  # Size(width=600, height=400)
        bounded_size(300, 200, 600, 400)   # Size(width=300, height=200)

    The result is truncated to whole pixels, at least 1x1.

    :raise ValidationError: If any argument is not positive.
    """
    for name, value in (
        ("width", width),
        ("height", height),
        ("max_width", max_width),
        ("max_height", max_height),
    ):
        if not value > 0:
            raise ValidationError("%s must be positive, got %r" % (name, value))

    if width > max_width or height > max_height:
        # The binding dimension lands exactly on its bound.
        if max_width / width <= max_height / height:
            width, height = max_width, height * max_width / width
        else:
            width, height = width * max_height / height, max_height
        logger.debug("Scaled display size to %gx%g", width, height)

    return Size(max(1, int(width)), max(1, int(height)))
