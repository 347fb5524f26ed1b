"""
Composer configuration.

Example::

    from layer_composer.config import ComposerConfig

    config = ComposerConfig(max_width=800, max_height=600, effect_delay=0.0)
"""

from attrs import define, field

from layer_composer.constants import Resample
from layer_composer.validators import in_, positive, range_


#: Display bound of the surface.
MAX_WIDTH = 600
MAX_HEIGHT = 400

#: Surface size assumed until a base raster is loaded.
DEFAULT_WIDTH = 300
DEFAULT_HEIGHT = 150

DEFAULT_EFFECT = "soft-light-wash"
EFFECT_DELAY = 2.0
EFFECT_OPACITY = 0.3


@define
class ComposerConfig:
    """
    Settings of :py:class:`~layer_composer.api.composer.ImageComposer`.

    .. py:attribute:: max_width
    .. py:attribute:: max_height

        Upper bound of the surface size. Larger base rasters are scaled down.

    .. py:attribute:: default_width
    .. py:attribute:: default_height

        Surface size used to center a component loaded before any base.

    .. py:attribute:: effect

        Name of the registered post-effect run by ``generate``.

    .. py:attribute:: effect_delay

        Latency in seconds of the reference post-effect.

    .. py:attribute:: effect_opacity

        Opacity of the reference post-effect wash.

    .. py:attribute:: resample

        Resampling filter, see :py:class:`~layer_composer.constants.Resample`.
    """

    max_width: int = field(default=MAX_WIDTH, validator=positive)
    max_height: int = field(default=MAX_HEIGHT, validator=positive)
    default_width: int = field(default=DEFAULT_WIDTH, validator=positive)
    default_height: int = field(default=DEFAULT_HEIGHT, validator=positive)
    effect: str = field(default=DEFAULT_EFFECT)
    effect_delay: float = field(default=EFFECT_DELAY, validator=range_(0.0, 3600.0))
    effect_opacity: float = field(default=EFFECT_OPACITY, validator=range_(0.0, 1.0))
    resample: Resample = field(
        default=Resample.BILINEAR, converter=Resample, validator=in_(Resample)
    )

    @property
    def max_size(self):
        return (self.max_width, self.max_height)

    @property
    def default_size(self):
        return (self.default_width, self.default_height)
