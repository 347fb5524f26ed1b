import logging

import pytest

from layer_composer.config import ComposerConfig
from layer_composer.constants import BlendMode, Resample
from layer_composer.errors import ConfigurationError
from layer_composer.registry import lookup, new_registry

logger = logging.getLogger(__name__)


def test_defaults():
    config = ComposerConfig()
    assert config.max_size == (600, 400)
    assert config.default_size == (300, 150)
    assert config.effect == "soft-light-wash"
    assert config.effect_delay == 2.0
    assert config.effect_opacity == 0.3
    assert config.resample == Resample.BILINEAR


def test_resample_converter():
    assert ComposerConfig(resample="nearest").resample == Resample.NEAREST


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(max_width=0),
        dict(max_height=-1),
        dict(default_width=None),
        dict(effect_delay=-0.1),
        dict(effect_opacity=1.5),
        dict(effect_opacity="high"),
        dict(resample="lanczos"),
    ],
)
def test_invalid(kwargs):
    with pytest.raises(ValueError):
        ComposerConfig(**kwargs)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("screen", BlendMode.SCREEN),
        ("Hard_Light", BlendMode.HARD_LIGHT),
        (" color-burn ", BlendMode.COLOR_BURN),
        (BlendMode.HUE, BlendMode.HUE),
    ],
)
def test_blend_mode_parse(value, expected):
    assert BlendMode.parse(value) is expected


def test_registry():
    registry, register = new_registry(attribute="name")

    @register("first")
    class First(object):
        pass

    assert registry == {"first": First}
    assert First.name == "first"
    assert lookup(registry, "first") is First

    with pytest.raises(ConfigurationError):

        @register("first")
        class Second(object):
            pass

    with pytest.raises(ConfigurationError, match="first"):
        lookup(registry, "second", "thing")
