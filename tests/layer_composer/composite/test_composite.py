import logging

import numpy as np
import pytest

from layer_composer.api.surface import Surface
from layer_composer.api.transform import TransformModel
from layer_composer.composite import Compositor, blend_source, fill, render
from layer_composer.composite import composite as composite_module
from layer_composer.constants import BlendMode, Resample

from ..utils import BLUE, GRAY, GREEN, RED, new_raster, pixel

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


def assert_pixel(actual, expected, tolerance=1):
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert abs(a - e) <= tolerance, (actual, expected)


@pytest.fixture
def surface() -> Surface:
    return Surface(100, 100)


@pytest.fixture
def transform() -> TransformModel:
    transform = TransformModel()
    transform.position = (40, 45)
    return transform


def test_render_base_only(surface, transform):
    render(surface, new_raster((100, 100), GREEN), None, transform)
    assert pixel(surface.topil(), 0, 0) == GREEN
    assert pixel(surface.topil(), 99, 99) == GREEN


def test_render_stretches_base(surface, transform):
    # Aspect ratio is ignored.
    render(surface, new_raster((50, 10), BLUE), None, transform)
    np.testing.assert_allclose(surface.alpha, 1.0)
    assert pixel(surface.topil(), 99, 0) == BLUE


def test_render_clears_previous_content(surface, transform):
    surface.color[...] = 1.0
    surface.alpha[...] = 1.0
    render(surface, new_raster((100, 100), TRANSPARENT), None, transform)
    np.testing.assert_array_equal(surface.alpha, 0.0)


@pytest.mark.pixels
def test_render_component_normal(surface, transform):
    render(surface, new_raster((100, 100), GREEN), new_raster((20, 10), RED), transform)
    image = surface.topil()
    assert pixel(image, 50, 50) == RED
    assert pixel(image, 41, 46) == RED
    assert pixel(image, 58, 53) == RED
    assert pixel(image, 38, 50) == GREEN
    assert pixel(image, 50, 57) == GREEN


@pytest.mark.pixels
def test_render_component_scaled(surface, transform):
    transform.scale = 2.0
    render(surface, new_raster((100, 100), GREEN), new_raster((20, 10), RED), transform)
    image = surface.topil()
    # Footprint (40, 45) to (80, 65).
    assert pixel(image, 75, 60) == RED
    assert pixel(image, 85, 60) == GREEN


@pytest.mark.pixels
def test_render_component_rotated(surface, transform):
    transform.rotation = 90
    render(surface, new_raster((100, 100), GREEN), new_raster((20, 10), RED), transform)
    image = surface.topil()
    # Rotated around the center (50, 50): covers x in [45, 55], y in [40, 60].
    assert pixel(image, 50, 42) == RED
    assert pixel(image, 50, 58) == RED
    assert pixel(image, 42, 50) == GREEN
    assert pixel(image, 58, 50) == GREEN


@pytest.mark.pixels
@pytest.mark.parametrize(
    "opacity, expected",
    [(1.0, RED), (0.5, (128, 0, 128, 255)), (0.0, BLUE)],
)
def test_render_opacity(surface, transform, opacity, expected):
    transform.opacity = opacity
    render(surface, new_raster((100, 100), BLUE), new_raster((20, 10), RED), transform)
    assert_pixel(pixel(surface.topil(), 50, 50), expected)


@pytest.mark.pixels
@pytest.mark.parametrize(
    "blend_mode, expected",
    [
        (BlendMode.NORMAL, RED),
        (BlendMode.MULTIPLY, (128, 0, 0, 255)),
        (BlendMode.SCREEN, (255, 128, 128, 255)),
        (BlendMode.DARKEN, (128, 0, 0, 255)),
        (BlendMode.LIGHTEN, (255, 128, 128, 255)),
        (BlendMode.DIFFERENCE, (127, 128, 128, 255)),
    ],
)
def test_render_blend_mode(surface, transform, blend_mode, expected):
    transform.blend_mode = blend_mode
    render(surface, new_raster((100, 100), GRAY), new_raster((20, 10), RED), transform)
    image = surface.topil()
    assert_pixel(pixel(image, 50, 50), expected)
    # Outside the component the base is untouched.
    assert pixel(image, 5, 5) == GRAY


@pytest.mark.pixels
def test_render_over_transparent_base(surface, transform):
    transform.blend_mode = BlendMode.MULTIPLY
    transform.opacity = 0.5
    render(surface, new_raster((100, 100), TRANSPARENT), new_raster((20, 10), RED), transform)
    # Blend functions only apply where the backdrop is present.
    assert_pixel(pixel(surface.topil(), 50, 50), (255, 0, 0, 128))


def test_render_is_repeatable(surface, transform):
    base, component = new_raster((100, 100), GRAY), new_raster((20, 10), RED)
    transform.rotation = 33
    transform.scale = 1.7
    render(surface, base, component, transform)
    first = surface.numpy()
    center = transform.center(20, 10)
    render(surface, base, component, transform)
    np.testing.assert_array_equal(surface.numpy(), first)
    assert transform.center(20, 10) == center


def test_fill(surface):
    fill(surface, 0.2, opacity=0.5)
    np.testing.assert_allclose(surface.color, 0.2, atol=1e-6)
    np.testing.assert_allclose(surface.alpha, 0.5, atol=1e-6)


def test_fill_soft_light(surface):
    surface.color[...] = 0.5
    surface.alpha[...] = 1.0
    fill(surface, (1.0, 1.0, 1.0), 0.3, "soft-light")
    np.testing.assert_allclose(surface.color, 0.3 * np.sqrt(0.5) + 0.7 * 0.5, atol=1e-5)
    np.testing.assert_allclose(surface.alpha, 1.0)


def test_blend_source_transparent_source(surface):
    surface.color[...] = 0.25
    surface.alpha[...] = 1.0
    color = np.ones_like(surface.color)
    alpha = np.zeros_like(surface.alpha)
    blend_source(surface, color, alpha, BlendMode.SCREEN)
    np.testing.assert_allclose(surface.color, 0.25, atol=1e-6)


class TestCompositor(object):
    @pytest.fixture
    def compositor(self) -> Compositor:
        compositor = Compositor(Resample.NEAREST)
        compositor.resize((60, 40))
        return compositor

    def test_empty(self):
        compositor = Compositor()
        assert compositor.surface is None
        assert compositor.size is None
        assert compositor.render(new_raster((4, 4)), None, TransformModel()) is None

    def test_render_without_base(self, compositor):
        assert compositor.render(None, new_raster((4, 4)), TransformModel()) is None
        np.testing.assert_array_equal(compositor.surface.alpha, 0.0)

    def test_render(self, compositor):
        surface = compositor.render(new_raster((120, 80), GREEN), None, TransformModel())
        assert surface is compositor.surface
        assert surface.size == (60, 40)
        assert pixel(surface.topil(), 30, 20) == GREEN

    def test_resize(self, compositor):
        old = compositor.surface
        surface = compositor.resize((30, 20))
        assert surface is not old
        assert compositor.size == (30, 20)

    def test_stretch_cache(self, compositor, monkeypatch):
        calls = []
        stretch = composite_module.stretch

        def counting_stretch(*args, **kwargs):
            calls.append(args)
            return stretch(*args, **kwargs)

        monkeypatch.setattr(composite_module, "stretch", counting_stretch)
        base, transform = new_raster((120, 80), GREEN), TransformModel()
        compositor.render(base, None, transform)
        compositor.render(base, new_raster((4, 4)), transform)
        assert len(calls) == 1

        compositor.render(new_raster((120, 80), BLUE), None, transform)
        assert len(calls) == 2
        assert pixel(compositor.surface.topil(), 0, 0) == BLUE

        compositor.resize((30, 20))
        compositor.render(base, None, transform)
        assert len(calls) == 3
        assert pixel(compositor.surface.topil(), 0, 0) == GREEN
