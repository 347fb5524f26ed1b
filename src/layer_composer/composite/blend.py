"""
Blend mode implementations.

Each function takes the backdrop color ``Cb`` and the source color ``Cs`` as
float arrays of shape (H, W, 3) in [0, 1] and returns the mixed color
``B(Cb, Cs)``. Formulas follow the W3C Compositing and Blending spec, which is
also what a browser canvas applies for its ``globalCompositeOperation``.
"""
import logging

import numpy as np

from layer_composer.composite import utils
from layer_composer.constants import BlendMode
from layer_composer.registry import lookup, new_registry

logger = logging.getLogger(__name__)

#: Blend function table keyed by :py:class:`~layer_composer.constants.BlendMode`.
BLEND_FUNC, register = new_registry(attribute="blend_mode")


# Separable blend functions
@register(BlendMode.NORMAL)
def normal(Cb, Cs):
    return Cs


@register(BlendMode.MULTIPLY)
def multiply(Cb, Cs):
    return Cb * Cs


@register(BlendMode.SCREEN)
def screen(Cb, Cs):
    return Cb + Cs - (Cb * Cs)


@register(BlendMode.OVERLAY)
def overlay(Cb, Cs):
    return hard_light(Cs, Cb)


@register(BlendMode.DARKEN)
def darken(Cb, Cs):
    return np.minimum(Cb, Cs)


@register(BlendMode.LIGHTEN)
def lighten(Cb, Cs):
    return np.maximum(Cb, Cs)


@register(BlendMode.COLOR_DODGE)
def color_dodge(Cb, Cs):
    B = np.zeros_like(Cb, dtype=np.float32)
    B[Cs == 1] = 1
    B[Cb == 0] = 0
    index = (Cs != 1) & (Cb != 0)
    B[index] = np.minimum(1, Cb[index] / (1 - Cs[index]))
    return B


@register(BlendMode.COLOR_BURN)
def color_burn(Cb, Cs):
    B = np.zeros_like(Cb, dtype=np.float32)
    B[Cb == 1] = 1
    index = (Cb != 1) & (Cs != 0)
    B[index] = 1 - np.minimum(1, (1 - Cb[index]) / Cs[index])
    return B


@register(BlendMode.HARD_LIGHT)
def hard_light(Cb, Cs):
    index = Cs > 0.5
    B = multiply(Cb, 2 * Cs)
    B[index] = screen(Cb, 2 * Cs - 1)[index]
    return B


@register(BlendMode.SOFT_LIGHT)
def soft_light(Cb, Cs):
    index = Cb <= 0.25
    D = np.sqrt(Cb)
    D[index] = (((16 * Cb - 12) * Cb + 4) * Cb)[index]

    index = Cs <= 0.5
    B = Cb + (2 * Cs - 1) * (D - Cb)
    B[index] = (Cb - (1 - 2 * Cs) * Cb * (1 - Cb))[index]
    return B


@register(BlendMode.DIFFERENCE)
def difference(Cb, Cs):
    return np.abs(Cb - Cs)


@register(BlendMode.EXCLUSION)
def exclusion(Cb, Cs):
    return Cb + Cs - 2 * Cb * Cs


# Non-separable blend functions
@register(BlendMode.HUE)
def hue(Cb, Cs):
    return _set_lum(_set_sat(Cs, _sat(Cb)), _lum(Cb))


@register(BlendMode.SATURATION)
def saturation(Cb, Cs):
    return _set_lum(_set_sat(Cb, _sat(Cs)), _lum(Cb))


@register(BlendMode.COLOR)
def color(Cb, Cs):
    return _set_lum(Cs, _lum(Cb))


@register(BlendMode.LUMINOSITY)
def luminosity(Cb, Cs):
    return _set_lum(Cb, _lum(Cs))


def get_blend_func(blend_mode):
    """
    Get the blend function of a mode.

    :raise ConfigurationError: If the mode is unknown.
    """
    return lookup(BLEND_FUNC, BlendMode.parse(blend_mode), "blend mode")


# Helper functions from the W3C spec.
def _lum(C):
    return 0.3 * C[:, :, 0:1] + 0.59 * C[:, :, 1:2] + 0.11 * C[:, :, 2:3]


def _set_lum(C, l):
    d = l - _lum(C)
    return _clip_color(C + d)


def _clip_color(C):
    L = np.repeat(_lum(C), 3, axis=2)
    C_min = np.repeat(np.min(C, axis=2, keepdims=True), 3, axis=2)
    C_max = np.repeat(np.max(C, axis=2, keepdims=True), 3, axis=2)

    index = C_min < 0.0
    L_i = L[index]
    C[index] = L_i + utils.divide((C[index] - L_i) * L_i, L_i - C_min[index])

    index = C_max > 1.0
    L_i = L[index]
    C[index] = L_i + utils.divide((C[index] - L_i) * (1 - L_i), C_max[index] - L_i)

    # For numerical stability.
    return utils.clip(C)


def _sat(C):
    return np.max(C, axis=2, keepdims=True) - np.min(C, axis=2, keepdims=True)


def _set_sat(C, s):
    # Maps min to 0, max to s and interpolates the middle component.
    C_min = np.min(C, axis=2, keepdims=True)
    C_diff = np.max(C, axis=2, keepdims=True) - C_min
    B = np.zeros_like(C, dtype=np.float32)
    index = np.repeat(C_diff > 0, 3, axis=2)
    scaled = (C - C_min) * s / np.where(C_diff > 0, C_diff, 1.0)
    B[index] = scaled[index]
    return B
