"""
Post-effects.

A post-effect is an asynchronous operation applied to a rendered surface on
explicit request, such as an AI service refining the composite. Any object
with an ``async apply(surface, prompt) -> Surface`` method satisfies
:py:class:`PostEffect`.

Effects are registered by name::

    @register("my-effect")
    class MyEffect:
        def __init__(self, config, sleep=asyncio.sleep):
            ...

        async def apply(self, surface, prompt):
            ...
            return surface

and built from configuration with :py:func:`create_effect`.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol, runtime_checkable

from layer_composer.api.surface import Surface
from layer_composer.composite import fill
from layer_composer.config import ComposerConfig
from layer_composer.constants import BlendMode
from layer_composer.errors import ProcessingError, ValidationError
from layer_composer.registry import lookup, new_registry

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

EFFECTS, register = new_registry(attribute="name")


@runtime_checkable
class PostEffect(Protocol):
    """Protocol of post-effects."""

    async def apply(self, surface: Surface, prompt: str) -> Surface: ...


def check_prompt(prompt: Optional[str]) -> str:
    """
    Return the stripped prompt.

    :raise ValidationError: If the prompt is missing or whitespace-only.
    """
    if prompt is None or not isinstance(prompt, str) or not prompt.strip():
        raise ValidationError("Prompt must not be empty")
    return prompt.strip()


@register("soft-light-wash")
class SoftLightWash(object):
    """
    Reference effect standing in for a remote generator.

    Waits ``delay`` seconds, then washes the surface with white at low
    opacity using the soft-light blend.
    """

    color = (1.0, 1.0, 1.0)
    blend_mode = BlendMode.SOFT_LIGHT

    def __init__(
        self,
        delay: float = 2.0,
        opacity: float = 0.3,
        sleep: Sleep = asyncio.sleep,
    ):
        self.delay = delay
        self.opacity = opacity
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: ComposerConfig, sleep: Sleep = asyncio.sleep):
        return cls(config.effect_delay, config.effect_opacity, sleep)

    async def apply(self, surface: Surface, prompt: str) -> Surface:
        logger.debug("Soft-light wash for prompt %r", prompt)
        await self._sleep(self.delay)
        fill(surface, self.color, self.opacity, self.blend_mode)
        return surface


def create_effect(config: ComposerConfig, sleep: Sleep = asyncio.sleep) -> PostEffect:
    """
    Build the effect named by ``config.effect``.

    :raise ConfigurationError: If no effect is registered under that name.
    """
    effect_cls = lookup(EFFECTS, config.effect, "effect")
    return effect_cls.from_config(config, sleep)


async def run_effect(effect: PostEffect, surface: Surface, prompt: str) -> Surface:
    """
    Apply ``effect`` to ``surface``.

    :raise ValidationError: If the prompt is empty, before the effect starts.
    :raise ProcessingError: If the effect fails or returns something other
        than a same-sized surface.
    """
    prompt = check_prompt(prompt)
    try:
        result = await effect.apply(surface, prompt)
    except ProcessingError:
        raise
    except Exception as e:
        raise ProcessingError("Post-effect failed: %s" % e) from e
    if not isinstance(result, Surface) or result.size != surface.size:
        raise ProcessingError("Post-effect returned an invalid surface: %r" % (result,))
    return result
