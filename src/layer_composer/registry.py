"""
Registry pattern utility.

Blend functions and post-effects are looked up through registries created
here::

    from layer_composer.registry import new_registry, lookup

    EFFECTS, register = new_registry(attribute="name")

    @register("soft-light-wash")
    class SoftLightWash:
        ...

    effect_cls = lookup(EFFECTS, "soft-light-wash", "effect")
"""

from typing import Any, Callable, Dict, Tuple, TypeVar, Union

from layer_composer.errors import ConfigurationError

T = TypeVar("T")


def new_registry(attribute: Union[str, None] = None) -> Tuple[Dict[Any, Any], Callable]:
    """
    Returns an empty dict and a @register decorator.

    :param attribute: Optional attribute name under which the key is stored on
        each registered object.
    :return: Tuple of (registry_dict, register_decorator)
    """
    registry: Dict[Any, Any] = {}

    def register(key: Any) -> Callable[[T], T]:
        def decorator(obj: T) -> T:
            if key in registry:
                raise ConfigurationError("Duplicate registration for %r" % (key,))
            registry[key] = obj
            if attribute:
                setattr(obj, attribute, key)
            return obj

        return decorator

    return registry, register


def lookup(registry: Dict[Any, Any], key: Any, kind: str = "entry") -> Any:
    """
    Get a registered object.

    :raise ConfigurationError: If nothing is registered under ``key``.
    """
    try:
        return registry[key]
    except KeyError:
        choices = ", ".join(sorted(str(k) for k in registry))
        raise ConfigurationError(
            "Unknown %s %r; expected one of: %s" % (kind, key, choices)
        ) from None
