"""
Exceptions raised by layer_composer.

All errors derive from :py:class:`ComposerError` and from the closest builtin
exception, so callers may catch either.
"""


class ComposerError(Exception):
    """Base class of layer_composer errors."""


class ValidationError(ComposerError, ValueError):
    """Invalid user input, e.g. an empty prompt or a non-numeric control."""


class ConfigurationError(ComposerError, ValueError):
    """Unknown blend mode, effect or configuration value."""


class StateError(ComposerError, RuntimeError):
    """Operation attempted before its prerequisites are loaded."""


class DecodeError(ComposerError, ValueError):
    """Image bytes could not be decoded."""


class ProcessingError(ComposerError, RuntimeError):
    """A post-effect failed."""
