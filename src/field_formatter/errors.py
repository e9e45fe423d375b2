"""Errors raised outside the total parse/serialize/transition core."""


class FormatterError(Exception):
    """Base error for this package."""


class ConfigError(FormatterError):
    """Raised when a configuration file cannot be read or decoded."""


class EnvelopeError(FormatterError, ValueError):
    """Raised when a structured payload does not have the envelope shape."""
