"""
Mirror error hierarchy.

Two families, handled very differently by the engine:

  - ValidationError : the request itself is malformed. Raised before any
                      sampling call and always surfaced to the caller.
  - SamplingFailure : anything that goes wrong once the request has been
                      handed to the sampling handler. Never surfaced; the
                      engine answers with a fallback reflection instead.
"""


class ValidationError(ValueError):
    """Raised when a reflection request fails validation."""
    pass


class InvalidArguments(ValidationError):
    """Raised when the request is not a mapping or a field has the wrong type."""
    pass


class MissingQuestion(ValidationError):
    """Raised when the question is absent, empty, or not a string."""
    pass


class MaxTokensOutOfRange(ValidationError):
    """Raised when max_tokens is not an integer in the allowed range."""
    pass


class TemperatureOutOfRange(ValidationError):
    """Raised when temperature is not a number in the allowed range."""
    pass


class SamplingFailure(Exception):
    """Raised when the sampling handler cannot produce a usable response."""
    pass


class SamplingUnavailable(SamplingFailure):
    """Raised when no sampling handler has been registered."""
    pass


class TruncationFailure(SamplingFailure):
    """Raised when generation stopped because it hit a length or token ceiling."""
    pass


class NormalizationFailure(SamplingFailure):
    """Raised when no reflection text can be found in a sampling response."""
    pass


class ConfigError(ValueError):
    """Raised when engine configuration values are invalid."""
    pass
