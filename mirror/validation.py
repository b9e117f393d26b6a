from dataclasses import dataclass
from typing import Optional

from .config import (
    DEFAULT_PROFILE,
    DEFAULT_TEMPERATURE,
    MAX_MAX_TOKENS,
    MAX_TEMPERATURE,
    MIN_MAX_TOKENS,
    MIN_TEMPERATURE,
    PROFILES,
)
from .errors import (
    InvalidArguments,
    MaxTokensOutOfRange,
    MissingQuestion,
    TemperatureOutOfRange,
)

OPTIONAL_TEXT_FIELDS = ["context", "system_prompt", "user_prompt"]


@dataclass(frozen=True)
class ReflectionRequest:
    question: str
    context: Optional[str] = None
    system_prompt: Optional[str] = None
    user_prompt: Optional[str] = None
    max_tokens: int = PROFILES[DEFAULT_PROFILE]["max_tokens"]
    temperature: float = DEFAULT_TEMPERATURE


def _validate_max_tokens(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MaxTokensOutOfRange(f"max_tokens must be between {MIN_MAX_TOKENS} and {MAX_MAX_TOKENS}")
    # 300.0 is fine, 300.5 is not
    if isinstance(value, float) and not value.is_integer():
        raise MaxTokensOutOfRange(f"max_tokens must be between {MIN_MAX_TOKENS} and {MAX_MAX_TOKENS}")
    if not MIN_MAX_TOKENS <= value <= MAX_MAX_TOKENS:
        raise MaxTokensOutOfRange(f"max_tokens must be between {MIN_MAX_TOKENS} and {MAX_MAX_TOKENS}")
    return int(value)


def _validate_temperature(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TemperatureOutOfRange("temperature must be between 0 and 2")
    if not MIN_TEMPERATURE <= value <= MAX_TEMPERATURE:
        raise TemperatureOutOfRange("temperature must be between 0 and 2")
    return float(value)


def validate_request(arguments, config):
    """
    Check raw tool arguments and return a ReflectionRequest.

    Missing max_tokens/temperature fall back to the config defaults.
    Optional text fields that are None or "" are treated as absent.
    Raises a ValidationError subclass for the first violated constraint.
    """
    if not isinstance(arguments, dict):
        raise InvalidArguments("Invalid arguments provided")

    question = arguments.get("question")
    if not isinstance(question, str) or not question:
        raise MissingQuestion("Question is required and must be a string")

    optional = {}
    for field in OPTIONAL_TEXT_FIELDS:
        value = arguments.get(field)
        if value is not None and not isinstance(value, str):
            raise InvalidArguments(f"{field} must be a string")
        optional[field] = value or None

    max_tokens = arguments.get("max_tokens")
    max_tokens = config.default_max_tokens if max_tokens is None else _validate_max_tokens(max_tokens)

    temperature = arguments.get("temperature")
    temperature = config.default_temperature if temperature is None else _validate_temperature(temperature)

    return ReflectionRequest(
        question=question,
        max_tokens=max_tokens,
        temperature=temperature,
        **optional,
    )
