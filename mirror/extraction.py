import math
from dataclasses import dataclass

from .errors import NormalizationFailure

# Conventional top-level field names some providers put the generated text in
FALLBACK_TEXT_FIELDS = ["text", "content", "response", "output", "result"]


def _text(value):
    """Return value if it is non-empty text, else None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _text_block(block):
    if isinstance(block, dict) and block.get("type") == "text":
        return _text(block.get("text"))
    return None


def extract_reflection(response):
    """
    Pull the reflection text out of a sampling response.

    Sampling providers disagree on response shape, so known shapes are tried
    in order and the first non-empty text wins:
      1. content list with a {"type": "text"} entry (or a single such block)
      2. content as plain text
      3. message.content as plain text
      4. the response itself is text
      5. one of FALLBACK_TEXT_FIELDS holding text
    Raises NormalizationFailure if nothing matches.
    """
    if hasattr(response, "model_dump"):
        response = response.model_dump()

    if isinstance(response, dict):
        content = response.get("content")

        if isinstance(content, list):
            for block in content:
                text = _text_block(block)
                if text is not None:
                    return text
        elif isinstance(content, dict):
            text = _text_block(content)
            if text is not None:
                return text

        text = _text(content)
        if text is not None:
            return text

        message = response.get("message")
        if isinstance(message, dict):
            text = _text(message.get("content"))
            if text is not None:
                return text

    text = _text(response)
    if text is not None:
        return text

    if isinstance(response, dict):
        for field in FALLBACK_TEXT_FIELDS:
            text = _text(response.get(field))
            if text is not None:
                return text

    raise NormalizationFailure("Unable to extract reflection from sampling response")


def estimate_tokens(text):
    """Rough token count: about 4 characters per token for English text."""
    return math.ceil(len(text) / 4)


@dataclass(frozen=True)
class ReflectionResult:
    reflection: str
    tokens_used: int

    @classmethod
    def from_text(cls, reflection):
        return cls(reflection=reflection, tokens_used=estimate_tokens(reflection))
