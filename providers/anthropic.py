"""
Mirror Provider: Anthropic Claude

Works with:
  - Claude Haiku, Sonnet, Opus via the Anthropic API

Environment variables:
  ANTHROPIC_API_KEY  — required
  MIRROR_MODEL       — model to use (default: claude-haiku-4-5-20251001)

Install: pip install anthropic
"""

import os
import sys
from mirror.errors import TruncationFailure
from providers import _SAMPLING_PROVIDERS
from providers.base import describe_request, split_system

_DEFAULT_MODEL = "claude-haiku-4-5-20251001"

# The Messages API accepts temperature in [0, 1]
_MAX_TEMPERATURE = 1.0


def _client():
    import anthropic
    return anthropic.AsyncAnthropic(api_key=os.environ["ANTHROPIC_API_KEY"])


async def sample_handler(request: dict) -> dict:
    model = os.environ.get("MIRROR_MODEL", _DEFAULT_MODEL)
    system, messages = split_system(request["messages"])

    print(f"[Anthropic] Sampling | {describe_request(request)} | model={model}", file=sys.stderr)

    kwargs = {
        "model": model,
        "max_tokens": request["maxTokens"],
        "temperature": min(request["temperature"], _MAX_TEMPERATURE),
        "messages": messages,
    }
    if system:
        kwargs["system"] = system

    async with _client() as client:
        resp = await client.messages.create(**kwargs)
    if resp.stop_reason == "max_tokens":
        raise TruncationFailure(
            f"Claude stopped generating: token limit reached (max_tokens={request['maxTokens']})"
        )
    return resp.model_dump()


# Register
_SAMPLING_PROVIDERS["anthropic"] = sample_handler

# Alias
_SAMPLING_PROVIDERS["claude"] = sample_handler
