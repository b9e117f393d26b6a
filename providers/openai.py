"""
Mirror Provider: OpenAI / OpenAI-compatible APIs

Works with:
  - OpenAI (GPT-4o, GPT-4.1-mini, etc.)
  - Manus (uses OpenAI SDK)
  - Any OpenAI-compatible endpoint (Azure, Together, Groq, etc.)

Environment variables:
  OPENAI_API_KEY       — required
  OPENAI_BASE_URL      — optional, override for compatible endpoints
  MIRROR_MODEL         — model to use (default: gpt-4.1-mini)

Install: pip install openai
"""

import os
import sys
from mirror.errors import TruncationFailure
from providers import _SAMPLING_PROVIDERS
from providers.base import describe_request, to_chat_messages

_DEFAULT_MODEL = "gpt-4.1-mini"


def _client():
    from openai import AsyncOpenAI
    kwargs = {"api_key": os.environ["OPENAI_API_KEY"]}
    base_url = os.environ.get("OPENAI_BASE_URL")
    if base_url:
        kwargs["base_url"] = base_url
    return AsyncOpenAI(**kwargs)


async def sample_handler(request: dict) -> dict:
    model = os.environ.get("MIRROR_MODEL", _DEFAULT_MODEL)

    print(f"[OpenAI] Sampling | {describe_request(request)} | model={model}", file=sys.stderr)

    async with _client() as client:
        resp = await client.chat.completions.create(
            model=model,
            messages=to_chat_messages(request["messages"]),
            max_tokens=request["maxTokens"],
            temperature=request["temperature"],
        )
    choice = resp.choices[0]
    if choice.finish_reason == "length":
        raise TruncationFailure(
            f"OpenAI stopped generating: length limit was reached (max_tokens={request['maxTokens']})"
        )
    return {
        "message": {"role": "assistant", "content": choice.message.content},
        "model": resp.model,
    }


# Register
_SAMPLING_PROVIDERS["openai"] = sample_handler

# Alias: "manus" points here (Manus uses the OpenAI SDK)
_SAMPLING_PROVIDERS["manus"] = sample_handler
