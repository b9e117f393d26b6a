"""
Mirror Provider: Mock (testing / CI / offline baseline)

Returns deterministic responses without any LLM call.
Useful for:
  - CI pipelines that test the engine itself (not model quality)
  - Exercising the fallback paths on demand
  - Offline development without API keys

Environment variables:
  MIRROR_MOCK_MODE — echo (default) | fail | truncate
    echo     : answer with a canned reflection in the content-list shape
    fail     : raise a generic sampling failure
    truncate : raise a failure that reads like a token ceiling hit
"""

import os
import sys
from mirror.errors import SamplingFailure
from providers import _SAMPLING_PROVIDERS
from providers.base import message_text

_MOCK_MODES = ["echo", "fail", "truncate"]


def _mode():
    mode = os.environ.get("MIRROR_MOCK_MODE", "echo")
    if mode not in _MOCK_MODES:
        raise ValueError(f"Unknown MIRROR_MOCK_MODE: '{mode}'. Available: {_MOCK_MODES}")
    return mode


async def sample_handler(request: dict) -> dict:
    mode = _mode()
    print(f"[Mock] Sampling | mode={mode} | messages={len(request['messages'])}", file=sys.stderr)

    if mode == "fail":
        raise SamplingFailure("Mock provider: sampling request failed")
    if mode == "truncate":
        raise SamplingFailure("Mock provider: the token limit was reached before the reflection finished")

    prompt = message_text(request["messages"][-1])
    first_line = prompt.strip().splitlines()[0] if prompt.strip() else ""
    return {
        "role": "assistant",
        "content": [
            {
                "type": "text",
                "text": (
                    "Mock reflection. Looking back at the request that began with "
                    f"\"{first_line[:120]}\", my reasoning rests on assumptions I have not "
                    "verified, and I am more confident about the structure of the answer "
                    "than about its details."
                ),
            }
        ],
        "model": "mock",
    }


# Register
_SAMPLING_PROVIDERS["mock"] = sample_handler
