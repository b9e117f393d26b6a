"""
Mirror Provider: Local models via Ollama

Works with any model running locally through Ollama (llama3, mistral, gemma, etc.)
No API key required, just a running Ollama instance.

Environment variables:
  OLLAMA_BASE_URL  — Ollama API base (default: http://localhost:11434)
  MIRROR_MODEL     — model to use (default: llama3)

No extra deps needed: the HTTP call uses urllib in a worker thread.
"""

import asyncio
import json
import os
import sys
from mirror.errors import TruncationFailure
from providers import _SAMPLING_PROVIDERS
from providers.base import describe_request, to_chat_messages

_DEFAULT_MODEL = "llama3"
_DEFAULT_BASE_URL = "http://localhost:11434"


def _chat(payload: dict) -> dict:
    import urllib.request

    base_url = os.environ.get("OLLAMA_BASE_URL", _DEFAULT_BASE_URL).rstrip("/")
    url = f"{base_url}/api/chat"

    data = json.dumps(payload).encode()
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})
    with urllib.request.urlopen(req, timeout=120) as resp:
        return json.loads(resp.read())


async def sample_handler(request: dict) -> dict:
    model = os.environ.get("MIRROR_MODEL", _DEFAULT_MODEL)

    print(f"[Ollama] Sampling | {describe_request(request)} | model={model}", file=sys.stderr)

    payload = {
        "model": model,
        "stream": False,
        "messages": to_chat_messages(request["messages"]),
        "options": {
            "num_predict": request["maxTokens"],
            "temperature": request["temperature"],
        },
    }
    result = await asyncio.to_thread(_chat, payload)

    if result.get("done_reason") == "length":
        raise TruncationFailure(
            f"Ollama stopped generating: length limit was reached (num_predict={request['maxTokens']})"
        )
    return result


# Register
_SAMPLING_PROVIDERS["ollama"] = sample_handler
_SAMPLING_PROVIDERS["local"] = sample_handler
