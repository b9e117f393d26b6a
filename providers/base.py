"""
Mirror Provider Base: shared utilities for all adapters.

The engine speaks in MCP-style messages:
  {"role": "system" | "user", "content": {"type": "text", "text": "..."}}

Provider SDKs mostly want {"role": ..., "content": "..."} and some of them
take system text as a separate parameter. These helpers do that translation
so every adapter sends the same thing.
"""


def message_text(message: dict) -> str:
    """Return the text of one engine message. Plain-string content is accepted too."""
    content = message.get("content", "")
    if isinstance(content, dict):
        return content.get("text", "")
    return content


def to_chat_messages(messages: list) -> list[dict]:
    """Convert engine messages into the {"role", "content": str} chat format."""
    return [{"role": m["role"], "content": message_text(m)} for m in messages]


def split_system(messages: list) -> tuple[str, list[dict]]:
    """
    Separate system messages from the rest.
    Returns (system_text, chat_messages). Multiple system messages are joined
    with a blank line.
    """
    system_parts = [message_text(m) for m in messages if m["role"] == "system"]
    rest = [m for m in messages if m["role"] != "system"]
    return "\n\n".join(system_parts), to_chat_messages(rest)


def describe_request(request: dict) -> str:
    """One-line summary of a sampling request for provider logs."""
    source = request.get("metadata", {}).get("source", "unknown")
    return (
        f"source={source} | messages={len(request['messages'])} | "
        f"max_tokens={request['maxTokens']} | temperature={request['temperature']}"
    )
