"""
The "reflect" tool as seen by an MCP-style dispatch layer.

The dispatch layer owns tool listing and transport; this module only
describes the tool and turns raw arguments into a JSON-ready payload:

  success : {"reflection": ..., "metadata": {"tokens_used": ..., "reflection_time_ms": ...}}
  failure : {"error": "Failed to generate reflection", "details": ...}

Only validation errors produce the failure payload. Sampling problems are
already absorbed by the engine into a fallback reflection.
"""

import json
import time

from .config import MAX_MAX_TOKENS, MAX_TEMPERATURE, MIN_MAX_TOKENS, MIN_TEMPERATURE
from .errors import ValidationError

REFLECT_TOOL_NAME = "reflect"
REFLECT_ERROR = "Failed to generate reflection"


class UnknownTool(LookupError):
    """Raised when a tool other than "reflect" is called."""
    pass


def reflect_tool_definition(config):
    """Tool descriptor advertised to the host, with defaults taken from config."""
    return {
        "name": REFLECT_TOOL_NAME,
        "description": (
            "Enable LLM self-reflection by asking questions and receiving "
            "computed responses through MCP sampling"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "question": {
                    "type": "string",
                    "description": "The question the LLM wants to ask itself",
                },
                "context": {
                    "type": "string",
                    "description": "Additional context for the reflection",
                },
                "system_prompt": {
                    "type": "string",
                    "description": "Custom system prompt to direct the reflection approach",
                },
                "user_prompt": {
                    "type": "string",
                    "description": "Custom user prompt to replace the default reflection instructions",
                },
                "max_tokens": {
                    "type": "number",
                    "description": "Maximum tokens for the response",
                    "default": config.default_max_tokens,
                    "minimum": MIN_MAX_TOKENS,
                    "maximum": MAX_MAX_TOKENS,
                },
                "temperature": {
                    "type": "number",
                    "description": "Sampling temperature",
                    "default": config.default_temperature,
                    "minimum": MIN_TEMPERATURE,
                    "maximum": MAX_TEMPERATURE,
                },
            },
            "required": ["question"],
        },
    }


def list_tools(config):
    return [reflect_tool_definition(config)]


async def handle_reflect(arguments, engine):
    """
    Run the reflect tool.
    Returns (payload, is_error).
    """
    start = time.monotonic()
    try:
        result = await engine.reflect(arguments)
    except ValidationError as e:
        return {"error": REFLECT_ERROR, "details": str(e)}, True
    elapsed_ms = int((time.monotonic() - start) * 1000)

    return {
        "reflection": result.reflection,
        "metadata": {
            "tokens_used": result.tokens_used,
            "reflection_time_ms": elapsed_ms,
        },
    }, False


async def call_tool(name, arguments, engine):
    if name != REFLECT_TOOL_NAME:
        raise UnknownTool(f"Unknown tool: {name}")
    return await handle_reflect(arguments, engine)


def render_payload(payload):
    return json.dumps(payload, indent=2)
