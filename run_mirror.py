#!/usr/bin/env python3
"""
Mirror Reflect Runner

Runs a single "reflect" tool call from the command line using a provider
adapter as the sampling capability, and prints the tool's JSON payload.

Usage:
  python run_mirror.py QUESTION [--context TEXT] [--system-prompt TEXT]
                                [--user-prompt TEXT] [--max-tokens N]
                                [--temperature T] [--provider PROVIDER]
                                [--model MODEL] [--profile PROFILE]
                                [--config PATH] [--show-messages]
  python run_mirror.py --list-tools

Examples:
  # Reflect with OpenAI GPT (default)
  OPENAI_API_KEY=sk-... python run_mirror.py "How confident am I in this analysis?"

  # Reflect with Claude, passing context
  ANTHROPIC_API_KEY=sk-ant-... python run_mirror.py "What biases affect my analysis?" \\
    --provider anthropic --context "Working on a predictive analytics model"

  # Offline: see the fallback reflection, with the truncation note
  MIRROR_MOCK_MODE=truncate python run_mirror.py "What are my limitations?" --provider mock

  # Inspect the messages that would be sent, without sampling
  python run_mirror.py "How can I improve?" --system-prompt "You are a mentor." --show-messages

Available providers: openai, anthropic, ollama, mock
Aliases:            manus → openai  |  claude → anthropic  |  local → ollama
"""

import argparse
import asyncio
import json
import os
import sys

from mirror.config import PROFILES, load_config
from mirror.errors import ConfigError, ValidationError
from mirror.reflection import ReflectionEngine
from mirror.tool import call_tool, list_tools, render_payload, REFLECT_TOOL_NAME
from mirror.validation import validate_request
import providers


def build_parser():
    parser = argparse.ArgumentParser(
        description="Mirror Reflect Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("question", nargs="?", default=None, help="The question to reflect on")
    parser.add_argument("--context", default=None, help="Additional context for the reflection")
    parser.add_argument("--system-prompt", default=None,
                        help="Custom system prompt to direct the reflection approach")
    parser.add_argument("--user-prompt", default=None,
                        help="Custom user prompt to replace the default reflection instructions")
    parser.add_argument("--max-tokens", type=int, default=None,
                        help="Maximum tokens for the response (default: from profile)")
    parser.add_argument("--temperature", type=float, default=None,
                        help="Sampling temperature, 0-2 (default: 0.8)")
    parser.add_argument("--provider", "-p", default=None,
                        help="Sampling provider: openai|anthropic|ollama|mock (default: $MIRROR_SAMPLING_PROVIDER or openai)")
    parser.add_argument("--model", "-m", default=None,
                        help="Model override (sets $MIRROR_MODEL)")
    parser.add_argument("--profile", choices=sorted(PROFILES), default=None,
                        help="Deployment profile (default: $MIRROR_PROFILE or standard)")
    parser.add_argument("--config", default=None,
                        help="YAML config file (default: $MIRROR_CONFIG)")
    parser.add_argument("--list-tools", action="store_true",
                        help="Print the tool descriptor and exit")
    parser.add_argument("--show-messages", action="store_true",
                        help="Print the sampling request that would be sent and exit")
    return parser


def tool_arguments(args):
    arguments = {
        "question": args.question,
        "context": args.context,
        "system_prompt": args.system_prompt,
        "user_prompt": args.user_prompt,
        "max_tokens": args.max_tokens,
        "temperature": args.temperature,
    }
    return {k: v for k, v in arguments.items() if v is not None}


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.model:
        os.environ["MIRROR_MODEL"] = args.model

    try:
        config = load_config(args.config, profile=args.profile)
    except (ConfigError, OSError) as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 1

    if args.list_tools:
        print(json.dumps({"tools": list_tools(config)}, indent=2))
        return 0

    engine = ReflectionEngine(config)

    if args.show_messages:
        try:
            request = validate_request(tool_arguments(args), config)
        except ValidationError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1
        print(json.dumps(engine.build_sampling_request(request), indent=2))
        return 0

    try:
        engine.register_handler(providers.load_sampler(args.provider))
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    payload, is_error = asyncio.run(call_tool(REFLECT_TOOL_NAME, tool_arguments(args), engine))
    print(render_payload(payload))
    return 1 if is_error else 0


if __name__ == "__main__":
    # Windows console defaults to cp1252; reconfigure to UTF-8 so emoji output works.
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")
    sys.exit(main())
