"""
Mirror Sampling Providers

Each provider module exposes one async callable:
  sample_handler(request: dict) -> response

request is the engine's sampling request:
  {"messages": [...], "maxTokens": int, "temperature": float, "metadata": {"source": str}}

Select a provider at runtime via environment variables:
  MIRROR_SAMPLING_PROVIDER — which provider services sampling requests
  MIRROR_MODEL             — override the default model for the selected provider

Usage:
  from providers import load_sampler
  engine.register_handler(load_sampler())
"""

import importlib
import os

_SAMPLING_PROVIDERS = {}

# Provider name (and aliases) -> module under providers/
_PROVIDER_MODULES = {
    "openai": "openai",
    "manus": "openai",
    "anthropic": "anthropic",
    "claude": "anthropic",
    "ollama": "local_ollama",
    "local": "local_ollama",
    "mock": "mock",
}


def available_providers():
    return sorted(_PROVIDER_MODULES)


def load_sampler(provider_name=None):
    name = provider_name or os.environ.get("MIRROR_SAMPLING_PROVIDER", "openai")
    _ensure_loaded(name)
    if name not in _SAMPLING_PROVIDERS:
        raise ValueError(f"Unknown sampling provider: '{name}'. Available: {available_providers()}")
    return _SAMPLING_PROVIDERS[name]


def _ensure_loaded(name):
    """Lazy-import the provider module so unused providers don't require their deps."""
    if name in _SAMPLING_PROVIDERS or name not in _PROVIDER_MODULES:
        return
    importlib.import_module(f"providers.{_PROVIDER_MODULES[name]}")
