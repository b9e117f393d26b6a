"""
Mirror: self-reflection for LLM hosts.

The engine never calls a model itself. It builds a sampling request, hands it
to a host-registered async handler, and turns whatever comes back into a
reflection, falling back to a template reflection when sampling fails.

Modules:
    mirror.validation  — request checks and the ReflectionRequest type
    mirror.prompts     — message composition
    mirror.extraction  — response normalization and token estimates
    mirror.fallback    — template reflections
    mirror.reflection  — ReflectionEngine and failure classification
    mirror.tool        — the "reflect" tool boundary
    mirror.config      — EngineConfig and profile/YAML loading
"""

from .config import EngineConfig, load_config
from .reflection import ReflectionEngine
from .extraction import ReflectionResult
from .validation import ReflectionRequest

__all__ = [
    "EngineConfig",
    "load_config",
    "ReflectionEngine",
    "ReflectionResult",
    "ReflectionRequest",
]
