"""
EngineConfig: the only state a ReflectionEngine holds.

Everything here is a default or a policy the host owns, not something a
single request can change:

  - default_max_tokens  : used when a request omits max_tokens
  - default_temperature : used when a request omits temperature
  - system_role         : whether the sampling capability accepts a
                          "system" message, or system text must be folded
                          into the user message
  - source              : provenance tag sent with every sampling request
  - truncation_phrases  : failure text that marks a sampling failure as a
                          length/token ceiling hit

The default max_tokens depends on the deployment profile. Two profiles ship:
"standard" (500 tokens) and "extended" (1500 tokens).

The profile is picked by explicit argument, then $MIRROR_PROFILE, then the
YAML file ($MIRROR_CONFIG), then "standard". A max_tokens set in the file or
passed explicitly always beats the profile's default.
"""

import os
import yaml

from .errors import ConfigError


MIN_MAX_TOKENS = 1
MAX_MAX_TOKENS = 4000
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

# Defaults
DEFAULT_PROFILE             = "standard"
DEFAULT_TEMPERATURE         = 0.8
DEFAULT_SYSTEM_ROLE         = False   # MCP sampling only accepts user/assistant roles
SAMPLING_SOURCE             = "mirror-mcp-reflection"
DEFAULT_TRUNCATION_PHRASES  = ("length limit", "token limit")

PROFILES = {
    "standard": {"max_tokens": 500},
    "extended": {"max_tokens": 1500},
}

_CONFIG_KEYS = {"profile", "max_tokens", "temperature", "system_role", "source", "truncation_phrases"}


class EngineConfig:
    """
    Immutable engine defaults.

    Usage:
        config = EngineConfig(default_max_tokens=1500, system_role=True)
        engine = ReflectionEngine(config)
    """

    __slots__ = (
        "profile",
        "default_max_tokens",
        "default_temperature",
        "system_role",
        "source",
        "truncation_phrases",
    )

    def __init__(
        self,
        default_max_tokens=None,
        default_temperature=DEFAULT_TEMPERATURE,
        system_role=DEFAULT_SYSTEM_ROLE,
        source=SAMPLING_SOURCE,
        truncation_phrases=DEFAULT_TRUNCATION_PHRASES,
        profile=DEFAULT_PROFILE,
    ):
        if profile not in PROFILES:
            raise ConfigError(f"Unknown profile: '{profile}'. Available: {list(PROFILES)}")
        if default_max_tokens is None:
            default_max_tokens = PROFILES[profile]["max_tokens"]

        if isinstance(default_max_tokens, bool) or not isinstance(default_max_tokens, int):
            raise ConfigError("default max_tokens must be an integer")
        if not MIN_MAX_TOKENS <= default_max_tokens <= MAX_MAX_TOKENS:
            raise ConfigError(
                f"default max_tokens must be between {MIN_MAX_TOKENS} and {MAX_MAX_TOKENS}"
            )
        if isinstance(default_temperature, bool) or not isinstance(default_temperature, (int, float)):
            raise ConfigError("default temperature must be a number")
        if not MIN_TEMPERATURE <= default_temperature <= MAX_TEMPERATURE:
            raise ConfigError("default temperature must be between 0 and 2")
        if not isinstance(system_role, bool):
            raise ConfigError("system_role must be true or false")
        if not isinstance(source, str) or not source.strip():
            raise ConfigError("source must be a non-empty string")

        if isinstance(truncation_phrases, str) or not isinstance(truncation_phrases, (list, tuple)):
            raise ConfigError("truncation_phrases must be a list of strings")
        if not all(isinstance(p, str) for p in truncation_phrases):
            raise ConfigError("truncation_phrases must be a list of strings")

        phrases = tuple(p.lower() for p in truncation_phrases if p.strip())
        if not phrases:
            raise ConfigError("truncation_phrases must contain at least one phrase")

        object.__setattr__(self, "profile", profile)
        object.__setattr__(self, "default_max_tokens", default_max_tokens)
        object.__setattr__(self, "default_temperature", float(default_temperature))
        object.__setattr__(self, "system_role", system_role)
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "truncation_phrases", phrases)

    def __setattr__(self, name, value):
        raise AttributeError(f"EngineConfig is immutable (tried to set '{name}')")

    def __repr__(self):
        return (
            f"EngineConfig(profile={self.profile!r}, default_max_tokens={self.default_max_tokens}, "
            f"default_temperature={self.default_temperature}, system_role={self.system_role}, "
            f"source={self.source!r})"
        )


def load_config_file(path):
    """Read a YAML config file. Returns {} for an empty file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {path}: expected a mapping")

    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Invalid config file {path}: unknown keys: {', '.join(unknown)}")

    phrases = data.get("truncation_phrases")
    if phrases is not None and (
        not isinstance(phrases, list) or not all(isinstance(p, str) for p in phrases)
    ):
        raise ConfigError(f"Invalid config file {path}: 'truncation_phrases' must be a list of strings")

    return data


def load_config(path=None, profile=None, **overrides):
    """
    Build an EngineConfig from profile defaults, an optional YAML file,
    the environment, and explicit overrides.

    Extra truncation_phrases from the file or overrides are added to the built-in ones,
    never substituted for them.
    """
    path = path or os.environ.get("MIRROR_CONFIG")
    data = load_config_file(path) if path else {}

    profile = profile or os.environ.get("MIRROR_PROFILE") or data.get("profile", DEFAULT_PROFILE)

    kwargs = {"profile": profile}
    if "max_tokens" in data:
        kwargs["default_max_tokens"] = data["max_tokens"]
    if "temperature" in data:
        kwargs["default_temperature"] = data["temperature"]
    if "system_role" in data:
        kwargs["system_role"] = data["system_role"]
    if "source" in data:
        kwargs["source"] = data["source"]
    extra_phrases = overrides.pop("truncation_phrases", None)
    if isinstance(extra_phrases, str) or (
        extra_phrases is not None and not isinstance(extra_phrases, (list, tuple))
    ):
        raise ConfigError("truncation_phrases must be a list of strings")
    kwargs["truncation_phrases"] = (
        DEFAULT_TRUNCATION_PHRASES
        + tuple(data.get("truncation_phrases") or ())
        + tuple(extra_phrases or ())
    )

    kwargs.update({k: v for k, v in overrides.items() if v is not None})
    return EngineConfig(**kwargs)
