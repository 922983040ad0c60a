"""
Provider table for the insight model.

One row per supported provider: its default litellm model string, the output
token cap used when a model isn't listed below, and the environment variable
litellm reads the API key from.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Provider:
    name: str
    default_model: str
    output_limit: int
    api_key_env: str | None = None


PROVIDERS: dict[str, Provider] = {
    p.name: p
    for p in (
        Provider("gemini", "gemini/gemini-2.5-flash", 8_192, "GEMINI_API_KEY"),
        Provider("openai", "gpt-4o-mini", 4_096, "OPENAI_API_KEY"),
        Provider("anthropic", "anthropic/claude-sonnet-4-20250514", 4_096, "ANTHROPIC_API_KEY"),
        Provider("local", "ollama/llama3.1", 8_192),
    )
}

DEFAULT_PROVIDER = "gemini"
FALLBACK_OUTPUT_LIMIT = 4096

# Output caps by model family, matched as substrings of the model string.
# More specific families come first ("gpt-4o" before "gpt-4").
MODEL_OUTPUT_TOKEN_LIMITS: dict[str, int] = {
    "gpt-4o": 16_384,
    "gpt-4": 4_096,
    "claude-sonnet-4": 8_192,
    "claude-haiku": 4_096,
    "gemini-2.5": 65_536,
    "gemini-2.0": 8_192,
    "gemini-1.5": 8_192,
    "llama3": 8_192,
}

_PREFIXES = (
    ("anthropic/", "anthropic"),
    ("gemini/", "gemini"),
    ("ollama/", "local"),
    ("openai/", "openai"),
)


def get_default_model(provider: str) -> str:
    return PROVIDERS.get(provider, PROVIDERS[DEFAULT_PROVIDER]).default_model


def get_model_max_tokens(model_name: str, provider: str | None = None) -> int:
    """Output token cap for ``model_name``, falling back to the provider's default."""
    for family, limit in MODEL_OUTPUT_TOKEN_LIMITS.items():
        if family in model_name:
            return limit
    if provider in PROVIDERS:
        return PROVIDERS[provider].output_limit
    return FALLBACK_OUTPUT_LIMIT


def infer_provider(model_name: str) -> str:
    """Provider for a litellm model string; bare names default to OpenAI."""
    for prefix, provider in _PREFIXES:
        if model_name.startswith(prefix):
            return provider
    if "claude" in model_name:
        return "anthropic"
    if "gemini" in model_name:
        return "gemini"
    return "openai"


def api_key_env(provider: str) -> str | None:
    """Environment variable holding the provider's API key (None for local models)."""
    found = PROVIDERS.get(provider)
    return found.api_key_env if found else None
