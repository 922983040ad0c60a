"""
LLM client: one JSON-capable completion call routed through LiteLLM.

litellm is imported on first use so the rest of moodmorph works without it.
A rate limit, provider error or connection failure on the primary model is
retried once on ``fallback_model`` when one is configured.
"""

import os
from typing import Any

from loguru import logger

from .config import DEFAULT_PROVIDER, api_key_env, get_default_model, get_model_max_tokens, infer_provider


def _import_litellm():
    try:
        import litellm
    except ImportError:
        raise ImportError("Install LLM support with: pip install litellm") from None
    return litellm


class LLMClient:
    """
    Completion client for any litellm-routable model.

    Model strings follow litellm conventions, e.g. ``"gemini/gemini-2.5-flash"``,
    ``"gpt-4o-mini"``, ``"anthropic/claude-sonnet-4-20250514"`` or
    ``"ollama/llama3.1"``.
    """

    def __init__(
        self,
        model: str | None = None,
        provider: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        timeout: int = 60,
        num_retries: int = 2,
        fallback_model: str | None = None,
    ):
        self.provider = provider or (infer_provider(model) if model else DEFAULT_PROVIDER)
        self.model = model or get_default_model(self.provider)
        self.temperature = temperature
        self.timeout = timeout
        self.num_retries = num_retries
        self.fallback_model = fallback_model or None
        self.fallback_provider = infer_provider(self.fallback_model) if self.fallback_model else None

        limit = get_model_max_tokens(self.model, self.provider)
        if max_tokens is not None and max_tokens > limit:
            logger.warning(f"max_tokens {max_tokens} is above the {self.model} limit of {limit}; using {limit}")
        self.max_tokens = min(max_tokens, limit) if max_tokens is not None else limit

        key_env = api_key_env(self.provider)
        if key_env and not os.environ.get(key_env):
            logger.debug(f"{key_env} is not set; requests to {self.provider} will likely be rejected")
        logger.debug(f"LLMClient model={self.model} max_tokens={self.max_tokens} fallback={self.fallback_model}")

    @classmethod
    def from_config(cls, config) -> "LLMClient":
        """Build a client from the ``llm.*`` settings of a Config."""
        return cls(
            model=config.get("llm.model") or None,
            temperature=config.get_float("llm.temperature", 0.7),
            timeout=config.get_int("llm.timeout", 60),
            fallback_model=config.get("llm.fallback_model") or None,
        )

    def completion(
        self,
        messages: list[dict[str, Any]],
        *,
        response_format: dict[str, Any] | None = None,
        model: str | None = None,
    ) -> Any:
        """Run one completion and return litellm's raw response.

        Args:
            messages: Chat messages (system + user).
            response_format: e.g. ``{"type": "json_object"}``.
            model: Use this model for the request instead of ``self.model``.

        Raises:
            ImportError: If litellm is not installed.
        """
        litellm = _import_litellm()
        retryable = (litellm.RateLimitError, litellm.APIError, litellm.APIConnectionError)
        request = self._request(messages, response_format, model or self.model)

        try:
            return litellm.completion(**request)
        except retryable as e:
            if not self.fallback_model:
                raise
            logger.warning(
                f"{request['model']} failed ({type(e).__name__}); retrying on {self.fallback_model}"
            )
            request["model"] = self.fallback_model
            request["max_tokens"] = min(
                request["max_tokens"], get_model_max_tokens(self.fallback_model, self.fallback_provider)
            )
            return litellm.completion(**request)

    def get_config_info(self) -> dict:
        info = {
            "provider": self.provider,
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        if self.fallback_model:
            info.update(fallback_model=self.fallback_model, fallback_provider=self.fallback_provider)
        return info

    def _request(
        self,
        messages: list[dict[str, Any]],
        response_format: dict[str, Any] | None,
        model: str,
    ) -> dict[str, Any]:
        max_tokens = self.max_tokens
        if model != self.model:
            max_tokens = min(max_tokens, get_model_max_tokens(model, infer_provider(model)))
        request: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": max_tokens,
            "timeout": self.timeout,
            "num_retries": self.num_retries,
        }
        if response_format:
            request["response_format"] = response_format
        return request
