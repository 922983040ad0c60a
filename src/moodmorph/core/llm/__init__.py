"""
LLM client and helpers, routed through LiteLLM.
"""

from .client import LLMClient
from .config import api_key_env, get_default_model, get_model_max_tokens, infer_provider
from .utils import extract_json_object, safe_get_content

__all__ = [
    "LLMClient",
    "api_key_env",
    "extract_json_object",
    "get_default_model",
    "get_model_max_tokens",
    "infer_provider",
    "safe_get_content",
]
