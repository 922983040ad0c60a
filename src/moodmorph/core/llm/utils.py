"""Helpers for reading model replies."""

import json
import re
from typing import Any

from loguru import logger

from moodmorph.core.exceptions import LLMError

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def safe_get_content(response: Any, default: str = "") -> str:
    """Text of the first choice, or ``default`` when the provider returned none."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        logger.warning("LLM response carries no message content; using default")
        return default
    return default if content is None else content


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse a JSON object out of model output.

    Tolerates a surrounding markdown code fence, which some providers add even
    when JSON output was requested.

    Raises:
        LLMError: If the text is empty, not JSON, or not a JSON object.
    """
    cleaned = (text or "").strip()
    match = _FENCE_RE.match(cleaned)
    if match:
        cleaned = match.group(1)
    if not cleaned:
        raise LLMError("Empty model response")

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise LLMError(f"Model response is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise LLMError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed
