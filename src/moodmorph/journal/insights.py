"""AI-generated behavioural insights.

Sends the most recent entries to a generative-language model and asks for a
JSON object ``{"summary": str, "patterns": [str], "advice": str}`` written in
the user's language. Any failure along the way (network, timeout, empty or
malformed reply) produces a localized placeholder insight instead of an error.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from moodmorph.core.llm import LLMClient, extract_json_object, safe_get_content

from .i18n import DEFAULT_LANGUAGE, language_name, translate
from .models import JournalEntry, format_timestamp

DEFAULT_MAX_ENTRIES = 20

SYSTEM_PROMPT = "You are an expert psychological assistant. You always answer with a single JSON object."

PROMPT_TEMPLATE = """You are an expert psychological assistant speaking {language}. Analyze the following journal entries from a user.
Identify behavioral patterns, emotional triggers, and consequences of their actions.
Provide constructive, empathetic advice on how to handle similar situations better in the future.

IMPORTANT: The response MUST be in {language}.

Respond with a JSON object with exactly these keys:
- "summary": a brief summary of the user's recent emotional state in {language}
- "patterns": a list of observed patterns, each a string in {language}
- "advice": actionable advice for improvement in {language}

Journal Entries:
{entries}
"""


@dataclass
class Insight:
    summary: str
    patterns: list[str] = field(default_factory=list)
    advice: str = ""
    is_fallback: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Insight:
        """Validate the model's reply shape.

        Raises:
            ValueError: If a key is missing or has the wrong type.
        """
        summary = data.get("summary")
        patterns = data.get("patterns")
        advice = data.get("advice")
        if not isinstance(summary, str) or not isinstance(advice, str):
            raise ValueError("'summary' and 'advice' must be strings")
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ValueError("'patterns' must be a list of strings")
        return cls(summary=summary, patterns=patterns, advice=advice)

    def to_dict(self) -> dict[str, Any]:
        return {"summary": self.summary, "patterns": list(self.patterns), "advice": self.advice}


def empty_insight(language: str = DEFAULT_LANGUAGE) -> Insight:
    return Insight(
        summary=translate("insightEmptySummary", language),
        patterns=[],
        advice=translate("insightEmptyAdvice", language),
        is_fallback=True,
    )


def fallback_insight(language: str = DEFAULT_LANGUAGE) -> Insight:
    return Insight(
        summary=translate("insightErrorSummary", language),
        patterns=[translate("insightErrorPattern", language)],
        advice=translate("insightErrorAdvice", language),
        is_fallback=True,
    )


def trim_entries(entries: Sequence[JournalEntry], limit: int = DEFAULT_MAX_ENTRIES) -> list[dict[str, Any]]:
    """The first ``limit`` entries (newest first) reduced to what the model needs."""
    return [
        {
            "date": format_timestamp(e.date),
            "trigger": e.action,
            "emotion": e.emotion.value,
            "my_reaction": e.reaction,
            "outcome": e.result,
            "intensity": e.intensity,
        }
        for e in list(entries)[:limit]
    ]


def build_prompt(entries: Sequence[JournalEntry], language: str, limit: int = DEFAULT_MAX_ENTRIES) -> str:
    payload = json.dumps(trim_entries(entries, limit), indent=2, ensure_ascii=False)
    return PROMPT_TEMPLATE.format(language=language_name(language), entries=payload)


class InsightService:
    """Turns journal entries into an ``Insight`` through an LLM."""

    def __init__(self, client: LLMClient | None = None, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.client = client or LLMClient()
        self.max_entries = max_entries

    def analyze(self, entries: Sequence[JournalEntry], language: str = DEFAULT_LANGUAGE) -> Insight:
        """Analyze the newest entries. Never raises."""
        if not entries:
            return empty_insight(language)

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(entries, language, self.max_entries)},
        ]
        try:
            response = self.client.completion(messages, response_format={"type": "json_object"})
            text = safe_get_content(response)
            insight = Insight.from_dict(extract_json_object(text))
        except Exception as e:
            logger.warning(f"Insight generation failed ({type(e).__name__}): {e}")
            return fallback_insight(language)

        logger.debug(f"Generated insight with {len(insight.patterns)} patterns")
        return insight
