"""Tests for the AI insight service."""

import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from moodmorph.journal.insights import Insight, InsightService, build_prompt, trim_entries


def _response(content):
    choice = MagicMock()
    choice.message.content = content
    return MagicMock(choices=[choice])


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def entries(make_entry, now):
    return [
        make_entry(f"e{i}", now - timedelta(hours=i), action=f"trigger {i}", reaction="r", result="o")
        for i in range(25)
    ]


class TestPrompt:
    def test_trim_entries_keys(self, entries):
        trimmed = trim_entries(entries)
        assert len(trimmed) == 20
        assert set(trimmed[0]) == {"date", "trigger", "emotion", "my_reaction", "outcome", "intensity"}
        assert trimmed[0]["trigger"] == "trigger 0"

    def test_prompt_names_language(self, entries):
        prompt = build_prompt(entries, "fa")
        assert "Persian (Farsi)" in prompt
        assert "trigger 19" in prompt
        assert "trigger 20" not in prompt


class TestInsight:
    def test_from_dict(self):
        insight = Insight.from_dict({"summary": "s", "patterns": ["p"], "advice": "a"})
        assert insight.to_dict() == {"summary": "s", "patterns": ["p"], "advice": "a"}
        assert insight.is_fallback is False

    @pytest.mark.parametrize(
        "data",
        [
            {"summary": "s", "patterns": ["p"]},
            {"summary": 1, "patterns": [], "advice": "a"},
            {"summary": "s", "patterns": "p", "advice": "a"},
            {"summary": "s", "patterns": [1], "advice": "a"},
        ],
    )
    def test_from_dict_rejects_bad_shape(self, data):
        with pytest.raises(ValueError):
            Insight.from_dict(data)


class TestInsightService:
    def test_success(self, client, entries):
        reply = {"summary": "Mostly calm", "patterns": ["Mornings are hard"], "advice": "Sleep more"}
        client.completion.return_value = _response(json.dumps(reply))

        insight = InsightService(client=client).analyze(entries, "en")

        assert insight.to_dict() == reply
        messages = client.completion.call_args.args[0]
        assert messages[-1]["role"] == "user"
        assert client.completion.call_args.kwargs["response_format"] == {"type": "json_object"}

    def test_max_entries(self, client, entries):
        client.completion.return_value = _response('{"summary": "s", "patterns": [], "advice": "a"}')
        InsightService(client=client, max_entries=3).analyze(entries)
        prompt = client.completion.call_args.args[0][-1]["content"]
        assert "trigger 2" in prompt
        assert "trigger 3" not in prompt

    def test_no_entries_skips_call(self, client):
        insight = InsightService(client=client).analyze([], "en")
        assert insight.summary == "No entries to analyze yet."
        assert insight.is_fallback is True
        client.completion.assert_not_called()

    def test_network_failure_falls_back(self, client, entries):
        client.completion.side_effect = ConnectionError("offline")
        insight = InsightService(client=client).analyze(entries, "en")
        assert insight.summary == "Could not generate analysis at this time."
        assert insight.patterns == ["Error connecting to AI service."]
        assert insight.advice == "Please try again later."

    @pytest.mark.parametrize("content", [None, "", "not json", '["a"]', '{"summary": "only"}'])
    def test_bad_reply_falls_back(self, client, entries, content):
        client.completion.return_value = _response(content)
        insight = InsightService(client=client).analyze(entries, "fa")
        assert insight.is_fallback is True
        assert insight.advice == "لطفاً بعداً دوباره تلاش کنید."
