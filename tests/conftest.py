"""Shared test fixtures for moodmorph."""

import os
from datetime import datetime

import pytest
from loguru import logger

from moodmorph.core.storage import MemoryStore
from moodmorph.journal import Emotion, JournalEntry, JournalSession


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks added by CLI runs so later tests don't write to closed streams."""
    yield
    logger.remove()


@pytest.fixture
def tmp_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "store_dir": os.path.join(tmp_dir, "data", "store"),
        },
        "llm": {
            "model": "gpt-4o-mini",
            "temperature": 0.2,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(store):
    return JournalSession(store)


@pytest.fixture
def now():
    """A fixed local 'now' so range tests don't depend on the wall clock."""
    return datetime(2024, 6, 15, 12, 0).astimezone()


@pytest.fixture
def make_entry():
    """Factory for entries with a fixed id and date."""

    def _make(
        entry_id: str,
        when: datetime,
        action: str = "something happened",
        emotion: str = "Neutral",
        intensity: int = 5,
        reaction: str = "",
        result: str = "",
    ) -> JournalEntry:
        return JournalEntry(
            id=entry_id,
            date=when,
            action=action,
            emotion=Emotion.parse(emotion),
            intensity=intensity,
            reaction=reaction,
            result=result,
        )

    return _make
