"""Core data models for the journal.

Profiles, journal entries and export packages, plus the timestamp helpers
that define their JSON wire format. Field names on the wire are camelCase
(``exportedAt``, ``appVersion``) so files stay interchangeable with other
MoodMorph clients.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

APP_VERSION = "1.0.0"

MIN_INTENSITY = 1
MAX_INTENSITY = 10


class Emotion(StrEnum):
    HAPPY = "Happy"
    EXCITED = "Excited"
    NEUTRAL = "Neutral"
    SAD = "Sad"
    ANGRY = "Angry"
    FRUSTRATED = "Frustrated"

    @classmethod
    def parse(cls, value: str | Emotion) -> Emotion:
        """Accept an Emotion, its value or its name, case-insensitively."""
        if isinstance(value, Emotion):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Emotion must be a string, got {type(value).__name__}")
        needle = value.strip().lower()
        for member in cls:
            if needle in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown emotion '{value}'. Choose one of: {', '.join(m.value for m in cls)}")


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def now_local() -> datetime:
    """Current time as an aware datetime in the system's local zone."""
    return datetime.now().astimezone()


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    A trailing ``Z`` means UTC. Naive values are taken as local time.

    Raises:
        ValueError: If the value is not a datetime or ISO-8601 string.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def format_timestamp(dt: datetime) -> str:
    """Format as UTC ISO-8601 with milliseconds, e.g. ``2024-01-05T09:30:00.000Z``."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def local_day(dt: datetime) -> date:
    """Calendar day of ``dt`` in the system's local time zone."""
    return parse_timestamp(dt).astimezone().date()


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def _new_id() -> str:
    return str(uuid.uuid4())


def _require_str(data: dict[str, Any], key: str, default: str | None = None) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' must be a string")
    return value


@dataclass(frozen=True)
class Profile:
    """A named local identity that journal entries are scoped to.

    Attributes:
        id: Opaque unique identifier; the profile's identity.
        name: Display name. Replaced when a newer export of the same id is imported.
        created: When the profile was created.
    """

    id: str
    name: str
    created: datetime = field(default_factory=now_local)

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("Profile id must be a non-empty string")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Profile name must be a non-empty string")
        if not isinstance(self.created, datetime):
            raise ValueError("Profile created must be a datetime")

    @classmethod
    def new(cls, name: str) -> Profile:
        return cls(id=_new_id(), name=name.strip(), created=now_local())

    @classmethod
    def from_dict(cls, data: Any) -> Profile:
        if not isinstance(data, dict):
            raise ValueError("Profile must be a JSON object")
        created = data.get("created")
        return cls(
            id=_require_str(data, "id"),
            name=_require_str(data, "name"),
            created=parse_timestamp(created) if created else now_local(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "created": format_timestamp(self.created)}


@dataclass(frozen=True)
class JournalEntry:
    """One trigger → emotion → reaction → result record.

    Attributes:
        id: Unique within the owning profile's collection.
        date: When the event happened.
        action: The trigger (what happened).
        emotion: How it felt.
        intensity: Strength of the emotion, 1 to 10.
        reaction: What the user did in response.
        result: What came of it.
    """

    id: str
    date: datetime
    action: str
    emotion: Emotion
    intensity: int
    reaction: str = ""
    result: str = ""

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("Entry id must be a non-empty string")
        if not isinstance(self.date, datetime):
            raise ValueError("Entry date must be a datetime")
        if not isinstance(self.emotion, Emotion):
            raise ValueError(f"Entry emotion must be an Emotion, got {self.emotion!r}")
        if isinstance(self.intensity, bool) or not isinstance(self.intensity, int):
            raise ValueError("Entry intensity must be an integer")
        if not MIN_INTENSITY <= self.intensity <= MAX_INTENSITY:
            raise ValueError(f"Entry intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}")
        for name in ("action", "reaction", "result"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"Entry {name} must be a string")

    @property
    def trigger(self) -> str:
        return self.action

    @classmethod
    def new(
        cls,
        action: str,
        emotion: Emotion | str,
        intensity: int,
        reaction: str = "",
        result: str = "",
        when: datetime | None = None,
    ) -> JournalEntry:
        """Create an entry with a fresh id, dated now unless ``when`` is given."""
        return cls(
            id=_new_id(),
            date=parse_timestamp(when) if when else now_local(),
            action=action,
            emotion=Emotion.parse(emotion),
            intensity=intensity,
            reaction=reaction,
            result=result,
        )

    @classmethod
    def from_dict(cls, data: Any) -> JournalEntry:
        """Build an entry from its JSON form.

        Raises:
            ValueError: On missing fields or values out of range.
        """
        if not isinstance(data, dict):
            raise ValueError("Entry must be a JSON object")
        if "date" not in data:
            raise ValueError("Entry is missing 'date'")

        intensity = data.get("intensity")
        if isinstance(intensity, float) and intensity.is_integer():
            intensity = int(intensity)

        return cls(
            id=_require_str(data, "id"),
            date=parse_timestamp(data["date"]),
            action=_require_str(data, "action", ""),
            emotion=Emotion.parse(data.get("emotion", "")),
            intensity=intensity,
            reaction=_require_str(data, "reaction", ""),
            result=_require_str(data, "result", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": format_timestamp(self.date),
            "action": self.action,
            "emotion": self.emotion.value,
            "intensity": self.intensity,
            "reaction": self.reaction,
            "result": self.result,
        }


@dataclass
class ExportPackage:
    """A portable, profile-scoped snapshot used for backup and transfer.

    Attributes:
        user: The profile the entries belong to.
        entries: Entries in collection order (newest first).
        exported_at: When the package was produced.
        app_version: Format stamp of the producing app.
    """

    user: Profile
    entries: list[JournalEntry]
    exported_at: datetime = field(default_factory=now_local)
    app_version: str = APP_VERSION

    @classmethod
    def from_dict(cls, data: Any) -> ExportPackage:
        if not isinstance(data, dict):
            raise ValueError("Package must be a JSON object")
        raw_entries = data.get("entries")
        if not isinstance(raw_entries, list):
            raise ValueError("Package 'entries' must be an array")
        exported_at = data.get("exportedAt")
        return cls(
            user=Profile.from_dict(data.get("user")),
            entries=[JournalEntry.from_dict(item) for item in raw_entries],
            exported_at=parse_timestamp(exported_at) if exported_at else now_local(),
            app_version=str(data.get("appVersion") or APP_VERSION),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict(),
            "entries": [entry.to_dict() for entry in self.entries],
            "exportedAt": format_timestamp(self.exported_at),
            "appVersion": self.app_version,
        }
