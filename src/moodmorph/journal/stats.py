"""Aggregate statistics over a profile's entries (the dashboard view)."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from .models import Emotion, JournalEntry, local_day

HIGH_INTENSITY_THRESHOLD = 7


@dataclass
class JournalStats:
    """Summary numbers for a set of entries.

    Attributes:
        total: Number of entries.
        average_intensity: Mean intensity, rounded to one decimal (0.0 when empty).
        emotion_counts: Count per emotion, every emotion present (zeros included).
        dominant_emotion: Most frequent emotion; ties go to the earlier enum member.
        intensity_by_emotion: Mean intensity per emotion that occurs.
        high_intensity_count: Entries at or above ``HIGH_INTENSITY_THRESHOLD``.
        entries_per_day: Local calendar day to count, oldest day first.
        top_triggers: Most repeated triggers (case/space-normalized) with counts.
    """

    total: int = 0
    average_intensity: float = 0.0
    emotion_counts: dict[Emotion, int] = field(default_factory=dict)
    dominant_emotion: Emotion | None = None
    intensity_by_emotion: dict[Emotion, float] = field(default_factory=dict)
    high_intensity_count: int = 0
    entries_per_day: dict[date, int] = field(default_factory=dict)
    top_triggers: list[tuple[str, int]] = field(default_factory=list)


def _normalize_trigger(text: str) -> str:
    return " ".join(text.lower().split())


def compute_stats(entries: Iterable[JournalEntry], top_n: int = 5) -> JournalStats:
    entries = list(entries)
    emotion_counts = {emotion: 0 for emotion in Emotion}
    if not entries:
        return JournalStats(emotion_counts=emotion_counts)

    intensities: dict[Emotion, list[int]] = defaultdict(list)
    per_day: Counter[date] = Counter()
    triggers: Counter[str] = Counter()

    for entry in entries:
        emotion_counts[entry.emotion] += 1
        intensities[entry.emotion].append(entry.intensity)
        per_day[local_day(entry.date)] += 1
        trigger = _normalize_trigger(entry.action)
        if trigger:
            triggers[trigger] += 1

    # max() keeps the first maximum, so ties resolve in enum order
    dominant = max(Emotion, key=lambda e: emotion_counts[e])

    return JournalStats(
        total=len(entries),
        average_intensity=round(sum(e.intensity for e in entries) / len(entries), 1),
        emotion_counts=emotion_counts,
        dominant_emotion=dominant,
        intensity_by_emotion={
            emotion: round(sum(values) / len(values), 1) for emotion, values in intensities.items()
        },
        high_intensity_count=sum(1 for e in entries if e.intensity >= HIGH_INTENSITY_THRESHOLD),
        entries_per_day=dict(sorted(per_day.items())),
        top_triggers=triggers.most_common(top_n),
    )
