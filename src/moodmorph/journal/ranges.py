"""Date range policy shared by bulk deletion and export.

The same four choices (last 7 days, last 30 days, all time, custom) drive two
opposite selections, so they live in two separately named functions:

- ``select_for_export`` keeps entries *strictly after* the cutoff (recent data).
- ``select_for_deletion`` returns what survives a delete. For the "last N days"
  choices it keeps entries *not after* the cutoff, which means the recent
  N days are the ones removed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import StrEnum

from .models import JournalEntry, now_local


class RangeKind(StrEnum):
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    ALL = "all"
    CUSTOM = "custom"


_WINDOW_DAYS = {
    RangeKind.LAST_7_DAYS: 7,
    RangeKind.LAST_30_DAYS: 30,
}


@dataclass(frozen=True)
class DateRange:
    """A range choice. ``start``/``end`` are required for, and only used by, CUSTOM."""

    kind: RangeKind
    start: date | None = None
    end: date | None = None

    def __post_init__(self):
        if self.kind == RangeKind.CUSTOM:
            if self.start is None or self.end is None:
                raise ValueError("A custom range needs both a start and an end date")
            if self.start > self.end:
                raise ValueError(f"Range start {self.start} is after end {self.end}")

    @classmethod
    def parse(cls, kind: str, start: str | date | None = None, end: str | date | None = None) -> DateRange:
        """Build a range from CLI-style values (``"7d"``, ``"2024-01-01"``)."""
        try:
            range_kind = RangeKind(kind)
        except ValueError:
            raise ValueError(
                f"Unknown range '{kind}'. Choose one of: {', '.join(k.value for k in RangeKind)}"
            ) from None
        return cls(kind=range_kind, start=_as_date(start), end=_as_date(end))

    @property
    def window_days(self) -> int | None:
        return _WINDOW_DAYS.get(self.kind)

    def cutoff(self, now: datetime | None = None) -> datetime:
        """``now`` minus the window, for the "last N days" kinds."""
        days = self.window_days
        if days is None:
            raise ValueError(f"Range '{self.kind}' has no rolling cutoff")
        return (now or now_local()) - timedelta(days=days)

    def bounds(self) -> tuple[datetime, datetime]:
        """Local ``[start 00:00:00, end 23:59:59.999999]`` for a custom range."""
        if self.kind != RangeKind.CUSTOM:
            raise ValueError(f"Range '{self.kind}' has no fixed bounds")
        lower = datetime.combine(self.start, time.min).astimezone()
        upper = datetime.combine(self.end, time.max).astimezone()
        return lower, upper


def _as_date(value: str | date | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def select_for_export(
    entries: Iterable[JournalEntry],
    date_range: DateRange,
    now: datetime | None = None,
) -> list[JournalEntry]:
    """Entries to include in an export, in their original order."""
    entries = list(entries)
    if date_range.kind == RangeKind.ALL:
        return entries
    if date_range.kind == RangeKind.CUSTOM:
        lower, upper = date_range.bounds()
        return [e for e in entries if lower <= e.date <= upper]
    cutoff = date_range.cutoff(now)
    return [e for e in entries if e.date > cutoff]


def select_for_deletion(
    entries: Iterable[JournalEntry],
    date_range: DateRange,
    now: datetime | None = None,
) -> list[JournalEntry]:
    """Entries that survive a bulk delete over ``date_range``, in their original order."""
    entries = list(entries)
    if date_range.kind == RangeKind.ALL:
        return []
    if date_range.kind == RangeKind.CUSTOM:
        lower, upper = date_range.bounds()
        return [e for e in entries if e.date < lower or e.date > upper]
    cutoff = date_range.cutoff(now)
    return [e for e in entries if not e.date > cutoff]
