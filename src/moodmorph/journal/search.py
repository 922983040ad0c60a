"""Entry filtering for the journal view.

``filter_entries`` is a pure function of the entries and the current filter
state: a free-text search term and the active calendar day. Input order is
preserved; nothing is re-sorted.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from .i18n import DEFAULT_LANGUAGE, emotion_label
from .models import JournalEntry, local_day


def matches_search(entry: JournalEntry, search_term: str, language: str = DEFAULT_LANGUAGE) -> bool:
    """Case-insensitive substring match on trigger, reaction, result or emotion label."""
    if not search_term:
        return True
    needle = search_term.lower()
    haystacks = (
        entry.action,
        entry.reaction,
        entry.result,
        emotion_label(entry.emotion, language),
    )
    return any(needle in text.lower() for text in haystacks)


def matches_day(entry: JournalEntry, active_date: date | datetime | None) -> bool:
    """Whether the entry falls on ``active_date``'s local calendar day.

    An unset ``active_date`` matches nothing.
    """
    if active_date is None:
        return False
    if isinstance(active_date, datetime):
        active_date = local_day(active_date)
    return local_day(entry.date) == active_date


def filter_entries(
    entries: Iterable[JournalEntry],
    search_term: str = "",
    active_date: date | datetime | None = None,
    language: str = DEFAULT_LANGUAGE,
    *,
    match_all_dates: bool = False,
) -> list[JournalEntry]:
    """Entries matching both the search term and the active day.

    Args:
        entries: Collection in display order.
        search_term: Free text; empty matches everything.
        active_date: Day to show. None matches no entries unless
            ``match_all_dates`` is set.
        language: Language used to resolve emotion labels for the search.
        match_all_dates: Skip the day filter entirely.
    """
    return [
        entry
        for entry in entries
        if matches_search(entry, search_term, language) and (match_all_dates or matches_day(entry, active_date))
    ]
