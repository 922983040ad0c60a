"""Entry store — per-profile journal collections.

Each profile's entries live under ``moodmorph_entries_<profile id>`` as one
JSON array, newest first. The pre-profile layout kept a single array under
``moodmorph_entries``; it is still read as a one-time migration source and is
where the active view writes while no profile exists.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from loguru import logger

from moodmorph.core.exceptions import EntryNotFoundError
from moodmorph.core.storage import KeyValueStore

from .models import JournalEntry
from .ranges import DateRange, select_for_deletion

ENTRIES_KEY_PREFIX = "moodmorph_entries_"
LEGACY_ENTRIES_KEY = "moodmorph_entries"


def entries_key(profile_id: str | None) -> str:
    """Storage key for a profile's entries; None maps to the legacy key."""
    return f"{ENTRIES_KEY_PREFIX}{profile_id}" if profile_id else LEGACY_ENTRIES_KEY


def decode_entries(raw: Iterable) -> list[JournalEntry]:
    return [JournalEntry.from_dict(item) for item in raw]


def encode_entries(entries: Iterable[JournalEntry]) -> list[dict]:
    return [entry.to_dict() for entry in entries]


class EntryStore:
    """Reads and writes entry collections, and holds the active profile's view.

    ``load``/``save``/``drop`` work on any profile. ``open`` selects the active
    collection; ``add``/``update``/``remove``/``delete_range`` change it and
    persist the whole collection on every call.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._profile_id: str | None = None
        self._entries: list[JournalEntry] = []

    # ------------------------------------------------------------------
    # Any profile
    # ------------------------------------------------------------------

    def load(self, profile_id: str | None, legacy_fallback: bool = True) -> list[JournalEntry]:
        """Return the stored entries for ``profile_id`` (empty if none).

        With ``legacy_fallback`` and no profile-scoped key yet, the legacy
        collection is read and copied to the profile's key.
        """
        raw = self.store.get(entries_key(profile_id))
        if raw is not None:
            return decode_entries(raw)
        if not (legacy_fallback and profile_id):
            return []

        legacy = self.store.get(LEGACY_ENTRIES_KEY)
        if legacy is None:
            return []
        entries = decode_entries(legacy)
        self.save(profile_id, entries)
        logger.info(f"Migrated {len(entries)} legacy entries to profile {profile_id}")
        return entries

    def save(self, profile_id: str | None, entries: Iterable[JournalEntry]) -> None:
        entries = list(entries)
        self.store.set(entries_key(profile_id), encode_entries(entries))
        if profile_id == self._profile_id:
            self._entries = entries

    def drop(self, profile_id: str) -> None:
        """Delete a profile's whole collection."""
        self.store.remove(entries_key(profile_id))
        if profile_id == self._profile_id:
            self._entries = []

    # ------------------------------------------------------------------
    # Active view
    # ------------------------------------------------------------------

    @property
    def profile_id(self) -> str | None:
        return self._profile_id

    @property
    def entries(self) -> list[JournalEntry]:
        return list(self._entries)

    def open(self, profile_id: str | None, legacy_fallback: bool = False) -> list[JournalEntry]:
        """Make ``profile_id`` the active collection and load it."""
        self._profile_id = profile_id
        self._entries = self.load(profile_id, legacy_fallback=legacy_fallback)
        logger.debug(f"Opened {len(self._entries)} entries for profile {profile_id}")
        return self.entries

    def get(self, entry_id: str) -> JournalEntry:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise EntryNotFoundError(f"No entry with id '{entry_id}'")

    def add(self, entry: JournalEntry) -> None:
        """Prepend a new entry."""
        self._commit([entry, *self._entries])

    def update(self, entry_id: str, entry: JournalEntry) -> None:
        """Replace the entry with ``entry_id`` in place."""
        index = next((i for i, e in enumerate(self._entries) if e.id == entry_id), None)
        if index is None:
            raise EntryNotFoundError(f"No entry with id '{entry_id}'")
        updated = list(self._entries)
        updated[index] = entry
        self._commit(updated)

    def remove(self, entry_id: str) -> bool:
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._commit(remaining)
        return True

    def replace_all(self, entries: Iterable[JournalEntry]) -> None:
        self._commit(list(entries))

    def delete_range(self, date_range: DateRange, now: datetime | None = None) -> int:
        """Bulk delete over ``date_range``. Returns how many entries were removed."""
        retained = select_for_deletion(self._entries, date_range, now=now)
        removed = len(self._entries) - len(retained)
        self._commit(retained)
        logger.info(f"Deleted {removed} entries ({date_range.kind}) from profile {self._profile_id}")
        return removed

    def _commit(self, entries: list[JournalEntry]) -> None:
        self._entries = entries
        self.store.set(entries_key(self._profile_id), encode_entries(entries))
