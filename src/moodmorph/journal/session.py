"""Journal session: the application controller.

Owns a ``ProfileRegistry`` and an ``EntryStore`` over one key-value store and
implements every user action: onboarding, profile switching and deletion,
entry CRUD, bulk delete, import, export, statistics and insights. Each call
runs to completion and persists before returning.
"""

from __future__ import annotations

from datetime import date, datetime

from loguru import logger

from moodmorph.core.exceptions import MoodMorphError, ProfileNotFoundError
from moodmorph.core.storage import KeyValueStore

from .entries import LEGACY_ENTRIES_KEY, EntryStore
from .exporter import build_package, legacy_dump
from .i18n import DEFAULT_LANGUAGE
from .importer import ImportReconciler, ImportResult, parse_import_text
from .insights import Insight, InsightService
from .models import ExportPackage, JournalEntry, Profile
from .profiles import ProfileRegistry
from .ranges import DateRange
from .search import filter_entries
from .stats import JournalStats, compute_stats


class OnboardingRequiredError(MoodMorphError):
    """Raised when an action needs a current profile and none exists yet."""


class JournalSession:
    """Single-user journal over a key-value store.

    Example::

        session = JournalSession(MemoryStore())
        session.onboard("Sara")
        session.add_entry(JournalEntry.new("missed the bus", "Frustrated", 6))
    """

    def __init__(
        self,
        store: KeyValueStore,
        insight_service: InsightService | None = None,
        language: str = DEFAULT_LANGUAGE,
    ):
        self.store = store
        self.language = language
        self.profiles = ProfileRegistry(store)
        self.entry_store = EntryStore(store)
        self.reconciler = ImportReconciler(self.profiles, self.entry_store)
        self._insight_service = insight_service

        current = self.profiles.get_current()
        # First load after the profile-scoped layout may still find data under the legacy key
        self.entry_store.open(current.id if current else None, legacy_fallback=True)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    @property
    def current_profile(self) -> Profile | None:
        return self.profiles.get_current()

    @property
    def needs_onboarding(self) -> bool:
        return self.profiles.get_current() is None

    def require_profile(self) -> Profile:
        profile = self.profiles.get_current()
        if profile is None:
            raise OnboardingRequiredError("No profile yet. Create one first.")
        return profile

    def onboard(self, name: str) -> Profile:
        """Create a profile and make it current.

        The first profile adopts the entries kept under the legacy key before
        any profile existed.
        """
        if not name or not name.strip():
            raise ValueError("Profile name cannot be empty")
        pending = self.entry_store.entries if self.needs_onboarding else []

        profile = Profile.new(name)
        self.profiles.upsert(profile)
        self.profiles.set_current(profile)
        self.entry_store.open(profile.id)
        # Scoped key is written even when empty; a missing key triggers the legacy fallback on load
        self.entry_store.replace_all(pending)

        logger.info(f"Created profile {profile.id} ({profile.name}) with {len(self.entry_store.entries)} entries")
        return profile

    def switch_profile(self, profile_id: str) -> Profile:
        """Make another registered profile current and load its own entries."""
        profile = self.profiles.get(profile_id)
        self.profiles.set_current(profile)
        self.entry_store.open(profile.id)
        logger.info(f"Switched to profile {profile.id} ({profile.name})")
        return profile

    def delete_profile(self, profile_id: str) -> Profile | None:
        """Delete a profile and its entries.

        If it was current, the first remaining profile becomes current; with
        none left the session returns to onboarding and the legacy key is
        cleared. Deleting any other profile, including before onboarding,
        leaves the current state alone. Returns the profile that is current
        afterwards.
        """
        if not self.profiles.remove(profile_id):
            raise ProfileNotFoundError(f"No profile with id '{profile_id}'")
        self.entry_store.drop(profile_id)

        current = self.profiles.get_current()
        if current is None or current.id != profile_id:
            return current

        remaining = self.profiles.list_profiles()
        if remaining:
            return self.switch_profile(remaining[0].id)

        self.profiles.set_current(None)
        self.store.remove(LEGACY_ENTRIES_KEY)
        self.entry_store.open(None)
        logger.info("Last profile deleted; onboarding required")
        return None

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    @property
    def entries(self) -> list[JournalEntry]:
        return self.entry_store.entries

    def add_entry(self, entry: JournalEntry) -> JournalEntry:
        self.entry_store.add(entry)
        logger.debug(f"Added entry {entry.id}")
        return entry

    def edit_entry(self, entry: JournalEntry) -> JournalEntry:
        """Replace the stored entry that has ``entry.id``, keeping its position."""
        self.entry_store.update(entry.id, entry)
        logger.debug(f"Edited entry {entry.id}")
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        return self.entry_store.remove(entry_id)

    def delete_range(self, date_range: DateRange, now: datetime | None = None) -> int:
        return self.entry_store.delete_range(date_range, now=now)

    def filtered(
        self,
        search_term: str = "",
        active_date: date | datetime | None = None,
        *,
        match_all_dates: bool = False,
    ) -> list[JournalEntry]:
        return filter_entries(
            self.entry_store.entries,
            search_term,
            active_date,
            self.language,
            match_all_dates=match_all_dates,
        )

    def stats(self) -> JournalStats:
        return compute_stats(self.entry_store.entries)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def import_text(self, text: str | bytes) -> ImportResult:
        """Parse and apply an import file's contents.

        Raises:
            InvalidImportError: If the data is malformed; nothing is changed.
        """
        return self.reconciler.apply(parse_import_text(text))

    def export_package(self, date_range: DateRange | None = None, now: datetime | None = None) -> ExportPackage:
        return build_package(self.entry_store.entries, self.require_profile(), date_range, now=now)

    def export_legacy(self) -> str:
        return legacy_dump(self.entry_store.entries)

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    def analyze(self) -> Insight:
        if self._insight_service is None:
            self._insight_service = InsightService()
        return self._insight_service.analyze(self.entry_store.entries, self.language)
