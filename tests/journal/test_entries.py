"""Tests for the per-profile entry store."""

from datetime import timedelta

import pytest

from moodmorph.core.exceptions import EntryNotFoundError
from moodmorph.journal.entries import LEGACY_ENTRIES_KEY, EntryStore, encode_entries, entries_key
from moodmorph.journal.ranges import DateRange, RangeKind


@pytest.fixture
def entry_store(store):
    return EntryStore(store)


class TestKeys:
    def test_scoped_key(self):
        assert entries_key("p1") == "moodmorph_entries_p1"

    def test_no_profile_uses_legacy_key(self):
        assert entries_key(None) == LEGACY_ENTRIES_KEY == "moodmorph_entries"


class TestLoadSave:
    def test_load_missing(self, entry_store):
        assert entry_store.load("p1") == []

    def test_save_and_load(self, entry_store, make_entry, now):
        entries = [make_entry("e1", now), make_entry("e2", now - timedelta(days=1))]
        entry_store.save("p1", entries)
        assert entry_store.load("p1") == entries

    def test_profiles_are_isolated(self, entry_store, make_entry, now):
        entry_store.save("p1", [make_entry("e1", now)])
        entry_store.save("p2", [make_entry("e2", now)])
        assert [e.id for e in entry_store.load("p1")] == ["e1"]
        assert [e.id for e in entry_store.load("p2")] == ["e2"]

    def test_legacy_migration(self, entry_store, store, make_entry, now):
        legacy = [make_entry("old1", now), make_entry("old2", now)]
        store.set(LEGACY_ENTRIES_KEY, encode_entries(legacy))

        assert entry_store.load("p1") == legacy
        assert store.contains(entries_key("p1"))

    def test_legacy_ignored_when_scoped_key_exists(self, entry_store, store, make_entry, now):
        store.set(LEGACY_ENTRIES_KEY, encode_entries([make_entry("old", now)]))
        entry_store.save("p1", [])
        assert entry_store.load("p1") == []

    def test_legacy_fallback_disabled(self, entry_store, store, make_entry, now):
        store.set(LEGACY_ENTRIES_KEY, encode_entries([make_entry("old", now)]))
        assert entry_store.load("p1", legacy_fallback=False) == []
        assert not store.contains(entries_key("p1"))

    def test_drop(self, entry_store, store, make_entry, now):
        entry_store.save("p1", [make_entry("e1", now)])
        entry_store.drop("p1")
        assert not store.contains(entries_key("p1"))

    def test_save_refreshes_active_view(self, entry_store, make_entry, now):
        entry_store.open("p1")
        entry_store.save("p1", [make_entry("e1", now)])
        assert [e.id for e in entry_store.entries] == ["e1"]

    def test_save_other_profile_leaves_view(self, entry_store, make_entry, now):
        entry_store.open("p1")
        entry_store.save("p2", [make_entry("e1", now)])
        assert entry_store.entries == []


class TestActiveView:
    @pytest.fixture
    def view(self, entry_store):
        entry_store.open("p1")
        return entry_store

    def test_add_prepends_and_persists(self, view, store, make_entry, now):
        view.add(make_entry("e1", now - timedelta(hours=2)))
        view.add(make_entry("e2", now))
        assert [e.id for e in view.entries] == ["e2", "e1"]
        assert [e["id"] for e in store.get(entries_key("p1"))] == ["e2", "e1"]

    def test_entries_returns_copy(self, view, make_entry, now):
        view.add(make_entry("e1", now))
        view.entries.clear()
        assert len(view.entries) == 1

    def test_get(self, view, make_entry, now):
        entry = make_entry("e1", now)
        view.add(entry)
        assert view.get("e1") == entry
        with pytest.raises(EntryNotFoundError):
            view.get("missing")

    def test_update_in_place(self, view, make_entry, now):
        view.add(make_entry("e1", now))
        view.add(make_entry("e2", now))
        view.update("e1", make_entry("e1", now, action="changed", intensity=9))
        assert [e.id for e in view.entries] == ["e2", "e1"]
        assert view.get("e1").action == "changed"
        assert view.get("e1").intensity == 9

    def test_update_missing(self, view, make_entry, now):
        with pytest.raises(EntryNotFoundError):
            view.update("nope", make_entry("nope", now))

    def test_remove(self, view, make_entry, now):
        view.add(make_entry("e1", now))
        assert view.remove("e1") is True
        assert view.remove("e1") is False
        assert view.entries == []

    def test_delete_range_counts_removed(self, view, store, make_entry, now):
        view.replace_all([make_entry("today", now), make_entry("old", now - timedelta(days=10))])
        removed = view.delete_range(DateRange(RangeKind.LAST_7_DAYS), now=now)
        assert removed == 1
        assert [e.id for e in view.entries] == ["old"]
        assert [e["id"] for e in store.get(entries_key("p1"))] == ["old"]

    def test_delete_range_all(self, view, make_entry, now):
        view.replace_all([make_entry("a", now), make_entry("b", now)])
        assert view.delete_range(DateRange(RangeKind.ALL), now=now) == 2
        assert view.entries == []

    def test_no_profile_writes_legacy_key(self, entry_store, store, make_entry, now):
        entry_store.open(None)
        entry_store.add(make_entry("e1", now))
        assert [e["id"] for e in store.get(LEGACY_ENTRIES_KEY)] == ["e1"]
