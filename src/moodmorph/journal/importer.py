"""Import reconciliation for data files.

Parsing and applying are separate steps. ``parse_import`` classifies a
decoded JSON value into exactly one of three variants before anything is
touched:

- ``PackageImport`` — an export package: ``{"user": {...}, "entries": [...]}``
- ``LegacyImport`` — a bare array of entries with no profile attached
- ``InvalidImport`` — anything else, including records that fail validation

The two valid variants use deliberately different merge strategies:
``merge_package_entries`` lets incoming entries overwrite on id collision,
while ``merge_legacy_entries`` only ever adds ids that are not present yet.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from moodmorph.core.exceptions import InvalidImportError

from .entries import EntryStore
from .models import ExportPackage, JournalEntry, Profile
from .profiles import ProfileRegistry


@dataclass(frozen=True)
class PackageImport:
    package: ExportPackage


@dataclass(frozen=True)
class LegacyImport:
    entries: list[JournalEntry]


@dataclass(frozen=True)
class InvalidImport:
    reason: str


ParsedImport = PackageImport | LegacyImport | InvalidImport


def parse_import(data: Any) -> ParsedImport:
    """Classify a decoded JSON value. Never raises."""
    if isinstance(data, dict) and data.get("user") and isinstance(data.get("entries"), list):
        try:
            return PackageImport(ExportPackage.from_dict(data))
        except ValueError as e:
            return InvalidImport(f"Invalid package: {e}")
    if isinstance(data, list):
        try:
            return LegacyImport([JournalEntry.from_dict(item) for item in data])
        except ValueError as e:
            return InvalidImport(f"Invalid entry list: {e}")
    return InvalidImport(f"Unrecognized data of type {type(data).__name__}")


def parse_import_text(text: str | bytes) -> ParsedImport:
    """Decode UTF-8 JSON text and classify it."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return InvalidImport(f"Malformed JSON: {e}")
    return parse_import(data)


def merge_package_entries(
    existing: Iterable[JournalEntry],
    incoming: Iterable[JournalEntry],
) -> list[JournalEntry]:
    """Merge by id; incoming wins on collision.

    Existing entries keep their order (collisions replaced in place), and
    entries with new ids follow in incoming order.
    """
    merged: dict[str, JournalEntry] = {}
    for entry in existing:
        merged[entry.id] = entry
    for entry in incoming:
        merged[entry.id] = entry
    return list(merged.values())


def merge_legacy_entries(
    current: Iterable[JournalEntry],
    incoming: Iterable[JournalEntry],
) -> tuple[list[JournalEntry], list[JournalEntry]]:
    """Add only entries whose ids are new; existing entries are never touched.

    Returns ``(merged, added)``. New entries are prepended in incoming order.
    A repeated id inside ``incoming`` is added once (first occurrence).
    """
    current = list(current)
    seen = {entry.id for entry in current}
    added: list[JournalEntry] = []
    for entry in incoming:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        added.append(entry)
    return [*added, *current], added


@dataclass
class ImportResult:
    """What an import changed.

    Attributes:
        kind: ``"package"`` or ``"legacy"``.
        profile: Target profile (the package's user, or the active profile).
        added: Entries with ids that were not stored before.
        updated: Entries that replaced an existing entry with the same id.
        switch_suggested: The package targets a profile other than the active
            one; the caller may offer to switch to it.
    """

    kind: str
    profile: Profile | None
    added: list[JournalEntry] = field(default_factory=list)
    updated: list[JournalEntry] = field(default_factory=list)
    switch_suggested: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated)


class ImportReconciler:
    """Applies parsed imports to the profile registry and entry store."""

    def __init__(self, profiles: ProfileRegistry, entries: EntryStore):
        self.profiles = profiles
        self.entries = entries

    def apply(self, parsed: ParsedImport) -> ImportResult:
        """Apply a parsed import.

        Raises:
            InvalidImportError: For ``InvalidImport``; nothing is written.
        """
        match parsed:
            case PackageImport(package=package):
                return self.apply_package(package)
            case LegacyImport(entries=incoming):
                return self.apply_legacy(incoming)
            case InvalidImport(reason=reason):
                logger.warning(f"Rejected import: {reason}")
                raise InvalidImportError(reason)
        raise InvalidImportError(f"Unsupported import variant: {type(parsed).__name__}")

    def apply_package(self, package: ExportPackage) -> ImportResult:
        """Upsert the package's profile and merge its entries (incoming wins)."""
        user = package.user
        self.profiles.upsert(user)

        existing = self.entries.load(user.id, legacy_fallback=False)
        existing_ids = {e.id for e in existing}
        merged = merge_package_entries(existing, package.entries)
        self.entries.save(user.id, merged)

        # save() refreshes the active view when the package targets it
        current = self.profiles.get_current()
        is_active = current is not None and current.id == user.id

        incoming = {e.id: e for e in package.entries}.values()
        result = ImportResult(
            kind="package",
            profile=user,
            added=[e for e in incoming if e.id not in existing_ids],
            updated=[e for e in incoming if e.id in existing_ids],
            switch_suggested=not is_active,
        )
        logger.info(
            f"Imported package for profile {user.id} ({user.name}): "
            f"{len(result.added)} added, {len(result.updated)} updated"
        )
        return result

    def apply_legacy(self, incoming: list[JournalEntry]) -> ImportResult:
        """Prepend entries with new ids to the active collection; never overwrite."""
        merged, added = merge_legacy_entries(self.entries.entries, incoming)
        if added:
            self.entries.replace_all(merged)
        logger.info(f"Imported {len(added)} new entries from legacy list ({len(incoming)} in file)")
        return ImportResult(kind="legacy", profile=self.profiles.get_current(), added=added)
