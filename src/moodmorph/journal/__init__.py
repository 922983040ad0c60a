"""Journal domain: profiles, entries, import/export, filtering, stats and insights.

Everything persists through an injectable ``KeyValueStore``; ``JournalSession``
ties the pieces together the way the app uses them.
"""

from .entries import EntryStore
from .importer import (
    ImportReconciler,
    ImportResult,
    InvalidImport,
    LegacyImport,
    PackageImport,
    merge_legacy_entries,
    merge_package_entries,
    parse_import,
    parse_import_text,
)
from .insights import Insight, InsightService
from .models import Emotion, ExportPackage, JournalEntry, Profile
from .profiles import ProfileRegistry
from .ranges import DateRange, RangeKind, select_for_deletion, select_for_export
from .search import filter_entries
from .session import JournalSession, OnboardingRequiredError
from .stats import JournalStats, compute_stats

__all__ = [
    "DateRange",
    "Emotion",
    "EntryStore",
    "ExportPackage",
    "ImportReconciler",
    "ImportResult",
    "Insight",
    "InsightService",
    "InvalidImport",
    "JournalEntry",
    "JournalSession",
    "JournalStats",
    "LegacyImport",
    "OnboardingRequiredError",
    "PackageImport",
    "Profile",
    "ProfileRegistry",
    "RangeKind",
    "compute_stats",
    "filter_entries",
    "merge_legacy_entries",
    "merge_package_entries",
    "parse_import",
    "parse_import_text",
    "select_for_deletion",
    "select_for_export",
]
