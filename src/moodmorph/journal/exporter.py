"""Export packaging.

Builds profile-scoped ``ExportPackage`` snapshots (and the legacy bare-array
dump), names export files, and writes them to disk.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path

from loguru import logger

from moodmorph.core.exceptions import ExportError

from .models import APP_VERSION, ExportPackage, JournalEntry, Profile, now_local
from .ranges import DateRange, RangeKind, select_for_export

_UNSAFE_NAME_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def build_package(
    entries: Iterable[JournalEntry],
    profile: Profile,
    date_range: DateRange | None = None,
    now: datetime | None = None,
) -> ExportPackage:
    """Snapshot ``profile`` and the entries selected by ``date_range`` (default: all)."""
    now = now or now_local()
    selected = select_for_export(entries, date_range or DateRange(RangeKind.ALL), now=now)
    return ExportPackage(user=profile, entries=selected, exported_at=now, app_version=APP_VERSION)


def package_to_json(package: ExportPackage) -> str:
    return json.dumps(package.to_dict(), indent=2, ensure_ascii=False)


def legacy_dump(entries: Iterable[JournalEntry]) -> str:
    """The raw entry array, without a profile wrapper."""
    return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)


def export_filename(profile: Profile, today: date | None = None) -> str:
    """``MoodMorph_<safe_name>_<YYYY-MM-DD>.json``"""
    safe_name = _UNSAFE_NAME_RE.sub("_", profile.name).lower()
    return f"MoodMorph_{safe_name}_{(today or now_local().date()).isoformat()}.json"


def legacy_filename(today: date | None = None) -> str:
    return f"moodmorph_legacy_{(today or now_local().date()).isoformat()}.json"


def write_export(path: str | Path, text: str) -> Path:
    """Write export text as UTF-8.

    Raises:
        ExportError: If the file can't be written; the message carries the OS error.
    """
    path = Path(path).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error(f"Export to {path} failed: {e}")
        raise ExportError(f"Export failed: {e}") from e
    logger.info(f"Exported {len(text)} characters to {path}")
    return path
