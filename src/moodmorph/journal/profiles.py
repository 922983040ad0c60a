"""Profile registry — the list of local profiles and the current-profile pointer.

Both are persisted after every mutation: the full list under
``moodmorph_profiles`` and the current profile under ``moodmorph_current_user``.
"""

from __future__ import annotations

from loguru import logger

from moodmorph.core.exceptions import ProfileNotFoundError
from moodmorph.core.storage import KeyValueStore

from .models import Profile

PROFILES_KEY = "moodmorph_profiles"
CURRENT_PROFILE_KEY = "moodmorph_current_user"


class ProfileRegistry:
    """Ordered collection of profiles keyed by id, with one optional current profile.

    Removing the current profile does not choose a replacement; that is the
    caller's decision (see ``JournalSession.delete_profile``).
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._profiles: list[Profile] = [Profile.from_dict(p) for p in store.get(PROFILES_KEY) or []]
        current = store.get(CURRENT_PROFILE_KEY)
        self._current: Profile | None = Profile.from_dict(current) if current else None

    def list_profiles(self) -> list[Profile]:
        return list(self._profiles)

    def get(self, profile_id: str) -> Profile:
        for profile in self._profiles:
            if profile.id == profile_id:
                return profile
        raise ProfileNotFoundError(f"No profile with id '{profile_id}'")

    def __contains__(self, profile_id: str) -> bool:
        return any(p.id == profile_id for p in self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def upsert(self, profile: Profile) -> None:
        """Insert ``profile``, or replace the stored profile with the same id in place."""
        for index, existing in enumerate(self._profiles):
            if existing.id == profile.id:
                self._profiles[index] = profile
                logger.debug(f"Updated profile {profile.id} ({profile.name})")
                break
        else:
            self._profiles.append(profile)
            logger.debug(f"Added profile {profile.id} ({profile.name})")

        if self._current and self._current.id == profile.id:
            self._current = profile
            self._persist_current()
        self._persist_profiles()

    def remove(self, profile_id: str) -> bool:
        """Drop a profile from the list. Returns False if it wasn't registered."""
        remaining = [p for p in self._profiles if p.id != profile_id]
        if len(remaining) == len(self._profiles):
            return False
        self._profiles = remaining
        self._persist_profiles()
        logger.debug(f"Removed profile {profile_id}")
        return True

    def set_current(self, profile: Profile | None) -> None:
        self._current = profile
        self._persist_current()

    def get_current(self) -> Profile | None:
        return self._current

    def _persist_profiles(self) -> None:
        self.store.set(PROFILES_KEY, [p.to_dict() for p in self._profiles])

    def _persist_current(self) -> None:
        if self._current is None:
            self.store.remove(CURRENT_PROFILE_KEY)
        else:
            self.store.set(CURRENT_PROFILE_KEY, self._current.to_dict())
