"""
MoodMorph exception hierarchy.

All moodmorph exceptions inherit from MoodMorphError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
"""


class MoodMorphError(Exception):
    """Base exception class for all moodmorph errors."""


class ConfigurationError(MoodMorphError):
    """Raised for configuration errors (missing keys, invalid values)."""


class StorageError(MoodMorphError):
    """Base exception for key-value store errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key is malformed or doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when a storage operation is not permitted."""


class StorageQuotaError(StorageError):
    """Raised when the backing medium has no room left for a write."""


class DataProcessingError(MoodMorphError):
    """Raised for data processing errors."""


class InvalidImportError(DataProcessingError):
    """Raised when an import payload is malformed or of an unknown shape."""


class EntryNotFoundError(MoodMorphError, KeyError):
    """Raised when a journal entry id is not in the active collection."""


class ProfileNotFoundError(MoodMorphError, KeyError):
    """Raised when a profile id is not in the registry."""


class ExportError(MoodMorphError):
    """Raised when an export file cannot be written."""


class APIError(MoodMorphError):
    """Raised for API communication errors."""


class LLMError(APIError):
    """Raised when an LLM call fails or its reply cannot be used."""
