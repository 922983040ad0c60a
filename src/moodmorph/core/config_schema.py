"""Pydantic models for config validation.

``Config.validated()`` turns the merged ``config_data`` dict into a
``MoodMorphConfig``. Dict-based access through ``Config.get`` keeps working;
the CLI validates once at start-up so a bad value fails with one clear message
instead of deep inside a command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class PathsConfig(BaseModel):
    """Where the store and the logs live."""

    data_dir: Path
    store_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "store_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @model_validator(mode="after")
    def _fill_from_data_dir(self) -> PathsConfig:
        if self.store_dir is None:
            self.store_dir = self.data_dir / "store"
        if self.log_dir is None:
            self.log_dir = self.data_dir / "logs"
        return self


class LLMConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    model: str = "gemini/gemini-2.5-flash"
    fallback_model: str = ""
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    timeout: int = Field(default=60, gt=0)


class StorageConfig(BaseModel):
    compress: bool = False


class InsightsConfig(BaseModel):
    max_entries: int = Field(default=20, ge=1)


class UIConfig(BaseModel):
    language: Literal["en", "fa"] = "en"

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class LoggingConfig(BaseModel):
    level: str = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _known_level(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}; choose one of {', '.join(LOG_LEVELS)}")
        return level


class MoodMorphConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so unknown sections survive validation untouched.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.moodmorph-data"))
    llm: LLMConfig = LLMConfig()
    storage: StorageConfig = StorageConfig()
    insights: InsightsConfig = InsightsConfig()
    ui: UIConfig = UIConfig()
    logging: LoggingConfig = LoggingConfig()
