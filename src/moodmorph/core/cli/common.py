"""Shared setup logic for CLI commands."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import click

MOODMORPH_DIR = Path.home() / ".moodmorph"
CONFIG_PATH = MOODMORPH_DIR / "config.yaml"


def load_config(ctx: click.Context):
    """Load config from --config, else ~/.moodmorph/config.yaml (if present)."""
    from moodmorph.core.config import Config

    opts = ctx.find_root().obj or {}
    config_file = opts.get("config_file") or str(CONFIG_PATH)
    return Config(config_file=config_file, data_dir=opts.get("data_dir"))


def open_session(ctx: click.Context, *, with_insights: bool = False):
    """Validate config, configure logging and open a JournalSession on the configured store."""
    from moodmorph.core.exceptions import ConfigurationError
    from moodmorph.core.storage import LocalStorage
    from moodmorph.core.utils.logging import log_file_in, setup_logging
    from moodmorph.journal import JournalSession

    opts = ctx.find_root().obj or {}
    try:
        config = load_config(ctx)
        settings = config.validated()
        level = "DEBUG" if opts.get("verbose") else settings.logging.level
        config.ensure_directories()
        setup_logging(level=level, log_file=log_file_in(settings.paths.log_dir))

        store = LocalStorage(base_path=str(settings.paths.store_dir), compress=settings.storage.compress)
        insight_service = _create_insight_service(config, settings.insights.max_entries) if with_insights else None
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}")
        sys.exit(1)

    return JournalSession(store, insight_service=insight_service, language=settings.ui.language)


def _create_insight_service(config, max_entries: int):
    from loguru import logger

    from moodmorph.core.llm import LLMClient
    from moodmorph.journal import InsightService

    client = LLMClient.from_config(config)
    logger.debug(f"Insight client: {client.get_config_info()}")
    return InsightService(client=client, max_entries=max_entries)


def ensure_profile(session) -> None:
    """Exit with a hint when no profile has been created yet."""
    if session.needs_onboarding:
        click.echo("No profile yet. Run 'moodmorph init NAME' first.")
        sys.exit(1)


def resolve_entry(session, entry_ref: str):
    """Find an entry by full id or unique id prefix, or exit."""
    from moodmorph.core.exceptions import EntryNotFoundError

    try:
        return session.entry_store.get(entry_ref)
    except EntryNotFoundError:
        pass
    matches = [e for e in session.entries if e.id.startswith(entry_ref)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        click.echo(f"No entry matches '{entry_ref}'.")
    else:
        click.echo(f"'{entry_ref}' matches {len(matches)} entries; use more characters.")
    sys.exit(1)


def parse_day(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD option value."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a date in YYYY-MM-DD format") from None


def short_id(entry_id: str) -> str:
    return entry_id[:8]
