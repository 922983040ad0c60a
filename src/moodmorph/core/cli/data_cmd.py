"""moodmorph import / export / purge — move data in and out, bulk delete."""

from __future__ import annotations

import sys
from pathlib import Path

import click

RANGE_CHOICES = ["7d", "30d", "all", "custom"]


def _build_range(kind: str, start: str | None, end: str | None):
    from moodmorph.journal import DateRange

    try:
        return DateRange.parse(kind, start, end)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--switch/--no-switch", default=None, help="Switch to an imported profile without asking.")
@click.pass_context
def import_(ctx: click.Context, file: str, switch: bool | None) -> None:
    """Import a MoodMorph export package or a legacy entry list."""
    from moodmorph.core.cli.common import open_session
    from moodmorph.core.exceptions import InvalidImportError
    from moodmorph.journal.i18n import translate

    session = open_session(ctx)
    try:
        result = session.import_text(Path(file).read_bytes())
    except InvalidImportError as e:
        click.echo(f"{translate('invalidData', session.language)} ({e})")
        sys.exit(1)

    if result.kind == "legacy":
        if result.added:
            click.echo(f"{translate('dataImported', session.language)} ({len(result.added)} new entries)")
        else:
            click.echo(translate("importNoNew", session.language))
        return

    click.echo(
        f"{translate('dataImported', session.language)} "
        f"({len(result.added)} new, {len(result.updated)} updated for '{result.profile.name}')"
    )
    if result.switch_suggested:
        if switch is None:
            prompt = translate("importProfileAddedDesc", session.language, name=result.profile.name)
            switch = click.confirm(prompt, default=False)
        if switch:
            session.switch_profile(result.profile.id)
            click.echo(f"Switched to '{result.profile.name}'.")


@click.command()
@click.option("--range", "range_kind", type=click.Choice(RANGE_CHOICES), default="30d", show_default=True)
@click.option("--start", help="First day of a custom range (YYYY-MM-DD).")
@click.option("--end", help="Last day of a custom range (YYYY-MM-DD).")
@click.option("--legacy", is_flag=True, help="Dump the raw entry list without profile data.")
@click.option("-o", "--output", type=click.Path(), help="File or directory to write to.")
@click.pass_context
def export(
    ctx: click.Context, range_kind: str, start: str | None, end: str | None, legacy: bool, output: str | None
) -> None:
    """Export the current profile's entries as a JSON file."""
    from moodmorph.core.cli.common import ensure_profile, open_session
    from moodmorph.core.exceptions import ExportError
    from moodmorph.journal.exporter import export_filename, legacy_filename, package_to_json, write_export

    session = open_session(ctx)
    ensure_profile(session)

    if legacy:
        text = session.export_legacy()
        filename = legacy_filename()
        count = len(session.entries)
    else:
        package = session.export_package(_build_range(range_kind, start, end))
        text = package_to_json(package)
        filename = export_filename(package.user)
        count = len(package.entries)

    target = Path(output) if output else Path.cwd() / filename
    if target.is_dir():
        target = target / filename

    try:
        path = write_export(target, text)
    except ExportError as e:
        click.echo(str(e))
        sys.exit(1)
    click.echo(f"Exported {count} entries to {path}")


@click.command()
@click.option("--range", "range_kind", type=click.Choice(RANGE_CHOICES), default="30d", show_default=True)
@click.option("--start", help="First day of a custom range (YYYY-MM-DD).")
@click.option("--end", help="Last day of a custom range (YYYY-MM-DD).")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@click.pass_context
def purge(ctx: click.Context, range_kind: str, start: str | None, end: str | None, yes: bool) -> None:
    """Delete entries over a date range.

    For 7d and 30d this removes the entries from the last 7 or 30 days and
    keeps everything older.
    """
    from moodmorph.core.cli.common import ensure_profile, open_session
    from moodmorph.journal.i18n import translate

    date_range = _build_range(range_kind, start, end)
    session = open_session(ctx)
    ensure_profile(session)

    if not yes and not click.confirm(f"Delete entries for range '{range_kind}'? This cannot be undone."):
        click.echo("Aborted.")
        return

    removed = session.delete_range(date_range)
    click.echo(f"{translate('dataDeleted', session.language)} ({removed} entries)")
