"""moodmorph log / edit / rm / list / stats: work with journal entries."""

from __future__ import annotations

import dataclasses

import click

from moodmorph.journal.models import Emotion

EMOTION_CHOICES = [e.value for e in Emotion]


def _entry_datetime(day):
    """The chosen day at the current local time of day (now when no day given)."""
    from moodmorph.journal.models import now_local

    now = now_local()
    if day is None:
        return now
    return now.replace(year=day.year, month=day.month, day=day.day)


@click.command()
@click.option("-t", "--trigger", required=True, help="What happened.")
@click.option(
    "-e", "--emotion", type=click.Choice(EMOTION_CHOICES, case_sensitive=False), default="Neutral", show_default=True
)
@click.option("-i", "--intensity", type=click.IntRange(1, 10), default=5, show_default=True)
@click.option("-r", "--reaction", default="", help="How you reacted.")
@click.option("--result", default="", help="What came of it.")
@click.option("--date", "day", help="Day of the event (YYYY-MM-DD). Defaults to today.")
@click.pass_context
def log(
    ctx: click.Context, trigger: str, emotion: str, intensity: int, reaction: str, result: str, day: str | None
) -> None:
    """Log a new entry."""
    from moodmorph.core.cli.common import ensure_profile, open_session, parse_day, short_id
    from moodmorph.journal import JournalEntry

    session = open_session(ctx)
    ensure_profile(session)
    entry = JournalEntry.new(
        action=trigger,
        emotion=emotion,
        intensity=intensity,
        reaction=reaction,
        result=result,
        when=_entry_datetime(parse_day(day)),
    )
    session.add_entry(entry)
    click.echo(f"Logged entry {short_id(entry.id)}.")


@click.command()
@click.argument("entry_ref")
@click.option("-t", "--trigger", help="New trigger text.")
@click.option("-e", "--emotion", type=click.Choice(EMOTION_CHOICES, case_sensitive=False))
@click.option("-i", "--intensity", type=click.IntRange(1, 10))
@click.option("-r", "--reaction")
@click.option("--result")
@click.option("--date", "day", help="Move the entry to another day (YYYY-MM-DD).")
@click.pass_context
def edit(
    ctx: click.Context,
    entry_ref: str,
    trigger: str | None,
    emotion: str | None,
    intensity: int | None,
    reaction: str | None,
    result: str | None,
    day: str | None,
) -> None:
    """Edit the entry ENTRY_REF (full id or unique prefix)."""
    from moodmorph.core.cli.common import ensure_profile, open_session, parse_day, resolve_entry, short_id

    session = open_session(ctx)
    ensure_profile(session)
    entry = resolve_entry(session, entry_ref)

    changes: dict = {}
    if trigger is not None:
        changes["action"] = trigger
    if emotion is not None:
        changes["emotion"] = Emotion.parse(emotion)
    if intensity is not None:
        changes["intensity"] = intensity
    if reaction is not None:
        changes["reaction"] = reaction
    if result is not None:
        changes["result"] = result
    new_day = parse_day(day)
    if new_day is not None:
        local = entry.date.astimezone()
        changes["date"] = local.replace(year=new_day.year, month=new_day.month, day=new_day.day)

    if not changes:
        click.echo("Nothing to change.")
        return
    session.edit_entry(dataclasses.replace(entry, **changes))
    click.echo(f"Updated entry {short_id(entry.id)}.")


@click.command()
@click.argument("entry_ref")
@click.pass_context
def rm(ctx: click.Context, entry_ref: str) -> None:
    """Delete the entry ENTRY_REF (full id or unique prefix)."""
    from moodmorph.core.cli.common import ensure_profile, open_session, resolve_entry, short_id

    session = open_session(ctx)
    ensure_profile(session)
    entry = resolve_entry(session, entry_ref)
    session.delete_entry(entry.id)
    click.echo(f"Deleted entry {short_id(entry.id)}.")


@click.command("list")
@click.option("--date", "day", help="Day to show (YYYY-MM-DD). Defaults to today.")
@click.option("--all-dates", is_flag=True, help="Show entries from every day.")
@click.option("-s", "--search", default="", help="Filter by text in trigger, reaction, result or emotion.")
@click.pass_context
def list_(ctx: click.Context, day: str | None, all_dates: bool, search: str) -> None:
    """Show entries for a day, newest first."""
    from rich.console import Console
    from rich.table import Table

    from moodmorph.core.cli.common import ensure_profile, open_session, parse_day, short_id
    from moodmorph.journal.i18n import emotion_label
    from moodmorph.journal.models import now_local

    session = open_session(ctx)
    ensure_profile(session)
    active_day = parse_day(day) or now_local().date()
    shown = session.filtered(search, active_day, match_all_dates=all_dates)

    scope = "all days" if all_dates else active_day.isoformat()
    if not shown:
        click.echo(f"No entries for {scope}.")
        return

    table = Table(title=f"{session.current_profile.name}: {scope} ({len(shown)} entries)")
    table.add_column("id", style="dim")
    table.add_column("when")
    table.add_column("trigger")
    table.add_column("emotion")
    table.add_column("int", justify="right")
    table.add_column("reaction")
    table.add_column("result")
    for entry in shown:
        table.add_row(
            short_id(entry.id),
            f"{entry.date.astimezone():%Y-%m-%d %H:%M}",
            entry.action,
            emotion_label(entry.emotion, session.language),
            str(entry.intensity),
            entry.reaction,
            entry.result,
        )
    Console().print(table)


@click.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show statistics for the current profile."""
    from moodmorph.core.cli.common import ensure_profile, open_session
    from moodmorph.journal.i18n import emotion_label

    session = open_session(ctx)
    ensure_profile(session)
    summary = session.stats()
    if summary.total == 0:
        click.echo("No entries yet.")
        return

    click.echo(f"Entries:            {summary.total}")
    click.echo(f"Average intensity:  {summary.average_intensity}")
    click.echo(f"High intensity:     {summary.high_intensity_count}")
    click.echo(f"Dominant emotion:   {emotion_label(summary.dominant_emotion, session.language)}")
    click.echo("\nBy emotion:")
    for emotion, count in summary.emotion_counts.items():
        if count:
            avg = summary.intensity_by_emotion.get(emotion, 0.0)
            click.echo(f"  {emotion_label(emotion, session.language):<12} {count:>4}  (avg {avg})")
    if summary.top_triggers:
        click.echo("\nTop triggers:")
        for trigger, count in summary.top_triggers:
            click.echo(f"  {count:>4}  {trigger}")
