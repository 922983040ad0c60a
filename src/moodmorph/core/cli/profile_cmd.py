"""moodmorph init / profiles — create, list, switch and delete profiles."""

from __future__ import annotations

import sys

import click


@click.command()
@click.argument("name")
@click.pass_context
def init(ctx: click.Context, name: str) -> None:
    """Create a profile and make it the current one."""
    from moodmorph.core.cli.common import open_session

    session = open_session(ctx)
    first = session.needs_onboarding
    try:
        profile = session.onboard(name)
    except ValueError as e:
        click.echo(str(e))
        sys.exit(1)

    click.echo(f"Created profile '{profile.name}' ({profile.id}).")
    if first and session.entries:
        click.echo(f"Moved {len(session.entries)} existing entries into it.")


@click.group()
def profiles() -> None:
    """Manage local profiles."""


@profiles.command("list")
@click.pass_context
def list_profiles(ctx: click.Context) -> None:
    """List profiles; the current one is marked with '*'."""
    from moodmorph.core.cli.common import open_session

    session = open_session(ctx)
    current = session.current_profile
    registered = session.profiles.list_profiles()
    if not registered:
        click.echo("No profiles yet. Run 'moodmorph init NAME' to create one.")
        return
    for profile in registered:
        marker = "*" if current and current.id == profile.id else " "
        count = len(session.entry_store.load(profile.id, legacy_fallback=False))
        click.echo(f"{marker} {profile.id}  {profile.name}  ({count} entries, created {profile.created:%Y-%m-%d})")


@profiles.command("switch")
@click.argument("profile_id")
@click.pass_context
def switch(ctx: click.Context, profile_id: str) -> None:
    """Make PROFILE_ID the current profile."""
    from moodmorph.core.cli.common import open_session
    from moodmorph.core.exceptions import ProfileNotFoundError

    session = open_session(ctx)
    try:
        profile = session.switch_profile(profile_id)
    except ProfileNotFoundError:
        click.echo(f"No profile with id '{profile_id}'.")
        sys.exit(1)
    click.echo(f"Switched to '{profile.name}' ({len(session.entries)} entries).")


@profiles.command("delete")
@click.argument("profile_id")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, profile_id: str, yes: bool) -> None:
    """Delete PROFILE_ID and all of its entries."""
    from moodmorph.core.cli.common import open_session
    from moodmorph.core.exceptions import ProfileNotFoundError

    session = open_session(ctx)
    try:
        profile = session.profiles.get(profile_id)
    except ProfileNotFoundError:
        click.echo(f"No profile with id '{profile_id}'.")
        sys.exit(1)

    if not yes and not click.confirm(f"Delete profile '{profile.name}' and all of its entries?"):
        click.echo("Aborted.")
        return

    current = session.delete_profile(profile_id)
    click.echo(f"Deleted profile '{profile.name}'.")
    if current is None:
        click.echo("No profiles left. Run 'moodmorph init NAME' to start again.")
    else:
        click.echo(f"Current profile: '{current.name}'.")
