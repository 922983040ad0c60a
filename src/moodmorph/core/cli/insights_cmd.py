"""moodmorph insights — AI analysis of recent entries."""

from __future__ import annotations

import click


@click.command()
@click.pass_context
def insights(ctx: click.Context) -> None:
    """Ask the configured LLM for patterns and advice on your recent entries."""
    from moodmorph.core.cli.common import ensure_profile, open_session

    session = open_session(ctx, with_insights=True)
    ensure_profile(session)

    click.echo("Analyzing your recent entries...\n")
    insight = session.analyze()

    click.echo(insight.summary)
    if insight.patterns:
        click.echo("")
        for pattern in insight.patterns:
            click.echo(f"  - {pattern}")
    if insight.advice:
        click.echo(f"\n{insight.advice}")
