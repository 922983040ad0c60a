"""MoodMorph CLI — profiles, journaling, import/export and insights."""

import click

from moodmorph import __version__


@click.group()
@click.version_option(version=__version__, package_name="moodmorph")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="Path to a YAML or JSON config file.")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Override the data directory.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, verbose: bool) -> None:
    """MoodMorph — track triggers, emotions, reactions and results."""
    ctx.ensure_object(dict)
    ctx.obj.update(config_file=config_file, data_dir=data_dir, verbose=verbose)


# Register subcommands
from .data_cmd import export, import_, purge
from .entry_cmd import edit, list_, log, rm, stats
from .insights_cmd import insights
from .profile_cmd import init, profiles

main.add_command(init)
main.add_command(profiles)
main.add_command(log)
main.add_command(edit)
main.add_command(rm)
main.add_command(list_)
main.add_command(stats)
main.add_command(import_)
main.add_command(export)
main.add_command(purge)
main.add_command(insights)
