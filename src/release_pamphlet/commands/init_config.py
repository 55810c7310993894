# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

from pathlib import Path
import click
import tomlkit
from rich.console import Console

from ..config import CONFIG_FILENAME, Config

console = Console()


def render_default_config() -> str:
    """Every default setting as a commented TOML document."""
    defaults = Config().model_dump(exclude_none=True, exclude={'paths'})

    doc = tomlkit.document()
    doc.add(tomlkit.comment("Release pamphlet generator configuration"))
    doc.add(tomlkit.comment("Unset tracker.browse_url and tracker.attachment_url derive from tracker.base_url"))
    doc.add(tomlkit.nl())
    for key, value in defaults.items():
        doc.add(key, value)

    paths = tomlkit.table()
    paths.add(tomlkit.comment('summary = "releaseSummary.xml"'))
    paths.add(tomlkit.comment('bug_list = "fixedBugsList.xml"'))
    paths.add(tomlkit.comment('notes_list = "releaseNotesList.xml"'))
    paths.add(tomlkit.comment('pamphlet = "RELEASE-NOTES.html"'))
    doc["paths"] = paths

    return tomlkit.dumps(doc)


@click.command('init-config', context_settings={'help_option_names': ['-h', '--help']})
@click.option('-y', '--assume-yes', is_flag=True, help='Assume "yes" for confirmation prompts')
@click.pass_context
def init_config(ctx, assume_yes: bool):
    """Create an example configuration file."""
    config_path = Path(CONFIG_FILENAME)
    if config_path.exists():
        console.print(f"[yellow]Configuration file already exists at {CONFIG_FILENAME}[/yellow]")

        assume_yes_effective = assume_yes or ctx.obj.get('assume_yes', False)
        if not assume_yes_effective:
            if not click.confirm("Overwrite?"):
                return

    config_path.write_text(render_default_config(), encoding='utf-8')
    console.print(f"[green]Created configuration file: {config_path}[/green]")
    console.print("\n[blue]Next steps:[/blue]")
    console.print("1. Edit release_pamphlet.toml and set your tracker and product name")
    console.print("2. Export fixedBugsList.xml and releaseNotesList.xml from the tracker")
    console.print("3. Run: release-pamphlet generate SUMMARY BUG_LIST NOTES_LIST OUTPUT_PAMPHLET")
