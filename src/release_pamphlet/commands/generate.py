# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

import sys
from typing import List, Sequence
import click
from rich.console import Console
from rich.markup import escape

from ..config import Config
from ..errors import PamphletError, UsageError
from ..generator import ReleaseNotesGenerator
from ..template_utils import TemplateError

console = Console()

USAGE = """Usage:

  release-pamphlet generate SUMMARY BUG_LIST NOTES_LIST OUTPUT_PAMPHLET

    where
      SUMMARY          Summary, a filled-in copy of the release summary template.
      BUG_LIST         An xml tracker report of issues addressed by this release.
      NOTES_LIST       An xml tracker report listing issues which have detailed
                       releaseNote.html attachments.
      OUTPUT_PAMPHLET  The output file to generate, typically RELEASE-NOTES.html.

The four paths may instead be set in the [paths] table of the configuration
file, in which case generate takes no arguments.

The generator connects to the issue tracker in order to read the detailed
release notes that have been clipped to individual issues. Before running
this program, make sure that you can reach the tracker host.

The generator assumes that the two tracker reports contain key, title, and
attachments elements for each issue. For each issue in NOTES_LIST, it looks
through the attachments block in that report and grabs the latest reported
releaseNote.html.

For this reason, it is recommended that you freshly generate BUG_LIST and
NOTES_LIST just before you run this tool."""


def _resolve_paths(paths: Sequence[str], config: Config) -> List[str]:
    """
    Pick the four input/output paths from the arguments or the config.

    Raises:
        UsageError: If neither source provides exactly four paths
    """
    if len(paths) == 4:
        return list(paths)
    if not paths:
        configured = config.paths.as_args()
        if configured:
            return configured
    raise UsageError(f"Expected 4 paths, got {len(paths)}")


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('paths', nargs=-1, metavar='[SUMMARY BUG_LIST NOTES_LIST OUTPUT_PAMPHLET]')
@click.option('--debug', is_flag=True, help='Show each build step and extracted issue')
@click.pass_context
def generate(ctx, paths: Sequence[str], debug: bool):
    """
    Generate the release notes pamphlet.

    Reads the release summary and the two tracker reports, downloads the
    detailed release note of every issue in NOTES_LIST, and writes a single
    HTML document.

    Examples:

      release-pamphlet generate summary.xml fixedBugsList.xml releaseNotesList.xml RELEASE-NOTES.html

      release-pamphlet --config release_pamphlet.toml generate
    """
    config: Config = ctx.obj['config']
    debug = debug or ctx.obj.get('debug', False)

    try:
        summary, bug_list, notes_list, pamphlet_path = _resolve_paths(paths, config)
    except UsageError as e:
        if debug:
            console.print(f"[dim]{escape(str(e))}[/dim]")
        console.print(USAGE, markup=False, highlight=False)
        return

    if debug:
        console.print(f"[dim]Summary: {summary}[/dim]")
        console.print(f"[dim]Bug list: {bug_list}[/dim]")
        console.print(f"[dim]Notes list: {notes_list}[/dim]")
        console.print(f"[dim]Tracker: {config.tracker.base_url}[/dim]")

    console.print(f"[blue]Generating release notes for {escape(summary)}...[/blue]")
    generator = ReleaseNotesGenerator(config, debug=debug)

    try:
        state = generator.generate(summary, bug_list, notes_list, pamphlet_path)
    except (PamphletError, TemplateError) as e:
        console.print(f"[red]Error running release notes generator: {escape(str(e))}[/red]")
        hint = getattr(e, 'hint', None)
        if hint:
            console.print(f"[red]{escape(hint)}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Release notes written to {escape(pamphlet_path)}[/green]")
    if state.missing_notes:
        console.print(f"[yellow]{len(state.missing_notes)} issue(s) still need release notes[/yellow]")
