# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Main CLI for the release pamphlet generator."""

import sys
import logging
from typing import Optional
import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .config import load_config
from .commands.generate import generate
from .commands.init_config import init_config

console = Console()


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True),
    help='Path to configuration file'
)
@click.option(
    '-y', '--assume-yes',
    is_flag=True,
    help='Assume "yes" for all confirmation prompts'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Show detailed debug output'
)
@click.pass_context
def cli(ctx, config: Optional[str], assume_yes: bool, debug: bool):
    """Generate HTML release notes from tracker exports."""
    ctx.ensure_object(dict)
    ctx.obj['assume_yes'] = assume_yes
    ctx.obj['debug'] = debug
    # init-config writes the file the other commands read
    if ctx.invoked_subcommand != 'init-config':
        try:
            ctx.obj['config'] = load_config(config)
        except (FileNotFoundError, ValidationError, ValueError) as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            sys.exit(1)


# Register commands
cli.add_command(generate)
cli.add_command(init_config)


def main():
    # Connection pool chatter from note downloads is only useful with --debug
    if '--debug' not in sys.argv:
        logging.getLogger('urllib3').setLevel(logging.WARNING)

    cli(obj={})


if __name__ == "__main__":
    main()
