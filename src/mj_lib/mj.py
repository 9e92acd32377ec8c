# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys

import click

from mj_lib.core.click_format import GNUHelpColorsGroup
from mj_lib.make.cli import make
from mj_lib.profiles.cli import profiles

__version__ = "0.1.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=GNUHelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of mj and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any mj command.

    mj turns a list of input files into one batch job per file for Grid Engine,
    PBS, LSF or Slurm, and resubmits only the jobs that have not yet succeeded.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(make)
cli.add_command(profiles)
