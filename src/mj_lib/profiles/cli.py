# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click
from rich.console import Console

from mj_lib.batch.profile import PROFILES
from mj_lib.core.click_format import GNUHelpColorsCommand
from mj_lib.core.config import CFG
from mj_lib.core.logger import get_logger

from .presenter import ProfilesPresenter

logger = get_logger(__name__)


@click.command(
    short_help="Display the supported resource managers.",
    help="Display the directive syntax and job variables of all supported resource managers.",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option("--yaml", is_flag=True, help="Output the profiles in YAML format.")
def profiles(yaml: bool) -> NoReturn:
    try:
        presenter = ProfilesPresenter(list(PROFILES.values()))
        if yaml:
            presenter.dumpYaml()
        else:
            console = Console(record=False, markup=False)
            console.print(presenter.createProfilesPanel(console))
        sys.exit(0)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        print()
        sys.exit(CFG.exit_codes.unexpected_error)
