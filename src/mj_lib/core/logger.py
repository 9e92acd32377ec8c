# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def _debug_mode() -> bool:
    return os.environ.get(CFG.env_vars.debug_mode) is not None


def get_logger(name: str) -> logging.Logger:
    """
    Return the logger of an mj module.

    Records go to stderr through rich so that stdout only carries the result
    panels and YAML output. With `MJ_DEBUG` set, debug records are shown
    together with timestamps and source locations.
    """
    logger = logging.getLogger(name)

    debug = _debug_mode()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if logger.handlers:
        return logger

    handler = RichHandler(
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        show_level=True,
        show_path=debug,
        show_time=debug,
        log_time_format=CFG.date_formats.standard,
        tracebacks_width=None,
        tracebacks_code_width=None,
    )
    logger.addHandler(handler)
    logger.propagate = False

    return logger
