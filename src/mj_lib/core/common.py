# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the mj library.

This module provides helpers for parsing input list lines, deriving file
stems, writing executable files, YAML output, and panel sizing.
"""

import stat
from functools import lru_cache
from pathlib import Path

import yaml
from rich.console import Console

from .error import ScriptWriteError
from .logger import get_logger

logger = get_logger(__name__)

# Character introducing a comment in an input list.
COMMENT_CHAR = "#"


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


def strip_comment(line: str) -> str:
    """
    Remove everything from the first comment character onward and trim whitespace.

    Args:
        line (str): A single line of an input list.

    Returns:
        str: The meaningful part of the line. Empty if the line was blank
             or contained only a comment.
    """
    return line.split(COMMENT_CHAR, 1)[0].strip()


def path_stem(path: str | Path) -> str:
    """
    Get the basename of a path without its last extension.

    Args:
        path (str | Path): Path to a file.

    Returns:
        str: The stem, e.g. 'sample' for 'data/sample.fastq'.
    """
    return Path(path).stem


def write_executable(path: Path, content: str) -> None:
    """
    Write `content` to `path`, overwriting any existing file, and make it executable.

    Raises:
        ScriptWriteError: If the file could not be written.
    """
    try:
        path.write_text(content)
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise ScriptWriteError(f"Could not write script '{path}': {e}.") from e

    logger.debug(f"Written script '{path}'.")


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int): The minimum allowable panel width. If None, no lower bound is applied.
        max_width (int): The maximum allowable panel width. If None, no upper bound is applied.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """
    panel_width = console.size.width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width
