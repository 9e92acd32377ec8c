# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Environment-module (dotkit) statements embedded into job scripts.
"""

from pathlib import Path

from mj_lib.core.config import CFG
from mj_lib.core.error import MissingRequiredArgumentError
from mj_lib.core.logger import get_logger

logger = get_logger(__name__)


def force_module_loads(
    text: str,
    non_forcing: str = CFG.modules.non_forcing,
    forcing: str = CFG.modules.forcing,
) -> list[str]:
    """
    Rewrite non-forcing load statements into forcing ones, line by line.

    A line starting with `non_forcing` gets that token replaced by `forcing`.
    All other lines are kept as they are.

    Args:
        text (str): Content of an environment-module file.
        non_forcing (str): Leading token of a non-forcing load statement.
        forcing (str): Leading token of a forcing load statement.

    Returns:
        list[str]: The rewritten lines.
    """
    rewritten = []
    for line in text.splitlines():
        if line.startswith(non_forcing):
            line = forcing + line[len(non_forcing) :]
        rewritten.append(line)

    return rewritten


def read_module_file(path: Path) -> list[str]:
    """
    Read an environment-module file and rewrite its load statements.

    Raises:
        MissingRequiredArgumentError: If the file cannot be read.
    """
    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise MissingRequiredArgumentError(
            f"Could not read environment-module file '{path}': {e}."
        ) from e

    logger.debug(f"Loaded environment-module file '{path}'.")
    return force_module_loads(text)
