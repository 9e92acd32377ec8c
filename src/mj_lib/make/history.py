# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Archival record of mj invocations.

Every invocation appends one YAML document to a history file located in the
script directory. Recording is best effort: failures are reported as
warnings and never abort the run.
"""

import getpass
import shlex
import socket
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from mj_lib.core.common import load_yaml_dumper
from mj_lib.core.config import CFG
from mj_lib.core.logger import get_logger
from mj_lib.properties.invocation import RunInvocation

logger = get_logger(__name__)


class HistoryRecorder:
    """
    Append reconstructed command lines of invocations to a history file.
    """

    def __init__(self, file: Path):
        self._file = file

    @staticmethod
    def toDict(invocation: RunInvocation) -> dict[str, Any]:
        """
        Build the history entry of an invocation.
        """
        return {
            "time": datetime.now().strftime(CFG.date_formats.standard),
            "user": getpass.getuser(),
            "host": socket.gethostname(),
            "cwd": str(invocation.workdir),
            "command": shlex.join(invocation.argv),
            "manager": str(invocation.manager),
            "dry_run": invocation.dry_run,
            "array": invocation.array,
        }

    def record(self, invocation: RunInvocation) -> None:
        """
        Append the history entry of an invocation to the history file.
        """
        try:
            with self._file.open("a") as f:
                yaml.dump(
                    self.toDict(invocation),
                    f,
                    Dumper=load_yaml_dumper(),
                    default_flow_style=False,
                    sort_keys=False,
                    explicit_start=True,
                )
        except (OSError, KeyError) as e:
            # getpass may fail with KeyError if the user has no passwd entry
            logger.warning(f"Could not record invocation in '{self._file}': {e}.")
            return

        logger.debug(f"Recorded invocation in '{self._file}'.")
