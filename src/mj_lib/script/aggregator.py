# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Task array script fanning out to per-record job scripts.

The array script is a single file. The resource manager expands it into
`N` tasks, each of which resolves the manager's task-index variable at run
time and runs `<tasks>/<index>.sh`, a link to the job script of the record
with that sequence index.
"""

import os
import shlex
from pathlib import Path

from mj_lib.batch.profile import SchedulerProfile
from mj_lib.core.common import write_executable
from mj_lib.core.config import CFG
from mj_lib.core.error import ArrayUnsupportedError, ScriptWriteError
from mj_lib.core.logger import get_logger
from mj_lib.properties.invocation import RunInvocation
from mj_lib.properties.record import JobRecord

from .generator import ScriptGenerator

logger = get_logger(__name__)


class ArrayAggregator:
    """
    Build the task array script and the task links it refers to.
    """

    def __init__(
        self,
        profile: SchedulerProfile,
        invocation: RunInvocation,
        generator: ScriptGenerator,
    ):
        """
        Initialize the aggregator.

        Raises:
            ArrayUnsupportedError: If the resource manager does not support task arrays.
        """
        if not profile.supportsArrays:
            raise ArrayUnsupportedError(
                f"Resource manager '{profile.manager}' does not support task arrays."
            )

        self._profile = profile
        self._invocation = invocation
        self._generator = generator

    def taskLink(self, index: int) -> Path:
        """Path to the task link of the given sequence index."""
        return self._invocation.tasks / f"{index}{CFG.suffixes.script}"

    def linkTask(self, record: JobRecord) -> Path:
        """
        (Re)create the task link pointing to the job script of a record.

        Returns:
            Path: Path to the task link.

        Raises:
            ScriptWriteError: If the link could not be created.
        """
        link = self.taskLink(record.index)
        target = os.path.relpath(record.script_path, link.parent)
        try:
            link.unlink(missing_ok=True)
            link.symlink_to(target)
        except OSError as e:
            raise ScriptWriteError(
                f"Could not link task {record.index} to '{record.script_path}': {e}."
            ) from e

        logger.debug(f"Linked task '{link}' -> '{target}'.")
        return link

    def render(self, size: int) -> str:
        """
        Render the task array script spanning tasks `1..size`.
        """
        profile = self._profile
        invocation = self._invocation
        task_index = profile.reference(profile.task_index_token)
        logs = self._generator.absolute(invocation.logs)
        tasks = shlex.quote(str(self._generator.absolute(invocation.tasks)))

        lines = self._generator.headerLines(
            invocation.array_name,
            logs / f"{invocation.array_name}{CFG.suffixes.stdout}",
            logs / f"{invocation.array_name}{CFG.suffixes.stderr}",
            array_size=size,
        )
        lines.extend(self._generator.environmentLines())
        lines.extend(
            [
                "",
                f'task={tasks}/"{task_index}{CFG.suffixes.script}"',
                'if [ ! -e "$task" ]; then',
                f'    echo "No job script for task {task_index}."',
                "    exit 0",
                "fi",
                "",
                f'stem=$(basename "$(readlink "$task")" {CFG.suffixes.script})',
                f"logs={shlex.quote(str(logs))}",
                f'exec {CFG.script.shell} "$task" > "$logs/$stem{CFG.suffixes.stdout}" 2> "$logs/$stem{CFG.suffixes.stderr}"',
            ]
        )

        return "\n".join(lines) + "\n"

    def write(self, size: int) -> Path:
        """
        Render the task array script and write it.

        Returns:
            Path: Path to the written script.

        Raises:
            ScriptWriteError: If the script could not be written.
        """
        script = self._invocation.array_script
        write_executable(script, self.render(size))
        logger.debug(f"Written task array script '{script}' with {size} tasks.")
        return script
