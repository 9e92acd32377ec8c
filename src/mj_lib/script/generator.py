# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shlex
from pathlib import Path

from mj_lib.batch.profile import SchedulerProfile
from mj_lib.core.common import write_executable
from mj_lib.core.config import CFG
from mj_lib.core.logger import get_logger
from mj_lib.properties.invocation import RunInvocation
from mj_lib.properties.record import JobRecord
from mj_lib.tracker.tracker import CompletionTracker

logger = get_logger(__name__)

# Placeholders recognized in the payload command.
INPUT_PLACEHOLDER = "{input}"
OUTPUT_PLACEHOLDER = "{output}"

# Runtime preamble: abort on errors, unset variables and failed pipeline stages.
STRICT_MODE = "set -euo pipefail"


class ScriptGenerator:
    """
    Render and write self-contained job scripts for individual job records.

    Each script contains, in order:
        - the interpreter declaration,
        - resource manager directives (job name, environment export,
          log redirection, extra options),
        - a statement disabling core dumps,
        - environment-module statements (if any),
        - the strict runtime preamble,
        - a re-check of the completion marker,
        - a change to the working directory,
        - the payload invocation,
        - the capture of the payload's exit status into the marker.
    """

    def __init__(
        self,
        profile: SchedulerProfile,
        invocation: RunInvocation,
        module_lines: list[str] | None = None,
    ):
        """
        Initialize the generator.

        Args:
            profile (SchedulerProfile): Profile of the target resource manager.
            invocation (RunInvocation): Global options of the current execution.
            module_lines (list[str] | None): Already rewritten environment-module
                statements to embed into every script.
        """
        self._profile = profile
        self._invocation = invocation
        self._module_lines = module_lines or []

    def headerLines(
        self,
        job_name: str,
        stdout: Path,
        stderr: Path,
        array_size: int | None = None,
    ) -> list[str]:
        """
        Render the interpreter declaration and all directive lines.

        Args:
            job_name (str): Name of the job.
            stdout (Path): File receiving the standard output of the job.
            stderr (Path): File receiving the standard error of the job.
            array_size (int | None): Number of tasks of a task array. If None,
                no array directive is written.

        Returns:
            list[str]: Lines of the script header.
        """
        profile = self._profile
        lines = [
            CFG.script.interpreter,
            profile.directiveLine(profile.name_flag, job_name),
        ]

        if array_size is not None and profile.array_flag:
            lines.append(profile.directiveLine(profile.array_flag, f"1-{array_size}"))

        if self._invocation.export_env:
            lines.append(profile.directiveLine(profile.env_flag))

        if not profile.logs_on_command_line:
            lines.append(profile.directiveLine(profile.stdout_flag, str(stdout)))
            lines.append(profile.directiveLine(profile.stderr_flag, str(stderr)))

        for option in self._invocation.submit_options:
            lines.append(profile.directiveLine(option))

        return lines

    def environmentLines(self) -> list[str]:
        """
        Render the environment setup shared by all scripts.
        """
        lines = ["", "ulimit -c 0"]
        if self._module_lines:
            lines.append("")
            lines.extend(self._module_lines)
        lines.extend(["", STRICT_MODE])
        return lines

    def absolute(self, path: Path) -> Path:
        """
        Anchor a relative path at the working directory.

        Jobs start in a directory chosen by the scheduler, so paths used before
        the script changes its directory must be absolute.
        """
        return path if path.is_absolute() else self._invocation.workdir / path

    def payload(self, record: JobRecord) -> str:
        """
        Render the payload command of a record, including the prefix.

        If the command contains '{input}' or '{output}', these placeholders are
        replaced by the record's paths. Otherwise both paths are appended.
        """
        command = self._invocation.command
        input_path = shlex.quote(record.input_path)
        output_path = shlex.quote(str(record.output_path))

        if INPUT_PLACEHOLDER in command or OUTPUT_PLACEHOLDER in command:
            command = command.replace(INPUT_PLACEHOLDER, input_path).replace(
                OUTPUT_PLACEHOLDER, output_path
            )
        else:
            command = f"{command} {input_path} {output_path}"

        if self._invocation.prefix:
            command = f"{self._invocation.prefix} {command}"

        return command

    def render(self, record: JobRecord) -> str:
        """
        Render the complete job script of a record.
        """
        profile = self._profile
        marker = shlex.quote(str(self.absolute(record.marker_path)))
        job_id = profile.reference(profile.job_id_token, "local")
        job_name = profile.reference(profile.job_name_token, record.job_name)

        lines = self.headerLines(
            record.job_name,
            self.absolute(record.stdout_path),
            self.absolute(record.stderr_path),
        )
        lines.extend(self.environmentLines())
        lines.extend(
            [
                "",
                f'echo "Job {job_id} ({job_name}) started on $(hostname) at $(date)."',
                "",
                f"if {CompletionTracker.shellCheck(marker)}; then",
                f'    echo "Record {record.index} ({record.stem}) already completed successfully."',
                "    exit 0",
                "fi",
                "",
                f"cd {shlex.quote(str(self._invocation.workdir))}",
                "",
                "status=0",
                f"{self.payload(record)} || status=$?",
                f'echo "$status" > {marker}',
                "",
                f'echo "Job {job_id} finished with exit status $status at $(date)."',
                'exit "$status"',
            ]
        )

        return "\n".join(lines) + "\n"

    def write(self, record: JobRecord) -> Path:
        """
        Render the job script of a record and write it, overwriting any previous version.

        Returns:
            Path: Path to the written script.

        Raises:
            ScriptWriteError: If the script could not be written.
        """
        write_executable(record.script_path, self.render(record))
        return record.script_path
