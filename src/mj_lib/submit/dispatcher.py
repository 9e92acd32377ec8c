# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shlex
import subprocess
from pathlib import Path

from mj_lib.batch.profile import SchedulerProfile
from mj_lib.core.error import SubmitCommandError
from mj_lib.core.logger import get_logger
from mj_lib.properties.invocation import RunInvocation

logger = get_logger(__name__)


class Dispatcher:
    """
    Invoke the external submit command for generated scripts.

    Submission is fire-and-forget: the output of the submit command is logged
    but never interpreted. In dry-run mode nothing is ever invoked.
    """

    def __init__(self, profile: SchedulerProfile, invocation: RunInvocation):
        self._profile = profile
        self._command = shlex.split(invocation.submitCommand(profile))
        self._dry_run = invocation.dry_run

    def translateSubmit(
        self, script: Path, logs: tuple[Path, Path] | None = None
    ) -> list[str]:
        """
        Build the argument list of the submit command.

        Args:
            script (Path): Script to submit.
            logs (tuple[Path, Path] | None): Standard output and standard error
                files of the job. Only passed on the command line if the manager
                requires it.

        Returns:
            list[str]: The submit command and its arguments.
        """
        command = list(self._command)

        if logs and self._profile.logs_on_command_line:
            stdout, stderr = logs
            command.extend(
                [
                    self._profile.stdout_flag,
                    str(stdout),
                    self._profile.stderr_flag,
                    str(stderr),
                ]
            )

        if not self._profile.script_on_stdin:
            command.append(str(script))

        return command

    def dispatch(
        self, script: Path, logs: tuple[Path, Path] | None = None
    ) -> str | None:
        """
        Submit a script to the resource manager.

        Args:
            script (Path): Script to submit.
            logs (tuple[Path, Path] | None): Standard output and standard error
                files of the job. None for task array scripts.

        Returns:
            str | None: Output of the submit command, or None in dry-run mode.

        Raises:
            SubmitCommandError: If the submit command could not be run or failed.
        """
        command = self.translateSubmit(script, logs)
        if self._dry_run:
            logger.debug(f"Dry run, not submitting: {shlex.join(command)}")
            return None

        logger.debug(shlex.join(command))

        try:
            if self._profile.script_on_stdin:
                with script.open() as stdin:
                    result = subprocess.run(
                        command,
                        stdin=stdin,
                        text=True,
                        check=False,
                        capture_output=True,
                        errors="replace",
                    )
            else:
                result = subprocess.run(
                    command,
                    text=True,
                    check=False,
                    capture_output=True,
                    errors="replace",
                )
        except OSError as e:
            raise SubmitCommandError(f"Failed to submit script '{script}': {e}.") from e

        if result.returncode != 0:
            raise SubmitCommandError(
                f"Failed to submit script '{script}': {result.stderr.strip()}."
            )

        return result.stdout.strip()
