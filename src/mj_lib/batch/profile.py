# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Directive syntax and run-time variables of each supported resource manager.
"""

from dataclasses import dataclass

from mj_lib.core.error import UnsupportedManagerError
from mj_lib.core.logger import get_logger

from .manager import Manager

logger = get_logger(__name__)


@dataclass(frozen=True)
class SchedulerProfile:
    """
    Syntax profile of a batch resource manager.

    Attributes:
        manager (Manager): Identity of the manager.
        directive (str): Comment-prefixed marker introducing a directive line.
        name_flag (str): Flag setting the job name.
        array_flag (str | None): Flag declaring a task array range. None if
            the manager has no task arrays that mj can use.
        env_flag (str): Directive exporting the caller's environment to the job.
        stdout_flag (str): Flag redirecting the standard output of the job.
        stderr_flag (str): Flag redirecting the standard error of the job.
        logs_on_command_line (bool): Log redirection must be passed to the submit
            command instead of being embedded as directives.
        script_on_stdin (bool): The submit command reads directives only from
            a script fed on its standard input.
        job_id_token (str): Variable holding the job ID at run time.
        job_name_token (str): Variable holding the job name at run time.
        task_index_token (str): Variable holding the task index of an array job.
        submit_command (str): Default command used to submit scripts.
    """

    manager: Manager
    directive: str
    name_flag: str
    array_flag: str | None
    env_flag: str
    stdout_flag: str
    stderr_flag: str
    logs_on_command_line: bool
    script_on_stdin: bool
    job_id_token: str
    job_name_token: str
    task_index_token: str
    submit_command: str

    @property
    def supportsArrays(self) -> bool:
        """Whether the manager can expand a single script into a task array."""
        return self.array_flag is not None

    def directiveLine(self, flag: str, value: str | None = None) -> str:
        """
        Render a single directive line.

        Args:
            flag (str): Flag (or raw option string) to embed.
            value (str | None): Optional value of the flag.

        Returns:
            str: The directive line, e.g. '#SBATCH --job-name sample'.
        """
        if value is None:
            return f"{self.directive} {flag}"
        return f"{self.directive} {flag} {value}"

    @staticmethod
    def reference(token: str, default: str | None = None) -> str:
        """
        Reference a run-time token inside a generated script.

        Args:
            token (str): Name of the variable provided by the manager.
            default (str | None): Value to use when the variable is not set.

        Returns:
            str: Shell expansion of the variable, e.g. '${JOB_ID}' or '${JOB_ID:-local}'.
        """
        if default is None:
            return f"${{{token}}}"
        return f"${{{token}:-{default}}}"


PROFILES: dict[Manager, SchedulerProfile] = {
    Manager.SGE: SchedulerProfile(
        manager=Manager.SGE,
        directive="#$",
        name_flag="-N",
        array_flag="-t",
        env_flag="-V",
        stdout_flag="-o",
        stderr_flag="-e",
        logs_on_command_line=False,
        script_on_stdin=False,
        job_id_token="JOB_ID",
        job_name_token="JOB_NAME",
        task_index_token="SGE_TASK_ID",
        submit_command="qsub",
    ),
    Manager.PBS: SchedulerProfile(
        manager=Manager.PBS,
        directive="#PBS",
        name_flag="-N",
        array_flag="-t",
        env_flag="-V",
        stdout_flag="-o",
        stderr_flag="-e",
        logs_on_command_line=False,
        script_on_stdin=False,
        job_id_token="PBS_JOBID",
        job_name_token="PBS_JOBNAME",
        task_index_token="PBS_ARRAYID",
        submit_command="qsub",
    ),
    Manager.LSF: SchedulerProfile(
        manager=Manager.LSF,
        directive="#BSUB",
        name_flag="-J",
        # LSF arrays are declared through the job name, not through a range flag
        array_flag=None,
        env_flag="-env all",
        stdout_flag="-o",
        stderr_flag="-e",
        logs_on_command_line=True,
        script_on_stdin=True,
        job_id_token="LSB_JOBID",
        job_name_token="LSB_JOBNAME",
        task_index_token="LSB_JOBINDEX",
        submit_command="bsub",
    ),
    Manager.SLURM: SchedulerProfile(
        manager=Manager.SLURM,
        directive="#SBATCH",
        name_flag="--job-name",
        array_flag="--array",
        env_flag="--export=ALL",
        stdout_flag="--output",
        stderr_flag="--error",
        logs_on_command_line=False,
        script_on_stdin=False,
        job_id_token="SLURM_JOB_ID",
        job_name_token="SLURM_JOB_NAME",
        task_index_token="SLURM_ARRAY_TASK_ID",
        submit_command="sbatch",
    ),
}


def resolve_profile(manager: Manager | str) -> SchedulerProfile:
    """
    Return the syntax profile of the given resource manager.

    Args:
        manager (Manager | str): Manager identity or its name.

    Returns:
        SchedulerProfile: The profile of the manager.

    Raises:
        UnsupportedManagerError: If the manager is not supported.
    """
    if isinstance(manager, str):
        manager = Manager.fromStr(manager)

    try:
        profile = PROFILES[manager]
    except KeyError as e:
        raise UnsupportedManagerError(
            f"No profile registered for resource manager '{manager}'."
        ) from e

    logger.debug(f"Resolved profile for resource manager '{manager}'.")
    return profile
