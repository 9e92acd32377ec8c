# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Global options of a single mj execution.
"""

from dataclasses import dataclass, field
from pathlib import Path

from mj_lib.batch.manager import Manager
from mj_lib.batch.profile import SchedulerProfile
from mj_lib.core.config import CFG


@dataclass(frozen=True)
class RunInvocation:
    """
    Immutable description of one mj execution.

    Attributes:
        manager (Manager): Resource manager to generate scripts for.
        input_list (Path): File listing one input path per line.
        command (str): Payload command. May contain '{input}' and '{output}'
            placeholders; otherwise the input and output paths are appended.
        output_dir (Path): Directory receiving the outputs of all jobs.
        extension (str): Extension of output files (ignored in directory mode).
        dest_is_dir (bool): Each job writes into its own output directory.
        script_dir (Path): Directory receiving the generated scripts.
        log_dir (Path | None): Directory receiving job logs. Defaults to a
            subdirectory of `script_dir`.
        workdir (Path): Working directory restored before running the payload.
        array (bool): Fold all records into a single task array submission.
        array_name (str): Name of the task array job.
        dry_run (bool): Generate scripts without submitting anything.
        submit_command (str | None): Submit command overriding the manager's default.
        submit_options (tuple[str, ...]): Extra scheduler options, each embedded
            as one directive line.
        prefix (str | None): Command prepended to the payload (e.g. 'time').
        export_env (bool): Export the caller's environment to the jobs.
        modules_file (Path | None): Environment-module (dotkit) file sourced in every job.
        job_prefix (str): Prefix of all job names.
        argv (tuple[str, ...]): Command line of the invocation, for the history record.
    """

    manager: Manager
    input_list: Path
    command: str
    output_dir: Path = Path("out")
    extension: str = "out"
    dest_is_dir: bool = False
    script_dir: Path = Path("scripts")
    log_dir: Path | None = None
    workdir: Path = field(default_factory=Path.cwd)
    array: bool = False
    array_name: str = CFG.script.array_name
    dry_run: bool = False
    submit_command: str | None = None
    submit_options: tuple[str, ...] = ()
    prefix: str | None = None
    export_env: bool = True
    modules_file: Path | None = None
    job_prefix: str = ""
    argv: tuple[str, ...] = ()

    @property
    def logs(self) -> Path:
        """Directory receiving job logs."""
        return self.log_dir or self.script_dir / CFG.dirs.logs

    @property
    def tasks(self) -> Path:
        """Directory receiving the task links of a task array."""
        return self.script_dir / CFG.dirs.tasks

    @property
    def history_file(self) -> Path:
        """File recording invocations of mj."""
        return self.script_dir / CFG.dirs.history_file

    @property
    def array_script(self) -> Path:
        """Path to the task array script."""
        return self.script_dir / f"{self.array_name}{CFG.suffixes.array_script}"

    def submitCommand(self, profile: SchedulerProfile) -> str:
        """
        Get the submit command to use with the given profile.

        The explicitly configured command wins over the manager's default.
        """
        return self.submit_command or profile.submit_command
