# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class JobRecord:
    """
    A single job derived from one line of the input list.

    Attributes:
        index (int): 1-based sequence index in input order. Only real records
            are counted, blank and comment lines are not.
        input_path (str): Input path as given, with any comment stripped.
        stem (str): Basename of the input without its extension.
        output_path (Path): Output file or directory of the job.
        marker_path (Path): Completion marker holding the last exit status of the payload.
        script_path (Path): Per-record job script.
        stdout_path (Path): File receiving the job's standard output.
        stderr_path (Path): File receiving the job's standard error.
        job_name (str): Name of the job in the resource manager.
    """

    index: int
    input_path: str
    stem: str
    output_path: Path
    marker_path: Path
    script_path: Path
    stdout_path: Path
    stderr_path: Path
    job_name: str
