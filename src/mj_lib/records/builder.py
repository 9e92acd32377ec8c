# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Self

from mj_lib.core.common import path_stem, strip_comment
from mj_lib.core.config import CFG
from mj_lib.core.error import MissingRequiredArgumentError
from mj_lib.core.logger import get_logger
from mj_lib.properties.invocation import RunInvocation
from mj_lib.properties.record import JobRecord

logger = get_logger(__name__)


class RecordBuilder:
    """
    Turn the lines of an input list into `JobRecord` objects.

    Everything from the first '#' onward is a comment. Lines that are empty
    after stripping the comment are ignored and do not consume a sequence index.

    Records are produced lazily; iterating the builder again restarts the
    numbering from 1.
    """

    def __init__(
        self,
        lines: Iterable[str],
        output_dir: Path,
        extension: str,
        dest_is_dir: bool,
        script_dir: Path,
        log_dir: Path,
        job_prefix: str = "",
    ):
        """
        Initialize the builder.

        Args:
            lines (Iterable[str]): Lines of the input list.
            output_dir (Path): Directory receiving the outputs.
            extension (str): Extension of output files. Ignored if `dest_is_dir`.
            dest_is_dir (bool): Every record writes into its own output directory.
            script_dir (Path): Directory receiving the job scripts.
            log_dir (Path): Directory receiving the job logs.
            job_prefix (str): Prefix of the job names.
        """
        self._lines = lines
        self._output_dir = output_dir
        self._extension = extension.lstrip(".")
        self._dest_is_dir = dest_is_dir
        self._script_dir = script_dir
        self._log_dir = log_dir
        self._job_prefix = job_prefix

    @classmethod
    def fromInvocation(cls, invocation: RunInvocation) -> Self:
        """
        Create a builder reading the input list of the given invocation.

        Raises:
            MissingRequiredArgumentError: If the input list cannot be read.
        """
        try:
            lines = invocation.input_list.read_text().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise MissingRequiredArgumentError(
                f"Could not read input list '{invocation.input_list}': {e}."
            ) from e

        return cls(
            lines,
            invocation.output_dir,
            invocation.extension,
            invocation.dest_is_dir,
            invocation.script_dir,
            invocation.logs,
            invocation.job_prefix,
        )

    def __iter__(self) -> Iterator[JobRecord]:
        index = 0
        for line in self._lines:
            input_path = strip_comment(line)
            if not input_path:
                continue

            index += 1
            yield self._buildRecord(index, input_path)

    def _buildRecord(self, index: int, input_path: str) -> JobRecord:
        stem = path_stem(input_path)

        if self._dest_is_dir:
            output_path = self._output_dir / stem
            marker_path = output_path / f".{CFG.suffixes.marker}"
        else:
            output_path = self._output_dir / f"{stem}.{self._extension}"
            marker_path = output_path.with_name(
                f"{output_path.name}.{CFG.suffixes.marker}"
            )

        record = JobRecord(
            index=index,
            input_path=input_path,
            stem=stem,
            output_path=output_path,
            marker_path=marker_path,
            script_path=self._script_dir / f"{stem}{CFG.suffixes.script}",
            stdout_path=self._log_dir / f"{stem}{CFG.suffixes.stdout}",
            stderr_path=self._log_dir / f"{stem}{CFG.suffixes.stderr}",
            job_name=f"{self._job_prefix}{stem}",
        )
        logger.debug(f"Built record {index}: '{input_path}' -> '{output_path}'.")
        return record
