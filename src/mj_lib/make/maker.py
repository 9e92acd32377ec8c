# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from mj_lib.batch.profile import resolve_profile
from mj_lib.core.error import (
    ArrayUnsupportedError,
    MissingRequiredArgumentError,
    MJError,
    RecordError,
    ScriptWriteError,
    StemCollisionError,
)
from mj_lib.core.logger import get_logger
from mj_lib.core.repeater import Repeater
from mj_lib.properties.invocation import RunInvocation
from mj_lib.properties.record import JobRecord
from mj_lib.records.builder import RecordBuilder
from mj_lib.script.aggregator import ArrayAggregator
from mj_lib.script.generator import ScriptGenerator
from mj_lib.script.modules import read_module_file
from mj_lib.submit.dispatcher import Dispatcher
from mj_lib.tracker.tracker import CompletionTracker

from .history import HistoryRecorder

logger = get_logger(__name__)


class Outcome(Enum):
    """
    What happened to a job record during one invocation.
    """

    # Marker reports a previous successful run.
    SKIPPED = 1
    # Script written but not submitted (dry run or task array mode).
    GENERATED = 2
    # Script written and submitted.
    SUBMITTED = 3
    # Script could not be written or submitted.
    FAILED = 4
    # Record collides with an earlier record of the same stem.
    REJECTED = 5

    def __str__(self):
        return self.name.lower()


@dataclass
class RecordResult:
    """Outcome of a single job record."""

    record: JobRecord
    outcome: Outcome
    message: str | None = None


@dataclass
class MakeReport:
    """
    Summary of one invocation of JobMaker.

    Attributes:
        results (list[RecordResult]): Outcomes of all records in input order.
        array_script (Path | None): Task array script, if one was written.
        array_size (int): Number of tasks of the task array.
        array_submitted (bool): Whether the task array script was submitted.
        array_error (str | None): Error encountered while building or submitting the task array.
    """

    results: list[RecordResult] = field(default_factory=list)
    array_script: Path | None = None
    array_size: int = 0
    array_submitted: bool = False
    array_error: str | None = None

    def count(self, outcome: Outcome) -> int:
        """Number of records with the given outcome."""
        return sum(result.outcome == outcome for result in self.results)

    @property
    def failed(self) -> bool:
        """Whether any part of the invocation failed."""
        return (
            self.count(Outcome.FAILED) > 0
            or self.count(Outcome.REJECTED) > 0
            or self.array_error is not None
        )


class JobMaker:
    """
    Generate and submit one job per input record, skipping completed work.

    Responsibilities:
        - Resolve the resource manager profile and validate the invocation
          before anything is written.
        - Create the script, log and output directories.
        - Record the invocation in the history file.
        - For every record: reject stem collisions, consult the completion
          marker, write the job script and submit it (or link it into the
          task array).
        - In task array mode, write and submit the task array script once
          all records are known.

    Configuration errors are raised. Errors affecting a single record are
    reported and the remaining records are still processed.
    """

    def __init__(self, invocation: RunInvocation):
        """
        Initialize the maker and validate the invocation.

        Raises:
            UnsupportedManagerError: If the resource manager is not supported.
            MissingRequiredArgumentError: If the payload command is empty or an
                input file cannot be read.
            ArrayUnsupportedError: If task array mode is requested for a manager
                without task arrays.
        """
        self._invocation = invocation
        self._profile = resolve_profile(invocation.manager)

        if not invocation.command.strip():
            raise MissingRequiredArgumentError("No command to run was specified.")

        if invocation.array and not self._profile.supportsArrays:
            raise ArrayUnsupportedError(
                f"Resource manager '{self._profile.manager}' does not support task arrays."
            )

        self._builder = RecordBuilder.fromInvocation(invocation)
        module_lines = (
            read_module_file(invocation.modules_file)
            if invocation.modules_file
            else None
        )

        self._generator = ScriptGenerator(self._profile, invocation, module_lines)
        self._dispatcher = Dispatcher(self._profile, invocation)
        self._aggregator = (
            ArrayAggregator(self._profile, invocation, self._generator)
            if invocation.array
            else None
        )

        # stem -> index of the record that claimed it
        self._stems: dict[str, int] = {}
        self._max_index = 0

    def make(self) -> MakeReport:
        """
        Process all records of the input list.

        Returns:
            MakeReport: Outcomes of all records and of the task array.

        Raises:
            MJError: If a required directory could not be created.
        """
        self._prepareDirectories()
        HistoryRecorder(self._invocation.history_file).record(self._invocation)

        report = MakeReport()
        repeater = Repeater(self._builder, self._processRecord, report)
        repeater.onException(RecordError, self._handleRecordError(report))
        repeater.run()

        # nothing to run if every record was skipped or failed
        if (
            self._aggregator
            and report.count(Outcome.GENERATED) > 0
            and report.array_error is None
        ):
            self._makeArray(report)

        return report

    def _prepareDirectories(self) -> None:
        directories = [
            self._invocation.script_dir,
            self._invocation.logs,
            self._invocation.output_dir,
        ]
        if self._aggregator:
            directories.append(self._invocation.tasks)

        for directory in directories:
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise MJError(f"Could not create directory '{directory}': {e}.") from e

    def _processRecord(self, record: JobRecord, report: MakeReport) -> None:
        self._max_index = record.index
        self._claimStem(record)

        if not CompletionTracker.mustRun(record.marker_path):
            logger.info(
                f"Record {record.index} ('{record.input_path}') already completed. Skipping."
            )
            if self._aggregator:
                self._aggregator.linkTask(record)
            report.results.append(RecordResult(record, Outcome.SKIPPED))
            return

        if self._invocation.dest_is_dir:
            try:
                record.output_path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ScriptWriteError(
                    f"Could not create output directory '{record.output_path}': {e}."
                ) from e

        script = self._generator.write(record)

        if self._aggregator:
            self._aggregator.linkTask(record)
            report.results.append(RecordResult(record, Outcome.GENERATED))
            return

        output = self._dispatcher.dispatch(
            script, (record.stdout_path, record.stderr_path)
        )
        if output is None:
            report.results.append(RecordResult(record, Outcome.GENERATED))
            return

        logger.info(f"Submitted record {record.index} ('{record.stem}'): {output}")
        report.results.append(RecordResult(record, Outcome.SUBMITTED, output))

    def _claimStem(self, record: JobRecord) -> None:
        """
        Reserve the stem of a record.

        Raises:
            StemCollisionError: If an earlier record already uses the same stem.
        """
        if (owner := self._stems.get(record.stem)) is not None:
            raise StemCollisionError(
                f"Record {record.index} ('{record.input_path}') maps to the same output as record {owner} (stem '{record.stem}'). Skipping."
            )

        self._stems[record.stem] = record.index

    def _handleRecordError(self, report: MakeReport):
        def handler(
            exception: BaseException, record: JobRecord, _metadata: Repeater
        ) -> None:
            logger.error(exception)
            if self._aggregator:
                self._dropTask(record, report)
            outcome = (
                Outcome.REJECTED
                if isinstance(exception, StemCollisionError)
                else Outcome.FAILED
            )
            report.results.append(RecordResult(record, outcome, str(exception)))

        return handler

    def _dropTask(self, record: JobRecord, report: MakeReport) -> None:
        """
        Remove the task link of a record that will not run in this invocation.

        A link left over from an earlier run could point at the script of another
        record. If it cannot be removed, the task array is not submitted.
        """
        assert self._aggregator is not None

        link = self._aggregator.taskLink(record.index)
        try:
            link.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove task link '{link}': {e}.")
            report.array_error = f"Could not remove task link '{link}': {e}."

    def _makeArray(self, report: MakeReport) -> None:
        assert self._aggregator is not None

        report.array_size = self._max_index
        try:
            report.array_script = self._aggregator.write(self._max_index)
            output = self._dispatcher.dispatch(report.array_script)
        except RecordError as e:
            logger.error(e)
            report.array_error = str(e)
            return

        if output is not None:
            logger.info(f"Submitted task array with {self._max_index} tasks: {output}")
            report.array_submitted = True
