# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout mj.

Configuration-level errors (`UnsupportedManagerError`,
`MissingRequiredArgumentError`, `ArrayUnsupportedError`) abort the whole
invocation. Per-record errors (`ScriptWriteError`, `SubmitCommandError`,
`StemCollisionError`) are reported and the rest of the batch still runs.
Each exception carries an exit code used by mj commands to report failures.
"""

from .config import CFG


class MJError(Exception):
    """Common exception type for all recoverable mj errors."""

    exit_code = CFG.exit_codes.default


class UnsupportedManagerError(MJError):
    """Raised when the requested resource manager is not known to mj."""

    pass


class MissingRequiredArgumentError(MJError):
    """Raised when a required option or input is missing."""

    pass


class ArrayUnsupportedError(MJError):
    """Raised when array mode is requested for a manager without task arrays."""

    pass


class RecordError(MJError):
    """Base class for errors that only affect a single job record."""

    pass


class ScriptWriteError(RecordError):
    """Raised when a job script could not be written."""

    pass


class SubmitCommandError(RecordError):
    """Raised when the external submit command fails."""

    pass


class StemCollisionError(RecordError):
    """Raised when two input paths map onto the same output stem."""

    pass
