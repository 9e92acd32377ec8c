# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Generation and submission of a batch of jobs from an input list.

- `JobMaker` drives one invocation: validation, directory setup, the
  per-record loop and the optional task array.
- `HistoryRecorder` archives the command line of each invocation.
- `MakePresenter` renders the outcome.
- `make` is the click command exposing all of this.
"""

from .cli import make
from .maker import JobMaker, MakeReport, Outcome, RecordResult

__all__ = [
    "JobMaker",
    "MakeReport",
    "Outcome",
    "RecordResult",
    "make",
]
