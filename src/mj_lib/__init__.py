# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the mj command-line tool.

This package turns a flat list of input files into a batch of cluster jobs,
one job per input, for Grid Engine, PBS, LSF or Slurm. It defines the
syntax profiles of the supported resource managers, parses input lists into
job records, tracks per-record completion markers so that repeated runs skip
finished work, renders job scripts and task array scripts, and dispatches
them to the resource manager's submit command.
"""

from .mj import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "batch",
    "core",
    "make",
    "profiles",
    "properties",
    "records",
    "script",
    "submit",
    "tracker",
]
