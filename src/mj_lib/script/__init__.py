# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Rendering of job scripts.

- `ScriptGenerator` renders and writes the per-record job scripts.
- `ArrayAggregator` renders the task array script fanning out to them.
- `force_module_loads` rewrites environment-module statements sourced by jobs.
"""

from .aggregator import ArrayAggregator
from .generator import ScriptGenerator
from .modules import force_module_loads, read_module_file

__all__ = [
    "ArrayAggregator",
    "ScriptGenerator",
    "force_module_loads",
    "read_module_file",
]
