# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Value types passed through the mj pipeline.

- `RunInvocation`: the immutable set of global options of one mj execution.
- `JobRecord`: a single normalized entry of the input list together with all
  paths derived from it.
"""

from .invocation import RunInvocation
from .record import JobRecord

__all__ = [
    "JobRecord",
    "RunInvocation",
]
