# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Submission of generated scripts to the resource manager.
"""

from .dispatcher import Dispatcher

__all__ = [
    "Dispatcher",
]
