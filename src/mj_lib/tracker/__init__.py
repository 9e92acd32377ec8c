# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Completion tracking through on-disk markers.
"""

from .tracker import CompletionTracker

__all__ = [
    "CompletionTracker",
]
