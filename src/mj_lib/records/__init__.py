# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Parsing of input lists into job records.
"""

from .builder import RecordBuilder

__all__ = [
    "RecordBuilder",
]
