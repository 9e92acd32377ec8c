# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Display of the directive syntax of the supported resource managers.
"""

from .cli import profiles
from .presenter import ProfilesPresenter

__all__ = [
    "ProfilesPresenter",
    "profiles",
]
