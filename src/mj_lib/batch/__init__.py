# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Resource-manager profiles.

Every supported batch resource manager is described by a single
`SchedulerProfile` entry: its directive syntax, the variables it provides to
running jobs, and its default submit command. The rest of mj only consumes
profiles, so supporting another manager means adding one `Manager` member and
one profile entry.
"""

from .manager import Manager
from .profile import PROFILES, SchedulerProfile, resolve_profile

__all__ = [
    "Manager",
    "PROFILES",
    "SchedulerProfile",
    "resolve_profile",
]
