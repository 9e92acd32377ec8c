# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumeration of supported batch resource managers.
"""

from enum import Enum
from typing import Self

from mj_lib.core.error import UnsupportedManagerError


class Manager(Enum):
    """
    Family of the batch resource manager a script is generated for.
    """

    # Sun/Univa/Son of Grid Engine.
    SGE = 1
    # PBS and Torque.
    PBS = 2
    # IBM Spectrum LSF.
    LSF = 3
    # Slurm Workload Manager.
    SLURM = 4

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding Manager enum variant.

        Besides the variant names, a few common aliases are recognized
        ('uge', 'gridengine', 'torque').

        Args:
            s (str): Name of the manager (case-insensitive).

        Returns:
            Manager variant.

        Raises:
            UnsupportedManagerError if the string corresponds to no Manager.
        """
        name = s.strip().upper()
        name = _ALIASES.get(name, name)
        try:
            return cls[name]
        except KeyError:
            raise UnsupportedManagerError(
                f"Unsupported resource manager '{s}'. Supported managers: {', '.join(str(m) for m in cls)}."
            )


_ALIASES = {
    "UGE": "SGE",
    "GRIDENGINE": "SGE",
    "TORQUE": "PBS",
}
