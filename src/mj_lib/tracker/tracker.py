# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Decide whether the work of a job record has to be (re)done.

A record is done only if its marker file exists and reads exactly `0`, the
exit status written by a successful run of its job script. Anything else,
including an unreadable marker, means the record must run again.

The marker is written by jobs running on the cluster, possibly at the same
time as mj reads it. It is treated as eventually consistent state, not a lock.
"""

from pathlib import Path

from mj_lib.core.logger import get_logger

logger = get_logger(__name__)

# Marker content signalling successful completion.
SUCCESS = "0"


class CompletionTracker:
    """
    Inspect completion markers of job records.
    """

    @staticmethod
    def readMarker(marker: Path) -> str | None:
        """
        Read the content of a marker file.

        Returns:
            str | None: The stripped content, or None if the marker could not be read.
        """
        try:
            return marker.read_text().strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read marker '{marker}': {e}. Assuming not done.")
            return None

    @staticmethod
    def mustRun(marker: Path) -> bool:
        """
        Check whether the work guarded by `marker` has to be (re)done.

        Missing, unreadable, non-zero or non-numeric markers all mean
        that the work must run.
        """
        content = CompletionTracker.readMarker(marker)
        if content is None:
            return True

        if content != SUCCESS:
            if not content.lstrip("-").isdigit():
                logger.debug(
                    f"Marker '{marker}' contains unexpected content '{content}'. Assuming not done."
                )
            return True

        return False

    @staticmethod
    def shellCheck(marker: str) -> str:
        """
        Render the shell condition re-checking the marker inside a job script.

        Args:
            marker (str): Shell-quoted path to the marker.

        Returns:
            str: A condition that succeeds only if the marker reads exactly '0'
                once all whitespace is removed, the same rule as `mustRun`.
        """
        return (
            f"[ -f {marker} ] && "
            f"[ \"$(tr -d '[:space:]' 2>/dev/null < {marker})\" = \"{SUCCESS}\" ]"
        )
