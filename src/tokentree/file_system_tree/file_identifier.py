"""Identity of a directory by device and inode, for symlink cycle detection."""

import os
from typing import NamedTuple, Optional


class FileIdentifier(NamedTuple):
    """Device and inode pair that uniquely identifies a directory on a host.

    Only used when symbolic links are followed: a directory whose identifier is
    already on the current descent path is a cycle.

    Example:
        >>> FileIdentifier(1, 2) == FileIdentifier(1, 2)
        True
    """

    device_id: int
    inode_number: int

    @classmethod
    def of(cls, path: str) -> Optional["FileIdentifier"]:
        """Return the identifier of ``path`` (following links), or None if it can't be stat'ed."""
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)
