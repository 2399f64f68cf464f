"""Error action enum for handling filesystem errors during directory traversal."""

from enum import Enum


class ErrorAction(str, Enum):
    """Action to take when a directory listing or file stat fails during traversal.

    Values:
        WARN: Log a warning and continue with a best-effort result (default behavior)
        RAISE: Re-raise the OSError to the caller
    """

    WARN = "warn"
    RAISE = "raise"
