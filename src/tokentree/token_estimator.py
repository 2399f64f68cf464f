"""Approximate token counts from file sizes.

Real tokenization would require reading and parsing every file. For an interactive
overview of a directory the byte length is a good enough proxy: on typical source
code a token averages about four bytes.
"""

import os

BYTES_PER_TOKEN = 4


def estimate_tokens(byte_length: int) -> int:
    """Estimate a token count from a byte length.

    Args:
        byte_length: Size of the content in bytes.

    Returns:
        The byte length divided by four, truncated.

    Example:
        >>> estimate_tokens(4)
        1
        >>> estimate_tokens(11)
        2
        >>> estimate_tokens(0)
        0
    """
    return byte_length // BYTES_PER_TOKEN


def file_tokens(path: str) -> int:
    """Estimate the token count of a file from its size on disk.

    The stat follows symbolic links, so a link reports the size of its target.

    Args:
        path: Path of the file.

    Returns:
        The estimated token count.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    return estimate_tokens(os.stat(path).st_size)
