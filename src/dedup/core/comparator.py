"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Streaming byte-exact content comparison with cooperative cancellation.

Both streams are read chunk by chunk in lockstep and the comparison stops at the
first differing chunk, so the bytes read before a verdict are proportional to the
position of the first difference. The stop flag is checked once per chunk.
"""

import logging
from typing import BinaryIO, Callable, Optional

from dedup.core.exceptions import ComparisonCancelledError, ReadSizeMismatchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096
# Large enough to reduce head thrashing on spinning disks,
# small enough to keep memory usage reasonable with two files open
READ_AHEAD_SIZE = 4096 * 4000


def _read_exactly(stream: BinaryIO, size: int) -> bytes:
    """Read `size` bytes, looping over short reads. Returns fewer bytes only at EOF."""
    if size == 0:
        return b""
    data = stream.read(size)
    if len(data) == size or not data:
        return data
    parts = [data]
    remaining = size - len(data)
    while remaining > 0:
        more = stream.read(remaining)
        if not more:
            break
        parts.append(more)
        remaining -= len(more)
    return b"".join(parts)


def equal_streams(
        left: BinaryIO,
        right: BinaryIO,
        stopped_flag: Optional[Callable[[], bool]] = None,
        chunk_size: int = CHUNK_SIZE
) -> bool:
    """
    Compare two binary streams of equal reported size.

    Returns:
        True if the contents are byte-identical, False at the first mismatch.
    Raises:
        ComparisonCancelledError: stopped_flag() returned True (no verdict).
        ReadSizeMismatchError: the streams ended at different positions.
        OSError: reading either stream failed.
    """
    position = 0
    while True:
        if stopped_flag and stopped_flag():
            raise ComparisonCancelledError()

        chunk1 = left.read(chunk_size)
        chunk2 = _read_exactly(right, len(chunk1))

        if len(chunk1) != len(chunk2):
            raise ReadSizeMismatchError(
                f"read size mismatch at offset {position}: left={len(chunk1)}, right={len(chunk2)}"
            )

        if chunk1 != chunk2:
            return False

        if not chunk1:
            # Left is exhausted, right must be exhausted at the same offset
            if right.read(1):
                raise ReadSizeMismatchError(f"right stream continues past offset {position}")
            return True

        position += len(chunk1)


def equal_files(
        left_path: str,
        right_path: str,
        stopped_flag: Optional[Callable[[], bool]] = None
) -> bool:
    """Open two files with a large read-ahead buffer and compare their contents."""
    with open(left_path, "rb", buffering=READ_AHEAD_SIZE) as f1, \
            open(right_path, "rb", buffering=READ_AHEAD_SIZE) as f2:
        equal = equal_streams(f1, f2, stopped_flag=stopped_flag)
    logger.debug(f"Content {'equal' if equal else 'differs'}: {left_path} <> {right_path}")
    return equal


class ContentComparator:
    """
    Compares file contents byte by byte.
    Holds the stop flag so one instance can serve a whole pass.
    """

    def __init__(self, stopped_flag: Optional[Callable[[], bool]] = None):
        self.stopped_flag = stopped_flag

    def equal(self, left_path: str, right_path: str) -> bool:
        return equal_files(left_path, right_path, stopped_flag=self.stopped_flag)
