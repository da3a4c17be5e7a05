"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/selector.py
Decides which of two content-identical files is the copy.

RULES (first rule that discriminates wins)
------------------------------------------
1. Larger copy counter parsed from the name is the duplicate
2. A file without extension loses to one with an extension
3. A digits-only name loses to one that is not digits-only
4. The newer modification time is the duplicate
5. Otherwise the second file is the duplicate
"""

import logging
import os
import stat
from typing import Callable, Optional

from dedup.core.comparator import ContentComparator
from dedup.core.exceptions import ImpossibleStateError, SameFileError
from dedup.core.models import Selection
from dedup.core.naming import is_digits, split_file_name

logger = logging.getLogger(__name__)


def _check_preconditions(left: os.stat_result, right: os.stat_result) -> None:
    if left.st_size != right.st_size:
        raise ImpossibleStateError("comparison on differently sized files")
    if left.st_size == 0 or right.st_size == 0:
        raise ImpossibleStateError("duplicate selection on empty files")
    if stat.S_ISDIR(left.st_mode) or stat.S_ISDIR(right.st_mode):
        raise ImpossibleStateError("duplicate comparison contained a directory")
    if stat.S_ISLNK(left.st_mode) or stat.S_ISLNK(right.st_mode):
        raise ImpossibleStateError("duplicate comparison contained a symlink")


def choose_duplicate(
        left_stat: os.stat_result,
        right_stat: os.stat_result,
        left_name: str,
        right_name: str
) -> Selection:
    """
    Apply the selection rules to two files already known to have identical content.
    Pure function of the given metadata and names.
    """
    _check_preconditions(left_stat, right_stat)

    left_prefix, left_counter, left_ext = split_file_name(left_name)
    right_prefix, right_counter, right_ext = split_file_name(right_name)

    if left_counter != right_counter:
        return Selection.LEFT if left_counter > right_counter else Selection.RIGHT

    if left_ext and not right_ext:
        return Selection.RIGHT
    if not left_ext and right_ext:
        return Selection.LEFT

    left_digits = is_digits(left_prefix)
    right_digits = is_digits(right_prefix)
    if left_digits and not right_digits:
        return Selection.LEFT
    if right_digits and not left_digits:
        return Selection.RIGHT

    if left_stat.st_mtime_ns < right_stat.st_mtime_ns:
        return Selection.RIGHT
    if left_stat.st_mtime_ns > right_stat.st_mtime_ns:
        return Selection.LEFT

    return Selection.RIGHT


def select_duplicate(left_path: str, right_path: str) -> Selection:
    """Stat both paths (without following symlinks) and choose the duplicate."""
    left_stat = os.lstat(left_path)
    right_stat = os.lstat(right_path)
    return choose_duplicate(
        left_stat,
        right_stat,
        os.path.basename(left_path),
        os.path.basename(right_path),
    )


class FilenameComparator:
    """
    Per-pair compare function for the pairwise pass over file paths.
    Proves byte equality first, then picks the duplicate.

    Raises whatever the content comparison raises; the pairwise pass logs it
    and treats the pair as not proven duplicate.
    """

    def __init__(self, stopped_flag: Optional[Callable[[], bool]] = None):
        self.content = ContentComparator(stopped_flag=stopped_flag)

    def __call__(self, left_path: str, right_path: str) -> Selection:
        # Different spellings (relative root, symlinked root) can name one file
        if left_path == right_path or os.path.samefile(left_path, right_path):
            raise SameFileError(left_path)

        if not self.content.equal(left_path, right_path):
            return Selection.NONE

        return select_duplicate(left_path, right_path)
