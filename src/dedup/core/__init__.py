"""
Core deduplication engine — scanner, size bucketer, pairwise detector and selection rules.

- FileScannerImpl / MultiRootScanner: directory traversal, one thread per root
- SizeBucketer: exact-size grouping with a minimum-size filter
- PairwiseDeduplicator: row-major pairwise pass with a compacted skip matrix
- ContentComparator: streaming byte-exact comparison with cancellation
- select_duplicate / split_file_name: which of two identical files is the copy
- DeduplicatorImpl: runs the pairwise pass over every size group

Pure Python, no GUI dependencies.
"""

from .models import (
    Action, DeduplicationParams, DeduplicationStats, File, FilenameParse, PassCounters,
    Selection, SizeGroup)
from .exceptions import (
    ComparisonCancelledError, DedupError, ImpossibleStateError, ReadSizeMismatchError,
    SameFileError)
from .naming import split_file_name
from .comparator import ContentComparator, equal_files, equal_streams
from .selector import FilenameComparator, choose_duplicate, select_duplicate
from .pairwise import PairwiseDeduplicator, find_duplicate_indexes, skip_offset
from .scanner import FileScannerImpl, MultiRootScanner
from .grouper import SizeBucketer
from .deduplicator import DeduplicatorImpl, GroupResult

__all__ = [
    "Action",
    "DeduplicationParams",
    "DeduplicationStats",
    "File",
    "FilenameParse",
    "PassCounters",
    "Selection",
    "SizeGroup",
    "ComparisonCancelledError",
    "DedupError",
    "ImpossibleStateError",
    "ReadSizeMismatchError",
    "SameFileError",
    "split_file_name",
    "ContentComparator",
    "equal_files",
    "equal_streams",
    "FilenameComparator",
    "choose_duplicate",
    "select_duplicate",
    "PairwiseDeduplicator",
    "find_duplicate_indexes",
    "skip_offset",
    "FileScannerImpl",
    "MultiRootScanner",
    "SizeBucketer",
    "DeduplicatorImpl",
    "GroupResult",
]
