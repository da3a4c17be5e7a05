"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/pairwise.py
Pairwise duplicate detection over one candidate set.

Every unordered pair (row, col), row < col, is visited in row-major order. Once an
item is judged to be a duplicate, the rest of its row is marked in a compacted
triangular skip matrix (a flat list of n*(n-1)/2 flags) and never compared again.
This only elides comparisons for items whose fate is final; it does not infer
equality between pairs that were not compared.
"""

import logging
from typing import Callable, List, Sequence, TypeVar

from dedup.core.exceptions import ComparisonCancelledError
from dedup.core.models import PassCounters, Selection

logger = logging.getLogger(__name__)

T = TypeVar("T")
CompareFunc = Callable[[T, T], Selection]


def skip_offset(n: int, row: int, col: int) -> int:
    """
    Map the pair (row, col) with 0 <= row < col < n onto [0, n*(n-1)/2).
    Pairs in earlier rows come first, then the position inside the row.
    """
    return row * n + col - row * (row + 1) // 2 - (row + 1)


class PairwiseDeduplicator:
    """
    Finds the indexes of duplicate items in a candidate set.

    Attributes:
        abort_on_cancel: Stop the pass on the first cancelled comparison instead of
            treating it as a failed pair.
        counters: Comparisons, skips and failures of the last pass.
    """

    def __init__(self, abort_on_cancel: bool = False):
        self.abort_on_cancel = abort_on_cancel
        self.counters = PassCounters()

    def find_indexes(self, items: Sequence[T], compare: CompareFunc) -> List[int]:
        """
        Run one pass over items.

        Args:
            items: Ordered candidates; index identity must stay stable for the pass.
            compare: Returns the Selection for (left, right). Exceptions are logged
                and the pair counts as not proven duplicate.
        Returns:
            Sorted list of distinct indexes judged to be duplicates.
        """
        self.counters = PassCounters()
        n = len(items)
        skip_matrix = [False] * (n * (n - 1) // 2)
        duplicates = set()

        for row in range(n - 1):
            for col in range(row + 1, n):
                if skip_matrix[skip_offset(n, row, col)]:
                    logger.debug(f"Skipping comparison: {items[row]} <> {items[col]}")
                    self.counters.skipped += 1
                    continue

                self.counters.comparisons += 1
                try:
                    selection = compare(items[row], items[col])
                except ComparisonCancelledError as e:
                    self.counters.failures += 1
                    self.counters.cancelled = True
                    logger.error(f"Comparison cancelled: {items[row]} <> {items[col]}: {e}")
                    if self.abort_on_cancel:
                        return sorted(duplicates)
                    continue
                except Exception as e:
                    self.counters.failures += 1
                    logger.error(f"Comparison failure: {items[row]} <> {items[col]}: {e}")
                    continue

                logger.info(f"Comparison: {items[row]} <> {items[col]}, duplicate={selection}")

                if selection is Selection.NONE:
                    continue
                elif selection is Selection.LEFT:
                    for c in range(col + 1, n):
                        skip_matrix[skip_offset(n, row, c)] = True
                    duplicates.add(row)
                elif selection is Selection.RIGHT:
                    for c in range(col + 1, n):
                        skip_matrix[skip_offset(n, col, c)] = True
                    duplicates.add(col)
                else:
                    raise ValueError(f"Invalid selection option {selection!r}")

        return sorted(duplicates)


def find_duplicate_indexes(items: Sequence[T], compare: CompareFunc) -> List[int]:
    """Convenience wrapper for a single pass without cancellation."""
    return PairwiseDeduplicator().find_indexes(items, compare)
