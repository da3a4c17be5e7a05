"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Runs the pairwise pass over every size group.

Each group is a self-contained unit of work with its own skip matrix, so groups can be
processed one at a time or by a bounded thread pool with identical results. Results are
always yielded in group order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional

from dedup.core.interfaces import PairComparator
from dedup.core.models import PassCounters, SizeGroup
from dedup.core.pairwise import PairwiseDeduplicator
from dedup.core.selector import FilenameComparator

logger = logging.getLogger(__name__)


@dataclass
class GroupResult:
    """Duplicates found in one size group, in index order."""
    group: SizeGroup
    indexes: List[int]
    counters: PassCounters

    @property
    def duplicates(self) -> List[str]:
        return [self.group.files[i] for i in self.indexes]


class DeduplicatorImpl:
    """
    Applies PairwiseDeduplicator to each size group.

    Attributes:
        workers: Number of groups processed concurrently (1 = sequential)
        abort_on_cancel: Stop a group's pass at the first cancelled comparison
        comparator_factory: Builds the per-pair compare function from the stop flag
    """

    def __init__(
            self,
            workers: int = 1,
            abort_on_cancel: bool = True,
            comparator_factory: Optional[Callable[[Optional[Callable[[], bool]]], PairComparator]] = None
    ):
        self.workers = workers
        self.abort_on_cancel = abort_on_cancel
        self.comparator_factory = comparator_factory or FilenameComparator

    def find_duplicates(
            self,
            groups: Iterable[SizeGroup],
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Iterator[GroupResult]:
        """
        Yield one GroupResult per group, in the order the groups were given.
        Stops taking new groups once stopped_flag() returns True.
        """
        if self.workers <= 1:
            for group in groups:
                if stopped_flag and stopped_flag():
                    logger.debug("Duplicate detection interrupted")
                    return
                yield self._process_group(group, stopped_flag)
            return

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="compare") as executor:
            pending = []
            for group in groups:
                if stopped_flag and stopped_flag():
                    break
                pending.append(executor.submit(self._process_group, group, stopped_flag))
            for future in pending:
                yield future.result()

    def _process_group(
            self,
            group: SizeGroup,
            stopped_flag: Optional[Callable[[], bool]]
    ) -> GroupResult:
        logger.debug(f"Comparing {len(group.files)} files of {group.size} bytes: {group.files}")
        pairwise = PairwiseDeduplicator(abort_on_cancel=self.abort_on_cancel)
        indexes = pairwise.find_indexes(group.files, self.comparator_factory(stopped_flag))
        return GroupResult(group=group, indexes=indexes, counters=pairwise.counters)
