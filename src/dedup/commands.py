"""
Unified command orchestrator for deduplication.
Scan → size grouping → pairwise detection → handler, with cancellation support.
"""
import logging
import os
import time
from typing import Callable, List, Optional

from dedup.core.deduplicator import DeduplicatorImpl
from dedup.core.grouper import SizeBucketer
from dedup.core.interfaces import DuplicateHandler, FileScanner
from dedup.core.models import DeduplicationParams, DeduplicationStats, Stage
from dedup.core.scanner import MultiRootScanner
from dedup.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the entire deduplication workflow:
    1. Walk every root directory concurrently
    2. Group the records by exact size (full barrier)
    3. Run the pairwise pass over each group
    4. Invoke the handler once per duplicate, in index order within a group

    Usage:
        params = DeduplicationParams(root_dirs=["~/Pictures"], min_size_bytes=2048)
        stats = DeduplicationCommand().execute(params, stopped_flag=stop_event.is_set)
    """

    def execute(
            self,
            params: DeduplicationParams,
            handler: Optional[DuplicateHandler] = None,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> DeduplicationStats:
        """
        Execute deduplication with given parameters.

        Args:
            params: Validated run parameters
            handler: Action per duplicate path; defaults to the handler for params.action
            stopped_flag: () -> bool (returns True if the run should stop)
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Statistics for the run. Comparison and handler failures are logged and
            counted, never raised.
        """
        handler = handler or FileService.handler_for(params.action)
        stats = DeduplicationStats()
        total_start_time = time.time()

        # Step 1 + 2: scanning feeds the size bucketer directly
        start_time = time.time()
        scanner: FileScanner = MultiRootScanner(params.root_dirs)
        bucketer = SizeBucketer(min_size=params.min_size_bytes)
        groups = bucketer.bucket(scanner.scan(stopped_flag=stopped_flag), stopped_flag=stopped_flag)
        stats.files_scanned = bucketer.files_seen
        stats.groups = len(groups)
        stats.update_stage(Stage.SCAN.value, bucketer.files_seen, time.time() - start_time)
        stats.update_stage(Stage.SIZE.value, len(groups), 0.0)
        logger.debug(f"Scanned {bucketer.files_seen} files into {len(groups)} candidate group(s)")
        if progress_callback:
            progress_callback(Stage.SCAN.value, bucketer.files_seen, None)

        # Step 3 + 4: compare group by group, handle duplicates as each group completes
        deduplicator = DeduplicatorImpl(workers=params.workers, abort_on_cancel=params.abort_on_cancel)
        compare_time = 0.0
        handle_time = 0.0
        processed = 0
        start_time = time.time()
        for result in deduplicator.find_duplicates(groups, stopped_flag=stopped_flag):
            compare_time += time.time() - start_time
            stats.counters.merge(result.counters)
            stats.duplicates_found += len(result.indexes)
            processed += 1

            start_time = time.time()
            for path in result.duplicates:
                self._handle(handler, path, result.group.size, stats)
            handle_time += time.time() - start_time

            if progress_callback:
                progress_callback(Stage.COMPARE.value, processed, len(groups))
            start_time = time.time()

        stats.update_stage(Stage.COMPARE.value, sum(len(g) for g in groups[:processed]), compare_time)
        stats.update_stage(Stage.HANDLE.value, stats.handled, handle_time)
        stats.total_time = time.time() - total_start_time
        return stats

    @staticmethod
    def _handle(handler: DuplicateHandler, path: str, size: int, stats: DeduplicationStats) -> None:
        logger.debug(f"Handling duplicate: {path}")
        try:
            handler(path)
        except Exception as e:
            stats.handler_failures += 1
            logger.error(f"Handler error for {path}: {e}")
            return
        stats.handled += 1
        stats.bytes_reclaimed += size

    @staticmethod
    def validate_roots(root_dirs: List[str]) -> None:
        """Raise ValueError if any root is missing or not a directory."""
        for root in root_dirs:
            if not os.path.exists(root):
                raise ValueError(f"Directory not found: {root}")
            if not os.path.isdir(root):
                raise ValueError(f"Path is not a directory: {root}")
