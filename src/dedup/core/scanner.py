"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Directory traversal producing (path, size) records for regular files.
Features:
- Recursively walks each root with os.walk, never following symbolic links
- Skips symlinks, zero-byte files and entries that cannot be stat'ed
- Walks several roots concurrently (one thread per root) and merges the
  records through a bounded queue, since roots may live on different disks
"""

import logging
import os
import queue
import stat
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List, Optional

from dedup.core.models import File

logger = logging.getLogger(__name__)

QUEUE_SIZE = 10000


class FileScannerImpl:
    """
    Walks one root directory and yields regular files.

    Attributes:
        root_dir: Root directory to scan
    """

    def __init__(self, root_dir: str):
        self.root_dir = root_dir

    def scan(self, stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[File]:
        """
        Lazily yield File records found under root_dir.
        Stops early when stopped_flag() returns True.
        """
        logger.debug(f"Walking directory: {self.root_dir}")

        if not os.path.isdir(self.root_dir):
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        def on_error(error: OSError) -> None:
            logger.error(f"Unable to access {error.filename}: {error}")

        for root, dirs, files in os.walk(self.root_dir, onerror=on_error):
            if stopped_flag and stopped_flag():
                logger.debug(f"Scan of {self.root_dir} interrupted")
                return
            dirs.sort()
            for filename in sorted(files):
                if stopped_flag and stopped_flag():
                    logger.debug(f"Scan of {self.root_dir} interrupted")
                    return
                record = self._process_file(os.path.join(root, filename))
                if record is not None:
                    yield record

    @staticmethod
    def _process_file(path: str) -> Optional[File]:
        """Return a File for a non-empty regular file, else None."""
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.error(f"Failed to get file info for {path}: {e}")
            return None

        if stat.S_ISLNK(st.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return None
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None
        if st.st_size == 0:
            logger.debug(f"Skipping zero-byte file: {path}")
            return None

        return File(path=path, size=st.st_size, dev=st.st_dev, ino=st.st_ino)


class MultiRootScanner:
    """
    Scans several roots concurrently and merges their records into one stream.
    Records from different roots interleave in arrival order.
    """

    _SENTINEL = object()

    def __init__(self, root_dirs: List[str]):
        self.root_dirs = list(root_dirs)

    def scan(self, stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[File]:
        if not self.root_dirs:
            return

        records: queue.Queue = queue.Queue(maxsize=QUEUE_SIZE)
        abandoned = threading.Event()
        start_time = time.time()

        with ThreadPoolExecutor(max_workers=len(self.root_dirs), thread_name_prefix="scan") as executor:
            futures = [
                executor.submit(self._produce, root, records, abandoned, stopped_flag)
                for root in self.root_dirs
            ]

            try:
                remaining = len(futures)
                while remaining:
                    item = records.get()
                    if item is self._SENTINEL:
                        remaining -= 1
                        continue
                    yield item
            finally:
                # Unblocks producers if the consumer stops iterating early
                abandoned.set()

            # Surface producer failures (e.g. a root that is not a directory)
            for future in futures:
                future.result()

        logger.debug(f"Finished listing {len(self.root_dirs)} root(s) in {time.time() - start_time:.2f}s")

    def _produce(
            self,
            root_dir: str,
            records: queue.Queue,
            abandoned: threading.Event,
            stopped_flag: Optional[Callable[[], bool]]
    ) -> None:
        try:
            for record in FileScannerImpl(root_dir).scan(stopped_flag=stopped_flag):
                if not self._put(records, record, abandoned):
                    return
        finally:
            self._put(records, self._SENTINEL, abandoned)

    @staticmethod
    def _put(records: queue.Queue, item, abandoned: threading.Event) -> bool:
        """Blocking put that gives up once the consumer is gone."""
        while not abandoned.is_set():
            try:
                records.put(item, timeout=0.1)
                return True
            except queue.Full:
                continue
        return False
