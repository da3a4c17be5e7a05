"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups scanned files by exact size.

This is a full barrier: group membership is unknown until every record has been
seen, so the whole stream is drained before the first group is returned.
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional

from dedup.core.models import File, SizeGroup

logger = logging.getLogger(__name__)


class SizeBucketer:
    """
    Partitions file records into candidate sets of equal size.

    Attributes:
        min_size: Files smaller than this many bytes are left out
    """

    def __init__(self, min_size: int = 0):
        self.min_size = min_size
        self.files_seen = 0

    def bucket(
            self,
            files: Iterable[File],
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[SizeGroup]:
        """
        Returns groups with 2+ files each, largest size first.
        Paths keep their arrival order inside a group.
        """
        buckets: Dict[int, SizeGroup] = {}
        seen: Dict[int, set] = defaultdict(set)
        self.files_seen = 0

        for file in files:
            if stopped_flag and stopped_flag():
                logger.debug("Size grouping interrupted")
                return []

            self.files_seen += 1
            if file.size < self.min_size:
                logger.debug(f"Skipping file below min size ({file.size} bytes): {file.path}")
                continue
            if file.identity in seen[file.size]:
                # Same file reached twice: a repeated or nested root, a symlinked
                # root, or a hard link
                logger.debug(f"File appeared twice in file listing: {file.path}")
                continue
            seen[file.size].add(file.identity)
            if file.size not in buckets:
                buckets[file.size] = SizeGroup(size=file.size)
            buckets[file.size].add_file(file.path)

        groups = [group for group in buckets.values() if group.is_candidate()]
        groups.sort(key=lambda g: -g.size)
        logger.debug(f"Finished size grouping: {len(buckets)} size(s), {len(groups)} candidate group(s)")
        return groups
