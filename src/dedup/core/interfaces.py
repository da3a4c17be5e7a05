"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.

Key Components:
---------------
- FileScanner: Interface for walking directories and yielding file records.
- PairComparator: Per-pair compare function returning a Selection.
- DuplicateHandler: Action applied to each confirmed duplicate path.
"""

from typing import Callable, Iterator, Optional, Protocol

from dedup.core.models import File, Selection


class FileScanner(Protocol):
    """Interface for scanning file systems and collecting file records."""
    def scan(self, stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[File]:
        """
        Yield regular files found under the configured root(s).

        Args:
            stopped_flag: Function that returns True if the scan should stop.
        """
        ...


class PairComparator(Protocol):
    """
    Decides whether two items are duplicates and which one is the copy.
    May raise; callers treat any error as "not proven duplicate".
    """
    def __call__(self, left: str, right: str) -> Selection: ...


class DuplicateHandler(Protocol):
    """Action applied once per duplicate path. Raises on failure."""
    def __call__(self, path: str) -> None: ...
