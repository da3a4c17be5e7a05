"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning, size grouping and pairwise duplicate detection.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from dedup.utils.convert_utils import ConvertUtils


# =============================
# Enums
# =============================

class Selection(Enum):
    """
    Verdict of one pairwise comparison.
    NONE: not duplicates, LEFT: first argument is the duplicate,
    RIGHT: second argument is the duplicate.
    """
    NONE = 0
    LEFT = 1
    RIGHT = 2

    def __str__(self) -> str:
        return self.name.capitalize()


class Action(Enum):
    """What happens to a file once it is judged to be a duplicate."""
    DRY_RUN = "dry-run"
    REMOVE = "remove"
    TRASH = "trash"

    @property
    def display_name(self) -> str:
        """Human-readable name for CLI output."""
        mapping = {
            Action.DRY_RUN: "Dry run (print only)",
            Action.REMOVE: "Remove permanently",
            Action.TRASH: "Move to trash",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SCAN = "scan"
    SIZE = "size"
    COMPARE = "compare"
    HANDLE = "handle"


# ======================
#  Core Data Models
# ======================

@dataclass
class File:
    """
    A regular file found by the scanner.
    dev/ino come from the scanner's lstat; records built without them fall back to
    the path as their identity.
    """
    path: str
    size: int  # in bytes
    name: Optional[str] = None
    dev: Optional[int] = None
    ino: Optional[int] = None

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)

    @property
    def identity(self) -> Union[Tuple[int, int], str]:
        """Same value for every path that reaches the same file on disk."""
        if self.dev is None or self.ino is None:
            return self.path
        return self.dev, self.ino

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class SizeGroup:
    """
    Candidate set: paths of distinct regular files sharing one exact size.
    Index identity matters for the pairwise pass, so the order of `files` is kept as given.
    """
    size: int
    files: List[str] = field(default_factory=list)

    def add_file(self, path: str) -> None:
        self.files.append(path)

    def is_candidate(self) -> bool:
        """True if this group contains at least two files."""
        return len(self.files) >= 2

    def __len__(self) -> int:
        return len(self.files)

    def __repr__(self):
        return f"<SizeGroup size={self.size}, count={len(self.files)}>"


class FilenameParse(NamedTuple):
    """Result of splitting a file name into its guessed original name, copy depth and extension."""
    prefix: str
    counter: int
    extension: str


@dataclass
class PassCounters:
    """Counters collected by one pairwise pass over a size group."""
    comparisons: int = 0
    skipped: int = 0
    failures: int = 0
    cancelled: bool = False

    def merge(self, other: "PassCounters") -> None:
        self.comparisons += other.comparisons
        self.skipped += other.skipped
        self.failures += other.failures
        self.cancelled = self.cancelled or other.cancelled


class DeduplicationStats:
    """
    Statistics collected during one run of the pipeline.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.files_scanned: int = 0
        self.groups: int = 0
        self.duplicates_found: int = 0
        self.handled: int = 0
        self.handler_failures: int = 0
        self.bytes_reclaimed: int = 0
        self.counters = PassCounters()
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(self, stage_name: str, items: int, duration: float) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {"items": 0, "time": 0.0}
        self.stage_stats[stage_name]["items"] += items
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            Stage.SCAN.value: "Files scanned",
            Stage.SIZE.value: "Size groups",
            Stage.COMPARE.value: "Files compared",
            Stage.HANDLE.value: "Duplicates handled",
        }

        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: ITEMS / TIME",
        ]
        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.title())
            lines.append(f"{label}: {data['items']} / {data['time']:.3f}s")

        lines.append("")
        lines.append(f"Candidate groups: {self.groups}")
        lines.append(f"Comparisons:{self.counters.comparisons} "
                     f"(skipped {self.counters.skipped}, failed {self.counters.failures})")
        lines.append(f"Duplicates found: {self.duplicates_found}")
        if self.handler_failures:
            lines.append(f"Handler failures: {self.handler_failures}")
        lines.append(f"Space held by duplicates: {ConvertUtils.bytes_to_human(self.bytes_reclaimed)}")
        if self.counters.cancelled:
            lines.append("Run was cancelled before completion")
        return "\n".join(lines)


"""
DTO for run parameters with built-in validation.
Threaded explicitly into the pipeline entry point instead of living in global state.
"""

DEFAULT_MIN_SIZE = 2048


@dataclass
class DeduplicationParams:
    """Parameters for one deduplication run with validation."""
    root_dirs: List[str] = field(default_factory=lambda: ["."])
    min_size_bytes: int = DEFAULT_MIN_SIZE
    action: Action = Action.DRY_RUN
    workers: int = 1
    abort_on_cancel: bool = True

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dirs:
            raise ValueError("No directories given")

        normalized = []
        for root in self.root_dirs:
            if not root or not root.strip():
                raise ValueError("Root directory cannot be empty")
            normalized.append(os.path.normpath(root))
        self.root_dirs = normalized

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.workers < 1:
            raise ValueError("Worker count must be at least 1")

    @staticmethod
    def from_human_readable(
            root_dirs: Optional[List[str]] = None,
            min_size_str: str = "2K",
            action: Action = Action.DRY_RUN,
            workers: int = 1,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return DeduplicationParams(
            root_dirs=list(root_dirs) if root_dirs else ["."],
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            action=action,
            workers=workers,
        )
