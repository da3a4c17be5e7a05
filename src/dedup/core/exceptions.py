"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exceptions.py
Error taxonomy for the detection core.

- DedupError: base class for every error raised by the core
- ComparisonCancelledError: comparison stopped by the cooperative stop flag (no verdict)
- ImpossibleStateError: a contract between components was broken upstream
  (bucketing or scanning let through something the core must never see)
- SameFileError: a path was compared with itself
"""


class DedupError(Exception):
    """Base class for all dedup errors."""


class ComparisonCancelledError(DedupError):
    """Raised when a comparison is aborted because cancellation was requested."""

    def __init__(self, message: str = "comparison cancelled"):
        super().__init__(message)


class ImpossibleStateError(DedupError):
    """
    Raised when a defensive invariant is violated.
    These indicate a bug in an upstream collaborator, not a user-facing condition.
    """

    def __init__(self, message: str):
        super().__init__(f"error should not be possible: {message}")


class ReadSizeMismatchError(ImpossibleStateError):
    """Two streams of equal reported size returned a different number of bytes."""


class SameFileError(DedupError, ValueError):
    """Raised when an item is compared with itself."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"comparing item with itself: {path}")
