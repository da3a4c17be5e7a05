"""
dedup — find byte-identical files and act on the copies.

Core features:
- Exact byte-by-byte comparison within groups of equal-sized files (no hashing)
- Keeps the likely original of each pair, judged from copy suffixes such as
  "photo (1).jpg" or "photo - Copy (2).jpg", extension, name and modification time
- Dry run by default; permanent removal or move to trash (via send2trash) on request
- Concurrent scanning of several roots, graceful Ctrl+C cancellation
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dedup")
except Exception:
    import os as _os
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    _pyproject = _os.path.join(_os.path.dirname(__file__), "..", "..", "pyproject.toml")
    with open(_pyproject, "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API
from dedup.commands import DeduplicationCommand
from dedup.core import (
    Action, DeduplicationParams, DeduplicationStats, FilenameParse, Selection, SizeGroup,
    find_duplicate_indexes, split_file_name)
from dedup.services.file_service import FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "DeduplicationStats",
    "Action",
    "Selection",
    "SizeGroup",
    "FilenameParse",
    "find_duplicate_indexes",
    "split_file_name",
    "FileService",
    "__version__",
]
