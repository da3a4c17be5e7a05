"""
Shared fixtures for deduplication tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import sys
import tempfile
from pathlib import Path
from typing import Dict

import pytest

# Add src/ to sys.path so the 'dedup' package is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def set_mtime():
    """Sets a file's modification time (seconds since epoch)."""
    def _set(path: Path, seconds: int) -> None:
        os.utime(path, ns=(seconds * 1_000_000_000, seconds * 1_000_000_000))
    return _set


@pytest.fixture
def photo_files(temp_dir, set_mtime) -> Dict[str, Path]:
    """
    Creates the classic copy scenario:
    - a.jpg and "a (1).jpg": identical content (the second is the browser copy)
    - b.jpg: different size, never compared with the a variants
    - small.txt: below the default 2K minimum size
    """
    files = {}
    content_a = b"A" * 4096

    files["a"] = temp_dir / "a.jpg"
    files["a_copy"] = temp_dir / "a (1).jpg"
    files["a"].write_bytes(content_a)
    files["a_copy"].write_bytes(content_a)
    # The copy is older, so only the name can tell them apart
    set_mtime(files["a"], 2_000_000)
    set_mtime(files["a_copy"], 1_000_000)

    files["b"] = temp_dir / "b.jpg"
    files["b"].write_bytes(b"B" * 5000)

    files["small"] = temp_dir / "small.txt"
    files["small"].write_bytes(b"S" * 100)

    return files
