"""
Shared fixtures for duplicate cleanup tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import time
import pytest
import tempfile
from pathlib import Path
from typing import Dict

# Fixed reference instant for age-based tests
NOW = 1_700_000_000.0
DAY = 24 * 60 * 60


def write_file(path: Path, content: bytes, mtime: float = None) -> Path:
    """Writes `content` to `path` (creating parents) and optionally sets its mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate scenarios:
    - 3 identical files (one oldest original + 2 duplicates, one of them in a subdirectory)
    - 2 identical files with different content (second group)
    - 2 unique files (different content)
    - 2 empty files (never grouped)
    - 1 copy inside a hidden directory (never scanned)
    """
    base = time.time() - 10 * DAY
    files = {}

    # Duplicate group #1 (1KB of 'A'), oldest is dup1_a
    content_a = b"A" * 1024
    files["dup1_a"] = write_file(temp_dir / "dup1_a.txt", content_a, base)
    files["dup1_b"] = write_file(temp_dir / "dup1_b.txt", content_a, base + 100)
    files["sub_dup"] = write_file(temp_dir / "subdir" / "dup_in_subdir.txt", content_a, base + 200)

    # Duplicate group #2 (2KB of 'B'), oldest is dup2_b
    content_b = b"B" * 2048
    files["dup2_a"] = write_file(temp_dir / "dup2_a.txt", content_b, base + 50)
    files["dup2_b"] = write_file(temp_dir / "dup2_b.txt", content_b, base + 10)

    # Unique files
    files["unique1"] = write_file(temp_dir / "unique1.txt", b"C" * 1500, base)
    files["unique2"] = write_file(temp_dir / "unique2.jpg", b"D" * 2500, base)

    # Empty files: identical digests, still never duplicates
    files["empty1"] = write_file(temp_dir / "empty1.txt", b"", base)
    files["empty2"] = write_file(temp_dir / "empty2.txt", b"", base)

    # Hidden directory with a copy of group #1
    files["hidden"] = write_file(temp_dir / ".cache" / "hidden_copy.txt", content_a, base - 1000)

    return files
