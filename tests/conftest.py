"""
Shared fixtures for deduplication tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict, Optional
import sys

# Add src/ to sys.path so the 'dupelink' package is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

MB = 1024 * 1024


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_file(temp_dir):
    """
    Factory writing `content` to `temp_dir / rel_path` (parents created).
    `mtime` (seconds since epoch) is applied with os.utime when given.
    """
    def _make(rel_path: str, content: bytes, mtime: Optional[float] = None) -> Path:
        path = temp_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def test_files(make_file) -> Dict[str, Path]:
    """
    Creates controlled test files for deduplication scenarios:
    - 2 identical 2MB files (duplicates, distinct mtimes)
    - 2 identical 3MB files (duplicates, distinct mtimes)
    - 1 unique 2MB file (same size as the first pair, different content)
    - 1 small file below the default 1MB minimum
    - 1 ignored .lnk file with duplicate content
    - 1 duplicate inside a subdirectory (only seen in recursive mode)
    """
    files = {}

    content_a = b"A" * (2 * MB)
    files["dup1_a"] = make_file("dup1_a.bin", content_a, mtime=1_000_000)
    files["dup1_b"] = make_file("dup1_b.bin", content_a, mtime=2_000_000)

    content_b = b"B" * (3 * MB)
    files["dup2_a"] = make_file("dup2_a.bin", content_b, mtime=3_000_000)
    files["dup2_b"] = make_file("dup2_b.bin", content_b, mtime=4_000_000)

    # Same size as the first pair, one byte different
    files["unique"] = make_file("unique.bin", b"A" * (2 * MB - 1) + b"Z", mtime=5_000_000)

    files["small"] = make_file("small.bin", b"S" * 100)

    files["ignored"] = make_file("shortcut.lnk", content_a)

    files["sub_dup"] = make_file("subdir/dup_in_subdir.bin", content_a, mtime=6_000_000)

    return files
