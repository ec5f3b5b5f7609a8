"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- FileIdentity: Platform file identity (inode / file index) and reparse-point detection.
- LinkOps: Platform symbolic link creation.
- HashAlgorithm: Incremental digest (MD5, SHA-2, CRC32, xxHash) producing a hex signature.
- Hasher: Streams a file through a HashAlgorithm and validates the signature.
- FileScanner: Interface for scanning directories and returning structured file metadata.
- Deduplicator: Interface for the engine turning scanned files into duplicate groups.
"""

from typing import Protocol, List, Tuple, Optional, Callable
from dupelink.core.models import (
    Algorithm,
    DeduplicationParams,
    DuplicateGroup,
    DeduplicationStats,
    FileCollection,
    FileRecord,
)


# ===== Platform capabilities =====

class FileIdentity(Protocol):
    """Identifies the storage object behind a path."""

    def get_file_index(self, path: str) -> Optional[int]:
        """
        Platform file identity for `path`, or None when the platform does not
        provide one or the lookup fails.
        """
        ...

    def is_reparse_point(self, path: str) -> bool:
        """True if `path` is a symbolic link or another OS-level indirection."""
        ...


class LinkOps(Protocol):
    """Creates links on the current platform."""

    def create_symlink(self, target: str, link: str) -> None:
        """Create a symbolic link at `link` pointing to `target`. Raises OSError on failure."""
        ...


# ===== Hashing =====

class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the deduplication logic.
    """

    def update(self, data: bytes) -> None:
        """Feeds the next chunk of file content."""
        ...

    def hexdigest(self) -> str:
        """Lowercase hex signature of everything fed so far."""
        ...


class Hasher(Protocol):
    """Interface for computing content signatures of whole files."""

    def digest(self, path: str, algorithm: Algorithm) -> str: ...

    def compute_signature(self, file: FileRecord, algorithm: Algorithm) -> Optional[str]: ...


# ===== Pipeline =====

class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.

    Methods:
        scan: Scans and returns a structured collection of files.
    """
    def scan(
        self,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> FileCollection:
        """
        Scan files from the configured directory.

        Args:
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            FileCollection containing all scanned files and discovered cache files.
        """
        ...


class Deduplicator(Protocol):
    """
    Interface for the main deduplication engine.

    Filters the scanned files, groups them by the selected algorithm and
    collects statistics about the process.
    """
    def find_duplicates(
        self,
        files: List[FileRecord],
        params: DeduplicationParams,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Run the deduplication pipeline for the selected algorithm.

        Args:
            files: List of scanned files to analyze for duplicates.
            params: Unified configuration parameters (size bounds, algorithm, threads, ...).
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            A tuple containing:
                - List of duplicate groups (each with 2+ files, unsorted inside)
                - Statistics collected during processing
        """
        ...
