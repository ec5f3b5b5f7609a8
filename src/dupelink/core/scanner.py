"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory scanning for duplicate detection.
Features:
- Walks the tree with os.walk (depth 1 when not recursive)
- Skips ignored names and the tool's own log/cache files
- Always skips symbolic links and other reparse points
- Collects cache files left by earlier runs instead of scanning them
- Returns a FileCollection with one immutable FileRecord per accepted file
"""

import os
import stat
import time
import logging
from typing import List, Optional, Callable

from dupelink.core.models import FileRecord, FileCollection, LOG_FILE_NAME, CACHE_FILE_NAME
from dupelink.core.interfaces import FileScanner, FileIdentity
from dupelink.core.platform import get_platform

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans a directory and collects per-file metadata.

    Attributes:
        root_dir: Canonical root directory to scan
        recursive: Descend into subdirectories (otherwise only direct children)
        ignore: Names to skip; entries starting with '.' also match as suffixes
        identity: Platform capability for file identity and reparse-point checks
    """

    def __init__(
        self,
        root_dir: str,
        recursive: bool = False,
        ignore: Optional[List[str]] = None,
        identity: Optional[FileIdentity] = None
    ):
        self.root_dir = root_dir
        self.recursive = recursive
        self.ignore = set(ignore) if ignore else set()
        self.identity = identity or get_platform()

    def scan(self,
             progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None) -> FileCollection:
        """
        Single-pass scan. Per-entry metadata failures skip that entry only.
        """
        logger.debug(f"Scanning directory: {self.root_dir} (recursive={self.recursive})")

        if not os.path.isdir(self.root_dir):
            raise RuntimeError(f"Not a directory: {self.root_dir}")

        collection = FileCollection()
        processed_files = 0

        # Progress throttling: update every N files to reduce console overhead
        progress_interval = 1000
        progress_counter = 0
        start_time = time.time()

        for root, dirs, files in os.walk(self.root_dir, onerror=self._on_walk_error):
            collection.folder_count += 1

            if self.recursive:
                # Pre-filter subdirectories BEFORE os.walk enters them
                dirs[:] = sorted(d for d in dirs if self._prefilter_dir(os.path.join(root, d), d))
            else:
                dirs[:] = []

            for filename in sorted(files):
                path = os.path.join(root, filename)

                if filename == CACHE_FILE_NAME:
                    collection.cache_files.append(path)
                    continue

                record = self._process_file(path, filename)
                if record:
                    collection.files.append(record)
                processed_files += 1
                progress_counter += 1

                if progress_callback and progress_counter >= progress_interval:
                    progress_callback("Scanning", processed_files, None)
                    progress_counter = 0

        # Final update for small datasets
        if progress_callback and progress_counter > 0:
            progress_callback("Scanning", processed_files, None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Accepted {len(collection.files)} of {processed_files} files.")
        return collection

    def is_ignored(self, name: str) -> bool:
        """True for the tool's own log file and for names matching the ignore list."""
        if name == LOG_FILE_NAME:
            return True
        if name in self.ignore:
            return True
        return any(item.startswith(".") and name.endswith(item) for item in self.ignore)

    def _prefilter_dir(self, path: str, name: str) -> bool:
        """Pre-filter directories: skip ignored names and links/junctions."""
        if self.is_ignored(name):
            logger.debug(f"Skipping ignored directory: {path}")
            return False
        if self.identity.is_reparse_point(path):
            logger.debug(f"Skipping linked directory: {path}")
            return False
        return True

    def _process_file(self, path: str, name: str) -> Optional[FileRecord]:
        """
        Build the FileRecord for one path, or None if it is ignored, a link,
        not a regular file, or its metadata cannot be read.
        """
        if self.is_ignored(name):
            logger.debug(f"Skipping ignored file: {path}")
            return None

        if self.identity.is_reparse_point(path):
            logger.debug(f"Skipping symbolic link: {path}")
            return None

        try:
            stat_result = os.stat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            return None

        return FileRecord(
            path=path,
            rel_path=os.path.relpath(path, self.root_dir),
            size=stat_result.st_size,
            mtime_ns=getattr(stat_result, "st_mtime_ns", 0) or 0,
            identity=self.identity.get_file_index(path),
        )

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory: {error}")
