"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages between the scanner and the duplicate groups.

STAGES
------
HardlinkStage     : Drops records that are hardlinks of an already seen record
SizeFilterStage   : Keeps records inside the inclusive [min, max] byte range
SizeBucketStage   : Keeps only records whose size is shared by another record
CacheLookupStage  : Splits candidates into cache hits and files to hash
HashStage         : Hashes cache misses on a thread pool, appending to the cache

STAGE CONTRACTS
---------------
Every stage exposes `process()` and `get_stage_name()`. All stages except
HashStage are single-threaded and metadata-only. HashStage is the only
parallel stage; its workers share nothing but the cache append path and the
progress counter, both lock-protected.
"""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Callable, Tuple, Set

from dupelink.core.models import Algorithm, FileRecord, SignatureEntry, UNBOUNDED
from dupelink.core.grouper import FileGrouperImpl
from dupelink.core.hasher import HasherImpl
from dupelink.core.cache import HashCache
from dupelink.core.interfaces import Hasher

logger = logging.getLogger(__name__)

SignedFile = Tuple[FileRecord, str]


class HardlinkStage:
    """
    Keeps the first record per (identity, size) in scan order.
    Records without an identity always pass.

    The POSIX identity is the inode number alone, without the device. A
    recursive scan crossing a mount point can therefore drop an unrelated
    file that happens to share both inode number and size with an earlier one.
    """

    def get_stage_name(self) -> str:
        return "Hardlink filter"

    def process(self, files: List[FileRecord]) -> List[FileRecord]:
        seen: Set[Tuple[int, int]] = set()
        unique_files = []
        for f in files:
            if f.identity:
                key = (f.identity, f.size)
                if key in seen:
                    logger.debug(f"Skipping hardlink: {f.rel_path}")
                    continue
                seen.add(key)
            unique_files.append(f)
        return unique_files


class SizeFilterStage:
    """Retains records with min_size <= size <= max_size (max UNBOUNDED means no limit)."""

    def __init__(self, min_size: int = 0, max_size: int = UNBOUNDED):
        self.min_size = min_size
        self.max_size = max_size

    def get_stage_name(self) -> str:
        return "Size filter"

    def process(self, files: List[FileRecord]) -> List[FileRecord]:
        return [f for f in files if self.size_passes(f.size)]

    def size_passes(self, size: int) -> bool:
        if size < self.min_size:
            return False
        if self.max_size != UNBOUNDED and size > self.max_size:
            return False
        return True


class SizeBucketStage:
    """
    Buckets records by size and flattens the non-singleton buckets.
    A file with a unique size cannot have a duplicate, so it is never hashed.
    """

    def __init__(self, grouper: Optional[FileGrouperImpl] = None):
        self.grouper = grouper or FileGrouperImpl()

    def get_stage_name(self) -> str:
        return "Size grouping"

    def process(self, files: List[FileRecord]) -> List[FileRecord]:
        buckets = self.grouper.bucket_by_size(files)
        return [f for bucket in buckets.values() for f in bucket]


class CacheLookupStage:
    """Partitions candidates into (cache hits with their signature, files that need hashing)."""

    def __init__(self, cache: HashCache, algorithm: Algorithm):
        self.cache = cache
        self.algorithm = algorithm

    def get_stage_name(self) -> str:
        return "Cache lookup"

    def process(self, files: List[FileRecord]) -> Tuple[List[SignedFile], List[FileRecord]]:
        cached: List[SignedFile] = []
        to_hash: List[FileRecord] = []
        for f in files:
            signature = self.cache.get(f.rel_path, f.size, f.mtime_ns, self.algorithm)
            if signature:
                cached.append((f, signature))
            else:
                to_hash.append(f)
        return cached, to_hash


class HashStage:
    """
    Hashes files on a bounded worker pool.
    Each valid signature is appended to the cache before the worker returns,
    so an aborted run keeps every completed hash. Failed files are dropped.
    """

    def __init__(
        self,
        cache: HashCache,
        algorithm: Algorithm,
        hasher: Optional[Hasher] = None,
        threads: Optional[int] = None
    ):
        if not algorithm.is_content_hash:
            raise ValueError(f"{algorithm.display_name} does not need hashing")
        self.cache = cache
        self.algorithm = algorithm
        self.hasher = hasher or HasherImpl()
        self.threads = threads or os.cpu_count() or 1
        self.failed = 0
        self._progress_lock = threading.Lock()
        self._processed_bytes = 0

    def get_stage_name(self) -> str:
        return "Hashing"

    def process(
        self,
        files: List[FileRecord],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> List[SignedFile]:
        """
        Returns (record, signature) pairs for every file hashed successfully.
        Completion order is arbitrary.
        """
        if not files:
            return []

        # Smallest first so visible progress starts early
        ordered = sorted(files, key=lambda f: f.size)
        total_bytes = sum(f.size for f in ordered)
        self._processed_bytes = 0
        self.failed = 0
        results: List[SignedFile] = []

        with ThreadPoolExecutor(max_workers=self.threads) as executor:
            futures = [
                executor.submit(self._hash_one, f, total_bytes, progress_callback)
                for f in ordered
            ]
            for future in as_completed(futures):
                signed = future.result()
                if signed is None:
                    self.failed += 1
                else:
                    results.append(signed)

        if self.failed:
            logger.info(f"Skipped {self.failed} files that could not be hashed")
        return results

    def _hash_one(
        self,
        file: FileRecord,
        total_bytes: int,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]]
    ) -> Optional[SignedFile]:
        signature = self.hasher.compute_signature(file, self.algorithm)

        if signature:
            self.cache.append(SignatureEntry(
                path=file.rel_path,
                size=file.size,
                time=file.mtime_ns,
                algo=self.algorithm,
                hash=signature,
            ))

        with self._progress_lock:
            self._processed_bytes += file.size
            processed = self._processed_bytes
            if progress_callback:
                progress_callback(self.get_stage_name(), processed, total_bytes)

        return (file, signature) if signature else None
