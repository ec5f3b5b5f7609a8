"""
Core deduplication engine — scanner, hasher, cache, grouper, and pipeline orchestrator.

This package contains the foundation of dupelink:
- FileScannerImpl: directory traversal with ignore rules and reparse-point skipping
- HasherImpl: streamed MD5 / SHA-2 / CRC32 / xxHash64 signatures
- HashCache: the semicolon-separated signature cache shared by all runs
- FileGrouperImpl: name, size and signature grouping
- DeduplicatorImpl: hardlinks → size filter → size buckets → cache → hashing → groups
- Models: FileRecord, DuplicateGroup, and configuration objects

No component here touches the files it scans beyond reading them.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl
from .cache import HashCache
from .deduplicator import DeduplicatorImpl
from .sorter import Sorter
from .models import (
    FileRecord, DuplicateGroup, FileCollection, SignatureEntry, Algorithm, KeepCriteria, Mode,
    DeduplicationParams, DeduplicationStats)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "HashCache",
    "DeduplicatorImpl",
    "FileRecord",
    "DuplicateGroup",
    "FileCollection",
    "SignatureEntry",
    "Algorithm",
    "KeepCriteria",
    "Mode",
    "DeduplicationParams",
    "DeduplicationStats",
    "Sorter"
]
