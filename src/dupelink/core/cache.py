"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/cache.py
Persistent, append-only signature cache.

Rows are stored as `path;size;time;algo;hash` in a text file at the scan root.
A row is a valid hit only if relative path, size, mtime and algorithm all match
exactly. New signatures are written and flushed one by one as soon as they are
computed, so an interrupted run keeps everything hashed so far.
The file is read and written with `surrogateescape`, so file names that are not
valid UTF-8 survive the round trip unchanged.

Concurrency
-----------
`append()` is called from the hashing worker threads. The index update and the
physical write happen inside one lock; hashing itself runs outside of it.
"""

import csv
import logging
import os
import threading
from typing import Dict, Optional, Tuple

from dupelink.core.models import Algorithm, SignatureEntry
from dupelink.core.hasher import validate_signature

logger = logging.getLogger(__name__)

DELIMITER = ";"
HEADER = ["path", "size", "time", "algo", "hash"]

CacheKey = Tuple[str, int, int, Algorithm]


class HashCache:
    """
    In-memory index of SignatureEntry rows backed by one append-only CSV file.

    Attributes:
        cache_path: File new entries are appended to
        root_dir: Scan root; cache files below it are rebased onto it when loaded
    """

    def __init__(self, cache_path: str, root_dir: Optional[str] = None):
        self.cache_path = cache_path
        self.root_dir = root_dir or os.path.dirname(cache_path)
        self._index: Dict[CacheKey, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._index)

    def load(self, path: str) -> int:
        """
        Parses all well-formed rows of the cache file at `path` into the index.
        Malformed rows are skipped one by one. Later rows win over earlier ones
        with the same key. Returns the number of entries loaded.
        """
        prefix = self._rebase_prefix(path)
        loaded = 0
        skipped = 0

        try:
            with open(path, newline="", encoding="utf-8", errors="surrogateescape") as f:
                reader = csv.reader(f, delimiter=DELIMITER)
                for row in reader:
                    if not row or row == HEADER:
                        continue
                    entry = self.parse_row(row)
                    if entry is None:
                        skipped += 1
                        continue
                    rel_path = os.path.join(prefix, entry.path) if prefix else entry.path
                    with self._lock:
                        self._index[(rel_path, entry.size, entry.time, entry.algo)] = entry.hash
                    loaded += 1
        except (OSError, csv.Error) as e:
            logger.warning(f"Could not read hash cache {path}: {e}")

        if skipped:
            logger.info(f"  Ignored {skipped} corrupt/invalid lines in {path}")
        logger.debug(f"Loaded {loaded} entries from {path}")
        return loaded

    @staticmethod
    def parse_row(row) -> Optional[SignatureEntry]:
        """Builds a SignatureEntry from one CSV row, or None if the row is malformed."""
        if len(row) != len(HEADER):
            return None
        path, size_str, time_str, algo_str, signature = row
        if not path or not size_str.isdigit() or not time_str.isdigit():
            return None
        try:
            algo = Algorithm(algo_str)
        except ValueError:
            return None
        if not validate_signature(signature, algo):
            return None
        return SignatureEntry(path=path, size=int(size_str), time=int(time_str), algo=algo, hash=signature)

    def get(self, rel_path: str, size: int, mtime_ns: int, algorithm: Algorithm) -> Optional[str]:
        """Signature for an exact (path, size, mtime, algorithm) match, else None."""
        return self._index.get((rel_path, size, mtime_ns, algorithm))

    def append(self, entry: SignatureEntry) -> None:
        """
        Adds `entry` to the index and appends it to the backing file immediately.
        Safe to call from several threads. Write failures are logged; the entry
        stays usable for this run.
        """
        if not entry.hash:
            return

        with self._lock:
            self._index[entry.key] = entry.hash
            try:
                self._write_row(entry)
            except (OSError, ValueError) as e:
                logger.warning(f"Could not append to hash cache {self.cache_path}: {e}")

    def _write_row(self, entry: SignatureEntry) -> None:
        needs_header = not os.path.exists(self.cache_path) or os.path.getsize(self.cache_path) == 0
        with open(self.cache_path, "a", newline="", encoding="utf-8", errors="surrogateescape") as f:
            writer = csv.writer(f, delimiter=DELIMITER, lineterminator="\n")
            if needs_header:
                writer.writerow(HEADER)
            writer.writerow([entry.path, entry.size, entry.time, entry.algo.value, entry.hash])
            f.flush()

    def _rebase_prefix(self, path: str) -> str:
        """
        Relative directory of a cache file found below the root ('' for the root's own file).
        Rows of such a file were keyed relative to that directory.
        """
        try:
            rel_dir = os.path.relpath(os.path.dirname(os.path.abspath(path)), os.path.abspath(self.root_dir))
        except ValueError:
            return ""
        if rel_dir == os.curdir or rel_dir.startswith(os.pardir):
            return ""
        return rel_dir
