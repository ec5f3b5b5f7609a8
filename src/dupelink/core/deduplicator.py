"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the pipeline turning scanned files into duplicate groups.
Pipeline per algorithm:
    - name: hardlinks → size filter → group by base name
    - size: hardlinks → size filter → group by size
    - md5 / sha256 / sha512 / crc32 / xxh64:
      hardlinks → size filter → size buckets → cache lookup → parallel hashing → group by signature
"""
import time
import logging
from typing import List, Tuple, Optional, Callable

from dupelink.core.models import (
    Algorithm, FileRecord, DuplicateGroup, DeduplicationStats, DeduplicationParams)
from dupelink.core.grouper import FileGrouperImpl
from dupelink.core.hasher import HasherImpl
from dupelink.core.cache import HashCache
from dupelink.core.interfaces import Deduplicator, Hasher
from dupelink.core.stages import (
    HardlinkStage, SizeFilterStage, SizeBucketStage, CacheLookupStage, HashStage)
from dupelink.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Runs the filtering and grouping stages for the selected algorithm
    and collects detailed statistics.
    """
    def __init__(self, cache: HashCache, grouper: Optional[FileGrouperImpl] = None, hasher: Optional[Hasher] = None):
        self.cache = cache
        self.grouper = grouper or FileGrouperImpl()
        self.hasher = hasher or HasherImpl()

    def find_duplicates(
        self,
        files: List[FileRecord],
        params: DeduplicationParams,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Args:
            files: Scanned records in scan order
            params: Size bounds, algorithm and thread count are used here
            progress_callback: Reports hashing progress in bytes
        Returns:
            Tuple[List[DuplicateGroup], DeduplicationStats]
        """
        stats = DeduplicationStats()
        total_start_time = time.time()

        logger.info("Filtering hardlinks...")
        start_time = time.time()
        unique_files = HardlinkStage().process(files)
        stats.update_stage("hardlinks", 0, len(unique_files), time.time() - start_time)
        logger.info(f"Unique files to process: {len(unique_files)}")

        start_time = time.time()
        size_filter = SizeFilterStage(params.min_size_bytes, params.max_size_bytes)
        sized_files = size_filter.process(unique_files)
        stats.update_stage("size_filter", 0, len(sized_files), time.time() - start_time)
        filtered_count = len(unique_files) - len(sized_files)
        if filtered_count > 0:
            logger.info(
                f"Filtered {filtered_count} files outside size range "
                f"({ConvertUtils.bytes_to_human(params.min_size_bytes)} - "
                f"{ConvertUtils.bytes_to_human(params.max_size_bytes)})"
            )
        logger.info(f"Files after size filter: {len(sized_files)}")

        start_time = time.time()
        if params.algorithm == Algorithm.NAME:
            groups = self.grouper.group_by_name(sized_files)
        elif params.algorithm == Algorithm.SIZE:
            groups = self.grouper.group_by_size(sized_files)
        else:
            groups = self._group_by_content(sized_files, params, stats, progress_callback)
        stats.update_stage(
            "grouping", len(groups), sum(len(g.files) for g in groups), time.time() - start_time)

        stats.total_time = time.time() - total_start_time
        return groups, stats

    def _group_by_content(
        self,
        files: List[FileRecord],
        params: DeduplicationParams,
        stats: DeduplicationStats,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]]
    ) -> List[DuplicateGroup]:
        logger.info("Pre-grouping by size...")
        candidates = SizeBucketStage(self.grouper).process(files)

        cached, to_hash = CacheLookupStage(self.cache, params.algorithm).process(candidates)
        stats.cache_hits = len(cached)
        total_bytes = sum(f.size for f in to_hash)
        logger.info(
            f"Cache: {len(cached)} hits, {len(to_hash)} files "
            f"({ConvertUtils.bytes_to_gb(total_bytes):.2f} GB) need hashing"
        )

        start_time = time.time()
        hash_stage = HashStage(self.cache, params.algorithm, hasher=self.hasher, threads=params.threads)
        hashed = hash_stage.process(to_hash, progress_callback=progress_callback)
        stats.hashed_files = len(hashed)
        stats.failed_hashes = hash_stage.failed
        stats.update_stage("hashing", 0, len(to_hash), time.time() - start_time)

        # Hash completion order is arbitrary; restore scan order so keep-policy ties stay stable
        position = {f.path: i for i, f in enumerate(files)}
        signed = sorted(cached + hashed, key=lambda pair: position[pair[0].path])
        return self.grouper.group_by_signature(signed)
