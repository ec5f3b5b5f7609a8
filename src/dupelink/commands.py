"""
Unified command orchestrator for deduplication.
This is the SINGLE source of truth for the run workflow — used by the CLI and by tests.
"""
import logging
import os
import time
from typing import List, Optional, Callable, Tuple

from dupelink.core.models import (
    DuplicateGroup, DeduplicationStats, DeduplicationParams, CACHE_FILE_NAME)
from dupelink.core.scanner import FileScannerImpl
from dupelink.core.cache import HashCache
from dupelink.core.deduplicator import DeduplicatorImpl
from dupelink.core.sorter import Sorter
from dupelink.core.platform import get_platform
from dupelink.services.file_service import FileService
from dupelink.services.duplicate_service import DuplicateService
from dupelink.utils.convert_utils import ConvertUtils
from dupelink.utils.disk_utils import DiskUtils
from dupelink.exceptions import StartupError

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the entire deduplication workflow:
    1. Scan the root directory (collecting leftover cache files on the way)
    2. Load and merge every cache file
    3. Filter and group files by the selected algorithm
    4. Sort each group by the keep policy
    5. Delete / symlink / hardlink the duplicates (or only log them in dry-run mode)

    Usage:
        params = DeduplicationParams.from_human_readable(root_dir=".", keep="oldest")
        command = DeduplicationCommand()
        groups, stats = command.execute(params, progress_callback=cli_progress_printer)
    """

    def __init__(self, platform=None):
        self.platform = platform or get_platform()

    @staticmethod
    def resolve_root(root_dir: str) -> str:
        """Canonical absolute root path. Raises StartupError if it is not a usable directory."""
        try:
            resolved = os.path.realpath(root_dir, strict=True)
        except (OSError, ValueError) as e:
            raise StartupError(f"Failed to canonicalize path {root_dir}: {e}") from e
        if not os.path.isdir(resolved):
            raise StartupError(f"Path is not a directory: {root_dir}")
        return resolved

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Execute a full run with given parameters.

        Args:
            params: Validated deduplication parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (duplicate_groups sorted by keep policy, statistics)

        Raises:
            StartupError: If the root directory cannot be resolved
            ActionError: If deleting or linking a duplicate fails (run stops immediately)
        """
        total_start_time = time.time()
        root_dir = self.resolve_root(params.root_dir)

        logger.info(
            f"Settings: Path={root_dir} | Keep={params.keep.display_name} | Mode={params.mode.display_name} | "
            f"Algorithm={params.algorithm.display_name} | Recursive={params.recursive}"
        )
        disk_before = DiskUtils.get_raw_disk_info(root_dir)
        logger.info(f"Free space before: {DiskUtils.format_disk_info(disk_before)}")

        # Step 1: Scan
        logger.info("Scanning directory...")
        start_time = time.time()
        scanner = FileScannerImpl(
            root_dir=root_dir,
            recursive=params.recursive,
            ignore=params.ignore,
            identity=self.platform
        )
        collection = scanner.scan(progress_callback=progress_callback)
        scan_duration = time.time() - start_time
        logger.info(
            f"Found {len(collection.files)} total files in {collection.folder_count} folders."
        )

        # Step 2: Cache
        cache = HashCache(os.path.join(root_dir, CACHE_FILE_NAME), root_dir)
        self._load_caches(cache, collection.cache_files)

        # Step 3: Group
        deduplicator = DeduplicatorImpl(cache)
        groups, stats = deduplicator.find_duplicates(
            collection.files,
            params,
            progress_callback=progress_callback
        )
        stats.update_stage("scan", 0, len(collection.files), scan_duration)

        # Step 4: Keep policy
        Sorter.sort_files_inside_groups(groups, params.keep)

        # Step 5: Actions
        logger.info(
            f"Processing groups... ({len(groups)} groups, "
            f"{ConvertUtils.bytes_to_human(DuplicateService.reclaimable_bytes(groups))} in duplicates)"
        )
        start_time = time.time()
        executor = DuplicateService(
            mode=params.mode,
            dry_run=params.dry_run,
            use_trash=params.use_trash,
            file_service=FileService(link_ops=self.platform)
        )
        stats.actions_performed = executor.execute(groups)
        stats.update_stage("actions", len(groups), stats.actions_performed, time.time() - start_time)

        disk_after = DiskUtils.get_raw_disk_info(root_dir)
        logger.info(f"Free space after: {DiskUtils.format_disk_info(disk_after)}")
        freed = DiskUtils.format_space_freed(disk_before, disk_after)
        if freed is not None:
            logger.info(f"Total space freed: {freed}")

        stats.total_time = time.time() - total_start_time
        logger.info("Done.")
        return groups, stats

    @staticmethod
    def _load_caches(cache: HashCache, cache_files: List[str]) -> None:
        if not cache_files:
            return
        logger.info(f"Loading {len(cache_files)} hash CSV file(s)...")
        total_loaded = sum(cache.load(path) for path in cache_files)
        if total_loaded > 0:
            logger.info(f"Loaded {total_loaded} cached hashes from {len(cache_files)} file(s)")
