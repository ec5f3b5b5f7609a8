"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/disk_utils.py
Free-space measurement for the volume holding the scan root.
"""
import logging
import shutil
from typing import Optional, Tuple

from dupelink.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


class DiskUtils:
    @staticmethod
    def get_raw_disk_info(path: str) -> Optional[Tuple[int, int]]:
        """
        Returns (free_bytes, total_bytes) for the filesystem containing `path`,
        or None if it cannot be measured.
        """
        try:
            usage = shutil.disk_usage(path)
        except OSError as e:
            logger.debug(f"Could not measure disk usage of {path}: {e}")
            return None
        return usage.free, usage.total

    @staticmethod
    def format_disk_info(disk_info: Optional[Tuple[int, int]]) -> str:
        """Formats (free, total) as 'free/totalGB (p%)'."""
        if disk_info is None:
            return "Unknown"
        free, total = disk_info
        percent = (free / total) * 100.0 if total > 0 else 0.0
        return (
            f"{ConvertUtils.bytes_to_gb(free):.2f}/{ConvertUtils.bytes_to_gb(total):.2f}GB "
            f"({percent:.1f}%)"
        )

    @staticmethod
    def format_space_freed(before: Optional[Tuple[int, int]], after: Optional[Tuple[int, int]]) -> Optional[str]:
        """
        Describes the free space gained between two measurements.
        Returns None unless both measurements are available.
        """
        if before is None or after is None:
            return None
        freed = max(0, after[0] - before[0])
        total = before[1]
        percent = (freed / total) * 100.0 if total > 0 else 0.0
        return f"{ConvertUtils.bytes_to_gb(freed):.2f} GB ({percent:.2f}%)"
