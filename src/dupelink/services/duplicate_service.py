"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
Applies the selected Mode to every non-kept member of each duplicate group.
"""
import logging
from typing import List, Optional

from dupelink.core.models import DuplicateGroup, FileRecord, Mode
from dupelink.services.file_service import FileService

logger = logging.getLogger(__name__)


class DuplicateService:
    """
    Sequential, fail-fast action executor.
    Groups must already be sorted: files[0] is kept, the rest are acted on.
    Any ActionError propagates immediately; completed groups stay as they are.
    """

    def __init__(
        self,
        mode: Mode,
        dry_run: bool = False,
        use_trash: bool = False,
        file_service: Optional[FileService] = None
    ):
        self.mode = mode
        self.dry_run = dry_run
        self.use_trash = use_trash
        self.file_service = file_service or FileService()

    def execute(self, groups: List[DuplicateGroup]) -> int:
        """
        Process all groups in order. Returns the number of duplicates acted on
        (or that would be, in dry-run mode).
        """
        actions = 0
        for group in groups:
            if not group.is_duplicate():
                continue

            keep_file = group.kept
            logger.info(f"Group {group.signature}: Keeping {keep_file.rel_path}")

            for dup in group.duplicates:
                if self.dry_run:
                    logger.info(f"  [DRY RUN] {dup.rel_path} -> {self.mode.display_name}")
                else:
                    self._apply(keep_file, dup)
                actions += 1
        return actions

    def _apply(self, keep_file: FileRecord, dup: FileRecord) -> None:
        if self.mode == Mode.DELETE:
            if self.use_trash:
                self.file_service.move_to_trash(dup.path)
                logger.info(f"  Trashed {dup.rel_path}")
            else:
                self.file_service.remove(dup.path)
                logger.info(f"  Deleted {dup.rel_path}")
        elif self.mode == Mode.SYMLINK:
            self.file_service.replace_with_symlink(keep_file.path, dup.path)
            logger.info(f"  Symlinked {dup.rel_path}")
        elif self.mode == Mode.HARDLINK:
            self.file_service.replace_with_hardlink(keep_file.path, dup.path)
            logger.info(f"  Hardlinked {dup.rel_path}")
        else:
            raise ValueError(f"Unknown mode: {self.mode!r}")

    @staticmethod
    def reclaimable_bytes(groups: List[DuplicateGroup]) -> int:
        """Total size of every non-kept file, i.e. the space the actions can free."""
        return sum(dup.size for group in groups if group.is_duplicate() for dup in group.duplicates)
