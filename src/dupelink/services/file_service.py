"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem mutations used when resolving duplicates: remove, trash, hardlink, symlink.
Every failure is raised as ActionError; callers treat it as fatal.
"""
import os
from pathlib import Path
from typing import Optional

from send2trash import send2trash

from dupelink.core.interfaces import LinkOps
from dupelink.core.platform import get_platform
from dupelink.exceptions import ActionError


class FileService:
    """
    Destructive file operations. Removal and link creation are two separate
    steps: if the second one fails, the duplicate is already gone.
    """

    def __init__(self, link_ops: Optional[LinkOps] = None):
        self.link_ops = link_ops or get_platform()

    @staticmethod
    def remove(file_path: str) -> None:
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise ActionError(f"Failed to remove {file_path}: {e}") from e

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise ActionError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise ActionError(f"Failed to move to trash: {e}") from e

    def replace_with_symlink(self, target: str, link: str) -> None:
        """Removes `link` and recreates it as a symbolic link to `target` (absolute path)."""
        self.remove(link)
        try:
            self.link_ops.create_symlink(os.path.abspath(target), link)
        except OSError as e:
            raise ActionError(f"Removed {link} but failed to symlink it to {target}: {e}") from e

    def replace_with_hardlink(self, target: str, link: str) -> None:
        """Removes `link` and recreates it as a hardlink to `target`."""
        self.remove(link)
        try:
            os.link(target, link)
        except OSError as e:
            raise ActionError(f"Removed {link} but failed to hardlink it to {target}: {e}") from e
