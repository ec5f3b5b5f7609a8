"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/platform.py
Platform capabilities behind FileIdentity and LinkOps.

One implementation per platform family; `get_platform()` picks the right one
once at startup and the result is injected into the scanner and the action
executor instead of branching on `sys.platform` at every call site.
"""
import os
import stat
import sys
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# FILE_ATTRIBUTE_REPARSE_POINT
_REPARSE_POINT_ATTRIBUTE = getattr(stat, "FILE_ATTRIBUTE_REPARSE_POINT", 0x400)


class PosixPlatform:
    """Linux, macOS and BSD: identity is the inode number."""

    name = "posix"

    def get_file_index(self, path: str) -> Optional[int]:
        try:
            return os.stat(path).st_ino
        except OSError as e:
            logger.debug(f"Could not read inode of {path}: {e}")
            return None

    def is_reparse_point(self, path: str) -> bool:
        try:
            return stat.S_ISLNK(os.lstat(path).st_mode)
        except OSError:
            return False

    def create_symlink(self, target: str, link: str) -> None:
        os.symlink(target, link)


class WindowsPlatform:
    """Windows: identity is the NTFS file index, reparse points include junctions."""

    name = "windows"

    def get_file_index(self, path: str) -> Optional[int]:
        try:
            index = os.stat(path).st_ino
        except OSError as e:
            logger.debug(f"Could not read file index of {path}: {e}")
            return None
        return index or None

    def is_reparse_point(self, path: str) -> bool:
        try:
            attributes = getattr(os.lstat(path), "st_file_attributes", 0)
        except OSError:
            return False
        return bool(attributes & _REPARSE_POINT_ATTRIBUTE)

    def create_symlink(self, target: str, link: str) -> None:
        os.symlink(target, link, target_is_directory=False)


class NullPlatform:
    """Unsupported platforms: no identities, no symlinks."""

    name = "unsupported"

    def get_file_index(self, path: str) -> Optional[int]:
        return None

    def is_reparse_point(self, path: str) -> bool:
        return os.path.islink(path)

    def create_symlink(self, target: str, link: str) -> None:
        raise OSError(f"Symlinks not supported on this platform: {sys.platform}")


def get_platform(platform_name: Optional[str] = None):
    """Select the capability implementation for `platform_name` (default: current platform)."""
    platform_name = platform_name or sys.platform
    if platform_name == "win32":
        return WindowsPlatform()
    if platform_name.startswith(("linux", "darwin", "freebsd", "openbsd", "netbsd", "cygwin", "sunos", "aix")):
        return PosixPlatform()
    return NullPlatform()
