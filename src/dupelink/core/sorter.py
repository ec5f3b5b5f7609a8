"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure sorting logic for duplicate groups — zero dependencies outside core.
After sorting, files[0] of every group is the file to keep.
"""
from typing import List

from dupelink.core.models import DuplicateGroup, FileRecord, KeepCriteria


class Sorter:
    """
    Sorts files inside duplicate groups according to the keep policy.
    Modifies groups in-place. Sorting is stable: ties keep scan order.

    HIGHEST / DEEPEST compare the length of the relative path string,
    not the number of directory levels.
    """

    @staticmethod
    def sort_files_inside_groups(groups: List[DuplicateGroup], keep: KeepCriteria) -> None:
        if not groups:
            return

        for group in groups:
            Sorter.sort_files(group.files, keep)

    @staticmethod
    def sort_files(files: List[FileRecord], keep: KeepCriteria) -> None:
        if keep == KeepCriteria.LATEST:
            files.sort(key=lambda f: f.mtime_ns, reverse=True)
        elif keep == KeepCriteria.OLDEST:
            files.sort(key=lambda f: f.mtime_ns)
        elif keep == KeepCriteria.HIGHEST:
            files.sort(key=lambda f: len(f.rel_path))
        elif keep == KeepCriteria.DEEPEST:
            files.sort(key=lambda f: len(f.rel_path), reverse=True)
        elif keep == KeepCriteria.FIRST:
            files.sort(key=lambda f: f.rel_path)
        elif keep == KeepCriteria.LAST:
            files.sort(key=lambda f: f.rel_path, reverse=True)
        else:
            raise ValueError(f"Unknown keep criteria: {keep!r}")
