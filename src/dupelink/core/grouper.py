"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping strategies on FileRecord objects.
Groups are keyed by a signature string: base name, byte size or content hash.
"""

from typing import List, Dict, Tuple, Any, Callable, Iterable
from collections import defaultdict
from dupelink.core.models import FileRecord, DuplicateGroup


class FileGrouperImpl:
    """
    Turns records into DuplicateGroups. Groups with fewer than two files are dropped.
    Member order inside a group follows input order.
    """

    def group_by_name(self, files: List[FileRecord]) -> List[DuplicateGroup]:
        """Groups files by base name (NAME algorithm)."""
        return self._to_groups(self._group_by(files, lambda f: f.name))

    def group_by_size(self, files: List[FileRecord]) -> List[DuplicateGroup]:
        """Groups files by byte size (SIZE algorithm); the size itself is the signature."""
        return self._to_groups(self._group_by(files, lambda f: str(f.size)))

    def bucket_by_size(self, files: List[FileRecord]) -> Dict[int, List[FileRecord]]:
        """Size buckets with 2+ files, used to pick hashing candidates."""
        return self._group_by(files, lambda f: f.size)

    def group_by_signature(self, signed_files: Iterable[Tuple[FileRecord, str]]) -> List[DuplicateGroup]:
        """Groups (record, signature) pairs by signature; empty signatures are excluded."""
        groups = defaultdict(list)
        for file, signature in signed_files:
            if signature:
                groups[signature].append(file)
        return self._to_groups({k: v for k, v in groups.items() if len(v) >= 2})

    @staticmethod
    def _group_by(files: List[FileRecord], key_func: Callable[[FileRecord], Any]) -> Dict[Any, List[FileRecord]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a FileRecord
        Returns:
            Dict[key, List[FileRecord]] holding only keys shared by 2+ files
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}

    @staticmethod
    def _to_groups(grouped: Dict[str, List[FileRecord]]) -> List[DuplicateGroup]:
        return [DuplicateGroup(signature=key, files=files) for key, files in grouped.items()]
