"""
Tests for Sorter — the keep policy decides which file of a group survives.
"""
import pytest
from dupelink.core.sorter import Sorter
from dupelink.core.models import DuplicateGroup, FileRecord, KeepCriteria


def record(rel_path, mtime_ns=0):
    return FileRecord(path=f"/root/{rel_path}", rel_path=rel_path, size=100, mtime_ns=mtime_ns)


def kept_after(keep, files):
    group = DuplicateGroup(signature="sig", files=list(files))
    Sorter.sort_files_inside_groups([group], keep)
    return group.kept.rel_path


class TestKeepPolicies:

    def test_first_and_last_are_lexicographic(self):
        files = [record("c.txt"), record("a/b.txt")]
        assert kept_after(KeepCriteria.FIRST, files) == "a/b.txt"
        assert kept_after(KeepCriteria.LAST, files) == "c.txt"

    def test_latest_and_oldest_use_mtime(self):
        files = [record("mid", 2), record("new", 3), record("old", 1)]
        assert kept_after(KeepCriteria.LATEST, files) == "new"
        assert kept_after(KeepCriteria.OLDEST, files) == "old"

    def test_highest_and_deepest_use_path_string_length(self):
        # "a/b/c" has more levels but "long_name.txt" is the longer string
        files = [record("long_name.txt"), record("a/b/c"), record("x")]
        assert kept_after(KeepCriteria.HIGHEST, files) == "x"
        assert kept_after(KeepCriteria.DEEPEST, files) == "long_name.txt"

    @pytest.mark.parametrize("keep", list(KeepCriteria))
    def test_ties_keep_scan_order(self, keep):
        """All members tie on every key, so the sort must not reorder them."""
        files = [record("same", 5), record("same", 5), record("same", 5)]
        group = DuplicateGroup(signature="sig", files=list(files))
        Sorter.sort_files_inside_groups([group], keep)
        assert all(a is b for a, b in zip(group.files, files))

    def test_stable_for_partial_ties(self):
        first = record("b1", 5)
        second = record("b2", 5)
        group = DuplicateGroup(signature="sig", files=[first, record("a", 9), second])
        Sorter.sort_files_inside_groups([group], KeepCriteria.OLDEST)
        assert group.files[0] is first
        assert group.files[1] is second

    def test_unknown_policy_raises(self):
        with pytest.raises(ValueError):
            Sorter.sort_files([record("a")], "biggest")

    def test_empty_groups(self):
        Sorter.sort_files_inside_groups([], KeepCriteria.FIRST)
