"""
Unit tests for FileGrouperImpl.
Groups are keyed by name, size or signature; singletons never survive.
"""
from dupelink.core.grouper import FileGrouperImpl
from dupelink.core.models import FileRecord


def record(rel_path, size=100):
    return FileRecord(path=f"/root/{rel_path}", rel_path=rel_path, size=size)


class TestFileGrouperImpl:

    def test_group_by_name_uses_base_name(self):
        files = [record("a/photo.jpg", 1), record("b/photo.jpg", 2), record("c/other.jpg", 3)]
        groups = FileGrouperImpl().group_by_name(files)

        assert len(groups) == 1
        assert groups[0].signature == "photo.jpg"
        assert [f.rel_path for f in groups[0].files] == ["a/photo.jpg", "b/photo.jpg"]

    def test_group_by_size_uses_size_as_signature(self):
        files = [record("a", 10), record("b", 20), record("c", 10)]
        groups = FileGrouperImpl().group_by_size(files)

        assert len(groups) == 1
        assert groups[0].signature == "10"
        assert [f.rel_path for f in groups[0].files] == ["a", "c"]

    def test_bucket_by_size_drops_unique_sizes(self):
        files = [record("a", 10), record("b", 20), record("c", 10), record("d", 20), record("e", 30)]
        buckets = FileGrouperImpl().bucket_by_size(files)
        assert set(buckets) == {10, 20}

    def test_group_by_signature_preserves_input_order(self):
        a, b, c, d = record("a"), record("b"), record("c"), record("d")
        signed = [(c, "x"), (a, "y"), (b, "x"), (d, "y")]
        groups = {g.signature: g for g in FileGrouperImpl().group_by_signature(signed)}

        assert [f.rel_path for f in groups["x"].files] == ["c", "b"]
        assert [f.rel_path for f in groups["y"].files] == ["a", "d"]

    def test_group_by_signature_excludes_empty_and_singletons(self):
        signed = [(record("a"), ""), (record("b"), ""), (record("c"), "z")]
        assert FileGrouperImpl().group_by_signature(signed) == []

    def test_no_files(self):
        grouper = FileGrouperImpl()
        assert grouper.group_by_name([]) == []
        assert grouper.group_by_size([]) == []
        assert grouper.group_by_signature([]) == []
