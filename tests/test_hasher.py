"""
Unit tests for HasherImpl.
Verifies streamed signatures per algorithm, their format validation and
the recoverable failure path.
"""
import hashlib
import zlib
import pytest
import xxhash
from dupelink.core.hasher import HasherImpl, XXHashAlgorithmImpl, validate_signature, SIGNATURE_LENGTHS
from dupelink.core.models import Algorithm, FileRecord

CONTENT = b"test content " * 1000


@pytest.fixture
def sample(make_file):
    path = make_file("sample.bin", CONTENT)
    return FileRecord(path=str(path), rel_path="sample.bin", size=len(CONTENT))


class TestDigest:
    """Signatures match the reference implementations."""

    @pytest.mark.parametrize("algorithm, expected", [
        (Algorithm.MD5, hashlib.md5(CONTENT).hexdigest()),
        (Algorithm.SHA256, hashlib.sha256(CONTENT).hexdigest()),
        (Algorithm.SHA512, hashlib.sha512(CONTENT).hexdigest()),
        (Algorithm.CRC32, f"{zlib.crc32(CONTENT) & 0xFFFFFFFF:08x}"),
        (Algorithm.XXH64, xxhash.xxh64(CONTENT).hexdigest()),
    ])
    def test_matches_reference(self, sample, algorithm, expected):
        assert HasherImpl().digest(sample.path, algorithm) == expected

    @pytest.mark.parametrize("algorithm", list(SIGNATURE_LENGTHS))
    def test_lowercase_hex_of_expected_length(self, sample, algorithm):
        signature = HasherImpl().digest(sample.path, algorithm)
        assert len(signature) == SIGNATURE_LENGTHS[algorithm]
        assert signature == signature.lower()
        assert validate_signature(signature, algorithm)

    def test_chunk_size_does_not_change_result(self, sample):
        """Streaming in tiny chunks gives the same digest as the default chunk size."""
        assert HasherImpl(chunk_size=7).digest(sample.path, Algorithm.SHA256) == \
            HasherImpl().digest(sample.path, Algorithm.SHA256)

    def test_different_content_differs(self, make_file):
        a = make_file("a.bin", b"A" * 1024)
        b = make_file("b.bin", b"A" * 1023 + b"B")
        hasher = HasherImpl()
        assert hasher.digest(str(a), Algorithm.MD5) != hasher.digest(str(b), Algorithm.MD5)

    def test_empty_file(self, make_file):
        path = make_file("empty.bin", b"")
        assert HasherImpl().digest(str(path), Algorithm.MD5) == hashlib.md5(b"").hexdigest()

    @pytest.mark.parametrize("algorithm", [Algorithm.SIZE, Algorithm.NAME])
    def test_structural_algorithms_never_reach_hasher(self, sample, algorithm):
        with pytest.raises(ValueError):
            HasherImpl().digest(sample.path, algorithm)

    def test_missing_file_raises_oserror(self, temp_dir):
        with pytest.raises(OSError):
            HasherImpl().digest(str(temp_dir / "missing.bin"), Algorithm.MD5)

    def test_xxhash_algorithm_is_incremental(self):
        algo = XXHashAlgorithmImpl()
        algo.update(b"abc")
        algo.update(b"def")
        assert algo.hexdigest() == xxhash.xxh64(b"abcdef").hexdigest()


class TestComputeSignature:
    """Failures become None, never exceptions."""

    def test_returns_signature(self, sample):
        assert HasherImpl().compute_signature(sample, Algorithm.MD5) == hashlib.md5(CONTENT).hexdigest()

    def test_unreadable_file_returns_none(self, temp_dir):
        missing = FileRecord(path=str(temp_dir / "gone.bin"), rel_path="gone.bin", size=1)
        assert HasherImpl().compute_signature(missing, Algorithm.MD5) is None

    def test_invalid_signature_is_discarded(self, sample, monkeypatch):
        hasher = HasherImpl()
        monkeypatch.setattr(hasher, "digest", lambda path, algorithm: "NOT-HEX")
        assert hasher.compute_signature(sample, Algorithm.MD5) is None


class TestValidateSignature:

    def test_rejects_wrong_length_and_charset(self):
        assert not validate_signature("abc", Algorithm.MD5)
        assert not validate_signature("G" * 32, Algorithm.MD5)
        assert not validate_signature("A" * 8, Algorithm.CRC32)
        assert not validate_signature("", Algorithm.SHA256)
        assert not validate_signature(None, Algorithm.SHA256)

    def test_structural_algorithms_accept_any_non_empty_value(self):
        assert validate_signature("photo.jpg", Algorithm.NAME)
        assert validate_signature("1048576", Algorithm.SIZE)
        assert not validate_signature("", Algorithm.NAME)
