"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements whole-file content signatures using pluggable hash algorithms.

The HasherImpl class streams a file in fixed-size chunks through the selected
algorithm (no whole-file buffering) and validates the resulting signature
against the algorithm's expected format before handing it out.
"""

import hashlib
import logging
import re
import zlib
from typing import Dict, Optional, Type

import xxhash

from dupelink.core.models import Algorithm, FileRecord, READ_CHUNK_SIZE
from dupelink.core.interfaces import HashAlgorithm

logger = logging.getLogger(__name__)


# Use the same way to implement and use any other hashing algorithm
class HashlibAlgorithmImpl(HashAlgorithm):
    """Adapter for any hashlib constructor."""
    name = ""

    def __init__(self):
        self._context = hashlib.new(self.name)

    def update(self, data: bytes) -> None:
        self._context.update(data)

    def hexdigest(self) -> str:
        return self._context.hexdigest()


class Md5AlgorithmImpl(HashlibAlgorithmImpl):
    name = "md5"


class Sha256AlgorithmImpl(HashlibAlgorithmImpl):
    name = "sha256"


class Sha512AlgorithmImpl(HashlibAlgorithmImpl):
    name = "sha512"


class Crc32AlgorithmImpl(HashAlgorithm):
    def __init__(self):
        self._value = 0

    def update(self, data: bytes) -> None:
        self._value = zlib.crc32(data, self._value)

    def hexdigest(self) -> str:
        return f"{self._value & 0xFFFFFFFF:08x}"


class XXHashAlgorithmImpl(HashAlgorithm):
    def __init__(self):
        self._context = xxhash.xxh64()

    def update(self, data: bytes) -> None:
        self._context.update(data)

    def hexdigest(self) -> str:
        return self._context.hexdigest()


# Content algorithms only. SIZE and NAME are resolved structurally by the grouper.
ALGORITHM_IMPLS: Dict[Algorithm, Type[HashAlgorithm]] = {
    Algorithm.MD5: Md5AlgorithmImpl,
    Algorithm.SHA256: Sha256AlgorithmImpl,
    Algorithm.SHA512: Sha512AlgorithmImpl,
    Algorithm.CRC32: Crc32AlgorithmImpl,
    Algorithm.XXH64: XXHashAlgorithmImpl,
}

# Expected number of lowercase hex digits per content algorithm
SIGNATURE_LENGTHS: Dict[Algorithm, int] = {
    Algorithm.MD5: 32,
    Algorithm.SHA256: 64,
    Algorithm.SHA512: 128,
    Algorithm.CRC32: 8,
    Algorithm.XXH64: 16,
}

_HEX_RE = re.compile(r"^[0-9a-f]+$")


def validate_signature(signature: Optional[str], algorithm: Algorithm) -> bool:
    """
    True if `signature` has the length and character set `algorithm` produces.
    Structural algorithms accept any non-empty value.
    """
    if not signature:
        return False
    if not algorithm.is_content_hash:
        return True
    return len(signature) == SIGNATURE_LENGTHS[algorithm] and bool(_HEX_RE.match(signature))


class HasherImpl:
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Safe to share between worker threads: every call uses its own hash context.
    """

    def __init__(self, chunk_size: int = READ_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def digest(self, path: str, algorithm: Algorithm) -> str:
        """
        Streams the file at `path` through `algorithm` and returns its hex signature.

        Raises:
            ValueError: for SIZE and NAME, which never reach the hasher
            OSError: if the file cannot be read
        """
        if not algorithm.is_content_hash:
            raise ValueError(f"{algorithm.display_name} is not a content hash algorithm")

        context = ALGORITHM_IMPLS[algorithm]()
        with open(path, 'rb') as f:
            while chunk := f.read(self.chunk_size):
                context.update(chunk)
        return context.hexdigest()

    def compute_signature(self, file: FileRecord, algorithm: Algorithm) -> Optional[str]:
        """
        Returns the validated signature of `file`, or None if it could not be
        read or the result is malformed. Never raises for I/O problems.
        """
        try:
            signature = self.digest(file.path, algorithm)
        except OSError as e:
            logger.warning(f"Failed to hash {file.rel_path}: {e}")
            return None

        if not validate_signature(signature, algorithm):
            logger.warning(f"Discarding invalid {algorithm.value} signature for {file.rel_path}")
            return None
        return signature
