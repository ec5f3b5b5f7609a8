"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for file scanning and deduplication.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union
import os
from enum import Enum

from dupelink.utils.convert_utils import ConvertUtils, UNBOUNDED


# =============================
# Constants
# =============================

LOG_FILE_NAME = "duplicates.log"
CACHE_FILE_NAME = "duplicates.hashes.csv"
DEFAULT_IGNORE = (".lnk", ".url")
READ_CHUNK_SIZE = 8192


# =============================
# Enums
# =============================

class Algorithm(Enum):
    """
    Signature algorithm used to decide which files are duplicates.
    SIZE and NAME are structural: files are grouped without reading content.
    """
    MD5 = "md5"
    SHA256 = "sha256"
    SHA512 = "sha512"
    CRC32 = "crc32"
    XXH64 = "xxh64"
    SIZE = "size"
    NAME = "name"

    @property
    def is_content_hash(self) -> bool:
        return self not in (Algorithm.SIZE, Algorithm.NAME)

    @property
    def display_name(self) -> str:
        """Human-readable name for log lines and help text."""
        mapping = {
            Algorithm.MD5: "Md5",
            Algorithm.SHA256: "Sha256",
            Algorithm.SHA512: "Sha512",
            Algorithm.CRC32: "Crc32",
            Algorithm.XXH64: "Xxh64",
            Algorithm.SIZE: "Size",
            Algorithm.NAME: "Name",
        }
        return mapping[self]

    def __repr__(self) -> str:
        return self.value


class KeepCriteria(Enum):
    """Policy that picks the one file of a duplicate group that survives."""
    LATEST = "latest"
    OLDEST = "oldest"
    HIGHEST = "highest"
    DEEPEST = "deepest"
    FIRST = "first"
    LAST = "last"

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            KeepCriteria.LATEST: "newest modification time",
            KeepCriteria.OLDEST: "oldest modification time",
            KeepCriteria.HIGHEST: "shortest relative path",
            KeepCriteria.DEEPEST: "longest relative path",
            KeepCriteria.FIRST: "first relative path in alphabetical order",
            KeepCriteria.LAST: "last relative path in alphabetical order",
        }
        return mapping[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def __repr__(self) -> str:
        return self.value


class Mode(Enum):
    """What happens to every non-kept member of a duplicate group."""
    DELETE = "delete"
    SYMLINK = "symlink"
    HARDLINK = "hardlink"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    One discovered file.
    `rel_path` is relative to the scan root and is the stable cache key.
    `mtime_ns` is 0 when the modification time is unavailable.
    `identity` is the platform file identity (inode / file index) or None.
    """
    path: str
    rel_path: str
    size: int  # in bytes
    mtime_ns: int = 0
    identity: Optional[int] = None

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<FileRecord rel_path={self.rel_path}, size={self.size}>"


@dataclass(frozen=True)
class SignatureEntry:
    """One persisted hash cache row."""
    path: str
    size: int
    time: int
    algo: Algorithm
    hash: str

    @property
    def key(self):
        return self.path, self.size, self.time, self.algo


@dataclass
class DuplicateGroup:
    """
    Files sharing one signature (content hash, name or size depending on the algorithm).
    Only meaningful with more than one member; files[0] is the kept file after sorting.
    """
    signature: str
    files: List[FileRecord]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def kept(self) -> FileRecord:
        return self.files[0]

    @property
    def duplicates(self) -> List[FileRecord]:
        return self.files[1:]

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup signature={self.signature}, count={len(self.files)}>"


@dataclass
class FileCollection:
    """
    Result of a directory scan: accepted files, cache files found on the way
    and the number of folders visited.
    """
    files: List[FileRecord] = field(default_factory=list)
    cache_files: List[str] = field(default_factory=list)
    folder_count: int = 0

    def __len__(self) -> int:
        return len(self.files)


class DeduplicationStats:
    """
    Statistics collected during the deduplication process.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.cache_hits: int = 0
        self.hashed_files: int = 0
        self.failed_hashes: int = 0
        self.actions_performed: int = 0

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            "scan": "📁 Scanned Files",
            "hardlinks": "🔗 After Hardlink Filter",
            "size_filter": "📏 After Size Filter",
            "hashing": "🔍 Hashed Candidates",
            "grouping": "📦 Duplicate Groups",
            "actions": "🛠  Actions",
        }

        lines = [
            "📊 Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        lines.append(
            f"Cache hits: {self.cache_hits} | Hashed: {self.hashed_files} | "
            f"Failed: {self.failed_hashes} | Actions: {self.actions_performed}"
        )
        return "\n".join(lines)


# =============================
# Run parameters (DTO with built-in validation, used by the CLI and by tests)
# =============================

@dataclass
class DeduplicationParams:
    """Parameters for deduplication operation with validation."""
    root_dir: str
    keep: KeepCriteria
    recursive: bool = False
    dry_run: bool = False
    mode: Mode = Mode.SYMLINK
    algorithm: Algorithm = Algorithm.MD5
    ignore: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    threads: Optional[int] = None
    min_size_bytes: int = 1024 ** 2
    max_size_bytes: int = 1024 ** 4
    use_trash: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        if self.threads is not None and self.threads < 1:
            raise ValueError("Thread count must be at least 1")

        self.ignore = [name.strip() for name in self.ignore if name.strip()]

    @staticmethod
    def from_human_readable(
            root_dir: str,
            keep: str,
            mode: str = "symlink",
            algorithm: str = "md5",
            ignore_str: str = ",".join(DEFAULT_IGNORE),
            min_size_str: str = "1MB",
            max_size_str: str = "1TB",
            recursive: bool = False,
            dry_run: bool = False,
            threads: Optional[int] = None,
            use_trash: bool = False,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        min_size = ConvertUtils.human_to_bytes(min_size_str)
        max_size = ConvertUtils.human_to_bytes(max_size_str)

        ignore_list = [
            name.strip() for name in ignore_str.split(",") if name.strip()
        ] if ignore_str else []

        return DeduplicationParams(
            root_dir=root_dir,
            keep=KeepCriteria(keep.lower()),
            recursive=recursive,
            dry_run=dry_run,
            mode=Mode(mode.lower()),
            algorithm=Algorithm(algorithm.lower()),
            ignore=ignore_list,
            threads=threads,
            min_size_bytes=min_size,
            max_size_bytes=max_size,
            use_trash=use_trash,
        )
