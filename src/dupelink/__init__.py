"""
dupelink — duplicate file finder that keeps one copy and deletes or links the rest.

Core features:
- Seven grouping algorithms: MD5, SHA-256, SHA-512, CRC32, xxHash64 (content), size, name
- Six keep policies: latest, oldest, highest, deepest, first, last
- Duplicates are deleted (optionally to the system trash), symlinked or hardlinked
- Persistent CSV hash cache so repeated runs skip unchanged files
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupelink")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from dupelink.commands import DeduplicationCommand
from dupelink.core import (
    DeduplicationParams, Algorithm, KeepCriteria, Mode, FileRecord, DuplicateGroup)
from dupelink.utils.convert_utils import ConvertUtils
from dupelink.services import DuplicateService
from dupelink.services.file_service import FileService
from dupelink.exceptions import DupelinkError, StartupError, ActionError

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "Algorithm",
    "KeepCriteria",
    "Mode",
    "FileRecord",
    "DuplicateGroup",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "DupelinkError",
    "StartupError",
    "ActionError",
    "__version__",
]
