from dupelink.core.models import Algorithm, KeepCriteria, Mode, DEFAULT_IGNORE

KEEP_ALIASES = {criteria.value: criteria for criteria in KeepCriteria}

KEEP_CHOICES = list(KEEP_ALIASES.keys())

KEEP_HELP_TEXT = (
    "Which file of each duplicate group to keep (required):\n"
    + "".join(f"  {c.value:<9}: {c.description}\n" for c in KeepCriteria)
)

MODE_ALIASES = {mode.value: mode for mode in Mode}

MODE_CHOICES = list(MODE_ALIASES.keys())

MODE_HELP_TEXT = (
    "What to do with every other file of a group:\n"
    "  delete   : Delete the duplicate (see --trash)\n"
    "  symlink  : Replace the duplicate with a symbolic link to the kept file\n"
    "  hardlink : Replace the duplicate with a hardlink to the kept file\n"
    "Default: symlink"
)

ALGORITHM_ALIASES = {algorithm.value: algorithm for algorithm in Algorithm}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "How duplicates are recognised:\n"
    "  md5, sha256, sha512 : Full content hash\n"
    "  crc32               : Full content checksum (fast, rare false positives)\n"
    "  xxh64               : Full content xxHash64 (fastest content hash)\n"
    "  size                : Same byte size only, no content check\n"
    "  name                : Same file name only, no content check\n"
    "Default: md5"
)

DEFAULT_IGNORE_STR = ",".join(DEFAULT_IGNORE)

EPILOG_TEXT = """
Examples:
  Preview what would happen in the current folder, keeping the oldest copy
  %(prog)s -k oldest -d

  Replace duplicates below ~/Photos with symlinks to the newest copy
  %(prog)s -p ~/Photos -r -k latest

  Delete duplicates larger than 100MB, compared by SHA-256, using 8 threads
  %(prog)s -p /data -r -k first -m delete -a sha256 --min-size 100MB -t 8

  Consider files of any size
  %(prog)s -p /data -r -k highest --min-size 0 --max-size -1

Hashes are cached in duplicates.hashes.csv at the scan root, so an interrupted
run resumes where it stopped. Every action is logged to duplicates.log.
"""
