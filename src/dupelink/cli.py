#!/usr/bin/env python3
"""
dupelink CLI — Command line interface for finding and resolving duplicate files.
Duplicates are deleted, or replaced by symlinks/hardlinks to one kept copy.
Use --dry-run to see what would happen without touching any file.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install dupelink", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupelink.core.models import DeduplicationParams, DuplicateGroup, Mode, LOG_FILE_NAME
from dupelink.commands import DeduplicationCommand
from dupelink.exceptions import DupelinkError
from dupelink.utils.convert_utils import ConvertUtils
from dupelink.utils.log_utils import configure_run_logging
from dupelink.aliases import (
    KEEP_CHOICES, KEEP_HELP_TEXT,
    MODE_CHOICES, MODE_HELP_TEXT,
    ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    DEFAULT_IGNORE_STR, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupelink",
            description="dupelink — find duplicate files and replace them with links to one kept copy",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--path", "-p",
            default=".",
            type=str,
            help="Directory to scan. Default: current directory"
        )
        parser.add_argument(
            "--recursive", "-r",
            action="store_true",
            help="Scan subdirectories too"
        )
        parser.add_argument(
            "--dry-run", "-d",
            action="store_true",
            dest="dry_run",
            help="Only log what would be done, change nothing"
        )

        # Deduplication options
        parser.add_argument(
            "--keep", "-k",
            required=True,
            choices=KEEP_CHOICES,
            type=str,
            help=KEEP_HELP_TEXT
        )
        parser.add_argument(
            "--mode", "-m",
            choices=MODE_CHOICES,
            default="symlink",
            type=str,
            help=MODE_HELP_TEXT
        )
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="md5",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )

        # Filtering options
        parser.add_argument(
            "--ignore", "-i",
            default=DEFAULT_IGNORE_STR,
            type=str,
            help=f"Comma-separated file or directory names to skip. An entry starting with '.'\n"
                 f"also skips every name ending with it (.git skips foo.git too).\n"
                 f"Default: {DEFAULT_IGNORE_STR}"
        )
        parser.add_argument(
            "--min-size",
            default="1MB",
            type=str,
            metavar='SIZE',
            help="Minimum file size (e.g., 500KB, 1MB, 0). Default: 1MB"
        )
        parser.add_argument(
            "--max-size",
            default="1TB",
            type=str,
            metavar='SIZE',
            help="Maximum file size (e.g., 10MB, 1GB) or -1 for unlimited. Default: 1TB"
        )

        # Execution options
        parser.add_argument(
            "--threads", "-t",
            default=None,
            type=int,
            metavar='N',
            help="Hashing threads. Default: number of CPUs"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="With --mode delete: move duplicates to the system trash instead of deleting them"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Log to duplicates.log only, nothing on the console"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and detailed statistics"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.trash and args.mode != Mode.DELETE.value:
            self.error_exit("--trash can only be used with --mode delete")

        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        if args.threads is not None and args.threads < 1:
            self.error_exit("Thread count must be at least 1")

        # Validate size formats
        try:
            min_size = ConvertUtils.human_to_bytes(args.min_size)
            max_size = ConvertUtils.human_to_bytes(args.max_size)
            if max_size < min_size:
                self.error_exit("Maximum size cannot be less than minimum size")
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams.from_human_readable(
                root_dir=args.path,
                keep=args.keep,
                mode=args.mode,
                algorithm=args.algorithm,
                ignore_str=args.ignore,
                min_size_str=args.min_size,
                max_size_str=args.max_size,
                recursive=args.recursive,
                dry_run=args.dry_run,
                threads=args.threads,
                use_trash=args.trash,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            if stage == "Hashing":
                done = f"{ConvertUtils.bytes_to_human(current)}/{ConvertUtils.bytes_to_human(total)}"
            else:
                done = f"{current}/{total}"
            sys.stderr.write(f"\r  [{stage}] {done} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_deduplication(self, params: DeduplicationParams) -> List[DuplicateGroup]:
        """Resolve the root, attach the run log and execute the command."""
        command = DeduplicationCommand()
        try:
            root_dir = command.resolve_root(params.root_dir)
            teardown = configure_run_logging(Path(root_dir) / LOG_FILE_NAME, console=not self.quiet)
        except DupelinkError as e:
            self.error_exit(str(e))

        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except DupelinkError as e:
            logging.getLogger("dupelink").error(f"Aborted: {e}")
            self.error_exit(str(e))
        finally:
            if self.verbose:
                sys.stderr.write("\n")
            teardown()

        if self.verbose:
            print("\nDeduplication Statistics:")
            print(stats.print_summary())
        return groups

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.validate_args(args)
        params = self.create_params(args)

        groups = self.run_deduplication(params)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds ({len(groups)} duplicate groups)")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
