#!/usr/bin/env python3
"""
DupSweep CLI — Command line interface for duplicate file detection and cleanup.
Finds exact duplicates beneath a directory, keeps the oldest copy of each and
deletes the rest. Deletion is permanent: files are removed, not moved to trash.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupsweep.core.errors import FatalScanError
from dupsweep.core.models import (
    DuplicateGroup, DuplicateScanResult, FileRecord, FilterField, SavedFilter, ScanParams, SearchRequest)
from dupsweep.core.query import DEFAULT_PRESETS, apply_search, paginate, sort_files
from dupsweep.core.categories import category_for
from dupsweep.core.grouper import FileGrouperImpl
from dupsweep.commands import FolderCleanupCommand
from dupsweep.services.duplicate_service import DuplicateService
from dupsweep.utils.convert_utils import ConvertUtils
from dupsweep.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    FILTER_MODE_ALIASES, FILTER_MODE_CHOICES, FIELD_ALIASES,
    SORT_ALIASES, SORT_CHOICES, PRESET_CHOICES, PRESET_HELP_TEXT,
    SEARCH_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.command = FolderCleanupCommand()

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse and validate command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupsweep",
            description="DupSweep — find exact duplicate files and delete all but the oldest copy",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            type=str,
            help="Directory to scan. Asked interactively when omitted"
        )
        parser.add_argument(
            "--list",
            action="store_true",
            help="Browse mode: list the files of the directory itself (non-recursive)"
        )

        # Scan options
        parser.add_argument(
            "--max-depth", "-d",
            default="10",
            type=str,
            metavar='',
            help="How many directory levels below the input to descend. Default: 10"
        )
        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            default="1",
            type=str,
            metavar='',
            help="Number of threads used for hashing. Default: 1"
        )

        # Search options
        parser.add_argument(
            "--search", "-s",
            default="",
            type=str,
            metavar='',
            help=SEARCH_HELP_TEXT
        )
        parser.add_argument(
            "--filter", "-f",
            action="append",
            default=[],
            type=str,
            metavar='',
            dest="filters",
            help="Active filter (same syntax as --search). Repeat to add more"
        )
        parser.add_argument(
            "--preset",
            action="append",
            default=[],
            choices=PRESET_CHOICES,
            dest="presets",
            help=PRESET_HELP_TEXT
        )
        parser.add_argument(
            "--filter-mode",
            choices=FILTER_MODE_CHOICES,
            default="or",
            type=str,
            help="How active filters combine: 'and' (all must match) or 'or' (any). Default: or"
        )
        parser.add_argument(
            "--fields",
            default="name,extension,size,date",
            type=str,
            metavar='',
            help="Comma separated matchers to use: name, extension, size, date. Default: all"
        )

        # Listing options
        parser.add_argument(
            "--sort",
            choices=SORT_CHOICES,
            default=None,
            type=str,
            help="Sort listed files (with --list)"
        )
        parser.add_argument(
            "--desc",
            action="store_true",
            help="Sort in descending order"
        )
        parser.add_argument(
            "--page",
            default=None,
            type=int,
            metavar='',
            help="Show only this page of the listing (1-based, with --list)"
        )
        parser.add_argument(
            "--page-size",
            default=50,
            type=int,
            metavar='',
            help="Files per page. Default: 50"
        )

        # Actions
        parser.add_argument(
            "--keep-one",
            action="store_true",
            help="Keep the oldest file per duplicate group and permanently delete the rest. "
                 "Always shows preview before deletion for safety."
        )

        # Output options
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --keep-one (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed progress and skipped files"
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.keep_one:
            self.error_exit("--force can only be used with --keep-one")

        if args.list and args.keep_one:
            self.error_exit("--keep-one cannot be used with --list")

        # Prevent interactive confirmation in non-TTY environments
        if args.keep_one and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        if args.input is not None:
            root_path = os.path.abspath(os.path.expanduser(args.input))
            if not os.path.exists(root_path):
                self.error_exit(f"Directory not found: {args.input}")
            if not os.path.isdir(root_path):
                self.error_exit(f"Path is not a directory: {args.input}")

        for name in args.fields.split(","):
            if name.strip() and name.strip().lower() not in FIELD_ALIASES:
                self.error_exit(
                    f"Unknown search field: '{name.strip()}'.\n"
                    f"Valid options: name, extension, size, date"
                )

        if args.page is not None and args.page < 1:
            self.error_exit("Page number must be 1 or greater")
        if args.page_size < 1:
            self.error_exit("Page size must be 1 or greater")

    def resolve_root(self, args: argparse.Namespace) -> str:
        """Returns the directory to work on, asking for it when not given."""
        if args.input is not None:
            return os.path.abspath(os.path.expanduser(args.input))

        if not sys.stdin.isatty():
            self.error_exit("No input directory given. Use --input/-i in non-interactive sessions.")

        root = self.command.select_root()
        if root is None:
            self.error_exit("No directory selected.")
        return root

    def create_params(self, args: argparse.Namespace, root: str) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(
                root_dir=root,
                max_depth_str=args.max_depth,
                algorithm_str=ALGORITHM_ALIASES[args.algorithm].value,
                workers_str=args.workers,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    @staticmethod
    def create_search_request(args: argparse.Namespace) -> SearchRequest:
        """Create SearchRequest from CLI arguments."""
        fields = {
            FIELD_ALIASES[name.strip().lower()]
            for name in args.fields.split(",") if name.strip()
        }
        active_filters = [SavedFilter(query=q) for q in args.filters if q.strip()]
        active_filters += [DEFAULT_PRESETS[name] for name in args.presets]

        return SearchRequest(
            query=args.search,
            fields=fields or FilterField.get_all(),
            active_filters=active_filters,
            mode=FILTER_MODE_ALIASES[args.filter_mode],
        )

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
            sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    def run_listing(self, root: str, args: argparse.Namespace) -> None:
        """Browse mode: non-recursive listing with search, sort and paging."""
        try:
            files = self.command.list_files(root)
        except FatalScanError as e:
            self.error_exit(str(e))

        files = apply_search(files, self.create_search_request(args))
        if args.sort:
            files = sort_files(files, SORT_ALIASES[args.sort], descending=args.desc)

        if self.quiet:
            return

        if not files:
            print("No files to show.")
            return

        if args.page is not None:
            page = paginate(files, args.page, args.page_size)
            shown = page.items
            print(f"\n{page.total_items} files | page {page.page}/{page.total_pages}")
        else:
            shown = files
            print(f"\n{len(files)} files")

        if args.sort:
            order = "descending" if args.desc else "ascending"
            print(f"Sorted by: {SORT_ALIASES[args.sort].display_name} ({order})")

        for file in shown:
            category = category_for(file.extension, file.name).value
            print(
                f"   {file.name}  [{ConvertUtils.bytes_to_human(file.size)}]  "
                f"{ConvertUtils.timestamp_to_human(file.modified)}  ({category})"
            )

    def run_deduplication(self, params: ScanParams) -> DuplicateScanResult:
        """Execute duplicate search workflow."""
        if self.verbose:
            print(f"Finding duplicates (algorithm: {params.algorithm.display_name}, "
                  f"max depth: {params.max_depth})...")

        try:
            result = self.command.find_duplicates(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except FatalScanError as e:
            self.error_exit(f"Scan failed: {e}")

        if result.skipped and not self.verbose:
            self.warning(f"Skipped {len(result.skipped)} unreadable entries (use --verbose for details)")

        if self.verbose:
            sys.stderr.write("\n")
            if result.skipped:
                print(f"Skipped {len(result.skipped)} unreadable entries:")
                for item in result.skipped[:5]:
                    print(f"  • {item.path}: {item.reason}")
                if len(result.skipped) > 5:
                    print(f"  ...and {len(result.skipped) - 5} more")

        return result

    @staticmethod
    def select_groups(result: DuplicateScanResult, request: SearchRequest) -> List[DuplicateGroup]:
        """Groups the search applies to: all of them for an empty search."""
        if request.is_empty:
            return list(result.duplicate_groups)
        files = [view.file for view in result.duplicate_files]
        return DuplicateService.select_groups(result.duplicate_groups, apply_search(files, request))

    def output_results(self, groups: List[DuplicateGroup]) -> None:
        """Output duplicate groups as plain text, original first."""
        if self.quiet:
            return

        if not groups:
            print("No duplicate groups found.")
            return

        summary = FileGrouperImpl.summarize(groups)
        print(f"\nFound {summary.total_groups} duplicate groups "
              f"({summary.total_duplicates} duplicates, "
              f"{ConvertUtils.bytes_to_human(summary.total_reclaimable)} reclaimable)")

        for idx, group in enumerate(groups, 1):
            size_str = ConvertUtils.bytes_to_human(group.original.size)
            print(f"\n📁 Group {idx} | Size: {size_str} | Files: {group.file_count}")
            self._print_file("KEEP", group.original)
            for file in group.duplicates:
                self._print_file("DUP ", file)

    @staticmethod
    def _print_file(marker: str, file: FileRecord) -> None:
        print(f"   [{marker}] {file.path}  ({ConvertUtils.timestamp_to_human(file.modified)})")

    def execute_keep_one(self, groups: List[DuplicateGroup], force: bool = False) -> None:
        """Keep the original of every group, delete the rest. Always shows preview before deletion."""
        if not groups:
            if not self.quiet:
                print("No duplicate groups found.")
            return

        files_to_delete = DuplicateService.files_to_delete(groups)
        space_saved_str = ConvertUtils.bytes_to_human(sum(f.size for f in files_to_delete))

        # Always show deletion preview before action (safety first)
        print()
        for idx, group in enumerate(groups, 1):
            size_str = ConvertUtils.bytes_to_human(group.total_size)
            print(f"📁 Group {idx} | Total size: {size_str} | Files: {group.file_count}")
            print("-" * 60)
            print(f"   [KEEP] {group.original.path}")
            print(f"          Modified: {ConvertUtils.timestamp_to_human(group.original.modified)}"
                  f" (oldest copy)")
            for file in group.duplicates:
                print(f"   [DEL]  {file.path}")
                print(f"          Modified: {ConvertUtils.timestamp_to_human(file.modified)}")
            print()

        print("=" * 60)
        print(f"Summary: Keep 1 file per group ({len(groups)} files preserved, "
              f"{len(files_to_delete)} files deleted)")
        print(f"Total space saved: {space_saved_str}")
        print()

        if force:
            print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            # Safety check: confirm we're still in interactive mode
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )

            response = input(f"Permanently delete {len(files_to_delete)} files? This cannot be undone. [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return

        print(f"\nDeleting {len(files_to_delete)} files...")
        result = self.command.clean_duplicate_files(
            groups,
            progress_callback=self.progress_callback if self.verbose else None,
            stopped_flag=self.stopped_flag
        )
        if self.verbose:
            sys.stderr.write("\n")

        freed_str = ConvertUtils.bytes_to_human(result.freed_space)
        if result.errors:
            print(f"\n⚠️  Partial success: {result.deleted_count}/{len(files_to_delete)} files deleted "
                  f"({freed_str} freed).")
            print(f"Failed to delete {len(result.errors)} file(s):")
            for error in result.errors[:5]:  # Show first 5 errors
                print(f"  • {os.path.basename(error.file)}: {error.error}")
            if len(result.errors) > 5:
                print(f"  ...and {len(result.errors) - 5} more files")
        else:
            print(f"✅ Successfully deleted {result.deleted_count} files.")
            print(f"Total space saved: {freed_str}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    @staticmethod
    def configure_logging(verbose: bool, debug: bool) -> None:
        level = logging.DEBUG if debug else logging.INFO if verbose else logging.ERROR
        logging.getLogger("dupsweep").setLevel(level)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging(args.verbose, args.debug)

        self.validate_args(args)
        root = self.resolve_root(args)

        if args.list:
            self.run_listing(root, args)
            return

        params = self.create_params(args, root)
        request = self.create_search_request(args)

        if not self.quiet:
            print(f"Scanning directory: {params.root_dir}")

        result = self.run_deduplication(params)
        groups = self.select_groups(result, request)

        if args.keep_one:
            self.execute_keep_one(groups, force=args.force)
        else:
            self.output_results(groups)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


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
