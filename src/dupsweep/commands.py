"""
Unified command layer for folder cleanup.
This is the SINGLE entry point for the boundary operations used by any front end.
No UI dependencies — pure Python, and no state kept between calls.
"""
import os
import logging
from typing import Callable, List, Optional, Sequence, Union

from dupsweep.core.grouper import FileGrouperImpl
from dupsweep.core.hasher import HasherImpl, algorithm_for
from dupsweep.core.interfaces import ProgressCallback, StoppedFlag
from dupsweep.core.models import (
    CleanupResult, DuplicateGroup, DuplicateScanResult, FileRecord, ScanParams)
from dupsweep.core.scanner import FileScannerImpl
from dupsweep.services.cleanup_service import CleanupExecutorImpl

logger = logging.getLogger(__name__)


class FolderCleanupCommand:
    """
    Orchestrates the duplicate cleanup workflow:
    1. Pick a root directory (select_root)
    2. Browse it (list_files) or find duplicates beneath it (find_duplicates)
    3. Delete the duplicates of the groups the user selected (clean_duplicate_files)

    Usage:
        command = FolderCleanupCommand()
        result = command.find_duplicates(
            ScanParams(root_dir="/data", max_depth=10),
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )
        cleanup = command.clean_duplicate_files(result.duplicate_groups)
    """

    def __init__(self, delete_func: Callable[[str], None] = None):
        self._cleaner = CleanupExecutorImpl(delete_func)

    @staticmethod
    def select_root(ask: Optional[Callable[[str], str]] = None) -> Optional[str]:
        """
        Asks for a directory. Returns its absolute path, or None when the user
        cancels (blank answer, EOF, Ctrl+C) or names something that is not a directory.
        """
        try:
            answer = (ask or input)("Directory to scan: ")
        except (EOFError, KeyboardInterrupt):
            return None

        answer = os.path.expanduser(answer.strip()) if answer else ""
        if not answer:
            return None
        if not os.path.isdir(answer):
            logger.warning(f"Not a directory: {answer}")
            return None
        return os.path.abspath(answer)

    @staticmethod
    def list_files(root: str) -> List[FileRecord]:
        """
        Non-recursive listing of a single directory.

        Raises:
            FatalScanError: If the directory is missing or unreadable
        """
        return FileScannerImpl(root).list_directory()

    def find_duplicates(
            self,
            params: Union[ScanParams, str],
            progress_callback: Optional[ProgressCallback] = None,
            stopped_flag: Optional[StoppedFlag] = None
    ) -> DuplicateScanResult:
        """
        Walks the tree and groups duplicate files.

        Args:
            params: Validated scan parameters, or just a root directory
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            DuplicateScanResult with views, groups, summary and skipped items

        Raises:
            FatalScanError: If the root directory is missing or unreadable
        """
        if isinstance(params, str):
            params = ScanParams(root_dir=params)

        scanner = FileScannerImpl(params.root_dir, max_depth=params.max_depth)

        # Step 1: Enumerate the tree, keeping track of what could not be read
        files, skipped = scanner.scan_with_report(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

        if stopped_flag and stopped_flag():
            logger.debug("Duplicate search cancelled during scan")
            return self._empty_result()

        logger.info(f"Scanned {params.root_dir}: {len(files)} files, {len(skipped)} skipped")

        # Step 2: Hash and group
        hasher = HasherImpl(algorithm_for(params.algorithm), chunk_size=params.chunk_size)
        grouper = FileGrouperImpl(hasher, workers=params.workers)
        groups, hash_failures = grouper.group_with_report(
            files,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

        if stopped_flag and stopped_flag():
            logger.debug("Duplicate search cancelled during hashing")
            return self._empty_result()

        return DuplicateScanResult(
            duplicate_files=FileGrouperImpl.build_views(groups),
            duplicate_groups=groups,
            summary=FileGrouperImpl.summarize(groups),
            skipped=skipped + hash_failures,
        )

    def clean_duplicate_files(
            self,
            groups: Sequence[DuplicateGroup],
            progress_callback: Optional[ProgressCallback] = None,
            stopped_flag: Optional[StoppedFlag] = None
    ) -> CleanupResult:
        """Permanently deletes every duplicate of `groups`; originals are kept."""
        return self._cleaner.clean(
            groups,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )

    @staticmethod
    def _empty_result() -> DuplicateScanResult:
        return DuplicateScanResult(
            duplicate_files=[],
            duplicate_groups=[],
            summary=FileGrouperImpl.summarize([]),
        )
