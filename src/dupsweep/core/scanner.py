"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory tree enumeration.
Features:
- Depth-first walk driven by an explicit stack (no recursion), bounded by max_depth
- Skips hidden directories (names starting with '.') and symbolic links
- Per-entry failures are skipped and reported as Err results, never abort the walk
- Non-recursive single-directory listing for plain browsing
"""

import os
import time
import logging
from typing import Iterator, List, Optional, Tuple

from dupsweep.core.errors import DirectoryReadError, FatalScanError, FileStatError
from dupsweep.core.interfaces import FileScanner, ProgressCallback, StoppedFlag
from dupsweep.core.models import DEFAULT_MAX_DEPTH, Err, FileRecord, ItemResult, Ok

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Walks a directory tree and returns every regular file as a FileRecord.

    Attributes:
        root_dir: Root directory to scan (depth 0)
        max_depth: Subdirectories are entered only while the current depth is below this value
    """

    def __init__(self, root_dir: str, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 0:
            raise ValueError("Maximum depth cannot be negative")
        self.root_dir = os.path.abspath(root_dir)
        self.max_depth = max_depth

    def scan(self,
             stopped_flag: Optional[StoppedFlag] = None,
             progress_callback: Optional[ProgressCallback] = None) -> List[FileRecord]:
        """
        Single-pass scan with progress updates.
        Skipped entries are logged where they occur and left out of the result.
        Returns an empty list if the scan is cancelled.

        Raises:
            FatalScanError: If the root directory is missing or unreadable
        """
        files, _ = self.scan_with_report(stopped_flag, progress_callback)
        return files

    def scan_with_report(
            self,
            stopped_flag: Optional[StoppedFlag] = None,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[FileRecord], List[Err]]:
        """
        Same as scan(), but also returns the entries that could not be read.
        Returns ([], []) if the scan is cancelled.
        """
        logger.debug(f"Starting scan of {self.root_dir} (max_depth={self.max_depth})")

        found_files = []
        skipped: List[Err] = []
        start_time = time.time()

        # Progress throttling: update every N files to reduce caller overhead
        progress_interval = 5000
        progress_counter = 0

        for result in self.iter_results(stopped_flag=stopped_flag):
            if isinstance(result, Ok):
                found_files.append(result.value)
            else:
                skipped.append(result)
            progress_counter += 1

            if progress_callback and progress_counter >= progress_interval:
                progress_callback('scanning', len(found_files), None)
                progress_counter = 0

        if stopped_flag and stopped_flag():
            logger.debug("Scan interrupted by user")
            return [], []

        # Final update for small trees
        if progress_callback and progress_counter > 0:
            progress_callback('scanning', len(found_files), None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.info(f"Scan completed. Found {len(found_files)} files, skipped {len(skipped)} entries.")
        return found_files, skipped

    def iter_results(self, stopped_flag: Optional[StoppedFlag] = None) -> Iterator[ItemResult]:
        """
        Yields Ok(FileRecord) for each regular file and Err for each entry or
        subtree that could not be read. Order carries no meaning.

        Raises:
            FatalScanError: If the root directory is missing or unreadable
        """
        root_entries = self._open_root()

        # Stack of (directory path, depth, entries). Entries are listed lazily,
        # except for the root which is listed up front so failures there are fatal.
        stack: List[Tuple[str, int, Optional[List[os.DirEntry]]]] = [(self.root_dir, 0, root_entries)]

        while stack:
            if stopped_flag and stopped_flag():
                return

            directory, depth, entries = stack.pop()

            if entries is None:
                try:
                    entries = self._list_entries(directory)
                except OSError as e:
                    error = DirectoryReadError(f"Cannot read directory {directory}: {e}")
                    logger.warning(str(error))
                    yield Err(directory, str(error))
                    continue

            subdirs = []
            for entry in entries:
                if stopped_flag and stopped_flag():
                    return

                try:
                    if entry.is_dir(follow_symlinks=False):
                        if entry.name.startswith('.'):
                            logger.debug(f"Skipping hidden directory: {entry.path}")
                        elif depth < self.max_depth:
                            subdirs.append(entry.path)
                        continue
                    if not entry.is_file(follow_symlinks=False):
                        logger.debug(f"Skipping non-regular file: {entry.path}")
                        continue
                except OSError as e:
                    yield self._stat_failure(entry.path, e)
                    continue

                try:
                    record = FileRecord.from_stat(
                        entry.path,
                        entry.stat(follow_symlinks=False),
                        directory=directory,
                    )
                except OSError as e:
                    yield self._stat_failure(entry.path, e)
                    continue

                yield Ok(record)

            # Reversed so that the first subdirectory is popped (visited) first
            for subdir in reversed(subdirs):
                stack.append((subdir, depth + 1, None))

    def list_directory(self) -> List[FileRecord]:
        """
        Non-recursive listing of the root directory: regular files only,
        hidden files included. Records carry no `directory` attribute.

        Raises:
            FatalScanError: If the directory is missing or unreadable
        """
        files = []
        for entry in self._open_root():
            try:
                if not entry.is_file(follow_symlinks=False):
                    continue
                files.append(FileRecord.from_stat(entry.path, entry.stat(follow_symlinks=False)))
            except OSError as e:
                self._stat_failure(entry.path, e)
        logger.debug(f"Listed {len(files)} files in {self.root_dir}")
        return files

    def _open_root(self) -> List[os.DirEntry]:
        """Validates and lists the root directory."""
        if not os.path.exists(self.root_dir):
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise FatalScanError(error_msg)
        if not os.path.isdir(self.root_dir):
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise FatalScanError(error_msg)

        try:
            return self._list_entries(self.root_dir)
        except OSError as e:
            error_msg = f"Cannot read directory {self.root_dir}: {e}"
            logger.error(error_msg)
            raise FatalScanError(error_msg) from e

    @staticmethod
    def _list_entries(directory: str) -> List[os.DirEntry]:
        with os.scandir(directory) as it:
            return list(it)

    @staticmethod
    def _stat_failure(path: str, e: OSError) -> Err:
        error = FileStatError(f"Could not read metadata of {path}: {e}")
        logger.debug(str(error))
        return Err(path, str(error))
