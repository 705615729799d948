"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate cleanup system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (e.g., SHA-256, xxHash).
- Hasher: Interface for computing the content digest of a file.
- FileScanner: Interface for walking a directory tree and returning file records.
- FileGrouper: Interface for turning file records into duplicate groups.
- CleanupExecutor: Interface for deleting the duplicates of a set of groups.
"""

from typing import Protocol, List, Optional, Callable, Sequence, Iterator, Tuple
from dupsweep.core.models import (
    FileRecord,
    DuplicateGroup,
    CleanupResult,
    ItemResult,
    Err,
)

StoppedFlag = Callable[[], bool]
ProgressCallback = Callable[[str, int, Optional[int]], None]


# ===== Interfaces =====

class HashObject(Protocol):
    """Incremental hash state, as returned by hashlib.sha256() or xxhash.xxh3_128()."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the deduplication logic.
    """
    name: str

    def new(self) -> HashObject:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of a file."""
    def compute_full_hash(self, file: FileRecord) -> str: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def iter_results(
        self,
        stopped_flag: Optional[StoppedFlag] = None,
    ) -> Iterator[ItemResult]:
        """Yields Ok(FileRecord) for every file found and Err for every entry skipped."""
        ...

    def scan(
        self,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[FileRecord]:
        """
        Scan files from the configured directory.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            List of all regular files found.
        """
        ...

    def scan_with_report(
        self,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[FileRecord], List[Err]]:
        """Same as scan(), plus the entries that were skipped."""
        ...


class FileGrouper(Protocol):
    """Interface for grouping files by content digest."""
    def group(
        self,
        files: Sequence[FileRecord],
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        ...


class CleanupExecutor(Protocol):
    """Interface for removing every non-original file of a set of groups."""
    def clean(
        self,
        groups: Sequence[DuplicateGroup],
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> CleanupResult:
        ...
