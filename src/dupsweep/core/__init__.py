"""
Core duplicate detection engine — scanner, hasher, grouper and search.

This package contains the filesystem-facing foundation of dupsweep:
- FileScannerImpl: depth-bounded directory walk that skips hidden directories
- HasherImpl + Sha256AlgorithmImpl / XXHashAlgorithmImpl: streaming content hashing
- FileGrouperImpl: digest-based grouping with oldest-file-wins original selection
- query: in-memory search, sort and paging over file records
- Models: FileRecord, DuplicateGroup, CleanupResult and request objects

All components are pure Python with no UI dependencies.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl, algorithm_for
from .categories import FileCategory, category_for
from .errors import (
    DupSweepError, DirectoryReadError, FileStatError, HashComputeError, DeletionError, FatalScanError)
from .models import (
    FileRecord, DuplicateGroup, DuplicateFileView, DuplicatesSummary, DuplicateScanResult,
    CleanupResult, CleanupError, Ok, Err, ScanParams, SearchRequest, SavedFilter,
    HashAlgorithmName, FilterField, FilterMode, SortKey)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "algorithm_for",
    "FileCategory",
    "category_for",
    "DupSweepError",
    "DirectoryReadError",
    "FileStatError",
    "HashComputeError",
    "DeletionError",
    "FatalScanError",
    "FileRecord",
    "DuplicateGroup",
    "DuplicateFileView",
    "DuplicatesSummary",
    "DuplicateScanResult",
    "CleanupResult",
    "CleanupError",
    "Ok",
    "Err",
    "ScanParams",
    "SearchRequest",
    "SavedFilter",
    "HashAlgorithmName",
    "FilterField",
    "FilterMode",
    "SortKey",
]
