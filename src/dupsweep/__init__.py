"""
DupSweep — exact duplicate file finder and cleaner.

Core features:
- Depth-bounded recursive scan that skips hidden directories
- Content-addressed grouping (SHA-256 by default, xxHash optional)
- Oldest copy of every duplicate set is kept, the rest can be deleted permanently
- In-memory search over file lists: name, extension, size and age expressions
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupsweep")
except PackageNotFoundError:
    import os as _os
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    _pyproject = _os.path.join(_os.path.dirname(__file__), "..", "..", "pyproject.toml")
    with open(_pyproject, "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API: only what users should import directly
from dupsweep.commands import FolderCleanupCommand
from dupsweep.core import (
    ScanParams, SearchRequest, SavedFilter, FilterField, FilterMode, SortKey, HashAlgorithmName,
    FileRecord, DuplicateGroup, DuplicateFileView, DuplicateScanResult, CleanupResult,
    FatalScanError)
from dupsweep.core.query import apply_search, filter_files, sort_files, paginate
from dupsweep.utils.convert_utils import ConvertUtils
from dupsweep.services import DuplicateService, FileService, CleanupExecutorImpl

__all__ = [
    "FolderCleanupCommand",
    "ScanParams",
    "SearchRequest",
    "SavedFilter",
    "FilterField",
    "FilterMode",
    "SortKey",
    "HashAlgorithmName",
    "FileRecord",
    "DuplicateGroup",
    "DuplicateFileView",
    "DuplicateScanResult",
    "CleanupResult",
    "FatalScanError",
    "apply_search",
    "filter_files",
    "sort_files",
    "paginate",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "CleanupExecutorImpl",
    "__version__",
]
