"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Error taxonomy for scanning, hashing and cleanup.

Per-item errors (DirectoryReadError, FileStatError, HashComputeError, DeletionError)
are caught where they happen and never abort a batch.
FatalScanError is the only one that reaches the caller.
"""


class DupSweepError(Exception):
    """Base class for all dupsweep errors."""


class DirectoryReadError(DupSweepError, OSError):
    """A directory below the scan root could not be listed."""


class FileStatError(DupSweepError, OSError):
    """File metadata could not be read."""


class HashComputeError(DupSweepError, OSError):
    """A file could not be opened or read while hashing."""


class DeletionError(DupSweepError, OSError):
    """A file could not be removed."""


class FatalScanError(DupSweepError, RuntimeError):
    """The scan root itself is missing, not a directory or unreadable."""
