"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for file scanning, deduplication and cleanup.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, FrozenSet, Union, Generic, TypeVar
import os
from enum import Enum


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Content digest used to compare files.
    """
    SHA256 = "sha256"
    XXHASH = "xxhash"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.XXHASH: "xxHash (XXH3-128)",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class FilterField(Enum):
    """Matchers a search query is tested against."""
    NAME = "name"
    EXTENSION = "extension"
    SIZE = "size"
    DATE = "date"

    @classmethod
    def get_all(cls) -> FrozenSet['FilterField']:
        return frozenset(cls)


class FilterMode(Enum):
    """How active filters are combined."""
    AND = "and"
    OR = "or"


class SortKey(Enum):
    NAME = "name"
    PATH = "path"
    EXTENSION = "extension"
    SIZE = "size"
    MODIFIED = "modified"

    @property
    def display_name(self) -> str:
        mapping = {
            SortKey.NAME: "Name",
            SortKey.PATH: "Path",
            SortKey.EXTENSION: "Extension",
            SortKey.SIZE: "Size",
            SortKey.MODIFIED: "Modified",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    Represents a single regular file found on the file system.
    Created fresh on every scan and never mutated afterwards.
    """
    path: str
    size: int  # in bytes
    modified: float  # POSIX timestamp
    name: Optional[str] = None
    extension: Optional[str] = None
    directory: Optional[str] = None  # Only set by the recursive walk

    def __post_init__(self):
        """Automatically extract basename and extension from path if not provided."""
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.size}")

        # Frozen dataclass: derived fields go through object.__setattr__
        if self.name is None:
            object.__setattr__(self, "name", os.path.basename(self.path))

        if self.extension is None:
            _, ext = os.path.splitext(self.name)
            object.__setattr__(self, "extension", ext.lower())  # ".JPG" → ".jpg"

    @classmethod
    def from_stat(cls, path: str, stat_result: os.stat_result,
                  directory: Optional[str] = None) -> 'FileRecord':
        """Build a record from an os.stat() result."""
        return cls(
            path=path,
            size=stat_result.st_size,
            modified=stat_result.st_mtime,
            directory=directory,
        )

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    A set of files sharing one content digest.

    The file to keep lives in `original`, every other copy in `duplicates`.
    The split is made once, at construction time, so cleanup code can only
    ever reach the deletable copies.
    """
    hash: str
    original: FileRecord
    duplicates: Tuple[FileRecord, ...]

    def __post_init__(self):
        if not self.duplicates:
            raise ValueError("A duplicate group needs at least two files")
        if any(f.path == self.original.path for f in self.duplicates):
            raise ValueError("Original file cannot be listed among its duplicates")

    @classmethod
    def from_files(cls, digest: str, files: Sequence[FileRecord]) -> 'DuplicateGroup':
        """
        Builds a group from files that share `digest`.
        Files are ordered oldest first; equal timestamps keep their given order.
        """
        if len(files) < 2:
            raise ValueError("A duplicate group needs at least two files")
        ordered = sorted(files, key=lambda f: f.modified)  # sorted() is stable
        return cls(hash=digest, original=ordered[0], duplicates=tuple(ordered[1:]))

    @property
    def files(self) -> Tuple[FileRecord, ...]:
        """All files of the group, oldest first."""
        return (self.original,) + self.duplicates

    @property
    def file_count(self) -> int:
        return len(self.duplicates) + 1

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)

    @property
    def duplicate_size(self) -> int:
        """Bytes reclaimed by deleting every duplicate."""
        return sum(f.size for f in self.duplicates)

    def __repr__(self):
        return f"<DuplicateGroup hash={self.hash[:12]}, count={self.file_count}>"


@dataclass(frozen=True)
class DuplicateFileView:
    """A file annotated with its duplicate group, for presentation."""
    file: FileRecord
    is_original: bool
    duplicate_group: str
    group_size: int  # number of files in the group

    @property
    def can_delete(self) -> bool:
        return not self.is_original


@dataclass(frozen=True)
class DuplicatesSummary:
    total_duplicates: int = 0
    total_groups: int = 0
    total_reclaimable: int = 0


# ======================
#  Per-item results
# ======================

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    path: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


ItemResult = Union[Ok, Err]


@dataclass
class DuplicateScanResult:
    """Everything find_duplicates() hands back to the caller."""
    duplicate_files: List[DuplicateFileView]
    duplicate_groups: List[DuplicateGroup]
    summary: DuplicatesSummary
    skipped: List[Err] = field(default_factory=list)


@dataclass(frozen=True)
class CleanupError:
    file: str
    error: str


@dataclass
class CleanupResult:
    """
    Outcome of one cleanup pass.
    `success` is always True: partial failures show up only in `errors`.
    """
    deleted_count: int = 0
    freed_space: int = 0
    errors: List[CleanupError] = field(default_factory=list)
    success: bool = True
    cancelled: bool = False

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


"""
Request objects with built-in validation.
Interface-agnostic — used by the command layer and the CLI.
"""

DEFAULT_MAX_DEPTH = 10
DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass
class ScanParams:
    """Parameters for a duplicate scan."""
    root_dir: str
    max_depth: int = DEFAULT_MAX_DEPTH
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA256
    workers: int = 1
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.max_depth < 0:
            raise ValueError("Maximum depth cannot be negative")

        if self.workers < 1:
            raise ValueError("Number of workers must be at least 1")

        if self.chunk_size < 1:
            raise ValueError("Chunk size must be positive")

    @staticmethod
    def from_human_readable(
            root_dir: str,
            max_depth_str: str = str(DEFAULT_MAX_DEPTH),
            algorithm_str: str = "sha256",
            workers_str: str = "1",
    ) -> 'ScanParams':
        """
        Factory method to create params from string inputs (CLI arguments).
        """
        try:
            max_depth = int(max_depth_str)
        except ValueError:
            raise ValueError(f"Invalid depth: '{max_depth_str}'")
        try:
            workers = int(workers_str)
        except ValueError:
            raise ValueError(f"Invalid number of workers: '{workers_str}'")
        try:
            algorithm = HashAlgorithmName(algorithm_str.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown hash algorithm: '{algorithm_str}'")

        return ScanParams(
            root_dir=root_dir,
            max_depth=max_depth,
            algorithm=algorithm,
            workers=workers,
        )


@dataclass(frozen=True)
class SavedFilter:
    """A saved filter expression that can be toggled on and off."""
    query: str
    label: Optional[str] = None

    def __post_init__(self):
        if self.label is None:
            object.__setattr__(self, "label", self.query)


@dataclass
class SearchRequest:
    """Everything the filter engine needs to evaluate a search."""
    query: str = ""
    fields: FrozenSet[FilterField] = field(default_factory=FilterField.get_all)
    active_filters: Sequence[SavedFilter] = ()
    mode: FilterMode = FilterMode.OR

    def __post_init__(self):
        self.fields = frozenset(self.fields)
        self.active_filters = tuple(self.active_filters)

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to filter by."""
        return not self.query.strip() and not self.active_filters
