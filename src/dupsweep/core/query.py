"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/query.py
In-memory search, sort and paging over file records.

Query grammar (each string is tested against every enabled matcher):
    photoshop        - name contains (case-insensitive)
    .jpg             - extension or name contains
    >100MB, <=1.5KB  - size comparison, units B/KB/MB/GB (powers of 1024)
    older:30days     - age comparison, units day(s)/week(s)/month(s)/year(s)
                       (month = 30 days, year = 365 days)
"""

import re
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from dupsweep.core.models import (
    FileRecord, FilterField, FilterMode, SavedFilter, SearchRequest, SortKey)

# Pre-compiled regex patterns
_PATTERN_SIZE = re.compile(r'([<>]=?)\s*(\d+(?:\.\d+)?)\s*(B|KB|MB|GB)', re.IGNORECASE)
_PATTERN_DATE = re.compile(r'(older|newer):(\d+)(days?|weeks?|months?|years?)', re.IGNORECASE)

SIZE_UNITS = {
    'B': 1,
    'KB': 1024,
    'MB': 1024 ** 2,
    'GB': 1024 ** 3,
}

_DAY = 24 * 60 * 60
DATE_UNITS = {
    'day': _DAY,
    'week': 7 * _DAY,
    'month': 30 * _DAY,
    'year': 365 * _DAY,
}

_SIZE_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    '>': lambda a, b: a > b,
    '>=': lambda a, b: a >= b,
    '<': lambda a, b: a < b,
    '<=': lambda a, b: a <= b,
}


# =============================
# Matchers
# =============================

def matches_name(file: FileRecord, query: str) -> bool:
    return query.lower() in file.name.lower()


def matches_extension(file: FileRecord, query: str) -> bool:
    needle = query.lower()
    return needle in (file.extension or "").lower() or needle in file.name.lower()


def matches_size(size: int, query: str) -> bool:
    """
    Compares `size` against a size expression such as '>100MB'.
    Malformed expressions never match.
    """
    match = _PATTERN_SIZE.fullmatch(query)
    if not match:
        return False

    operator, value, unit = match.groups()
    target = float(value) * SIZE_UNITS[unit.upper()]
    return _SIZE_OPERATORS[operator](size, target)


def matches_date(modified: float, query: str, now: Optional[float] = None) -> bool:
    """
    Compares the age of a timestamp against 'older:<n><unit>' / 'newer:<n><unit>'.
    Both comparisons are strict. Malformed expressions never match.
    """
    match = _PATTERN_DATE.fullmatch(query)
    if not match:
        return False

    direction, value, unit = match.groups()
    threshold = int(value) * DATE_UNITS[unit.lower().rstrip('s')]
    age = (time.time() if now is None else now) - modified

    if direction.lower() == 'older':
        return age > threshold
    return age < threshold


def matches_query(file: FileRecord, query: str, fields: Iterable[FilterField],
                  now: Optional[float] = None) -> bool:
    """True if any enabled matcher accepts the file."""
    fields = set(fields)
    return (
        (FilterField.NAME in fields and matches_name(file, query))
        or (FilterField.EXTENSION in fields and matches_extension(file, query))
        or (FilterField.SIZE in fields and matches_size(file.size, query))
        or (FilterField.DATE in fields and matches_date(file.modified, query, now))
    )


# =============================
# Filtering
# =============================

def filter_files(files: Sequence[FileRecord],
                 query: str,
                 fields: Iterable[FilterField],
                 active_filters: Sequence[SavedFilter],
                 mode: FilterMode = FilterMode.OR,
                 now: Optional[float] = None) -> List[FileRecord]:
    """
    Returns the files matching the text query and/or the active filters.

    With both a query and active filters a file matches if either side does.
    With neither, nothing matches: callers that want "show everything" for an
    empty search go through apply_search().
    """
    fields = frozenset(fields)
    now = time.time() if now is None else now
    has_query = bool(query.strip())
    has_filters = bool(active_filters)

    def include(file: FileRecord) -> bool:
        text_matches = has_query and matches_query(file, query, fields, now)

        filter_matches = False
        if has_filters:
            results = (matches_query(file, f.query, fields, now) for f in active_filters)
            filter_matches = all(results) if mode == FilterMode.AND else any(results)

        if has_query and has_filters:
            return text_matches or filter_matches
        if has_query:
            return text_matches
        if has_filters:
            return filter_matches
        return False

    return [f for f in files if include(f)]


def apply_search(files: Sequence[FileRecord],
                 request: SearchRequest,
                 now: Optional[float] = None) -> List[FileRecord]:
    """Filters files for display. An empty search shows every file."""
    if request.is_empty:
        return list(files)
    return filter_files(
        files,
        request.query,
        request.fields,
        request.active_filters,
        request.mode,
        now=now,
    )


# =============================
# Sorting and paging
# =============================

def sort_files(files: Sequence[FileRecord], key: SortKey, descending: bool = False) -> List[FileRecord]:
    """
    Stable sort. Size and modification time compare numerically,
    everything else as lower-cased text.
    """
    if key == SortKey.SIZE:
        key_func = lambda f: f.size or 0
    elif key == SortKey.MODIFIED:
        key_func = lambda f: f.modified
    else:
        key_func = lambda f: (getattr(f, key.value) or "").lower()
    return sorted(files, key=key_func, reverse=descending)


@dataclass(frozen=True)
class Page:
    items: List[FileRecord]
    page: int
    page_size: int
    total_items: int
    total_pages: int


def paginate(files: Sequence[FileRecord], page: int = 1, page_size: int = 50) -> Page:
    """Returns one 1-based page; out-of-range page numbers are clamped."""
    if page_size < 1:
        raise ValueError("Page size must be positive")

    total_pages = max(1, math.ceil(len(files) / page_size))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(files[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(files),
        total_pages=total_pages,
    )


# =============================
# Quick search presets
# =============================

def generate_label(query: str, fallback: str) -> str:
    """
    Builds a short label for a saved filter.
        "older:10days" -> "10 days or older"
        ".DS_Store"    -> ".DS_Store"
    Anything else keeps `fallback`.
    """
    match = _PATTERN_DATE.fullmatch(query)
    if match:
        direction, value, unit = match.groups()
        unit = unit.lower().rstrip('s')
        unit = unit if value == "1" else unit + "s"
        suffix = "or older" if direction.lower() == "older" else "or newer"
        return f"{value} {unit} {suffix}"

    if query.startswith('.'):
        return query

    return fallback


DEFAULT_PRESETS: Dict[str, SavedFilter] = {
    "temp": SavedFilter(query=".tmp", label="Temporary files"),
    "large": SavedFilter(query=">100MB", label="Large files"),
    "old": SavedFilter(query="older:30days", label=generate_label("older:30days", "Old files")),
    "ds-store": SavedFilter(query=".DS_Store", label=generate_label(".DS_Store", ".DS_Store")),
}
