"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups files by content digest and picks the file to keep in every group.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from dupsweep.core.hasher import HasherImpl
from dupsweep.core.interfaces import FileGrouper, Hasher, ProgressCallback, StoppedFlag
from dupsweep.core.models import (
    DuplicateFileView, DuplicateGroup, DuplicatesSummary, Err, FileRecord, ItemResult, Ok)

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    Partitions files by full content hash.
    Uses an injected Hasher instance for flexibility and testability.

    With workers > 1 files are hashed on a bounded thread pool. Results are
    still consumed in input order, so groups and originals are the same as
    with a single worker.
    """

    def __init__(self, hasher: Hasher = None, workers: int = 1):
        if workers < 1:
            raise ValueError("Number of workers must be at least 1")
        self.hasher = hasher or HasherImpl()
        self.workers = workers

    def group(self,
              files: Sequence[FileRecord],
              stopped_flag: Optional[StoppedFlag] = None,
              progress_callback: Optional[ProgressCallback] = None) -> List[DuplicateGroup]:
        """Returns duplicate groups; files that fail to hash are left out."""
        groups, _ = self.group_with_report(files, stopped_flag, progress_callback)
        return groups

    def group_with_report(
            self,
            files: Sequence[FileRecord],
            stopped_flag: Optional[StoppedFlag] = None,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], List[Err]]:
        """
        Same as group(), but also returns the files that could not be hashed.
        Returns ([], []) if the operation is cancelled.
        """
        # Empty files would all share one digest, they are never duplicates of each other
        candidates = [f for f in files if f.size > 0]
        total = len(candidates)
        logger.debug(f"Hashing {total} of {len(files)} files (zero-byte files excluded)")

        buckets: Dict[str, List[FileRecord]] = defaultdict(list)
        skipped: List[Err] = []
        processed = 0

        for result in self.hash_files(candidates, stopped_flag=stopped_flag):
            if isinstance(result, Ok):
                file, digest = result.value
                buckets[digest].append(file)
            else:
                skipped.append(result)
            processed += 1
            if progress_callback:
                progress_callback('hashing', processed, total)

        if stopped_flag and stopped_flag():
            logger.debug("Grouping interrupted by user")
            return [], []

        if skipped:
            logger.warning(f"Skipped {len(skipped)} files due to hash computation errors")

        groups = [
            DuplicateGroup.from_files(digest, bucket)
            for digest, bucket in buckets.items()
            if len(bucket) >= 2  # Avoid groups with less than 2 files
        ]
        logger.info(f"Found {len(groups)} duplicate groups")
        return groups, skipped

    def hash_files(self,
                   files: Sequence[FileRecord],
                   stopped_flag: Optional[StoppedFlag] = None) -> Iterator[ItemResult]:
        """
        Yields Ok((file, digest)) or Err(path, reason) per file, in input order.
        Stops early when cancelled.
        """
        if self.workers == 1:
            for file in files:
                if stopped_flag and stopped_flag():
                    return
                yield self._hash_one(file)
            return

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            for result in executor.map(lambda f: self._hash_one(f, stopped_flag), files):
                if result is None:
                    return
                yield result

    def _hash_one(self, file: FileRecord,
                  stopped_flag: Optional[StoppedFlag] = None) -> Optional[ItemResult]:
        if stopped_flag and stopped_flag():
            return None
        try:
            return Ok((file, self.hasher.compute_full_hash(file)))
        except OSError as e:
            logger.warning(f"Error processing {file.path}: {e}")
            return Err(file.path, str(e))

    @staticmethod
    def build_views(groups: Sequence[DuplicateGroup]) -> List[DuplicateFileView]:
        """Flattens groups into per-file views, original first within each group."""
        views = []
        for group in groups:
            for file in group.files:
                views.append(DuplicateFileView(
                    file=file,
                    is_original=file is group.original,
                    duplicate_group=group.hash,
                    group_size=group.file_count,
                ))
        return views

    @staticmethod
    def summarize(groups: Sequence[DuplicateGroup]) -> DuplicatesSummary:
        return DuplicatesSummary(
            total_duplicates=sum(len(g.duplicates) for g in groups),
            total_groups=len(groups),
            total_reclaimable=sum(g.duplicate_size for g in groups),
        )
