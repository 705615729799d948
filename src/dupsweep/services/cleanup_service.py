"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/cleanup_service.py
Deletes every duplicate of a set of groups and aggregates the outcome.
"""

import logging
from typing import Callable, Optional, Sequence

from dupsweep.core.interfaces import CleanupExecutor, ProgressCallback, StoppedFlag
from dupsweep.core.models import CleanupError, CleanupResult, DuplicateGroup
from dupsweep.services.file_service import FileService

logger = logging.getLogger(__name__)


class CleanupExecutorImpl(CleanupExecutor):
    """
    Removes the files in each group's `duplicates`. Originals are never touched:
    the loop only ever walks `group.duplicates`.

    A failure on one file is recorded and the loop moves on. clean() does not
    raise for per-file failures; callers inspect `CleanupResult.errors`.
    """

    def __init__(self, delete_func: Callable[[str], None] = None):
        self.delete_func = delete_func or FileService.delete_file

    def clean(self,
              groups: Sequence[DuplicateGroup],
              stopped_flag: Optional[StoppedFlag] = None,
              progress_callback: Optional[ProgressCallback] = None) -> CleanupResult:
        result = CleanupResult()
        total = sum(len(g.duplicates) for g in groups)
        processed = 0

        logger.debug(f"Deleting {total} duplicates from {len(groups)} groups")

        for group in groups:
            for file in group.duplicates:
                if stopped_flag and stopped_flag():
                    logger.debug("Cleanup interrupted by user")
                    result.cancelled = True
                    return result

                try:
                    self.delete_func(file.path)
                except Exception as e:
                    logger.warning(f"Failed to delete {file.path}: {e}")
                    result.errors.append(CleanupError(file=file.path, error=str(e)))
                else:
                    result.deleted_count += 1
                    result.freed_space += file.size

                processed += 1
                if progress_callback:
                    progress_callback('deleting', processed, total)

        logger.info(
            f"Cleanup finished: {result.deleted_count} deleted, "
            f"{len(result.errors)} failed, {result.freed_space} bytes freed"
        )
        return result
