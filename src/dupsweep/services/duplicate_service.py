from typing import Iterable, List, Sequence

from dupsweep.core.models import CleanupResult, DuplicateGroup, FileRecord


class DuplicateService:
    @staticmethod
    def select_groups(groups: Sequence[DuplicateGroup], files: Iterable[FileRecord]) -> List[DuplicateGroup]:
        """
        Picks the groups the user wants to clean.

        A group is selected when at least one of its files (original or duplicate)
        is among `files`, e.g. the result of a search over the duplicate views.

        Args:
            groups (Sequence[DuplicateGroup]): All duplicate groups of a scan.
            files (Iterable[FileRecord]): Files the user has selected.

        Returns:
            List[DuplicateGroup]: Selected groups, in their original order.
        """
        selected_paths = {f.path for f in files}
        return [g for g in groups if any(f.path in selected_paths for f in g.files)]

    @staticmethod
    def remove_files_from_groups(groups: Sequence[DuplicateGroup], file_paths: Iterable[str]) -> List[DuplicateGroup]:
        """
        Removes files with the specified paths from all duplicate groups.

        Files that match any of the provided file paths are removed from each group.
        Groups that contain fewer than 2 files after removal are discarded.
        The oldest remaining file becomes the original of a rebuilt group.

        Args:
            groups (Sequence[DuplicateGroup]): List of duplicate groups to update.
            file_paths (Iterable[str]): Paths of files to remove.

        Returns:
            List[DuplicateGroup]: Updated list of duplicate groups.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            remaining = [f for f in group.files if f.path not in removed]
            if len(remaining) == group.file_count:
                updated_groups.append(group)
            elif len(remaining) >= 2:
                updated_groups.append(DuplicateGroup.from_files(group.hash, remaining))
        return updated_groups

    @staticmethod
    def deleted_paths(groups: Sequence[DuplicateGroup], result: CleanupResult) -> List[str]:
        """
        Paths the cleanup pass actually removed: every duplicate that has no
        entry in `result.errors`. Only meaningful for a pass that was not cancelled.
        """
        failed = {e.file for e in result.errors}
        return [f.path for g in groups for f in g.duplicates if f.path not in failed]

    @staticmethod
    def files_to_delete(groups: Sequence[DuplicateGroup]) -> List[FileRecord]:
        """All files a cleanup of `groups` would remove (never an original)."""
        return [f for g in groups for f in g.duplicates]
