"""
Unit tests for data models and request objects.
"""
import os
import pytest
from dupsweep.core.models import (
    FileRecord, DuplicateGroup, CleanupResult, ScanParams, SearchRequest, SavedFilter,
    HashAlgorithmName, FilterField, FilterMode, Ok, Err, DEFAULT_MAX_DEPTH)


class TestFileRecord:
    def test_derives_name_and_lowercase_extension(self):
        record = FileRecord(path="/a/b/Holiday.JPEG", size=5, modified=1.0)
        assert record.name == "Holiday.JPEG"
        assert record.extension == ".jpeg"
        assert record.directory is None

    def test_no_extension(self):
        assert FileRecord(path="/a/Makefile", size=1, modified=0.0).extension == ""

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            FileRecord(path="/a", size=-1, modified=0.0)

    def test_is_immutable(self):
        record = FileRecord(path="/a", size=1, modified=0.0)
        with pytest.raises(AttributeError):
            record.size = 2

    def test_from_stat(self, tmp_path):
        path = tmp_path / "f.txt"
        path.write_bytes(b"abc")
        record = FileRecord.from_stat(str(path), os.stat(path), directory=str(tmp_path))

        assert record.size == 3
        assert record.modified == os.stat(path).st_mtime
        assert record.directory == str(tmp_path)


class TestDuplicateGroup:
    def _files(self):
        return [
            FileRecord(path="/c", size=4, modified=30.0),
            FileRecord(path="/a", size=4, modified=10.0),
            FileRecord(path="/b", size=4, modified=20.0),
        ]

    def test_from_files_picks_oldest(self):
        group = DuplicateGroup.from_files("h", self._files())

        assert group.original.path == "/a"
        assert [f.path for f in group.duplicates] == ["/b", "/c"]
        assert group.file_count == 3
        assert group.total_size == 12
        assert group.duplicate_size == 8

    def test_original_plus_duplicates_covers_every_file(self):
        files = self._files()
        group = DuplicateGroup.from_files("h", files)
        assert sorted(f.path for f in group.files) == sorted(f.path for f in files)

    def test_single_file_is_not_a_group(self):
        with pytest.raises(ValueError):
            DuplicateGroup.from_files("h", self._files()[:1])

    def test_original_cannot_be_a_duplicate(self):
        f = self._files()[0]
        with pytest.raises(ValueError):
            DuplicateGroup(hash="h", original=f, duplicates=(f,))


class TestResults:
    def test_ok_and_err(self):
        assert Ok(1).ok is True
        assert Err("/x", "denied").ok is False

    def test_cleanup_result_defaults(self):
        result = CleanupResult()
        assert result.success is True
        assert not result.has_errors
        assert result.cancelled is False


class TestScanParams:
    def test_defaults(self):
        params = ScanParams(root_dir="/data")
        assert params.max_depth == DEFAULT_MAX_DEPTH == 10
        assert params.algorithm == HashAlgorithmName.SHA256
        assert params.workers == 1

    @pytest.mark.parametrize("kwargs", [
        {"root_dir": ""},
        {"root_dir": "/d", "max_depth": -1},
        {"root_dir": "/d", "workers": 0},
        {"root_dir": "/d", "chunk_size": 0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ScanParams(**kwargs)

    def test_from_human_readable(self):
        params = ScanParams.from_human_readable("/d", "3", " XXHASH ", "4")
        assert (params.max_depth, params.algorithm, params.workers) == (3, HashAlgorithmName.XXHASH, 4)

    @pytest.mark.parametrize("args,message", [
        (("/d", "abc"), "Invalid depth"),
        (("/d", "2", "md5"), "Unknown hash algorithm"),
        (("/d", "2", "sha256", "many"), "Invalid number of workers"),
    ])
    def test_from_human_readable_errors(self, args, message):
        with pytest.raises(ValueError, match=message):
            ScanParams.from_human_readable(*args)


class TestSearchRequest:
    def test_defaults_search_every_field(self):
        request = SearchRequest()
        assert request.fields == FilterField.get_all()
        assert request.mode == FilterMode.OR
        assert request.is_empty

    def test_not_empty_with_filters(self):
        assert not SearchRequest(active_filters=[SavedFilter(".tmp")]).is_empty
        assert not SearchRequest(query="x").is_empty

    def test_collections_are_normalized(self):
        request = SearchRequest(fields=[FilterField.NAME], active_filters=[SavedFilter("a")])
        assert request.fields == frozenset({FilterField.NAME})
        assert isinstance(request.active_filters, tuple)
