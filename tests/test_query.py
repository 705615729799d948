"""
Unit tests for the query engine.
Verifies matchers, filter combination modes, empty-search behavior, sorting, paging and presets.
"""
import pytest
from dupsweep.core.models import FileRecord, FilterField, FilterMode, SavedFilter, SearchRequest, SortKey
from dupsweep.core.query import (
    matches_name, matches_extension, matches_size, matches_date, matches_query,
    filter_files, apply_search, sort_files, paginate, generate_label, DEFAULT_PRESETS)
from conftest import NOW, DAY

ALL_FIELDS = FilterField.get_all()


def _file(path, size=100, modified=NOW):
    return FileRecord(path=path, size=size, modified=modified)


@pytest.fixture
def files():
    return [
        _file("/docs/Report.PDF", size=500_000, modified=NOW - 40 * DAY),
        _file("/pics/photo.jpg", size=2_000_000, modified=NOW - 10 * DAY),
        _file("/tmp/cache.tmp", size=10, modified=NOW - 1 * DAY),
        _file("/mac/.DS_Store", size=6148, modified=NOW - 100 * DAY),
    ]


def _paths(files):
    return [f.path for f in files]


class TestMatchers:
    """Single-expression matchers."""

    def test_name_is_case_insensitive_substring(self):
        assert matches_name(_file("/x/PhotoShop_Export.png"), "photoshop")
        assert not matches_name(_file("/x/image.png"), "photoshop")

    def test_extension_matches_extension_or_name(self):
        assert matches_extension(_file("/a/b.JPG"), ".jpg")
        assert matches_extension(_file("/a/.DS_Store"), ".ds_store")
        assert not matches_extension(_file("/a/b.png"), ".jpg")

    @pytest.mark.parametrize("size,query,expected", [
        (2_000_000, ">=1MB", True),
        (500_000, ">=1MB", False),
        (1024 ** 2, ">=1MB", True),
        (1024 ** 2, ">1MB", False),
        (1536, "<=1.5KB", True),
        (1537, "<=1.5KB", False),
        (10, "< 11 b", True),
        (3 * 1024 ** 3, ">2GB", True),
    ])
    def test_size_expressions(self, size, query, expected):
        assert matches_size(size, query) is expected

    @pytest.mark.parametrize("query", [">", ">100", "100MB", "=5MB", ">5TB", ">MB", "large", ">5 MB extra"])
    def test_malformed_size_never_matches(self, query):
        assert matches_size(10 ** 12, query) is False
        assert matches_size(0, query) is False

    @pytest.mark.parametrize("query", [">=1MB\n", " >=1MB", ">=1MB ", ">=1MB\nextra"])
    def test_size_expression_must_span_whole_query(self, query):
        assert matches_size(2_000_000, query) is False

    @pytest.mark.parametrize("query", ["older:1day\n", " older:1day", "older:1days\n"])
    def test_date_expression_must_span_whole_query(self, query):
        assert matches_date(NOW - 40 * DAY, query, NOW) is False

    def test_trailing_newline_does_not_produce_label(self):
        assert generate_label("older:10days\n", "Custom") == "Custom"

    def test_date_older_and_newer(self):
        assert matches_date(NOW - 40 * DAY, "older:30days", NOW)
        assert not matches_date(NOW - 10 * DAY, "older:30days", NOW)
        assert matches_date(NOW - 10 * DAY, "newer:2weeks", NOW)
        assert not matches_date(NOW - 20 * DAY, "newer:2weeks", NOW)

    def test_date_units(self):
        assert matches_date(NOW - 31 * DAY, "older:1month", NOW)
        assert not matches_date(NOW - 29 * DAY, "older:1month", NOW)
        assert matches_date(NOW - 366 * DAY, "older:1year", NOW)
        assert matches_date(NOW - 2 * DAY, "older:1day", NOW)

    def test_date_comparisons_are_strict(self):
        assert not matches_date(NOW - 30 * DAY, "older:30days", NOW)
        assert not matches_date(NOW - 30 * DAY, "newer:30days", NOW)

    def test_date_direction_is_case_insensitive(self):
        assert matches_date(NOW - 40 * DAY, "OLDER:30DAYS", NOW)
        assert not matches_date(NOW - 40 * DAY, "Newer:30days", NOW)

    @pytest.mark.parametrize("query", ["older30days", "older:days", "older:5", "before:5days", "older:5hours"])
    def test_malformed_date_never_matches(self, query):
        assert matches_date(0.0, query, NOW) is False

    def test_matches_query_respects_enabled_fields(self):
        file = _file("/a/big.bin", size=10 ** 9)
        assert matches_query(file, ">100MB", ALL_FIELDS, NOW)
        assert not matches_query(file, ">100MB", {FilterField.NAME, FilterField.EXTENSION}, NOW)
        assert not matches_query(file, "big", set(), NOW)


class TestFilterFiles:
    """Query and active filter combination."""

    def test_size_filter_scenario(self):
        small = _file("/a", size=500_000)
        large = _file("/b", size=2_000_000)
        assert filter_files([small, large], ">=1MB", ALL_FIELDS, [], now=NOW) == [large]

    def test_date_filter_scenario(self):
        old = _file("/old", modified=NOW - 40 * DAY)
        recent = _file("/recent", modified=NOW - 10 * DAY)
        assert filter_files([old, recent], "older:30days", ALL_FIELDS, [], now=NOW) == [old]

    def test_or_mode_any_filter(self, files):
        filters = [SavedFilter(".tmp"), SavedFilter(">1MB")]
        result = filter_files(files, "", ALL_FIELDS, filters, FilterMode.OR, now=NOW)
        assert _paths(result) == ["/pics/photo.jpg", "/tmp/cache.tmp"]

    def test_and_mode_all_filters(self, files):
        filters = [SavedFilter("older:30days"), SavedFilter(">100KB")]
        result = filter_files(files, "", ALL_FIELDS, filters, FilterMode.AND, now=NOW)
        assert _paths(result) == ["/docs/Report.PDF"]

    def test_query_or_filters(self, files):
        """With both present a file matches if either the query or the filters accept it."""
        result = filter_files(files, "photo", ALL_FIELDS, [SavedFilter(".ds_store")], now=NOW)
        assert _paths(result) == ["/pics/photo.jpg", "/mac/.DS_Store"]

    def test_whitespace_query_counts_as_empty(self, files):
        result = filter_files(files, "   ", ALL_FIELDS, [SavedFilter(".tmp")], now=NOW)
        assert _paths(result) == ["/tmp/cache.tmp"]

    def test_no_query_and_no_filters_matches_nothing(self, files):
        """The matcher alone excludes everything; apply_search is what shows all files."""
        assert filter_files(files, "", ALL_FIELDS, [], now=NOW) == []

    def test_filtering_is_idempotent(self, files):
        once = filter_files(files, "older:5days", ALL_FIELDS, [], now=NOW)
        twice = filter_files(once, "older:5days", ALL_FIELDS, [], now=NOW)
        assert once == twice

    def test_malformed_expression_excludes_without_error(self, files):
        result = filter_files(files, ">abcMB", {FilterField.SIZE}, [], now=NOW)
        assert result == []


class TestApplySearch:
    def test_empty_request_shows_every_file(self, files):
        assert apply_search(files, SearchRequest(), now=NOW) == files
        assert apply_search(files, SearchRequest(query="  "), now=NOW) == files

    def test_delegates_to_filter(self, files):
        request = SearchRequest(query="older:30days", fields={FilterField.DATE})
        assert _paths(apply_search(files, request, now=NOW)) == ["/docs/Report.PDF", "/mac/.DS_Store"]

    def test_filters_only(self, files):
        request = SearchRequest(active_filters=[DEFAULT_PRESETS["temp"]])
        assert _paths(apply_search(files, request, now=NOW)) == ["/tmp/cache.tmp"]


class TestSortAndPaginate:
    def test_sort_by_size_descending(self, files):
        assert [f.size for f in sort_files(files, SortKey.SIZE, descending=True)] == [
            2_000_000, 500_000, 6148, 10]

    def test_sort_by_name_ignores_case(self, files):
        assert [f.name for f in sort_files(files, SortKey.NAME)] == [
            ".DS_Store", "cache.tmp", "photo.jpg", "Report.PDF"]

    def test_sort_by_modified(self, files):
        assert _paths(sort_files(files, SortKey.MODIFIED))[0] == "/mac/.DS_Store"

    def test_sort_is_stable(self):
        a, b = _file("/x/a", size=1), _file("/y/b", size=1)
        assert sort_files([b, a], SortKey.SIZE) == [b, a]

    def test_paginate(self):
        items = [_file(f"/{i}") for i in range(5)]
        page = paginate(items, page=2, page_size=2)

        assert _paths(page.items) == ["/2", "/3"]
        assert (page.page, page.total_items, page.total_pages) == (2, 5, 3)

    def test_paginate_clamps_out_of_range_pages(self):
        items = [_file(f"/{i}") for i in range(5)]
        assert paginate(items, page=99, page_size=2).page == 3
        assert paginate(items, page=0, page_size=2).page == 1

    def test_paginate_empty(self):
        page = paginate([], page=1, page_size=10)
        assert page.items == [] and page.total_pages == 1

    def test_paginate_rejects_bad_page_size(self):
        with pytest.raises(ValueError):
            paginate([], page_size=0)


class TestPresets:
    def test_generate_label(self):
        assert generate_label("older:10days", "x") == "10 days or older"
        assert generate_label("newer:1week", "x") == "1 week or newer"
        assert generate_label(".DS_Store", "x") == ".DS_Store"
        assert generate_label(">100MB", "Large files") == "Large files"

    def test_default_presets(self):
        assert DEFAULT_PRESETS["old"].label == "30 days or older"
        assert DEFAULT_PRESETS["large"].query == ">100MB"
        assert set(DEFAULT_PRESETS) == {"temp", "large", "old", "ds-store"}

    def test_saved_filter_label_defaults_to_query(self):
        assert SavedFilter(">1GB").label == ">1GB"
