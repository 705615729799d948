"""
Unit tests for ConvertUtils.
"""
import time
import pytest
from dupsweep.utils.convert_utils import ConvertUtils


class TestBytesToHuman:
    @pytest.mark.parametrize("size,expected", [
        (0, "0 B"),
        (-5, "0 B"),
        (1, "1 B"),
        (1023, "1023 B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 ** 2, "1 MB"),
        (int(3.25 * 1024 ** 3), "3.25 GB"),
        (1024 ** 4, "1 TB"),
    ])
    def test_conversion(self, size, expected):
        assert ConvertUtils.bytes_to_human(size) == expected


class TestTimestampToHuman:
    def test_default_format(self):
        ts = time.mktime((2024, 3, 5, 14, 7, 0, 0, 0, -1))
        assert ConvertUtils.timestamp_to_human(ts) == "2024-03-05 14:07"

    def test_custom_format(self):
        ts = time.mktime((2024, 3, 5, 14, 7, 0, 0, 0, -1))
        assert ConvertUtils.timestamp_to_human(ts, "%d.%m.%Y") == "05.03.2024"

    def test_invalid_timestamp(self):
        assert ConvertUtils.timestamp_to_human(1e20) == "Invalid timestamp"
