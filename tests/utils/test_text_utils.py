"""Tests for text and timestamp helpers."""

from datetime import datetime, timezone

import pytest

from autoblog.utils.text import fold_diacritics, slugify, strip_html, strip_quotes, truncate
from autoblog.utils.timestamps import parse_timestamp, parse_timestamp_lenient


class TestSlugify:

    @pytest.mark.parametrize("title,expected", [
        ("Trí tuệ nhân tạo 2025", "tri-tue-nhan-tao-2025"),
        ("Đột phá AI: GPT-5 ra mắt!", "dot-pha-ai-gpt-5-ra-mat"),
        ("  Hello   --  World  ", "hello-world"),
        ("!!!", ""),
    ])
    def test_slugs(self, title, expected):
        assert slugify(title) == expected

    def test_fold_diacritics(self):
        assert fold_diacritics("Đà Nẵng") == "Da Nang"


def test_strip_html():
    assert strip_html("<p>Hello\n <b>world</b></p>") == "Hello world"


def test_truncate():
    assert truncate("abc def", 4) == "abc"
    assert truncate("short", 10) == "short"


def test_strip_quotes():
    assert strip_quotes(" 'quoted' ") == "quoted"


class TestParseTimestamp:

    def test_zulu(self):
        assert parse_timestamp("2025-12-17T15:20:21Z") == datetime(2025, 12, 17, 15, 20, 21, tzinfo=timezone.utc)

    def test_compact_offset(self):
        assert parse_timestamp("2025-12-17T15:20:21+0000").tzinfo is not None

    def test_epoch(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp("86400") == datetime(1970, 1, 2, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_timestamp("2025-12-17").tzinfo == timezone.utc

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_timestamp("not a date")
        assert parse_timestamp_lenient("not a date") is None
        assert parse_timestamp_lenient(None) is None
