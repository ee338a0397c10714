"""
Tests for the formatting and validation helpers.
"""

import pytest

from video_analyzer.utils.helpers import (
    decode_entities,
    extract_video_id,
    format_date,
    format_timestamp,
    format_view_count,
    is_valid_video_id,
    parse_iso8601_duration,
)


@pytest.mark.parametrize("seconds, expected", [
    (0, "0:00"),
    (59, "0:59"),
    (60, "1:00"),
    (3600, "1:00:00"),
    (3661, "1:01:01"),
    (754, "12:34"),
    (59.9, "0:59"),
    (36000, "10:00:00"),
])
def test_format_timestamp(seconds, expected):
    """Test H:MM:SS / M:SS formatting."""
    assert format_timestamp(seconds) == expected


def test_format_timestamp_negative_is_zero():
    """Test that negative input clamps instead of failing."""
    assert format_timestamp(-5) == "0:00"


@pytest.mark.parametrize("video_id", ["dQw4w9WgXcQ", "abc_DEF-123", "___________", "-----------"])
def test_valid_video_ids(video_id):
    """Test that 11 characters of [A-Za-z0-9_-] are accepted."""
    assert is_valid_video_id(video_id)


@pytest.mark.parametrize("video_id", [
    "",
    "dQw4w9WgXc",
    "dQw4w9WgXcQQ",
    "dQw4w9WgXc!",
    "dQw4w9 gXcQ",
    "dQw4w9WgXcQ\n",
    None,
    12345678901,
])
def test_invalid_video_ids(video_id):
    """Test that anything else is rejected."""
    assert not is_valid_video_id(video_id)


@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42s",
    "https://youtu.be/dQw4w9WgXcQ?si=abc",
    "https://www.youtube.com/embed/dQw4w9WgXcQ",
    "https://www.youtube.com/shorts/dQw4w9WgXcQ",
    "dQw4w9WgXcQ",
])
def test_extract_video_id(url):
    """Test extracting the ID from the common URL shapes."""
    assert extract_video_id(url) == "dQw4w9WgXcQ"


def test_extract_video_id_no_match():
    """Test that a URL without an ID yields None."""
    assert extract_video_id("https://example.com/page") is None
    assert extract_video_id("") is None


@pytest.mark.parametrize("duration, expected", [
    ("PT1H2M3S", 3723),
    ("PT12M34S", 754),
    ("PT45S", 45),
    ("PT2H", 7200),
    ("P1DT1S", 86401),
    ("garbage", 0),
    (None, 0),
])
def test_parse_iso8601_duration(duration, expected):
    """Test ISO-8601 duration parsing."""
    assert parse_iso8601_duration(duration) == expected


@pytest.mark.parametrize("count, expected", [
    ("1500000", "1.5M"),
    ("2500", "2.5K"),
    ("999", "999"),
    (0, "0"),
    ("n/a", "0"),
])
def test_format_view_count(count, expected):
    """Test view count shortening."""
    assert format_view_count(count) == expected


def test_format_date():
    """Test ISO date rendering."""
    assert format_date("2024-03-05T16:00:00Z") == "Mar 5, 2024"
    assert format_date("not a date") == "not a date"
    assert format_date(None) is None


def test_decode_entities():
    """Test entity decoding and whitespace collapsing."""
    assert decode_entities("Hi &amp; bye") == "Hi & bye"
    assert decode_entities("a &lt;b&gt;&nbsp;c") == "a <b> c"
    assert decode_entities("it&#39;s &quot;fine&quot;") == "it's \"fine\""
    assert decode_entities("it&amp;#39;s") == "it's"
    assert decode_entities("line one\nline two") == "line one line two"
