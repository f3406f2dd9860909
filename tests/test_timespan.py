"""Tests for duration and count parsing"""

import pytest

from runedit.engine.timespan import (
    MAX_DURATION,
    ParseError,
    format_duration,
    is_count,
    is_duration,
    parse_count,
    parse_duration,
)


def test_parse_duration_forms():
    """Test seconds, minutes and hours forms"""
    assert parse_duration("5") == 5.0
    assert parse_duration("1:23.45") == pytest.approx(83.45)
    assert parse_duration("1:02:03.5") == pytest.approx(3723.5)
    assert parse_duration(".5") == pytest.approx(0.5)
    assert parse_duration("  42.1 ") == pytest.approx(42.1)


def test_parse_duration_sign():
    """Test negative durations parse, the engine decides if they're allowed"""
    assert parse_duration("-5") == -5.0
    assert parse_duration("−1:00") == -60.0


def test_parse_duration_empty_clears():
    """Test that empty text parses to None"""
    assert parse_duration("") is None
    assert parse_duration("   ") is None


@pytest.mark.parametrize("text", ["abc", "1:2:3:4", "1..2", "1:", "12a"])
def test_parse_duration_rejects(text):
    """Test malformed durations raise ParseError"""
    with pytest.raises(ParseError):
        parse_duration(text)
    assert not is_duration(text)


def test_parse_count():
    """Test attempt count parsing"""
    assert parse_count("12") == 12
    assert parse_count("") is None
    assert is_count("0")
    assert not is_count("-1")
    assert not is_count("1.5")

    with pytest.raises(ParseError):
        parse_count("many")


@pytest.mark.parametrize("text", ["9" * 400, "1" * 5000, "-" + "9" * 400, "9" * 40 + ":00", "2000000000"])
def test_parse_duration_out_of_range(text):
    """Test durations too large to represent raise ParseError"""
    with pytest.raises(ParseError):
        parse_duration(text)
    assert not is_duration(text)


def test_parse_duration_near_limit():
    """Test long but representable durations still parse and format"""
    seconds = parse_duration("277777:46:40")
    assert seconds == MAX_DURATION
    assert format_duration(seconds) == "277777:46:40.00"


def test_parse_count_out_of_range():
    """Test counts too long to convert raise ParseError"""
    with pytest.raises(ParseError):
        parse_count("9" * 5000)
    assert not is_count("9" * 5000)


def test_format_duration():
    """Test the displayed forms"""
    assert format_duration(None) == ""
    assert format_duration(5.0) == "5.00"
    assert format_duration(83.45) == "1:23.45"
    assert format_duration(3723.5) == "1:02:03.50"
    assert format_duration(-60.0) == "-1:00.00"


def test_format_duration_truncates():
    """Test that hundredths are truncated, not rounded"""
    assert format_duration(1.999) == "1.99"
    assert format_duration(59.996) == "59.99"
