from __future__ import annotations

from datetime import timedelta

import pytest

from tomlvar.utils import format_duration, format_float, parse_duration, split_path


def test_split_path_simple():
    assert split_path("a") == ["a"]
    assert split_path("server.http.port") == ["server", "http", "port"]


def test_split_path_quoted_segments_keep_dots():
    assert split_path('servers."alpha.example".ip') == ["servers", "alpha.example", "ip"]


def test_split_path_unterminated_quote():
    with pytest.raises(ValueError):
        split_path('a."b')


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", timedelta(0)),
        ("1s", timedelta(seconds=1)),
        ("2m", timedelta(minutes=2)),
        ("1h2m3s", timedelta(hours=1, minutes=2, seconds=3)),
        ("-1.5h", -timedelta(hours=1, minutes=30)),
        ("+300ms", timedelta(milliseconds=300)),
        ("10us", timedelta(microseconds=10)),
        ("10µs", timedelta(microseconds=10)),
        ("2500ns", timedelta(microseconds=2)),
        (".5s", timedelta(milliseconds=500)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "-", "1", "1x", "s", "1s2", "one second"])
def test_parse_duration_rejects_invalid_literals(text):
    with pytest.raises(ValueError):
        parse_duration(text)


@pytest.mark.parametrize(
    "value, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(microseconds=750), "750µs"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(seconds=1), "1s"),
        (timedelta(minutes=2), "2m0s"),
        (timedelta(hours=1), "1h0m0s"),
        (timedelta(hours=1, minutes=2, seconds=3, milliseconds=500), "1h2m3.5s"),
        (-timedelta(seconds=90), "-1m30s"),
    ],
)
def test_format_duration(value, expected):
    assert format_duration(value) == expected


def test_format_float_is_shortest_and_drops_trailing_zero():
    assert format_float(0.0) == "0"
    assert format_float(1.0) == "1"
    assert format_float(2.5) == "2.5"
    assert format_float(0.1) == "0.1"
    assert format_float(2718e28) == "2.718e+31"


def test_parse_duration_too_large_is_value_error():
    with pytest.raises(ValueError, match="out of range"):
        parse_duration("99999999999999h")
